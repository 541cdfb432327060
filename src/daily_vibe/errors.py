from __future__ import annotations

import threading


class AnalysisCancelled(Exception):
    """Raised when the caller cancels an analysis before it completes.

    This is the only exception the analyzer lets through; a cancelled
    analysis has no result and is never cached.
    """


class CancelToken:
    """Cooperative cancellation flag shared between a caller and an analysis."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise AnalysisCancelled()
