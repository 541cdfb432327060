"""
One-result-per-day memo for the vibe analysis.

The cache keeps a single entry: the result for the most recent local
calendar day it computed. The check-compute-store sequence runs under one
lock, so concurrent callers asking for today's result trigger exactly one
analysis and all receive the same object. A cancelled analysis raises
through and leaves the cache untouched.
"""

from __future__ import annotations

import threading
from datetime import date
from typing import Callable, Optional, Protocol, Sequence, Tuple

from .errors import CancelToken
from .logging_utils import get_logger
from .models import AnalysisResult, NewsItem

log = get_logger(__name__)


class _Analyzer(Protocol):
    def analyze(
        self, items: Sequence[NewsItem], cancel: Optional[CancelToken] = None
    ) -> AnalysisResult: ...


class DailyResultCache:
    def __init__(self, analyzer: _Analyzer, today: Callable[[], date] = date.today):
        self.analyzer = analyzer
        self._today = today
        self._lock = threading.Lock()
        self._entry: Optional[Tuple[date, AnalysisResult]] = None

    def compute_if_absent(
        self, day: date, compute: Callable[[], AnalysisResult]
    ) -> AnalysisResult:
        """Return the result stored for ``day``, computing and storing it if missing."""
        with self._lock:
            if self._entry is not None and self._entry[0] == day:
                log.debug("daily_cache_hit day=%s", day.isoformat())
                return self._entry[1]
            log.debug("daily_cache_miss day=%s", day.isoformat())
            result = compute()
            self._entry = (day, result)
            return result

    def get_for_today(
        self, items: Sequence[NewsItem], cancel: Optional[CancelToken] = None
    ) -> AnalysisResult:
        return self.compute_if_absent(
            self._today(), lambda: self.analyzer.analyze(items, cancel)
        )

    def force_refresh(
        self, items: Sequence[NewsItem], cancel: Optional[CancelToken] = None
    ) -> AnalysisResult:
        """Recompute unconditionally and overwrite today's entry."""
        with self._lock:
            day = self._today()
            result = self.analyzer.analyze(items, cancel)
            self._entry = (day, result)
            log.info("daily_cache_refreshed day=%s vibe=%s", day.isoformat(), result.vibe.value)
            return result

    def get(self, day: Optional[date] = None) -> Optional[AnalysisResult]:
        """Cached result for ``day`` (default today) without computing."""
        day = day or self._today()
        with self._lock:
            if self._entry is not None and self._entry[0] == day:
                return self._entry[1]
            return None

    def clear(self) -> None:
        with self._lock:
            self._entry = None
