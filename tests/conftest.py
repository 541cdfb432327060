"""Shared fixtures: item factory, fixed clock, fake embedding backends.

No test loads a real sentence-transformers model; semantic scoring is
exercised through the deterministic backends below.
"""

import threading
from datetime import datetime, timezone

import numpy as np
import pytest

from daily_vibe.models import NewsItem
from daily_vibe.vibes import VIBE_PROFILES, Vibe

FIXED_NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)

HOPEFUL_TITLE = (
    "Scientists announce major breakthrough in renewable energy, "
    "sparking hope for the future"
)
CRASH_TITLE = "Market crash triggers widespread fear and uncertainty"

_VIBE_INDEX = {vibe: i for i, vibe in enumerate(Vibe)}


def axis(vibe: Vibe, weight: float = 1.0) -> np.ndarray:
    """A vector pointing along ``vibe``'s own dimension."""
    vec = np.zeros(len(_VIBE_INDEX))
    vec[_VIBE_INDEX[vibe]] = weight
    return vec


class LookupBackend:
    """Embeds vibe definitions as one-hot axes and item texts via a lookup.

    Texts not in ``items`` embed to ``default`` (``None`` means failure).
    Texts in ``fail_on`` raise.
    """

    def __init__(self, items=None, default=None, fail_on=(), fail_definitions=False):
        self._vectors = {
            profile.definition_text: axis(vibe) for vibe, profile in VIBE_PROFILES.items()
        }
        self._items = dict(items or {})
        self._default = default
        self._fail_on = set(fail_on)
        self._fail_definitions = fail_definitions
        self.calls = 0
        self._lock = threading.Lock()

    def is_available(self):
        return True

    def embed(self, text):
        with self._lock:
            self.calls += 1
        if text in self._vectors:
            if self._fail_definitions:
                return None
            return self._vectors[text]
        if text in self._fail_on:
            raise RuntimeError(f"cannot embed {text!r}")
        return self._items.get(text, self._default)


class UnavailableBackend:
    def __init__(self):
        self.calls = 0

    def is_available(self):
        return False

    def embed(self, text):
        self.calls += 1
        return None


class BlockingBackend(LookupBackend):
    """Item embeds block until ``release`` is set (or 5s pass)."""

    def __init__(self):
        super().__init__(default=axis(Vibe.HOPEFUL))
        self.release = threading.Event()
        self.started = threading.Event()

    def embed(self, text):
        if text not in self._vectors:
            self.started.set()
            self.release.wait(5.0)
        return super().embed(text)


@pytest.fixture
def clock():
    return lambda: FIXED_NOW


@pytest.fixture
def make_item():
    def _make(title, description=None, content=None, **kwargs):
        kwargs.setdefault("published_at", FIXED_NOW)
        kwargs.setdefault("source_name", "test-wire")
        return NewsItem(title=title, description=description, content=content, **kwargs)

    return _make
