"""Tests for the one-per-day result cache and its single-writer guarantee."""

import threading
import time
from datetime import date

import pytest

from daily_vibe.analyzer import VibeAnalyzer
from daily_vibe.config import Settings
from daily_vibe.daily_cache import DailyResultCache
from daily_vibe.errors import AnalysisCancelled, CancelToken
from daily_vibe.vibes import Vibe
from tests.conftest import CRASH_TITLE, HOPEFUL_TITLE


class CountingAnalyzer:
    def __init__(self, inner, delay=0.0):
        self.inner = inner
        self.delay = delay
        self.calls = 0
        self._lock = threading.Lock()

    def analyze(self, items, cancel=None):
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return self.inner.analyze(items, cancel)


class Today:
    def __init__(self, day):
        self.day = day

    def __call__(self):
        return self.day


@pytest.fixture
def counting(clock):
    return CountingAnalyzer(VibeAnalyzer(settings=Settings(), backend=None, clock=clock))


def test_same_day_is_computed_once(counting, make_item):
    cache = DailyResultCache(counting, today=Today(date(2026, 1, 15)))
    first = cache.get_for_today([make_item(HOPEFUL_TITLE)])
    second = cache.get_for_today([make_item(CRASH_TITLE)])
    assert counting.calls == 1
    assert second is first
    assert cache.get() is first


def test_concurrent_callers_share_one_computation(clock, make_item):
    counting = CountingAnalyzer(
        VibeAnalyzer(settings=Settings(), backend=None, clock=clock), delay=0.05
    )
    cache = DailyResultCache(counting, today=Today(date(2026, 1, 15)))
    items = [make_item(HOPEFUL_TITLE)]
    results = []
    errors = []

    def worker():
        try:
            results.append(cache.get_for_today(items))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10.0)

    assert not errors
    assert counting.calls == 1
    assert len(results) == 20
    assert all(r is results[0] for r in results)


def test_new_day_recomputes(counting, make_item):
    today = Today(date(2026, 1, 15))
    cache = DailyResultCache(counting, today=today)
    first = cache.get_for_today([make_item(HOPEFUL_TITLE)])

    today.day = date(2026, 1, 16)
    assert cache.get() is None
    second = cache.get_for_today([make_item(CRASH_TITLE)])

    assert counting.calls == 2
    assert second.vibe is Vibe.UNCERTAIN
    assert cache.get(date(2026, 1, 15)) is None
    assert cache.get(date(2026, 1, 16)) is second
    assert first.vibe is Vibe.HOPEFUL


def test_force_refresh_overwrites(counting, make_item):
    cache = DailyResultCache(counting, today=Today(date(2026, 1, 15)))
    cache.get_for_today([make_item(HOPEFUL_TITLE)])
    refreshed = cache.force_refresh([make_item(CRASH_TITLE)])

    assert counting.calls == 2
    assert refreshed.vibe is Vibe.UNCERTAIN
    assert cache.get_for_today([make_item(HOPEFUL_TITLE)]) is refreshed


def test_compute_if_absent(counting):
    cache = DailyResultCache(counting)
    day = date(2026, 2, 1)
    sentinel = object()
    assert cache.compute_if_absent(day, lambda: sentinel) is sentinel
    assert cache.compute_if_absent(day, lambda: pytest.fail("recomputed")) is sentinel


def test_cancelled_analysis_is_not_cached(counting, make_item):
    cache = DailyResultCache(counting, today=Today(date(2026, 1, 15)))
    token = CancelToken()
    token.cancel()
    with pytest.raises(AnalysisCancelled):
        cache.get_for_today([make_item(HOPEFUL_TITLE)], token)
    assert cache.get() is None

    with pytest.raises(AnalysisCancelled):
        cache.force_refresh([make_item(HOPEFUL_TITLE)], token)
    assert cache.get() is None

    result = cache.get_for_today([make_item(HOPEFUL_TITLE)])
    assert cache.get() is result


def test_cancelled_refresh_keeps_previous_entry(counting, make_item):
    cache = DailyResultCache(counting, today=Today(date(2026, 1, 15)))
    kept = cache.get_for_today([make_item(HOPEFUL_TITLE)])
    token = CancelToken()
    token.cancel()
    with pytest.raises(AnalysisCancelled):
        cache.force_refresh([make_item(CRASH_TITLE)], token)
    assert cache.get() is kept


def test_clear(counting, make_item):
    cache = DailyResultCache(counting, today=Today(date(2026, 1, 15)))
    cache.get_for_today([make_item(HOPEFUL_TITLE)])
    cache.clear()
    assert cache.get() is None
