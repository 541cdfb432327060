"""Tests for semantic similarity scoring.

Covers:
- cosine similarity edge cases
- the scorer staying inactive when the backend cannot serve definitions
- per-item failures being skipped, all-items failure returning None
- cancellation abandoning in-flight embeds
- the sentence-transformers backend with a mocked model
"""

import threading
import time

import numpy as np
import pytest

from daily_vibe import embeddings
from daily_vibe.embeddings import (
    SemanticScorer,
    SentenceTransformerBackend,
    cosine_similarity,
)
from daily_vibe.errors import AnalysisCancelled, CancelToken
from daily_vibe.vibes import VIBE_PROFILES, Vibe
from tests.conftest import BlockingBackend, LookupBackend, UnavailableBackend, axis


class TestCosineSimilarity:
    def test_parallel_and_orthogonal(self):
        assert cosine_similarity([1.0, 2.0], [2.0, 4.0]) == pytest.approx(1.0)
        assert cosine_similarity([1.0, 0.0], [0.0, 3.0]) == 0.0
        assert cosine_similarity([1.0, 0.0], [-1.0, 0.0]) == pytest.approx(-1.0)

    def test_zero_vector_is_zero(self):
        assert cosine_similarity([0.0, 0.0], [1.0, 1.0]) == 0.0
        assert cosine_similarity(np.zeros(3), np.zeros(3)) == 0.0


class TestScorerActivation:
    def test_no_backend(self):
        scorer = SemanticScorer(None, VIBE_PROFILES)
        assert not scorer.active

    def test_unavailable_backend(self):
        backend = UnavailableBackend()
        scorer = SemanticScorer(backend, VIBE_PROFILES)
        assert not scorer.active
        assert backend.calls == 0

    def test_backend_raising_on_availability(self):
        class Broken:
            def is_available(self):
                raise RuntimeError("driver missing")

            def embed(self, text):
                return None

        assert not SemanticScorer(Broken(), VIBE_PROFILES).active

    def test_definition_embed_failure_disables_scorer(self, make_item):
        scorer = SemanticScorer(LookupBackend(fail_definitions=True), VIBE_PROFILES)
        assert not scorer.active
        assert scorer.similarities([make_item("anything")]) is None

    def test_mismatched_definition_sizes_disable_scorer(self):
        class Ragged(LookupBackend):
            def embed(self, text):
                vec = super().embed(text)
                if text == VIBE_PROFILES[Vibe.SOLEMN].definition_text:
                    return np.ones(3)
                return vec

        assert not SemanticScorer(Ragged(), VIBE_PROFILES).active

    def test_active_backend_embeds_every_definition_once(self):
        backend = LookupBackend()
        scorer = SemanticScorer(backend, VIBE_PROFILES)
        assert scorer.active
        assert backend.calls == len(VIBE_PROFILES)


class TestSimilarities:
    def test_normalised_mean_per_vibe(self, make_item):
        item = make_item("Lights in the fog")
        backend = LookupBackend(items={item.headline_text: axis(Vibe.MYSTERIOUS)})
        sims = SemanticScorer(backend, VIBE_PROFILES).similarities([item])
        assert sims[Vibe.MYSTERIOUS] == 1.0
        assert sims[Vibe.HOPEFUL] == 0.0
        assert list(sims) == list(Vibe)

    def test_mean_is_over_embedded_items_only(self, make_item):
        good = make_item("Lights in the fog")
        bad = make_item("Unembeddable")
        missing = make_item("Returns nothing")
        backend = LookupBackend(
            items={good.headline_text: axis(Vibe.MYSTERIOUS)},
            fail_on={bad.headline_text},
        )
        scorer = SemanticScorer(backend, VIBE_PROFILES)
        assert scorer.similarities([bad, good, missing]) == scorer.similarities([good])

    def test_mixed_items_average(self, make_item):
        a = make_item("First")
        b = make_item("Second")
        vec = axis(Vibe.SOLEMN) + axis(Vibe.URGENT)
        backend = LookupBackend(items={a.headline_text: axis(Vibe.SOLEMN), b.headline_text: vec})
        sims = SemanticScorer(backend, VIBE_PROFILES, floor=0.0, scale=1.0).similarities([a, b])
        assert sims[Vibe.SOLEMN] == pytest.approx((1.0 + 1 / np.sqrt(2)) / 2)
        assert sims[Vibe.URGENT] == pytest.approx((0.0 + 1 / np.sqrt(2)) / 2)

    def test_wrong_sized_vectors_are_skipped(self, make_item):
        good = make_item("Lights in the fog")
        odd = make_item("Short vector")
        backend = LookupBackend(
            items={good.headline_text: axis(Vibe.MYSTERIOUS), odd.headline_text: np.ones(3)}
        )
        scorer = SemanticScorer(backend, VIBE_PROFILES)
        assert scorer.similarities([odd, good]) == scorer.similarities([good])
        assert scorer.similarities([odd]) is None

    def test_all_items_failing_returns_none(self, make_item, caplog):
        backend = LookupBackend(fail_on={"Broken one", "Broken two"})
        scorer = SemanticScorer(backend, VIBE_PROFILES)
        with caplog.at_level("WARNING"):
            result = scorer.similarities([make_item("Broken one"), make_item("Broken two")])
        assert result is None
        assert "embedding_unavailable" in caplog.text

    def test_no_usable_items(self, make_item):
        scorer = SemanticScorer(LookupBackend(), VIBE_PROFILES)
        assert scorer.similarities([]) is None
        assert scorer.similarities([make_item("")]) is None

    def test_cancel_before_start(self, make_item):
        scorer = SemanticScorer(LookupBackend(), VIBE_PROFILES)
        token = CancelToken()
        token.cancel()
        with pytest.raises(AnalysisCancelled):
            scorer.similarities([make_item("Anything")], token)

    def test_cancel_abandons_in_flight_embeds(self, make_item):
        backend = BlockingBackend()
        scorer = SemanticScorer(backend, VIBE_PROFILES, max_workers=2)
        token = CancelToken()
        items = [make_item(f"Headline {i}") for i in range(6)]

        def cancel_when_started():
            backend.started.wait(2.0)
            token.cancel()

        threading.Thread(target=cancel_when_started).start()
        start = time.monotonic()
        try:
            with pytest.raises(AnalysisCancelled):
                scorer.similarities(items, token)
            assert time.monotonic() - start < 2.0
        finally:
            backend.release.set()


class FakeModel:
    instances = 0

    def __init__(self, name):
        FakeModel.instances += 1
        self.name = name

    def encode(self, text):
        return [float(len(text)), 1.0]


class TestSentenceTransformerBackend:
    def test_missing_library(self, monkeypatch):
        monkeypatch.setattr(embeddings, "EMBEDDINGS_AVAILABLE", False)
        backend = SentenceTransformerBackend()
        assert not backend.is_available()
        assert backend.embed("hello") is None

    def test_model_load_failure(self, monkeypatch):
        def boom(name):
            raise OSError("no such model")

        monkeypatch.setattr(embeddings, "EMBEDDINGS_AVAILABLE", True)
        monkeypatch.setattr(embeddings, "SentenceTransformer", boom)
        backend = SentenceTransformerBackend("missing-model")
        assert not backend.is_available()
        assert not backend.is_available()

    def test_embed_and_cache(self, monkeypatch):
        monkeypatch.setattr(embeddings, "EMBEDDINGS_AVAILABLE", True)
        monkeypatch.setattr(embeddings, "SentenceTransformer", FakeModel)
        FakeModel.instances = 0
        backend = SentenceTransformerBackend("fake", cache_size=4)

        vec = backend.embed("hello")
        assert isinstance(vec, np.ndarray)
        assert vec.tolist() == [5.0, 1.0]
        assert backend.embed("hello") is vec
        assert backend.embed("") is None
        assert backend.get_cache_stats() == {"size": 1, "hits": 1, "misses": 1}
        assert FakeModel.instances == 1
