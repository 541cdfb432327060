"""
Semantic similarity scoring with sentence embeddings.

Each vibe gets a short definition text (display name, description, first
five lexicon words) that is embedded once when the scorer is built. Per
analysis, every item's ``title + description`` is embedded, compared by
cosine similarity against each vibe vector, and averaged over the items
that embedded successfully. The averaged raw similarity is then stretched
onto [0, 1].

The scorer degrades instead of failing:

* no backend, a backend that cannot load its model, or a vibe definition
  that fails to embed: the scorer is inactive for its whole lifetime;
* an item that fails to embed, or embeds to a vector of the wrong size, is
  skipped;
* every item failing: that analysis falls back to keyword density.

Environment Variables:
* ``VIBE_EMBEDDING_MODEL`` – sentence-transformers model (default: all-MiniLM-L6-v2)
* ``VIBE_EMBED_MAX_WORKERS`` – concurrent per-item embeds (default: 4)
* ``VIBE_EMBED_CACHE_SIZE`` – LRU size for text → vector memo (default: 512)
"""

from __future__ import annotations

import threading
import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

import cachetools
import numpy as np

from .errors import AnalysisCancelled, CancelToken
from .logging_utils import get_logger
from .models import NewsItem
from .scoring import normalize_similarity
from .vibes import Vibe, VibeProfile

# Optional sentence-transformers support
try:
    from sentence_transformers import SentenceTransformer

    EMBEDDINGS_AVAILABLE = True
except ImportError:
    EMBEDDINGS_AVAILABLE = False
    SentenceTransformer = None

log = get_logger(__name__)

# How often a waiting analysis re-checks its cancel token, in seconds.
_CANCEL_POLL_SECONDS = 0.05


class EmbeddingBackend(Protocol):
    def embed(self, text: str) -> Optional[Sequence[float]]: ...

    def is_available(self) -> bool: ...


class SentenceTransformerBackend:
    """Embedding backend over a sentence-transformers model.

    The model is loaded lazily on first use; load failures leave the
    backend permanently unavailable. Results are memoised in an LRU cache
    guarded by a lock so the backend can be shared across threads.
    """

    def __init__(self, model_name: str = "all-MiniLM-L6-v2", cache_size: int = 512):
        self.model_name = model_name
        self._model: Optional[Any] = None
        self._load_attempted = False
        self._lock = threading.Lock()
        self._cache: cachetools.LRUCache = cachetools.LRUCache(maxsize=max(1, cache_size))
        self._cache_hits = 0
        self._cache_misses = 0

    def _initialize_model(self) -> None:
        if not EMBEDDINGS_AVAILABLE:
            log.warning(
                "embedding_backend_disabled reason=sentence_transformers_not_installed"
            )
            return
        try:
            log.info("embedding_model_loading model=%s", self.model_name)
            start_time = time.time()
            self._model = SentenceTransformer(self.model_name)
            log.info(
                "embedding_model_loaded model=%s elapsed=%.2fs",
                self.model_name,
                time.time() - start_time,
            )
        except Exception as e:
            log.warning("embedding_model_load_failed model=%s err=%s", self.model_name, str(e))
            self._model = None

    def is_available(self) -> bool:
        with self._lock:
            if not self._load_attempted:
                self._load_attempted = True
                self._initialize_model()
            return self._model is not None

    def embed(self, text: str) -> Optional[np.ndarray]:
        if not text or not self.is_available():
            return None

        with self._lock:
            cached = self._cache.get(text)
            if cached is not None:
                self._cache_hits += 1
                return cached
            self._cache_misses += 1

        try:
            vector = np.asarray(self._model.encode(text), dtype=np.float64)
        except Exception as e:
            log.debug("embedding_failed err=%s", str(e))
            return None

        with self._lock:
            self._cache[text] = vector
        return vector

    def get_cache_stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "size": len(self._cache),
                "hits": self._cache_hits,
                "misses": self._cache_misses,
            }


def cosine_similarity(u: Sequence[float], v: Sequence[float]) -> float:
    """Cosine of the angle between ``u`` and ``v``; 0 if either has zero length."""
    a = np.asarray(u, dtype=np.float64)
    b = np.asarray(v, dtype=np.float64)
    norm = float(np.linalg.norm(a) * np.linalg.norm(b))
    if norm == 0.0:
        return 0.0
    return float(np.dot(a, b) / norm)


class SemanticScorer:
    def __init__(
        self,
        backend: Optional[EmbeddingBackend],
        profiles: Mapping[Vibe, VibeProfile],
        *,
        floor: float = 0.05,
        scale: float = 4.0,
        max_workers: int = 4,
    ):
        self.backend = backend
        self.floor = floor
        self.scale = scale
        self.max_workers = max(1, min(max_workers, 16))
        self._vectors: Dict[Vibe, np.ndarray] = {}
        self._shape: Tuple[int, ...] = ()
        self.active = False

        if backend is None:
            log.info("semantic_scoring_disabled reason=no_backend")
            return
        try:
            available = backend.is_available()
        except Exception as e:
            log.warning("semantic_scoring_disabled reason=backend_error err=%s", str(e))
            return
        if not available:
            log.warning("semantic_scoring_disabled reason=backend_unavailable")
            return

        vectors: Dict[Vibe, np.ndarray] = {}
        for vibe, profile in profiles.items():
            vec = self._safe_embed(profile.definition_text)
            if vec is None:
                log.warning(
                    "semantic_scoring_disabled reason=definition_embed_failed vibe=%s",
                    vibe.value,
                )
                return
            if vectors and vec.shape != next(iter(vectors.values())).shape:
                log.warning(
                    "semantic_scoring_disabled reason=definition_shape_mismatch vibe=%s",
                    vibe.value,
                )
                return
            vectors[vibe] = vec
        self._vectors = vectors
        self._shape = next(iter(vectors.values())).shape if vectors else ()
        self.active = True
        log.info("semantic_scoring_ready vibes=%d", len(vectors))

    def _safe_embed(self, text: str) -> Optional[np.ndarray]:
        try:
            vec = self.backend.embed(text)
        except Exception as e:
            log.debug("embedding_failed err=%s", str(e))
            return None
        if vec is None:
            return None
        return np.asarray(vec, dtype=np.float64)

    def _embed_all(
        self, texts: List[str], cancel: Optional[CancelToken]
    ) -> List[Optional[np.ndarray]]:
        """Embed ``texts`` concurrently, preserving input order."""
        if cancel is not None:
            cancel.raise_if_cancelled()
        workers = min(self.max_workers, len(texts))
        executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="vibe-embed")
        futures: List[Future] = [executor.submit(self._safe_embed, t) for t in texts]
        try:
            pending = set(futures)
            while pending:
                if cancel is not None and cancel.cancelled:
                    for f in pending:
                        f.cancel()
                    log.info("semantic_scoring_cancelled pending=%d", len(pending))
                    raise AnalysisCancelled()
                _, pending = wait(
                    pending, timeout=_CANCEL_POLL_SECONDS, return_when=FIRST_COMPLETED
                )
        finally:
            # In-flight calls on cancellation are abandoned, not awaited.
            executor.shutdown(wait=cancel is None or not cancel.cancelled, cancel_futures=True)
        return [f.result() for f in futures]

    def similarities(
        self, items: Sequence[NewsItem], cancel: Optional[CancelToken] = None
    ) -> Optional[Dict[Vibe, float]]:
        """Normalised mean similarity per vibe, or ``None`` if nothing embedded."""
        if not self.active:
            return None
        texts = [item.headline_text for item in items if item.is_valid]
        if not texts:
            return None

        vectors = self._embed_all(texts, cancel)

        totals = {vibe: 0.0 for vibe in self._vectors}
        embedded = 0
        for vec in vectors:
            if vec is None:
                continue
            if vec.shape != self._shape:
                log.debug(
                    "embedding_shape_mismatch got=%s expected=%s", vec.shape, self._shape
                )
                continue
            embedded += 1
            for vibe, vibe_vec in self._vectors.items():
                totals[vibe] += cosine_similarity(vec, vibe_vec)

        if embedded == 0:
            log.warning("embedding_unavailable items=%d fallback=keyword_density", len(texts))
            return None
        if embedded < len(texts):
            log.debug("embedding_partial embedded=%d items=%d", embedded, len(texts))

        return {
            vibe: normalize_similarity(total / embedded, self.floor, self.scale)
            for vibe, total in totals.items()
        }


# Global singleton backend
_backend: Optional[SentenceTransformerBackend] = None
_backend_lock = threading.Lock()


def get_default_backend(
    model_name: str = "all-MiniLM-L6-v2", cache_size: int = 512
) -> SentenceTransformerBackend:
    """Get or create the process-wide sentence-transformers backend."""
    global _backend
    with _backend_lock:
        if _backend is None:
            _backend = SentenceTransformerBackend(model_name, cache_size=cache_size)
        return _backend
