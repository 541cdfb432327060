"""Deterministic vibe analysis pipeline.

items -> weighted tokens -> {sentiment, keyword density, semantic similarity}
-> blend -> select -> rationale / keywords / intensity -> AnalysisResult

The analyzer holds only immutable state after construction (the profile
table and, when semantic scoring is active, the per-vibe vectors), so one
instance can serve concurrent callers. Every call uses its own local
accumulators.
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Callable, Mapping, Optional, Sequence, Union

from .config import Settings, get_settings
from .embeddings import EmbeddingBackend, SemanticScorer, get_default_backend
from .errors import CancelToken
from .logging_utils import get_logger
from .models import NEUTRAL_SENTIMENT, AnalysisResult, IntensityInfo, NewsItem
from .rationale import build_rationale, detect_themes, extract_keywords, no_signal_rationale
from .scoring import combine_scores, density_scores, display_intensity, select_vibe
from .sentiment import score_text
from .text import combined_text, weighted_tokens
from .vibes import NEUTRAL_VIBE, Vibe, VibeProfile, build_profiles, get_profile

log = get_logger(__name__)

Clock = Callable[[], datetime]


class _UseDefaultBackend:
    """Marker for "use the shared backend when semantic scoring is enabled"."""

    def __repr__(self) -> str:
        return "<default backend>"


_DEFAULT_BACKEND = _UseDefaultBackend()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class VibeAnalyzer:
    """Keyword/semantic hybrid analyzer. Always returns a result.

    Parameters
    ----------
    settings : Settings, optional
        Defaults to :func:`get_settings`.
    backend : EmbeddingBackend or None, optional
        Embedding backend for semantic scoring. Omit to use the shared
        sentence-transformers backend (when ``FEATURE_SEMANTIC_SCORING`` is
        on); pass ``None`` for keyword-only mode.
    profiles : mapping, optional
        Vibe profile table. Defaults to the built-in table, with lexicons
        overridden from ``settings.keywords_path`` when set.
    clock : callable, optional
        Returns the ``analyzed_at`` timestamp.
    """

    name = "keyword"

    def __init__(
        self,
        settings: Optional[Settings] = None,
        backend: Union[EmbeddingBackend, None, _UseDefaultBackend] = _DEFAULT_BACKEND,
        profiles: Optional[Mapping[Vibe, VibeProfile]] = None,
        clock: Optional[Clock] = None,
    ):
        self.settings = settings or get_settings()
        self.profiles = profiles if profiles is not None else build_profiles(
            self.settings.keywords_path
        )
        self._clock = clock or _utcnow

        if isinstance(backend, _UseDefaultBackend):
            backend = (
                get_default_backend(
                    self.settings.embedding_model, self.settings.embed_cache_size
                )
                if self.settings.feature_semantic_scoring
                else None
            )
        self.semantic = SemanticScorer(
            backend,
            self.profiles,
            floor=self.settings.similarity_floor,
            scale=self.settings.similarity_scale,
            max_workers=self.settings.embed_max_workers,
        )

    @property
    def semantic_active(self) -> bool:
        return self.semantic.active

    def analyze(
        self, items: Sequence[NewsItem], cancel: Optional[CancelToken] = None
    ) -> AnalysisResult:
        """Analyze a batch of items.

        Raises :class:`~daily_vibe.errors.AnalysisCancelled` only if ``cancel``
        is set before the result is built; never raises otherwise.
        """
        start = time.time()
        s = self.settings
        usable = [item for item in items if item.is_valid]

        tokens = weighted_tokens(
            items,
            title_weight=s.title_weight,
            description_weight=s.description_weight,
            content_weight=s.content_weight,
        )
        sentiment = score_text(combined_text(usable))
        density = density_scores(tokens, self.profiles)

        similarity: Optional[Mapping[Vibe, float]] = None
        if self.semantic.active and usable:
            similarity = self.semantic.similarities(usable, cancel)

        final = combine_scores(
            density,
            similarity,
            density_weight=s.density_weight,
            similarity_weight=s.similarity_weight,
        )
        vibe, confidence, matched = select_vibe(final)
        if cancel is not None:
            cancel.raise_if_cancelled()

        profile = self.profiles[vibe]
        if matched:
            rationale = build_rationale(profile, sentiment, detect_themes(tokens))
            keywords = extract_keywords(tokens, profile)
            intensity = display_intensity(confidence, sentiment)
        else:
            if usable:
                rationale = build_rationale(profile, sentiment, detect_themes(tokens))
            else:
                rationale = no_signal_rationale(profile)
            keywords = []
            intensity = 0.0

        source = "hybrid" if similarity is not None else "keyword"
        result = AnalysisResult(
            vibe=vibe,
            confidence=confidence,
            rationale=rationale,
            keywords=tuple(keywords),
            sentiment=sentiment,
            analyzed_at=self._clock(),
            intensity_info=IntensityInfo.for_vibe(vibe, intensity),
            source=source,
        )
        log.info(
            "vibe_analyzed vibe=%s confidence=%.3f items=%d tokens=%d mode=%s elapsed=%.3fs",
            vibe.value,
            result.confidence,
            len(usable),
            len(tokens),
            source,
            time.time() - start,
        )
        return result


def neutral_result(analyzed_at: Optional[datetime] = None) -> AnalysisResult:
    """The zero-confidence neutral result returned when nothing else can be."""

    return AnalysisResult(
        vibe=NEUTRAL_VIBE,
        confidence=0.0,
        rationale=no_signal_rationale(get_profile(NEUTRAL_VIBE)),
        keywords=(),
        sentiment=NEUTRAL_SENTIMENT,
        analyzed_at=analyzed_at or _utcnow(),
        intensity_info=IntensityInfo.for_vibe(NEUTRAL_VIBE, 0.0),
        source="neutral",
    )
