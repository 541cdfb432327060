"""Per-vibe scoring, blending and selection."""

from __future__ import annotations

from typing import Collection, Dict, Mapping, Optional, Sequence, Tuple

from .models import INTENSITY_CEILING, INTENSITY_FLOOR, SentimentScore, clamp
from .vibes import NEUTRAL_VIBE, Vibe, VibeProfile


def keyword_density(tokens: Sequence[str], lexicon: Collection[str]) -> float:
    """Fraction of ``tokens`` that are exactly a lexicon entry.

    Matching is whole-token equality: "war" does not match "warmth".
    """
    if not tokens or not lexicon:
        return 0.0
    words = lexicon if isinstance(lexicon, (set, frozenset)) else frozenset(lexicon)
    matches = sum(1 for t in tokens if t in words)
    return matches / len(tokens)


def density_scores(
    tokens: Sequence[str], profiles: Mapping[Vibe, VibeProfile]
) -> Dict[Vibe, float]:
    """Keyword density for every vibe, in declaration order."""
    return {
        vibe: keyword_density(tokens, frozenset(profile.keywords))
        for vibe, profile in profiles.items()
    }


def normalize_similarity(raw: float, floor: float = 0.05, scale: float = 4.0) -> float:
    """Stretch the observed raw cosine range (~0.05-0.30) onto [0, 1]."""
    return clamp((raw - floor) * scale)


def combine_scores(
    density: Mapping[Vibe, float],
    similarity: Optional[Mapping[Vibe, float]] = None,
    density_weight: float = 0.3,
    similarity_weight: float = 0.7,
) -> Dict[Vibe, float]:
    """Blend density with normalised similarity, or pass density through.

    ``similarity`` must already be normalised. ``None`` means the semantic
    scorer is inactive for this analysis.
    """
    if similarity is None:
        return dict(density)
    return {
        vibe: density_weight * d + similarity_weight * similarity.get(vibe, 0.0)
        for vibe, d in density.items()
    }


def select_vibe(final: Mapping[Vibe, float]) -> Tuple[Vibe, float, bool]:
    """Pick the highest-scoring vibe.

    Returns ``(vibe, confidence, matched)``. Ties go to the vibe declared
    first. When the best score is 0 the neutral vibe is returned with
    confidence 0 and ``matched`` False.
    """
    best_vibe: Optional[Vibe] = None
    best_score = 0.0
    for vibe, score in final.items():
        if best_vibe is None or score > best_score:
            best_vibe, best_score = vibe, score
    if best_vibe is None or best_score <= 0.0:
        return NEUTRAL_VIBE, 0.0, False
    return best_vibe, clamp(best_score), True


def display_intensity(confidence: float, sentiment: SentimentScore) -> float:
    """Display intensity in [0.3, 1.0].

    Confidence dominates; energy and the distance of positivity from neutral
    add the rest.
    """
    emotional = abs(sentiment.positivity - 0.5) * 2.0
    raw = 0.6 * confidence + 0.3 * sentiment.energy + 0.1 * emotional
    return clamp(raw, INTENSITY_FLOOR, INTENSITY_CEILING)
