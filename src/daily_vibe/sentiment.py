"""Lexicon sentiment scoring with negation handling.

The scorer reads the *unweighted* text of the whole batch. Weighted tokens
would over-count headline vocabulary and skew the tone toward titles.

Scoring
-------
A negation word opens a two-token window. A positive or negative lexicon hit
inside the window counts toward the opposite polarity. Energy and calm hits
are counted at face value regardless of negation.

* ``positivity = 0.5 + 0.5 * (pos - neg) / max(1, pos + neg)``
* ``energy     = 0.5 + 0.5 * (energy - calm) / max(1, energy + calm)``
* ``complexity = (mean_token_length / 10 + unique / total) / 2``

An empty batch yields :data:`~daily_vibe.models.NEUTRAL_SENTIMENT`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .models import NEUTRAL_SENTIMENT, SentimentScore
from .text import NEGATION_WORDS, scan_tokens

NEGATION_WINDOW = 2

POSITIVE_WORDS = frozenset(
    {
        "good", "great", "excellent", "amazing", "wonderful", "fantastic",
        "positive", "successful", "beneficial", "helpful", "beautiful", "love",
        "joy", "happy", "pleased", "excited", "thrilled", "delighted", "proud",
        "grateful", "hope", "hopeful", "optimistic", "optimism", "breakthrough",
        "success", "win", "wins", "won", "victory", "triumph", "celebrate",
        "celebrates", "celebration", "improve", "improved", "improves",
        "improvement", "recovery", "recovers", "gain", "gains", "growth",
        "thrive", "thriving", "boost", "boosts", "progress", "promising",
        "praise", "praised", "applause", "relief", "safe", "rescued", "healthy",
        "strong", "record", "best", "peace", "kind", "kindness", "generous",
        "brilliant", "inspiring", "uplifting", "cheer", "cheers", "welcome",
        "welcomed", "support", "benefit", "benefits", "achievement", "award",
    }
)

NEGATIVE_WORDS = frozenset(
    {
        "bad", "terrible", "awful", "horrible", "negative", "failed", "disaster",
        "crisis", "problem", "issue", "concern", "worry", "fear", "angry", "sad",
        "disappointed", "frustrated", "upset", "troubled", "disturbed",
        "alarmed", "crash", "crashes", "collapse", "collapses", "plunge",
        "plunges", "decline", "declines", "loss", "losses", "lose", "loses",
        "death", "deaths", "dead", "killed", "kills", "war", "attack",
        "attacks", "violence", "violent", "threat", "threats", "danger",
        "dangerous", "risk", "risks", "fail", "fails", "failure", "worst",
        "tragedy", "tragic", "grief", "mourning", "scandal", "fraud", "corrupt",
        "corruption", "recession", "inflation", "layoffs", "cuts", "shortage",
        "panic", "chaos", "outrage", "anger", "conflict", "struggle",
        "struggles", "warning", "warns", "injured", "victims", "uncertainty",
        "doubt", "weak", "weakens", "slump", "turmoil", "damage", "destroyed",
    }
)

ENERGY_WORDS = frozenset(
    {
        "fast", "quick", "rapid", "speed", "rush", "burst", "explosive",
        "dynamic", "intense", "powerful", "strong", "force", "drive", "push",
        "action", "move", "active", "energetic", "vibrant", "lively", "exciting",
        "thrilling", "surge", "surges", "soar", "soars", "skyrocket", "race",
        "racing", "sprint", "launch", "launches", "blast", "erupt", "erupts",
        "storm", "storms", "fierce", "dramatic", "sudden", "suddenly", "spike",
        "spikes", "jump", "jumps", "leap", "leaps", "boom", "booming", "urgent",
        "breaking", "escalate", "escalates", "sweeping", "massive", "wild",
        "frenzy", "scramble",
    }
)

CALM_WORDS = frozenset(
    {
        "slow", "gentle", "soft", "quiet", "calm", "peaceful", "serene",
        "tranquil", "still", "steady", "stable", "balanced", "harmonious",
        "soothing", "relaxing", "comfortable", "easy", "smooth", "gradual",
        "patient", "mindful", "quietly", "gently", "slowly", "gradually",
        "steadily", "rest", "resting", "pause", "pauses", "paused", "ease",
        "eases", "eased", "settle", "settles", "settled", "routine", "ordinary",
        "modest", "mild", "moderate", "measured", "unchanged", "flat", "holds",
        "hold", "linger", "lingers", "reflect", "reflects", "reflection",
        "meditation", "silence", "silent", "cozy",
    }
)


@dataclass
class _Counts:
    positive: int = 0
    negative: int = 0
    energy: int = 0
    calm: int = 0


def _count_hits(tokens: Sequence[str]) -> _Counts:
    counts = _Counts()
    countdown = 0
    for tok in tokens:
        if tok in NEGATION_WORDS:
            countdown = NEGATION_WINDOW
            continue

        negated = countdown > 0
        if tok in POSITIVE_WORDS:
            if negated:
                counts.negative += 1
            else:
                counts.positive += 1
        elif tok in NEGATIVE_WORDS:
            if negated:
                counts.positive += 1
            else:
                counts.negative += 1

        if tok in ENERGY_WORDS:
            counts.energy += 1
        if tok in CALM_WORDS:
            counts.calm += 1

        if countdown > 0:
            countdown -= 1
    return counts


def _balance(up: int, down: int) -> float:
    return 0.5 + 0.5 * (up - down) / max(1, up + down)


def score_tokens(tokens: Sequence[str]) -> SentimentScore:
    if not tokens:
        return NEUTRAL_SENTIMENT

    counts = _count_hits(tokens)

    content = [t for t in tokens if t not in NEGATION_WORDS]
    if content:
        mean_len = sum(len(t) for t in content) / len(content)
        diversity = len(set(content)) / len(content)
        complexity = (mean_len / 10.0 + diversity) / 2.0
    else:
        complexity = 0.0

    return SentimentScore(
        positivity=_balance(counts.positive, counts.negative),
        energy=_balance(counts.energy, counts.calm),
        complexity=complexity,
    )


def score_text(text: str) -> SentimentScore:
    """Return the :class:`SentimentScore` for ``text``."""
    return score_tokens(scan_tokens(text))
