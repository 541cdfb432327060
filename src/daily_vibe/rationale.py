"""Human-readable annotation of an analysis: themes, rationale, keywords.

Theme detection uses its own lookup table, separate from the vibe lexicons,
and ranks themes by raw hit count rather than density.
"""

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Tuple

from .models import SentimentScore
from .vibes import VibeProfile

THEME_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "politics": ("government", "president", "congress", "election", "policy", "law"),
    "health": ("health", "medical", "doctor", "hospital", "treatment", "vaccine"),
    "technology": ("technology", "digital", "app", "internet", "computer", "innovation"),
    "environment": ("climate", "environment", "green", "renewable", "pollution", "nature"),
    "economy": ("economy", "business", "market", "financial", "money", "economic"),
    "social": ("community", "social", "people", "family", "education", "culture"),
}

MAX_THEMES = 3
MAX_KEYWORDS = 5


def detect_themes(tokens: Sequence[str], limit: int = MAX_THEMES) -> List[str]:
    """Top themes by raw hit count. Themes with no hits are left out."""
    counts = Counter(tokens)
    scored = []
    for theme, words in THEME_KEYWORDS.items():
        hits = sum(counts[w] for w in words)
        if hits:
            scored.append((theme, hits))
    # sorted() is stable, so equal counts keep table order
    scored.sort(key=lambda pair: pair[1], reverse=True)
    return [theme for theme, _ in scored[:limit]]


def positivity_label(positivity: float) -> str:
    if positivity < 0.3:
        return "challenging news"
    if positivity < 0.7:
        return "mixed developments"
    return "positive developments"


def energy_label(energy: float) -> str:
    if energy < 0.3:
        return "calm, steady news"
    if energy < 0.7:
        return "moderate activity"
    return "high-energy events"


def build_rationale(
    profile: VibeProfile, sentiment: SentimentScore, themes: Sequence[str]
) -> str:
    theme_text = ", ".join(themes) if themes else "general news"
    return (
        f"Today's news reflects a {profile.display_name.lower()} mood based on "
        f"{positivity_label(sentiment.positivity)} and {energy_label(sentiment.energy)}. "
        f"Key themes include: {theme_text}. "
        f"Headlines suggest {profile.description.lower()}."
    )


def no_signal_rationale(profile: VibeProfile) -> str:
    return (
        "There was not enough news signal to read today's mood, so it defaults "
        f"to {profile.display_name.lower()}: {profile.description.lower()}."
    )


def extract_keywords(
    tokens: Sequence[str], profile: VibeProfile, limit: int = MAX_KEYWORDS
) -> List[str]:
    """Most frequent weighted tokens that belong to the vibe's lexicon.

    Ties are broken alphabetically so the output is deterministic.
    """
    lexicon = frozenset(profile.keywords)
    counts = Counter(t for t in tokens if t in lexicon)
    ranked = sorted(counts.items(), key=lambda pair: (-pair[1], pair[0]))
    return [word for word, _ in ranked[:limit]]
