from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union

from dateutil import parser as _dtparse

from .vibes import Vibe, VibeProfile, get_profile


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, float(value)))


def _to_utc(ts_val: Union[datetime, str, None]) -> datetime:
    """Coerce a datetime or ISO string to an aware UTC datetime."""
    if ts_val is None:
        return datetime.now(timezone.utc)
    if isinstance(ts_val, datetime):
        ts_dt = ts_val
    elif isinstance(ts_val, str):
        try:
            ts_dt = _dtparse.isoparse(ts_val)
        except ValueError:
            ts_dt = datetime.fromisoformat(ts_val.replace("Z", "+00:00"))
    else:
        raise TypeError("timestamp must be datetime or ISO string")
    if ts_dt.tzinfo is None:
        return ts_dt.replace(tzinfo=timezone.utc)
    return ts_dt.astimezone(timezone.utc)


class NewsItem:
    """
    One news article handed to the analyzer. Read-only once built.

    ``title`` is the only field the analyzer depends on; an item whose title
    is blank is skipped during extraction. ``published_at`` accepts a
    datetime or ISO string and is stored as an aware UTC datetime
    (defaulting to now). ``source`` is accepted as an alias for
    ``source_name``; unknown keyword arguments are ignored.
    """

    __slots__ = ("title", "description", "content", "published_at", "source_name", "url")

    def __init__(self, title: str = "", **kwargs: Any) -> None:
        self.title: str = (title or "").strip()
        self.description: Optional[str] = kwargs.pop("description", None) or None
        self.content: Optional[str] = kwargs.pop("content", None) or None
        self.published_at: datetime = _to_utc(
            kwargs.pop("published_at", None) or kwargs.pop("publishedAt", None)
        )
        self.source_name: str = str(
            kwargs.pop("source_name", None) or kwargs.pop("source", None) or "unknown"
        )
        self.url: Optional[str] = kwargs.pop("url", None) or None

    def __repr__(self) -> str:
        return f"NewsItem(title={self.title!r}, source_name={self.source_name!r})"

    @property
    def is_valid(self) -> bool:
        return bool(self.title)

    @property
    def full_text(self) -> str:
        """Title, description and content joined by single spaces."""
        parts = [self.title]
        if self.description:
            parts.append(self.description)
        if self.content:
            parts.append(self.content)
        return " ".join(parts)

    @property
    def headline_text(self) -> str:
        """Title plus description; the text embedded for semantic scoring."""
        return f"{self.title} {self.description or ''}".strip()

    @classmethod
    def from_feed_dict(cls, d: Dict[str, Any]) -> "NewsItem":
        """
        Build a NewsItem from a NewsAPI-style article dict. ``source`` may be
        a plain string or an object with a ``name`` key. Unparseable
        timestamps fall back to the current UTC time.
        """
        source = d.get("source")
        if isinstance(source, dict):
            source = source.get("name")
        ts_val = d.get("publishedAt") or d.get("published_at") or d.get("published")
        try:
            published = _to_utc(ts_val)
        except (TypeError, ValueError):
            published = datetime.now(timezone.utc)
        return cls(
            title=d.get("title") or "",
            description=d.get("description"),
            content=d.get("content"),
            published_at=published,
            source_name=source or d.get("source_name"),
            url=d.get("url") or d.get("link"),
        )


@dataclass(frozen=True)
class SentimentScore:
    """Positivity, energy and complexity, each clamped to [0, 1] on construction."""

    positivity: float
    energy: float
    complexity: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "positivity", clamp(self.positivity))
        object.__setattr__(self, "energy", clamp(self.energy))
        object.__setattr__(self, "complexity", clamp(self.complexity))

    def to_dict(self) -> Dict[str, float]:
        return {
            "positivity": self.positivity,
            "energy": self.energy,
            "complexity": self.complexity,
        }


# Degenerate (no-token) sentiment. Complexity is 0: an empty batch carries
# no lexical variety at all.
NEUTRAL_SENTIMENT = SentimentScore(positivity=0.5, energy=0.5, complexity=0.0)

INTENSITY_FLOOR = 0.3
INTENSITY_CEILING = 1.0


@dataclass(frozen=True)
class IntensityInfo:
    vibe: Vibe
    description: str
    intensity: float

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "intensity", clamp(self.intensity, INTENSITY_FLOOR, INTENSITY_CEILING)
        )

    @classmethod
    def for_vibe(cls, vibe: Vibe, intensity: float) -> "IntensityInfo":
        return cls(
            vibe=vibe,
            description=get_profile(vibe).color_description,
            intensity=intensity,
        )


@dataclass(frozen=True)
class AnalysisResult:
    vibe: Vibe
    confidence: float
    rationale: str
    keywords: Tuple[str, ...]
    sentiment: SentimentScore
    analyzed_at: datetime
    intensity_info: IntensityInfo
    # Which analyzer produced the result ("keyword", "hybrid", or a delegate name).
    source: str = field(default="keyword", compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "confidence", clamp(self.confidence))
        object.__setattr__(self, "keywords", tuple(self.keywords)[:5])

    @property
    def profile(self) -> VibeProfile:
        return get_profile(self.vibe)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vibe": self.vibe.value,
            "confidence": self.confidence,
            "rationale": self.rationale,
            "keywords": list(self.keywords),
            "sentiment": self.sentiment.to_dict(),
            "analyzed_at": self.analyzed_at.isoformat(),
            "intensity_info": {
                "vibe": self.intensity_info.vibe.value,
                "description": self.intensity_info.description,
                "intensity": self.intensity_info.intensity,
            },
            "source": self.source,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "AnalysisResult":
        vibe = Vibe(d["vibe"])
        s = d.get("sentiment") or {}
        info = d.get("intensity_info") or {}
        keywords: List[str] = [str(k) for k in d.get("keywords") or []]
        return cls(
            vibe=vibe,
            confidence=float(d.get("confidence", 0.0)),
            rationale=str(d.get("rationale", "")),
            keywords=tuple(keywords),
            sentiment=SentimentScore(
                positivity=float(s.get("positivity", 0.5)),
                energy=float(s.get("energy", 0.5)),
                complexity=float(s.get("complexity", 0.0)),
            ),
            analyzed_at=_to_utc(d.get("analyzed_at")),
            intensity_info=IntensityInfo(
                vibe=Vibe(info.get("vibe", vibe.value)),
                description=str(
                    info.get("description") or get_profile(vibe).color_description
                ),
                intensity=float(info.get("intensity", INTENSITY_FLOOR)),
            ),
            source=str(d.get("source", "keyword")),
        )
