"""Daily vibe engine.

Classifies the overall emotional tone of a batch of news articles into one
of a fixed set of vibes, with a confidence, a sentiment breakdown, a short
rationale, supporting keywords and a display intensity. The deterministic
keyword/semantic pipeline always produces a result; an optional smart
delegate can be consulted first.
"""

from .analyzer import VibeAnalyzer
from .daily_cache import DailyResultCache
from .delegates import AnalyzerChain, LLMVibeDelegate, SmartAnalyzer
from .errors import AnalysisCancelled, CancelToken
from .models import AnalysisResult, IntensityInfo, NewsItem, SentimentScore
from .vibes import NEUTRAL_VIBE, VIBE_PROFILES, Vibe, VibeProfile, get_profile

__version__ = "0.1.0"

__all__: list[str] = [
    "AnalysisCancelled",
    "AnalysisResult",
    "AnalyzerChain",
    "CancelToken",
    "DailyResultCache",
    "IntensityInfo",
    "LLMVibeDelegate",
    "NEUTRAL_VIBE",
    "NewsItem",
    "SentimentScore",
    "SmartAnalyzer",
    "VIBE_PROFILES",
    "Vibe",
    "VibeAnalyzer",
    "VibeProfile",
    "get_profile",
]
