"""
Optional "smart" analyzers consulted before the deterministic pipeline.

A smart analyzer implements ``analyze(items) -> AnalysisResult | None``.
:class:`AnalyzerChain` asks each delegate in turn, waits at most
``delegate_timeout`` seconds for each, and falls back to
:class:`~daily_vibe.analyzer.VibeAnalyzer` when every delegate returns
``None``, raises, times out, or returns something that is not a valid
result. The chain itself never raises except for
:class:`~daily_vibe.errors.AnalysisCancelled`.

Environment Variables:
* ``VIBE_DELEGATE_TIMEOUT`` – seconds to wait per delegate (default: 10)
"""

from __future__ import annotations

import json
import time
from concurrent.futures import FIRST_COMPLETED, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from .analyzer import VibeAnalyzer, neutral_result
from .errors import AnalysisCancelled, CancelToken
from .logging_utils import get_logger
from .models import AnalysisResult, IntensityInfo, NewsItem, SentimentScore, clamp
from .vibes import Vibe

log = get_logger(__name__)

_CANCEL_POLL_SECONDS = 0.05

# Headlines sent to a generative delegate.
MAX_PROMPT_HEADLINES = 10

VIBE_PROMPT = """Analyze these news headlines and determine the overall mood or "vibe":

{headlines}

Select the most appropriate vibe from this list:
{vibes}

Respond with JSON only, in this shape:
{{"vibe": "<one vibe from the list>", "reasoning": "<one or two sentences>", "themes": ["<theme>", ...], "confidence": <0.0-1.0>}}"""


class SmartAnalyzer(Protocol):
    name: str

    def analyze(self, items: Sequence[NewsItem]) -> Optional[AnalysisResult]: ...


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _extract_json(text: str) -> Optional[Dict[str, Any]]:
    """Parse the first JSON object in ``text``, tolerating code fences and chatter."""
    if not text:
        return None
    start = text.find("{")
    end = text.rfind("}")
    if start < 0 or end <= start:
        return None
    try:
        data = json.loads(text[start : end + 1])
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


class LLMVibeDelegate:
    """Classify the day's mood with a text-generation callable.

    ``generate`` takes a prompt and returns the model's raw text. Any
    model client works: wrap it in a function. Returns ``None`` (letting
    the chain fall back) when there are no usable headlines, the response
    is not JSON, or the named vibe is not one we know. Exceptions from
    ``generate`` propagate to the chain, which treats them as a failure.
    """

    def __init__(
        self,
        generate: Callable[[str], str],
        name: str = "llm",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._generate = generate
        self.name = name
        self._clock = clock or _utcnow

    def build_prompt(self, items: Sequence[NewsItem]) -> str:
        headlines = "\n".join(
            f"- {item.title}" for item in items[:MAX_PROMPT_HEADLINES]
        )
        vibes = ", ".join(v.value for v in Vibe)
        return VIBE_PROMPT.format(headlines=headlines, vibes=vibes)

    def analyze(self, items: Sequence[NewsItem]) -> Optional[AnalysisResult]:
        usable = [item for item in items if item.is_valid]
        if not usable:
            return None

        response = self._generate(self.build_prompt(usable))
        data = _extract_json(response)
        if data is None:
            log.warning("delegate_bad_response name=%s reason=not_json", self.name)
            return None

        vibe = Vibe.parse(str(data.get("vibe", "")))
        if vibe is None:
            log.warning(
                "delegate_bad_response name=%s reason=unknown_vibe vibe=%s",
                self.name,
                data.get("vibe"),
            )
            return None

        try:
            confidence = clamp(float(data.get("confidence", 0.5)))
        except (TypeError, ValueError):
            confidence = 0.5
        themes = data.get("themes") or []
        if not isinstance(themes, list):
            themes = []
        keywords: List[str] = [str(t).strip().lower() for t in themes if str(t).strip()]
        reasoning = str(data.get("reasoning") or "").strip()

        # The model reports no sentiment of its own; confidence stands in
        # for positivity and the other axes sit at neutral.
        sentiment = SentimentScore(positivity=confidence, energy=0.5, complexity=0.5)
        return AnalysisResult(
            vibe=vibe,
            confidence=confidence,
            rationale=reasoning or f"Today's headlines read as {vibe.value}.",
            keywords=tuple(keywords),
            sentiment=sentiment,
            analyzed_at=self._clock(),
            intensity_info=IntensityInfo.for_vibe(vibe, confidence),
            source=self.name,
        )


class AnalyzerChain:
    """Try each delegate with a bounded wait, then the deterministic analyzer.

    Delegates run on a worker thread so a hung model call cannot block the
    caller past ``timeout``; an abandoned call is left to finish on its own
    and its result is discarded.
    """

    def __init__(
        self,
        delegates: Sequence[SmartAnalyzer],
        fallback: Optional[VibeAnalyzer] = None,
        timeout: Optional[float] = None,
    ):
        self.delegates = list(delegates)
        self.fallback = fallback or VibeAnalyzer()
        self.timeout = (
            timeout if timeout is not None else self.fallback.settings.delegate_timeout
        )

    def _run_delegate(
        self,
        delegate: SmartAnalyzer,
        items: Sequence[NewsItem],
        cancel: Optional[CancelToken],
    ) -> Optional[AnalysisResult]:
        name = getattr(delegate, "name", type(delegate).__name__)
        executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="vibe-delegate")
        future = executor.submit(delegate.analyze, items)
        deadline = time.monotonic() + max(0.0, self.timeout)
        try:
            while not future.done():
                if cancel is not None and cancel.cancelled:
                    log.info("delegate_cancelled name=%s", name)
                    raise AnalysisCancelled()
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    log.warning(
                        "delegate_timeout name=%s timeout=%.1fs", name, self.timeout
                    )
                    return None
                wait(
                    [future],
                    timeout=min(_CANCEL_POLL_SECONDS, remaining),
                    return_when=FIRST_COMPLETED,
                )
            try:
                result = future.result()
            except AnalysisCancelled:
                raise
            except Exception as e:
                log.warning("delegate_failed name=%s err=%s", name, str(e))
                return None
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        if result is None:
            log.debug("delegate_declined name=%s", name)
            return None
        if not isinstance(result, AnalysisResult) or not isinstance(result.vibe, Vibe):
            log.warning(
                "delegate_bad_result name=%s type=%s", name, type(result).__name__
            )
            return None
        return result

    def analyze(
        self, items: Sequence[NewsItem], cancel: Optional[CancelToken] = None
    ) -> AnalysisResult:
        for delegate in self.delegates:
            if cancel is not None:
                cancel.raise_if_cancelled()
            result = self._run_delegate(delegate, items, cancel)
            if result is not None:
                log.info(
                    "vibe_analyzed vibe=%s confidence=%.3f mode=%s",
                    result.vibe.value,
                    result.confidence,
                    result.source,
                )
                return result

        if cancel is not None:
            cancel.raise_if_cancelled()
        try:
            return self.fallback.analyze(items, cancel)
        except AnalysisCancelled:
            raise
        except Exception as e:
            log.error("vibe_analysis_failed err=%s fallback=neutral", str(e), exc_info=True)
            return neutral_result()
