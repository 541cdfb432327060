"""Tokenisation and field-weighted token extraction.

``tokenize`` is the single normaliser used for keyword density, theme
detection and keyword extraction: lowercase, letters only, length > 2,
stopwords and every negation word removed. Contracted negatives ("don't")
are recognised whole and dropped rather than split into fragments.

``scan_tokens`` is the same scan with negations kept, for sentiment.

``weighted_tokens`` repeats each field's tokens by its integer weight so that
token frequency encodes field importance (a title token counts three times
by default) without any fractional bookkeeping.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from .logging_utils import get_logger
from .models import NewsItem

log = get_logger(__name__)

_SCAN_CHARS = re.compile(r"[^a-z']+")

NEGATION_WORDS = frozenset(
    {
        "not", "no", "never", "none", "nobody", "nothing", "neither", "nor",
        "nowhere", "cannot", "without", "hardly", "barely", "scarcely",
        "don't", "doesn't", "didn't", "isn't", "aren't", "wasn't", "weren't",
        "won't", "wouldn't", "can't", "couldn't", "shouldn't", "hasn't",
        "haven't", "hadn't", "ain't", "dont", "doesnt", "didnt", "isnt",
        "arent", "wasnt", "werent", "wont", "wouldnt", "cant", "couldnt",
        "shouldnt", "hasnt", "havent", "hadnt",
    }
)

STOPWORDS = frozenset(
    {
        "the", "a", "an", "and", "or", "but", "is", "are", "was", "were", "be",
        "been", "being", "am", "to", "of", "in", "on", "at", "by", "for", "with",
        "from", "into", "onto", "about", "as", "it", "its", "this", "that",
        "these", "those", "he", "she", "they", "them", "his", "her", "their",
        "we", "our", "you", "your", "has", "have", "had", "do", "does", "did",
        "will", "would", "can", "could", "should", "may", "might", "must",
        "shall", "than", "then", "there", "here", "what", "which", "who",
        "whom", "when", "where", "why", "how", "all", "any", "each", "more",
        "most", "some", "such", "only", "own", "same", "too", "very", "just",
        "also", "over", "after", "before", "says", "said", "new",
        "not", "no", "never", "nor",
    }
)


def scan_tokens(text: str) -> List[str]:
    """Lowercase word scan that keeps negations.

    Apostrophes survive long enough for contracted negatives ("don't") to be
    recognised; other words are cut at the apostrophe ("nation's" ->
    "nation").
    """
    if not text:
        return []
    cleaned = _SCAN_CHARS.sub(" ", text.lower().replace("’", "'"))
    out: List[str] = []
    for raw in cleaned.split():
        tok = raw.strip("'")
        if not tok:
            continue
        if tok in NEGATION_WORDS:
            out.append(tok)
            continue
        tok = tok.split("'", 1)[0]
        if len(tok) > 2 and tok not in STOPWORDS:
            out.append(tok)
    return out


def tokenize(text: str) -> List[str]:
    """Alphabetic tokens longer than two letters, minus stopwords and negations."""
    return [t for t in scan_tokens(text) if t not in NEGATION_WORDS]


def weighted_tokens(
    items: Iterable[NewsItem],
    title_weight: int = 3,
    description_weight: int = 1,
    content_weight: int = 1,
) -> List[str]:
    """Flatten a batch into one token sequence, repeating fields by weight.

    Items with an empty title are skipped. Non-positive weights drop the
    field entirely.
    """
    out: List[str] = []
    skipped = 0
    for item in items:
        if not item.is_valid:
            skipped += 1
            continue
        for text, weight in (
            (item.title, title_weight),
            (item.description, description_weight),
            (item.content, content_weight),
        ):
            if not text or weight <= 0:
                continue
            tokens = tokenize(text)
            for _ in range(weight):
                out.extend(tokens)
    if skipped:
        log.debug("weighted_tokens_skipped_items count=%d reason=empty_title", skipped)
    return out


def combined_text(items: Sequence[NewsItem]) -> str:
    """Unweighted full text of every usable item, space-joined."""
    return " ".join(item.full_text for item in items if item.is_valid)
