"""
Command line entry point.

    daily-vibe analyze articles.json [--no-semantic] [--timeout 30]
    daily-vibe vibes
"""

from __future__ import annotations

import argparse
import json
import os
import sys
import threading
from dataclasses import replace
from typing import Any, List, Optional

# Optional .env support; loaded in main() before settings are read.
try:
    from dotenv import load_dotenv  # type: ignore
except Exception:
    load_dotenv = None

from .analyzer import VibeAnalyzer
from .config import get_settings, reload_settings
from .errors import AnalysisCancelled, CancelToken
from .logging_utils import get_logger, setup_logging
from .models import NewsItem
from .vibes import VIBE_PROFILES

log = get_logger(__name__)

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_BAD_INPUT = 2


def _load_env() -> None:
    if load_dotenv is None:
        return
    # If DOTENV_FILE is set, load that; otherwise default to .env
    env_file = os.getenv("DOTENV_FILE")
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()


def load_articles(path: str) -> List[NewsItem]:
    """Read a JSON array of articles, or an object with an ``articles`` list."""
    with open(path, "r", encoding="utf-8") as f:
        raw: Any = json.load(f)
    if isinstance(raw, dict):
        raw = raw.get("articles")
    if not isinstance(raw, list):
        raise ValueError("expected a list of articles or {\"articles\": [...]}")
    return [NewsItem.from_feed_dict(a) for a in raw if isinstance(a, dict)]


def _cmd_analyze(args: argparse.Namespace) -> int:
    try:
        items = load_articles(args.file)
    except (OSError, ValueError) as e:
        sys.stderr.write(f"error: cannot read {args.file}: {e}\n")
        return EXIT_BAD_INPUT
    log.info("cli_analyze file=%s items=%d", args.file, len(items))

    settings = get_settings()
    backend_kwargs = {}
    if args.no_semantic:
        settings = replace(settings, feature_semantic_scoring=False)
        backend_kwargs["backend"] = None
    analyzer = VibeAnalyzer(settings=settings, **backend_kwargs)

    cancel = CancelToken()
    timer: Optional[threading.Timer] = None
    if args.timeout is not None and args.timeout > 0:
        timer = threading.Timer(args.timeout, cancel.cancel)
        timer.daemon = True
        timer.start()
    try:
        result = analyzer.analyze(items, cancel)
    except AnalysisCancelled:
        sys.stderr.write(f"error: analysis cancelled after {args.timeout}s\n")
        return EXIT_CANCELLED
    finally:
        if timer is not None:
            timer.cancel()

    print(json.dumps(result.to_dict(), indent=2))
    return EXIT_OK


def _cmd_vibes(args: argparse.Namespace) -> int:
    for vibe, profile in VIBE_PROFILES.items():
        print(f"{profile.emoji}  {vibe.value:<14} {profile.description}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    _load_env()
    settings = reload_settings()
    setup_logging(settings.log_level or "WARNING")

    ap = argparse.ArgumentParser(
        prog="daily-vibe", description="Classify the mood of a batch of news articles."
    )
    sub = ap.add_subparsers(dest="command", required=True)

    p_analyze = sub.add_parser("analyze", help="Analyze a JSON file of articles")
    p_analyze.add_argument("file", help="JSON array of articles or {\"articles\": [...]}")
    p_analyze.add_argument(
        "--no-semantic",
        action="store_true",
        help="Keyword density only; skip loading the embedding model",
    )
    p_analyze.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Cancel the analysis after this many seconds",
    )
    p_analyze.set_defaults(func=_cmd_analyze)

    p_vibes = sub.add_parser("vibes", help="List the vibes")
    p_vibes.set_defaults(func=_cmd_vibes)

    args = ap.parse_args(argv)
    return args.func(args)
