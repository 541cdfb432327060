import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


def _env_float(name: str, default: float) -> float:
    """
    Read a float from env. Returns ``default`` if unset, blank, or non-numeric.
    """
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip()
    if raw == "" or raw.lower() in {"none", "null"} or raw.startswith("#"):
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _env_path_opt(name: str) -> Optional[Path]:
    raw = (os.getenv(name) or "").strip()
    return Path(raw) if raw else None


def _b(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).strip().lower() in {
        "1",
        "true",
        "yes",
        "y",
        "on",
    }


@dataclass
class Settings:
    # --- Weighted token extraction ---
    # Each field's tokens are repeated this many times in the weighted
    # sequence. Headlines carry the strongest tone signal.
    title_weight: int = field(default_factory=lambda: _env_int("VIBE_TITLE_WEIGHT", 3))
    description_weight: int = field(
        default_factory=lambda: _env_int("VIBE_DESCRIPTION_WEIGHT", 1)
    )
    content_weight: int = field(
        default_factory=lambda: _env_int("VIBE_CONTENT_WEIGHT", 1)
    )

    # --- Semantic similarity scoring ---
    # When disabled (or when the embedding backend cannot be loaded) the
    # analyzer runs in keyword-only mode.
    feature_semantic_scoring: bool = field(
        default_factory=lambda: _b("FEATURE_SEMANTIC_SCORING", True)
    )
    embedding_model: str = field(
        default_factory=lambda: os.getenv("VIBE_EMBEDDING_MODEL", "all-MiniLM-L6-v2")
    )
    embed_max_workers: int = field(
        default_factory=lambda: _env_int("VIBE_EMBED_MAX_WORKERS", 4)
    )
    embed_cache_size: int = field(
        default_factory=lambda: _env_int("VIBE_EMBED_CACHE_SIZE", 512)
    )

    # Hybrid blend: final = density_weight * density + similarity_weight * sim
    density_weight: float = field(
        default_factory=lambda: _env_float("VIBE_DENSITY_WEIGHT", 0.3)
    )
    similarity_weight: float = field(
        default_factory=lambda: _env_float("VIBE_SIMILARITY_WEIGHT", 0.7)
    )
    # Raw cosine similarities land roughly in 0.05-0.30 for short headlines;
    # normalised = clamp((raw - floor) * scale, 0, 1).
    similarity_floor: float = field(
        default_factory=lambda: _env_float("VIBE_SIMILARITY_FLOOR", 0.05)
    )
    similarity_scale: float = field(
        default_factory=lambda: _env_float("VIBE_SIMILARITY_SCALE", 4.0)
    )

    # --- Smart delegate ---
    # Upper bound in seconds on how long the chain waits for a delegate
    # before falling back to the deterministic pipeline.
    delegate_timeout: float = field(
        default_factory=lambda: _env_float("VIBE_DELEGATE_TIMEOUT", 10.0)
    )

    # Optional JSON file {"vibe": ["word", ...]} replacing built-in lexicons.
    keywords_path: Optional[Path] = field(
        default_factory=lambda: _env_path_opt("VIBE_KEYWORDS_PATH")
    )

    # --- Logging ---
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", ""))
    log_plain: bool = field(default_factory=lambda: _b("LOG_PLAIN", False))
    log_dir: Optional[Path] = field(default_factory=lambda: _env_path_opt("LOG_DIR"))


SETTINGS = Settings()


def get_settings() -> Settings:
    return SETTINGS


def reload_settings() -> Settings:
    """Re-read the environment. Used by the CLI after loading ``.env``."""
    global SETTINGS
    SETTINGS = Settings()
    return SETTINGS
