# src/daily_vibe/logging_utils.py
import json
import logging
import logging.handlers
import sys
import time
from typing import Any, Dict

from .config import get_settings

# Keys commonly present on a LogRecord that we don't want to echo as "extra"
_EXCLUDE_KEYS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
}


def _jsonify(value: Any) -> Any:
    """Return a JSON-serializable representation of `value`."""
    try:
        json.dumps(value)
        return value
    except Exception:
        return str(value)


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base: Dict[str, Any] = {
            "ts": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created)),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        # Merge any "extra" attributes that were added to the record
        for k, v in record.__dict__.items():
            if k not in _EXCLUDE_KEYS and k not in base and not k.startswith("_"):
                base[k] = _jsonify(v)
        if record.exc_info:
            try:
                base["exc"] = self.formatException(record.exc_info)
            except Exception:
                base["exc"] = "unavailable"
        return json.dumps(base, ensure_ascii=False)


class PlainFormatter(logging.Formatter):
    """Human-readable single-line log formatter with colourised levels."""

    LEVEL_COLOURS = {
        "DEBUG": "\033[36m",  # cyan
        "INFO": "\033[32m",  # green
        "WARNING": "\033[33m",  # yellow
        "ERROR": "\033[31m",  # red
        "CRITICAL": "\033[35m",  # magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime(record.created))
        level = record.levelname
        extras: list[str] = []
        for k, v in record.__dict__.items():
            if k not in _EXCLUDE_KEYS and not k.startswith("_"):
                extras.append(f"{k}={_jsonify(v)}")
        extra_str = " " + " ".join(extras) if extras else ""
        colour = self.LEVEL_COLOURS.get(level, "")
        reset = self.RESET if colour else ""
        return f"{ts} {colour}{level:<8}{reset} {record.name}: {record.getMessage()}{extra_str}"


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for the vibe engine.

    Console output is JSON lines unless ``LOG_PLAIN=1``, in which case a
    colourised single-line format is used. When ``LOG_DIR`` is set, a
    rotating JSON log (``vibe.jsonl``) is also written there. ``LOG_LEVEL``
    overrides the ``level`` argument.
    """
    settings = get_settings()
    level_upper = (settings.log_level or level or "INFO").upper()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level_upper)

    if settings.log_dir is not None:
        try:
            settings.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                settings.log_dir / "vibe.jsonl",
                maxBytes=10 * 1024 * 1024,
                backupCount=7,
                encoding="utf-8",
            )
            file_handler.setFormatter(JsonFormatter())
            root.addHandler(file_handler)
        except OSError as e:
            sys.stderr.write(f"log_file_unavailable dir={settings.log_dir} err={e}\n")

    stream_handler = logging.StreamHandler(sys.stderr)
    if settings.log_plain:
        stream_handler.setFormatter(PlainFormatter())
    else:
        stream_handler.setFormatter(JsonFormatter())
    root.addHandler(stream_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
