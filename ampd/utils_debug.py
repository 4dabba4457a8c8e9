# ampd/utils_debug.py
from __future__ import annotations

import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, TextIO

_DEBUG = os.getenv("AMPD_DEBUG", "").strip().lower() in {"1", "true", "yes", "on"}
_LOG_PATH = os.getenv("AMPD_DEBUG_LOG", "").strip()


def _format(tag: str, kv: dict[str, Any]) -> str:
    ts = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    parts = [f"{ts} [{tag}]"]
    for k, v in kv.items():
        parts.append(f"{k}={v!r}")
    return " ".join(parts)


def _emit(line: str, stream: TextIO) -> None:
    if _LOG_PATH:
        try:
            Path(_LOG_PATH).parent.mkdir(parents=True, exist_ok=True)
            with open(_LOG_PATH, "a", encoding="utf-8") as f:
                f.write(line + "\n")
            return
        except OSError:
            # If file logging fails, fall back to the stream
            pass
    print(line, file=stream)


def dbg(tag: str, **kv: Any) -> None:
    if not _DEBUG:
        return
    _emit(_format(tag, kv), sys.stdout)


def log_error(tag: str, **kv: Any) -> None:
    """Like dbg, but never gated and written to stderr."""
    _emit(_format(tag, kv), sys.stderr)
