"""Centralized logging configuration with JSON option.

The library itself only creates module loggers; applications call
`setup_logging()` once at startup.

Env vars:
- LOG_LEVEL: DEBUG|INFO|WARNING|ERROR (default: INFO)
- LOG_JSON: true/false (default: false)
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional


YELLOW = "\x1b[33m"
RESET = "\x1b[0m"

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        base: Dict[str, Any] = {
            "ts": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """Plain text formatter that highlights warnings in yellow on a terminal."""

    def __init__(self, color: bool = False) -> None:
        super().__init__(fmt=TEXT_FORMAT)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        line = super().format(record)
        if self.color and record.levelno == logging.WARNING:
            return f"{YELLOW}{line}{RESET}"
        return line


def setup_logging(env: Optional[Mapping[str, str]] = None) -> logging.Handler:
    env = os.environ if env is None else env
    level = env.get("LOG_LEVEL", "INFO").upper()
    use_json = env.get("LOG_JSON", "false").lower() in {"1", "true", "yes", "on"}

    root = logging.getLogger()
    root.setLevel(level)

    # Clear default handlers
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(stream=sys.stdout)
    if use_json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(ConsoleFormatter(color=sys.stdout.isatty()))
    root.addHandler(handler)
    return handler
