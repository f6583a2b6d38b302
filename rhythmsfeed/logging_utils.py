"""
Logging helpers.

Progress lines go to stderr so that stdout only ever carries the JSON report.
"""

from __future__ import annotations

import logging
import os
import sys


def _resolve_level() -> str:
    env_level = os.getenv("LOG_LEVEL")
    if env_level:
        return env_level.upper()
    if os.getenv("RHYTHMSFEED_DEBUG", "0") == "1":
        return "DEBUG"
    return "INFO"


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=_resolve_level(),
            format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            stream=sys.stderr,
        )
    return logging.getLogger(name)
