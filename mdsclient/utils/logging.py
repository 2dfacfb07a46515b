"""Logging setup for the ``mdsclient`` logger tree.

Only the package logger is touched; the root logger and any handlers the
host application installed are left alone.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

PACKAGE_LOGGER = "mdsclient"

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ENV_LEVEL = "MDS_LOG_LEVEL"
_ENV_DEBUG = "MDS_DEBUG"


def _parse_level(text: str) -> Optional[int]:
    text = text.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else None


def _env_level(env: Mapping[str, str]) -> Optional[int]:
    raw = env.get(_ENV_LEVEL)
    if raw:
        return _parse_level(raw)
    if (env.get(_ENV_DEBUG) or "").strip().lower() in {"1", "true", "yes", "on"}:
        return logging.DEBUG
    return None


def configure_logging(
    level: int | str = logging.WARNING,
    *,
    handler: Optional[logging.Handler] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    """Set the level of the ``mdsclient`` logger and attach one handler.

    ``MDS_LOG_LEVEL`` (name or number) overrides ``level``; a truthy
    ``MDS_DEBUG`` forces DEBUG. Unknown level names fall back to ``level``.
    A stderr handler is added only when the package logger has none yet, so
    repeated calls never duplicate output.

    Returns:
        The configured package logger.
    """
    env = os.environ if environ is None else environ
    fallback = _parse_level(level) if isinstance(level, str) else int(level)
    if fallback is None:
        fallback = logging.WARNING
    effective = _env_level(env)

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(effective if effective is not None else fallback)
    if handler is not None:
        logger.addHandler(handler)
    elif not logger.handlers:
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(stream)
    return logger


__all__ = ["PACKAGE_LOGGER", "configure_logging"]
