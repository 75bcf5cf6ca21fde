"""Shared logging configuration for the API process."""

from __future__ import annotations

import logging

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_DEFAULT_LEVEL = "INFO"
_SUPPORTED_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


def resolve_log_level(level: str) -> str:
    """Return a valid upper-case level name, falling back to INFO."""

    normalized_level = level.strip().upper()
    if normalized_level not in _SUPPORTED_LEVELS:
        return _DEFAULT_LEVEL
    return normalized_level


def configure_logging(*, level: str) -> str:
    """Configure process logging with consistent format and return the level used."""

    resolved_level = resolve_log_level(level)
    logging.basicConfig(
        level=resolved_level,
        format=_LOG_FORMAT,
    )
    return resolved_level
