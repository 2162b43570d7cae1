# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for consul-online."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "CONSUL_ONLINE_LOG"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
# Level names used by the agents' own tooling.
_LEVEL_ALIASES = {"WARN": "WARNING", "TRACE": "DEBUG", "OFF": "CRITICAL"}


def normalize_log_level(level: str) -> str | None:
    """Return the logging level name for `level`, or None when it is unknown."""
    name = level.strip().upper()
    name = _LEVEL_ALIASES.get(name, name)
    return name if name in LOG_LEVELS else None


def resolve_log_level(level: str | None = None) -> str:
    """Flag value wins over CONSUL_ONLINE_LOG, which wins over WARNING."""
    for candidate in (level, os.getenv(LOG_LEVEL_ENV)):
        if candidate:
            normalized = normalize_log_level(candidate)
            if normalized is not None:
                return normalized
    return "WARNING"


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for CLI/library use."""
    logging.basicConfig(
        level=getattr(logging, resolve_log_level(level), logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["LOG_LEVELS", "normalize_log_level", "resolve_log_level", "setup_logging"]
