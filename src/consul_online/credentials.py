# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Access token resolution."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .errors import ConfigError

logger = logging.getLogger(__name__)


def resolve_access_token(
    token: str | None = None,
    token_file: str | os.PathLike[str] | None = None,
) -> str | None:
    """
    Return the token to send, or None.

    When both are given the token file wins. Blank tokens count as absent.
    """
    if token_file is not None:
        if token:
            logger.info("both a token and a token file were given, using the token file")
        try:
            value = Path(token_file).read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigError(f"failed to read token file: {exc}", field="http_token_file") from exc
        return value or None

    if token is not None:
        return token.strip() or None
    return None


__all__ = ["resolve_access_token"]
