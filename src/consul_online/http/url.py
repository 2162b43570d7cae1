# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Agent address normalization."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

from ..errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TargetAddress:
    """Resolved agent base URL (scheme://host[:port][/prefix]) and transport choice."""

    base_url: str
    use_tls: bool

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"


def resolve_target_address(address: str, *, force_tls: bool = False) -> TargetAddress:
    """
    Turn a user-supplied agent address into a TargetAddress.

    Examples:
      127.0.0.1:8500               -> http://127.0.0.1:8500
      127.0.0.1:8501 + force_tls   -> https://127.0.0.1:8501
      http://host:8500 + force_tls -> https://host:8500 (with a warning)
      https://host:8501            -> https://host:8501
    """
    raw = str(address or "").strip()
    if not raw:
        raise ConfigError("agent address is empty", field="address")

    lowered = raw.lower()
    if lowered.startswith("unix:"):
        raise ConfigError("unix sockets are not supported at the moment", field="address")

    if lowered.startswith("http://"):
        rest = raw[len("http://") :]
        if force_tls:
            logger.warning("address (%s) indicates http transport, but TLS is forced, using https", raw)
            scheme, use_tls = "https", True
        else:
            scheme, use_tls = "http", False
    elif lowered.startswith("https://"):
        rest = raw[len("https://") :]
        scheme, use_tls = "https", True
    elif "://" in raw:
        raise ConfigError(f"unsupported address scheme: {raw.split('://', 1)[0]}", field="address")
    else:
        rest = raw
        scheme, use_tls = ("https", True) if force_tls else ("http", False)

    base_url = f"{scheme}://{rest}".rstrip("/")
    if not urlsplit(base_url).hostname:
        raise ConfigError(f"agent address has no host: {raw}", field="address")
    return TargetAddress(base_url=base_url, use_tls=use_tls)


__all__ = ["TargetAddress", "resolve_target_address"]
