# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for consul-online."""

import os
from dataclasses import dataclass

from .errors import ConfigError
from .version import __version__

DEFAULT_ADDRESS = "localhost:8500"
DEFAULT_USER_AGENT = f"consul-online/{__version__}"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _str_env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value


def _bool_env(name: str, default: bool) -> bool:
    """Strict boolean parsing, matching the consul CLI: only "true"/"false" are accepted."""
    value = os.getenv(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized == "true":
        return True
    if normalized == "false":
        return False
    raise ConfigError(f"environment variable could not be parsed as boolean: {name}={value}", field=name)


@dataclass
class WaitSettings:
    """Everything needed for one wait run, after flag/environment resolution."""

    address: str = DEFAULT_ADDRESS
    force_tls: bool = False
    timeout: float | None = None
    interval: float | None = None
    reconnect: bool = False
    skip_verify: bool = False
    ca_cert: str | None = None
    client_cert: str | None = None
    client_key: str | None = None
    http_token: str | None = None
    http_token_file: str | None = None
    request_timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_body_bytes: int = 1024 * 1024

    @classmethod
    def from_env(cls) -> "WaitSettings":
        """Create settings from CONSUL_* environment variables (evaluated at call time)."""
        request_timeout = _float_env("CONSUL_ONLINE_REQUEST_TIMEOUT", cls.request_timeout)
        if request_timeout <= 0:
            request_timeout = cls.request_timeout
        return cls(
            address=_str_env("CONSUL_HTTP_ADDR") or cls.address,
            force_tls=_bool_env("CONSUL_HTTP_SSL", cls.force_tls),
            # CONSUL_HTTP_SSL_VERIFY=false disables verification, as in the consul CLI.
            skip_verify=not _bool_env("CONSUL_HTTP_SSL_VERIFY", True),
            ca_cert=_str_env("CONSUL_CACERT"),
            client_cert=_str_env("CONSUL_CLIENT_CERT"),
            client_key=_str_env("CONSUL_CLIENT_KEY"),
            http_token=_str_env("CONSUL_HTTP_TOKEN"),
            http_token_file=_str_env("CONSUL_HTTP_TOKEN_FILE"),
            request_timeout=request_timeout,
            user_agent=os.getenv("CONSUL_ONLINE_USER_AGENT", cls.user_agent),
        )


def load_wait_settings() -> WaitSettings:
    """Load settings from environment with sensible defaults."""
    return WaitSettings.from_env()
