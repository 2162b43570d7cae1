# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level facade wiring settings, TLS, the probe client and the polling engine."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from contextlib import suppress

from .config import WaitSettings, load_wait_settings
from .credentials import resolve_access_token
from .errors import ConfigError
from .http.client import HttpClient, create_default_http_client
from .http.url import TargetAddress, resolve_target_address
from .models import PollPolicy, RunResult
from .probe import ProbeClient
from .tls import TlsMaterial, build_ssl_context, resolve_tls_material
from .wait.engine import PollingEngine

logger = logging.getLogger(__name__)


class ConsulOnline:
    """
    One wait run against one agent.

    All configuration problems surface as ConfigError from the constructor,
    before any request is made. The HTTP client is closed on exit.
    """

    def __init__(
        self,
        settings: WaitSettings | None = None,
        *,
        http_client: HttpClient | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings or load_wait_settings()
        self.address: TargetAddress = resolve_target_address(self.settings.address, force_tls=self.settings.force_tls)
        self.token = resolve_access_token(self.settings.http_token, self.settings.http_token_file)
        self.tls_material: TlsMaterial | None = None

        if self.address.use_tls:
            self.tls_material = resolve_tls_material(
                self.settings.ca_cert,
                self.settings.client_cert,
                self.settings.client_key,
                skip_verify=self.settings.skip_verify,
                force_tls=self.settings.force_tls,
            )
        elif self.settings.client_cert or self.settings.client_key or self.settings.ca_cert:
            logger.info("plain http transport, ignoring TLS certificate options")

        if http_client is None:
            ssl_context = build_ssl_context(self.tls_material) if self.tls_material is not None else None
            http_client = create_default_http_client(self.settings, ssl_context=ssl_context)
        self.http_client = http_client

        self.policy = PollPolicy.create(
            interval=self.settings.interval,
            timeout=self.settings.timeout,
            reconnect=self.settings.reconnect,
            request_timeout=self.settings.request_timeout,
        )
        self.prober = ProbeClient(
            self.http_client,
            self.address,
            self.token,
            request_timeout=self.policy.request_timeout,
        )
        self.engine = PollingEngine(self.prober, self.policy, clock=clock, sleep=sleep)

    def wait(self) -> RunResult:
        logger.info("waiting for a leader at %s", self.prober.url)
        return self.engine.run()

    def close(self) -> None:
        with suppress(Exception):
            if hasattr(self.http_client, "close"):
                self.http_client.close()

    def __enter__(self) -> "ConsulOnline":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        self.close()


def run(settings: WaitSettings | None = None, *, http_client: HttpClient | None = None) -> RunResult:
    """Resolve configuration and wait; configuration errors become an INIT_ERROR result."""
    try:
        guard = ConsulOnline(settings, http_client=http_client)
    except ConfigError as exc:
        return RunResult.init_error(str(exc))
    with guard:
        return guard.wait()
