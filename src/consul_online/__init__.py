# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
consul-online package entrypoint.

Waits for a consul agent to become reachable and report an elected leader.
HTTP behavior is abstracted behind an injectable client interface, the polling
state machine takes an injectable clock, and domain objects are modeled with
typed dataclasses.
"""

from .config import WaitSettings, load_wait_settings
from .credentials import resolve_access_token
from .errors import ConfigError, ConsulOnlineError, ErrorCategory
from .http import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    TargetAddress,
    create_default_http_client,
    resolve_target_address,
)
from .log import setup_logging
from .models import PollPolicy, ProbeOutcome, ProbeStatus, RunResult, RunStatus
from .probe import ProbeClient
from .runtime import ConsulOnline, run
from .tls import TlsMaterial, build_ssl_context, resolve_tls_material
from .version import __version__
from .wait import Outcome, PollingEngine, emit_outcome, report_outcome

__all__ = [
    "ConfigError",
    "ConsulOnline",
    "ConsulOnlineError",
    "ErrorCategory",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpxClient",
    "Outcome",
    "PollPolicy",
    "PollingEngine",
    "ProbeClient",
    "ProbeOutcome",
    "ProbeStatus",
    "RunResult",
    "RunStatus",
    "TargetAddress",
    "TlsMaterial",
    "WaitSettings",
    "build_ssl_context",
    "create_default_http_client",
    "emit_outcome",
    "load_wait_settings",
    "report_outcome",
    "resolve_access_token",
    "resolve_target_address",
    "resolve_tls_material",
    "run",
    "setup_logging",
    "__version__",
]
