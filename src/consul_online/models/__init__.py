# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Dataclass exports for consul-online."""

from ..http.models import Headers, HttpRequest, HttpResponse
from .policy import DEFAULT_INTERVAL, MIN_INTERVAL, PollPolicy
from .probe import ProbeOutcome, ProbeStatus
from .result import RunResult, RunStatus

__all__ = [
    "DEFAULT_INTERVAL",
    "MIN_INTERVAL",
    "Headers",
    "HttpRequest",
    "HttpResponse",
    "PollPolicy",
    "ProbeOutcome",
    "ProbeStatus",
    "RunResult",
    "RunStatus",
]
