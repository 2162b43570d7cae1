# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Terminal run result."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class RunStatus(str, Enum):
    ONLINE = "ONLINE"
    TIMED_OUT = "TIMED_OUT"
    CONNECTION_FAILED = "CONNECTION_FAILED"
    INIT_ERROR = "INIT_ERROR"


@dataclass(frozen=True)
class RunResult:
    status: RunStatus
    detail: str = ""
    probes: int = 0
    elapsed: float = 0.0
    leader: str | None = None

    @classmethod
    def init_error(cls, detail: str) -> RunResult:
        return cls(RunStatus.INIT_ERROR, detail=detail)
