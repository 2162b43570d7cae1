# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Probe outcome models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import ErrorCategory


class ProbeStatus(str, Enum):
    ONLINE = "ONLINE"
    NOT_ONLINE = "NOT_ONLINE"
    CONNECTION_ERROR = "CONNECTION_ERROR"


@dataclass(frozen=True)
class ProbeOutcome:
    status: ProbeStatus
    detail: str = ""
    leader: str | None = None
    status_code: int | None = None
    error_category: ErrorCategory = ErrorCategory.NONE

    @classmethod
    def online(cls, leader: str, *, status_code: int | None = None) -> ProbeOutcome:
        return cls(ProbeStatus.ONLINE, detail=f"leader: {leader}", leader=leader, status_code=status_code)

    @classmethod
    def not_online(cls, detail: str = "no cluster leader", *, status_code: int | None = None) -> ProbeOutcome:
        return cls(ProbeStatus.NOT_ONLINE, detail=detail, status_code=status_code)

    @classmethod
    def connection_error(
        cls,
        detail: str,
        *,
        status_code: int | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ) -> ProbeOutcome:
        return cls(ProbeStatus.CONNECTION_ERROR, detail=detail, status_code=status_code, error_category=category)
