# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Map a RunResult to the process exit status and the final message."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import TextIO

from ..models.result import RunResult, RunStatus

logger = logging.getLogger(__name__)

EXIT_ONLINE = 0
EXIT_INIT_ERROR = 1
EXIT_TIMED_OUT = 2
EXIT_CONNECTION_FAILED = 3

EXIT_CODES: dict[RunStatus, int] = {
    RunStatus.ONLINE: EXIT_ONLINE,
    RunStatus.INIT_ERROR: EXIT_INIT_ERROR,
    RunStatus.TIMED_OUT: EXIT_TIMED_OUT,
    RunStatus.CONNECTION_FAILED: EXIT_CONNECTION_FAILED,
}


@dataclass(frozen=True)
class Outcome:
    status: int
    message: str

    @property
    def ok(self) -> bool:
        return self.status == EXIT_ONLINE


def _message(result: RunResult) -> str:
    if result.status is RunStatus.ONLINE:
        return f"consul is online! (leader: {result.leader})" if result.leader else "consul is online!"
    if result.status is RunStatus.INIT_ERROR:
        return f"initialization failed: {result.detail}"
    if result.status is RunStatus.TIMED_OUT:
        message = f"timed out after {int(result.elapsed)} seconds"
        return f"{message} (last: {result.detail})" if result.detail else message
    return f"failed: {result.detail}" if result.detail else "failed: could not connect"


def report_outcome(result: RunResult) -> Outcome:
    """Pure mapping: Online->0, InitError->1, TimedOut->2, ConnectionFailed->3."""
    return Outcome(status=EXIT_CODES[result.status], message=_message(result))


def emit_outcome(outcome: Outcome, stream: TextIO | None = None) -> int:
    """Log and print the final line; returns the exit status."""
    if outcome.ok:
        logger.info(outcome.message)
    else:
        logger.error(outcome.message)
    print(outcome.message, file=stream or sys.stdout)
    return outcome.status


__all__ = [
    "EXIT_CODES",
    "EXIT_CONNECTION_FAILED",
    "EXIT_INIT_ERROR",
    "EXIT_ONLINE",
    "EXIT_TIMED_OUT",
    "Outcome",
    "emit_outcome",
    "report_outcome",
]
