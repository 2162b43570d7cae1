# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Polling engine: Start -> Polling -> Done(RunResult).

The first probe is always sent. Every later iteration checks the global
deadline before probing, so no probe starts once the timeout has elapsed (a
probe already in flight may finish). Online ends the run; NotOnline sleeps and
retries; a connection error ends the run unless the policy asks to reconnect.
Time is read from a monotonic clock.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from ..models.policy import PollPolicy
from ..models.probe import ProbeOutcome, ProbeStatus
from ..models.result import RunResult, RunStatus

logger = logging.getLogger(__name__)


class Prober(Protocol):
    def probe(self, timeout: float | None = None) -> ProbeOutcome: ...


class PollingEngine:
    """Drives a Prober until the agent reports a leader, the deadline passes, or a connection fails."""

    def __init__(
        self,
        prober: Prober,
        policy: PollPolicy | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.prober = prober
        self.policy = policy or PollPolicy()
        self._clock = clock
        self._sleep = sleep

    def _request_timeout(self, remaining: float | None) -> float | None:
        # Only reconnecting runs cap requests at the deadline.
        if remaining is None or not self.policy.reconnect:
            return None
        return min(remaining, self.policy.request_timeout)

    def run(self) -> RunResult:
        policy = self.policy
        interval = policy.effective_interval
        start = self._clock()
        deadline = None if policy.timeout is None else start + policy.timeout
        probes = 0
        last_detail = ""

        while True:
            now = self._clock()
            # The first probe always goes out, even with a zero timeout.
            if probes and deadline is not None and now >= deadline:
                elapsed = now - start
                logger.info("deadline reached after %d probe(s)", probes)
                return RunResult(RunStatus.TIMED_OUT, detail=last_detail, probes=probes, elapsed=elapsed)

            remaining = deadline - now if deadline is not None and deadline > now else None
            outcome = self.prober.probe(self._request_timeout(remaining))
            probes += 1
            last_detail = outcome.detail

            if outcome.status is ProbeStatus.ONLINE:
                return RunResult(
                    RunStatus.ONLINE,
                    detail=outcome.detail,
                    probes=probes,
                    elapsed=self._clock() - start,
                    leader=outcome.leader,
                )

            if outcome.status is ProbeStatus.CONNECTION_ERROR:
                if not policy.reconnect:
                    return RunResult(
                        RunStatus.CONNECTION_FAILED,
                        detail=outcome.detail,
                        probes=probes,
                        elapsed=self._clock() - start,
                    )
                logger.info("request failed, reconnecting: %s", outcome.detail)
            else:
                logger.info("not online yet: %s", outcome.detail)

            delay = interval
            if deadline is not None:
                delay = min(delay, max(0.0, deadline - self._clock()))
            if delay > 0:
                logger.debug("sleep %.3fs", delay)
                self._sleep(delay)


__all__ = ["PollingEngine", "Prober"]
