# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Polling policy."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_INTERVAL = 1.0
# Floor for user-supplied intervals; keeps a zero interval from spinning.
MIN_INTERVAL = 0.1
DEFAULT_REQUEST_TIMEOUT = 10.0


@dataclass(frozen=True)
class PollPolicy:
    """
    How often to probe and when to give up.

    `timeout` of None waits forever; `reconnect` turns connection errors into
    retries instead of terminal failures.
    """

    interval: float = DEFAULT_INTERVAL
    timeout: float | None = None
    reconnect: bool = False
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @classmethod
    def create(
        cls,
        interval: float | None = None,
        timeout: float | None = None,
        reconnect: bool = False,
        request_timeout: float | None = None,
    ) -> PollPolicy:
        """Build a policy, filling defaults and clamping nonsensical values."""
        return cls(
            interval=DEFAULT_INTERVAL if interval is None else float(interval),
            timeout=None if timeout is None else max(0.0, float(timeout)),
            reconnect=bool(reconnect),
            request_timeout=DEFAULT_REQUEST_TIMEOUT if not request_timeout or request_timeout <= 0 else float(request_timeout),
        )

    @property
    def effective_interval(self) -> float:
        return max(self.interval, MIN_INTERVAL)
