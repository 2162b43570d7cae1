# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Single-shot leader probe.

`ProbeClient.probe` issues exactly one GET against the agent's leader status
endpoint and folds the answer into a `ProbeOutcome`. Transport failures are
data here, not exceptions: the polling engine decides what they mean.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from .errors import ErrorCategory, error_category_to_reason
from .http.client import HttpClient
from .http.models import HttpRequest, HttpResponse
from .http.url import TargetAddress
from .models.probe import ProbeOutcome

logger = logging.getLogger(__name__)

LEADER_ENDPOINT = "/v1/status/leader"
# The agent answers 500 ("No cluster leader") while an election is in progress.
NO_LEADER_STATUS_CODES = frozenset({500})
# Plain-text bodies only count as a leader when they look like host:port.
_PLAIN_LEADER_RE = re.compile(r"^(\[[0-9A-Fa-f:.]+\]|[A-Za-z0-9_.-]+):\d{1,5}$")


def _leader_from_raft_servers(servers: Any) -> str | None:
    if not isinstance(servers, list):
        return None
    for server in servers:
        if isinstance(server, dict) and server.get("Leader") is True:
            return str(server.get("Address") or server.get("Node") or server.get("ID") or "leader")
    return None


def extract_leader(response: HttpResponse) -> str | None:
    """
    Pull the leader address out of a status body.

    Accepts a JSON string ("10.0.0.1:8300"), an object with a "Leader" key, a
    raft configuration ({"Servers": [{"Leader": true, ...}]}) or a plain-text
    host:port.
    Returns None when no leader is reported.
    """
    text = (response.text or "").strip()
    if not text:
        return None
    try:
        payload = response.json()
    except ValueError:
        return text if _PLAIN_LEADER_RE.match(text) else None

    if isinstance(payload, str):
        return payload.strip() or None
    if isinstance(payload, dict):
        if "Servers" in payload:
            return _leader_from_raft_servers(payload.get("Servers"))
        leader = payload.get("Leader")
        if isinstance(leader, str):
            return leader.strip() or None
        return None
    return None


def classify_response(response: HttpResponse) -> ProbeOutcome:
    """Map one HttpResponse to Online / NotOnline / ConnectionError."""
    if not response.ok or response.status_code is None:
        category = response.meta.get("error_category", ErrorCategory.CONNECTION_ERROR)
        reason = error_category_to_reason(category)
        message = response.error_message or reason or "request failed"
        return ProbeOutcome.connection_error(message, category=category)

    code = response.status_code
    if response.is_success:
        leader = extract_leader(response)
        if leader:
            return ProbeOutcome.online(leader, status_code=code)
        return ProbeOutcome.not_online(status_code=code)

    body = (response.text or "").strip()
    if code in NO_LEADER_STATUS_CODES:
        return ProbeOutcome.not_online(f"not ready yet: {body or code}", status_code=code)

    detail = f"{response.url or 'agent'}: status code {code}"
    if body:
        detail = f"{detail} ({body[:200]})"
    return ProbeOutcome.connection_error(detail, status_code=code, category=ErrorCategory.HTTP_STATUS)


class ProbeClient:
    """Issues leader probes against one agent."""

    def __init__(
        self,
        http_client: HttpClient,
        address: TargetAddress,
        token: str | None = None,
        *,
        endpoint: str = LEADER_ENDPOINT,
        request_timeout: float = 10.0,
    ):
        self.http_client = http_client
        self.address = address
        self.url = address.endpoint(endpoint)
        self.request_timeout = request_timeout
        self._headers = {"Accept": "application/json"}
        if token:
            self._headers["Authorization"] = f"Bearer {token}"

    def build_request(self, timeout: float | None = None) -> HttpRequest:
        effective = self.request_timeout if timeout is None else min(timeout, self.request_timeout)
        return HttpRequest(url=self.url, method="GET", headers=dict(self._headers), timeout=effective)

    def probe(self, timeout: float | None = None) -> ProbeOutcome:
        """One request, one outcome. `timeout` caps the per-request timeout."""
        request = self.build_request(timeout)
        logger.debug("request %s (timeout %.2fs)", request.url, request.timeout)
        try:
            response = self.http_client.request(request)
        except Exception as exc:  # noqa: BLE001
            response = HttpResponse(
                ok=False,
                url=request.url,
                error_message=str(exc) or type(exc).__name__,
                error_type=type(exc).__name__,
            )
        outcome = classify_response(response)
        logger.info("probe: %s %s", outcome.status.value, outcome.detail)
        return outcome

    __call__ = probe


__all__ = ["LEADER_ENDPOINT", "ProbeClient", "classify_response", "extract_leader"]
