# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from consul_online.errors import ErrorCategory
from consul_online.http.adapters import StubHttpClient
from consul_online.http.models import HttpRequest, HttpResponse
from consul_online.http.url import resolve_target_address
from consul_online.models.probe import ProbeStatus
from consul_online.probe import LEADER_ENDPOINT, ProbeClient, classify_response, extract_leader

LEADER_URL = "http://agent:8500" + LEADER_ENDPOINT


def _ok(body, status_code=200):
    text = body if isinstance(body, str) else json.dumps(body)
    return HttpResponse(ok=True, status_code=status_code, text=text, url=LEADER_URL)


@pytest.mark.parametrize(
    ("body", "leader"),
    [
        ('"10.0.0.1:8300"', "10.0.0.1:8300"),
        ('""', None),
        ("", None),
        ("   ", None),
        ({"Leader": "10.0.0.2:8300"}, "10.0.0.2:8300"),
        ({"Leader": ""}, None),
        ({"Servers": [{"Leader": False, "Address": "a:1"}, {"Leader": True, "Address": "b:1"}]}, "b:1"),
        ({"Servers": [{"Leader": False, "Address": "a:1"}]}, None),
        ({"Servers": None}, None),
        ("10.0.0.3:8300\n", "10.0.0.3:8300"),
        ("consul-1.dc1:8300", "consul-1.dc1:8300"),
        ("[fd00::1]:8300", "[fd00::1]:8300"),
        ("OK", None),
        ("<html>Service Unavailable</html>", None),
        ("10.0.0.1:8300 is the leader", None),
        ([1, 2], None),
    ],
)
def test_extract_leader(body, leader):
    assert extract_leader(_ok(body)) == leader


def test_classify_success_with_leader_is_online():
    outcome = classify_response(_ok('"10.0.0.1:8300"'))
    assert outcome.status is ProbeStatus.ONLINE
    assert outcome.leader == "10.0.0.1:8300"
    assert outcome.status_code == 200


def test_classify_success_without_leader_is_not_online():
    outcome = classify_response(_ok('""'))
    assert outcome.status is ProbeStatus.NOT_ONLINE
    assert outcome.leader is None


def test_classify_no_cluster_leader_500_is_not_online():
    outcome = classify_response(_ok("No cluster leader", status_code=500))
    assert outcome.status is ProbeStatus.NOT_ONLINE
    assert "No cluster leader" in outcome.detail


@pytest.mark.parametrize("status_code", [403, 404, 503])
def test_classify_other_http_errors_are_connection_errors(status_code):
    outcome = classify_response(_ok("ACL not found", status_code=status_code))
    assert outcome.status is ProbeStatus.CONNECTION_ERROR
    assert outcome.status_code == status_code
    assert outcome.error_category is ErrorCategory.HTTP_STATUS
    assert str(status_code) in outcome.detail


def test_classify_transport_failure_is_connection_error():
    response = HttpResponse(
        ok=False,
        error_message="[Errno 111] Connection refused",
        meta={"error_category": ErrorCategory.CONNECTION_ERROR},
    )
    outcome = classify_response(response)
    assert outcome.status is ProbeStatus.CONNECTION_ERROR
    assert outcome.detail == "[Errno 111] Connection refused"
    assert outcome.error_category is ErrorCategory.CONNECTION_ERROR


def test_classify_transport_failure_without_message_uses_reason():
    outcome = classify_response(HttpResponse(ok=False, meta={"error_category": ErrorCategory.DNS_ERROR}))
    assert outcome.detail == "DNS resolution failure"


def test_probe_issues_one_get_with_token_header():
    stub = StubHttpClient({LEADER_URL: _ok('"10.0.0.1:8300"')})
    client = ProbeClient(stub, resolve_target_address("agent:8500"), token="s3cret", request_timeout=5.0)

    outcome = client.probe()

    assert outcome.status is ProbeStatus.ONLINE
    assert len(stub.requests) == 1
    sent = stub.requests[0]
    assert sent.method == "GET"
    assert sent.url == LEADER_URL
    assert sent.headers["Authorization"] == "Bearer s3cret"
    assert sent.timeout == 5.0


def test_probe_without_token_sends_no_auth_header():
    stub = StubHttpClient({LEADER_URL: _ok('""')})
    ProbeClient(stub, resolve_target_address("agent:8500")).probe()
    assert "Authorization" not in stub.requests[0].headers


def test_probe_caps_request_timeout():
    stub = StubHttpClient({LEADER_URL: _ok('""')})
    client = ProbeClient(stub, resolve_target_address("agent:8500"), request_timeout=10.0)
    client.probe(timeout=0.25)
    client.probe(timeout=60.0)
    assert [r.timeout for r in stub.requests] == [0.25, 10.0]


def test_probe_absorbs_client_exceptions():
    class ExplodingClient:
        def request(self, request: HttpRequest) -> HttpResponse:  # noqa: ARG002
            raise RuntimeError("boom")

    outcome = ProbeClient(ExplodingClient(), resolve_target_address("agent:8500")).probe()
    assert outcome.status is ProbeStatus.CONNECTION_ERROR
    assert outcome.detail == "boom"


def test_unstubbed_url_is_connection_error():
    outcome = ProbeClient(StubHttpClient(), resolve_target_address("agent:8500")).probe()
    assert outcome.status is ProbeStatus.CONNECTION_ERROR


def test_plain_ok_from_a_proxy_is_not_online():
    outcome = classify_response(_ok("OK"))
    assert outcome.status is ProbeStatus.NOT_ONLINE
    assert outcome.leader is None
