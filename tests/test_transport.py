"""Tests for the HTTP transport (session faked, no network)."""

from types import SimpleNamespace

import pytest
import requests

import labclient.impl.transport as transport_mod
from labclient.errors import ForbiddenError, NotFoundError
from labclient.impl.transport import HttpTransport


class FakeResponse:
    def __init__(self, status_code=200, payload=None, links=None, url="https://lab.test/api/v4/x", method="GET"):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self.links = links or {}
        self.url = url
        self.request = SimpleNamespace(method=method)

    def json(self):
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)


class FakeSession:
    def __init__(self, outcomes):
        self.headers = {}
        self.outcomes = list(outcomes)
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append((method, url, json))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr(transport_mod.time, "sleep", lambda seconds: calls.append(seconds))
    return calls


def _transport(outcomes, **settings):
    session = FakeSession(outcomes)
    base = {"base_url": "https://lab.test/api/v4/", "token": "secret", "retry": {"max_attempts": 3, "delay_seconds": 0.5}}
    base.update(settings)
    return HttpTransport(base, session=session), session


def test_requires_base_url():
    with pytest.raises(ValueError):
        HttpTransport({}, session=FakeSession([]))


def test_headers_and_relative_urls(sleeps):
    transport, session = _transport([FakeResponse(payload={"id": 1})])

    assert transport.get("projects/1") == {"id": 1}
    assert session.calls == [("GET", "https://lab.test/api/v4/projects/1", None)]
    assert session.headers["PRIVATE-TOKEN"] == "secret"
    assert sleeps == []


def test_retries_connection_errors_with_fixed_delay(sleeps):
    transport, session = _transport(
        [requests.ConnectionError("boom"), requests.Timeout("slow"), FakeResponse(payload=[1])]
    )
    assert transport.get("x") == [1]
    assert len(session.calls) == 3
    assert sleeps == [0.5, 0.5]


def test_gives_up_after_max_attempts(sleeps):
    transport, session = _transport([requests.ConnectionError("boom")] * 3)
    with pytest.raises(requests.ConnectionError):
        transport.get("x")
    assert len(session.calls) == 3
    assert sleeps == [0.5, 0.5]


def test_retries_server_errors_then_raises(sleeps):
    transport, session = _transport([FakeResponse(502), FakeResponse(503), FakeResponse(500)])
    with pytest.raises(requests.HTTPError):
        transport.get("x")
    assert len(session.calls) == 3


def test_server_error_recovers(sleeps):
    transport, _ = _transport([FakeResponse(502), FakeResponse(payload={"ok": True})])
    assert transport.get("x") == {"ok": True}


def test_not_found_and_forbidden_are_typed_and_not_retried(sleeps):
    transport, session = _transport([FakeResponse(404), FakeResponse(403)])
    with pytest.raises(NotFoundError):
        transport.get("x")
    with pytest.raises(ForbiddenError):
        transport.delete("x")
    assert len(session.calls) == 2
    assert sleeps == []


def test_other_client_errors_raise_http_error(sleeps):
    transport, session = _transport([FakeResponse(400)])
    with pytest.raises(requests.HTTPError):
        transport.post("x", {"a": 1})
    assert session.calls == [("POST", "https://lab.test/api/v4/x", {"a": 1})]


def test_get_all_follows_next_links(sleeps):
    next_url = "https://lab.test/api/v4/x?page=2"
    transport, session = _transport(
        [
            FakeResponse(payload=[1, 2], links={"next": {"url": next_url}}),
            FakeResponse(payload=[3]),
        ]
    )
    assert list(transport.get_all("x")) == [1, 2, 3]
    assert session.calls[1][1] == next_url
