import pytest
import requests

from osmshapes.osm.api_client import OverpassAPIClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload or {"elements": []}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}", response=self)

    def json(self):
        return self._payload


@pytest.fixture
def sleeps(monkeypatch):
    calls = []
    monkeypatch.setattr("osmshapes.osm.api_client.time.sleep", calls.append)
    return calls


def queue_responses(monkeypatch, outcomes):
    """Each outcome is a FakeResponse to return or an exception to raise"""
    calls = []

    def fake_post(url, data=None, headers=None, timeout=None):
        calls.append({"url": url, "data": data})
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr("osmshapes.osm.api_client.requests.post", fake_post)
    return calls


def test_query_returns_json(monkeypatch, sleeps):
    payload = {"elements": [{"type": "node", "id": 1}]}
    calls = queue_responses(monkeypatch, [FakeResponse(payload=payload)])

    client = OverpassAPIClient(overpass_url="https://example.test/api")

    assert client.query("node(1);out;") == payload
    assert calls[0]["url"] == "https://example.test/api"
    assert calls[0]["data"] == {"data": "node(1);out;"}
    assert sleeps == []


def test_retries_on_timeout_and_busy(monkeypatch, sleeps):
    queue_responses(monkeypatch, [
        requests.exceptions.Timeout(),
        FakeResponse(status_code=429),
        FakeResponse(payload={"elements": [1]}),
    ])

    result = OverpassAPIClient().query("way(1);out geom;", retry_delay=1.0)

    assert result == {"elements": [1]}
    assert sleeps == [1.0, 2.0]


def test_bad_query_is_not_retried(monkeypatch, sleeps):
    calls = queue_responses(monkeypatch, [FakeResponse(status_code=400)])

    with pytest.raises(RuntimeError, match="Invalid query syntax"):
        OverpassAPIClient().query("nonsense")

    assert len(calls) == 1
    assert sleeps == []


def test_gives_up_after_max_retries(monkeypatch, sleeps):
    client = OverpassAPIClient()
    queue_responses(monkeypatch, [requests.exceptions.ConnectionError("down")] * client.max_retries)

    with pytest.raises(RuntimeError, match="request failed"):
        client.query("way(1);out;", retry_delay=0.5)

    assert len(sleeps) == client.max_retries - 1


def test_empty_query():
    with pytest.raises(ValueError):
        OverpassAPIClient().query("   ")


def test_zero_retries_raises(monkeypatch, sleeps):
    calls = queue_responses(monkeypatch, [])
    client = OverpassAPIClient()
    client.max_retries = 0

    with pytest.raises(RuntimeError, match="not attempted"):
        client.query("way(1);out;")

    assert calls == []
