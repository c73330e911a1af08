import json
import urllib.error
import urllib.request

import pytest

from calc import derive_ledger
from config import RemoteSettings
from core.remote import CoreEvaluationClient, build_facts


class _Response:
    def __init__(self, body: bytes, status: int = 200) -> None:
        self._body = body
        self.status = status

    def read(self) -> bytes:
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture
def client():
    return CoreEvaluationClient(RemoteSettings(enabled=True, base_url="http://core.test/"))


def test_facts_carry_key_figures(sample_plan):
    facts = build_facts(sample_plan, derive_ledger(sample_plan))

    assert facts["association"]["name"] == sample_plan.meta.name
    assert facts["allocation"]["basis"] == "area"
    assert facts["allocation"]["unit_count"] == len(sample_plan.units)
    json.dumps(facts)


def test_evaluate_posts_domain_and_facts(monkeypatch, client):
    captured = {}

    def fake_urlopen(request, timeout):
        captured["url"] = request.full_url
        captured["body"] = json.loads(request.data.decode("utf-8"))
        return _Response(b'{"ok": true}')

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    assert client.evaluate({"a": 1}) == {"ok": True}
    assert captured["url"] == "http://core.test/evaluate"
    assert captured["body"] == {"domain": "korteriühistu", "jurisdiction": "EE", "facts": {"a": 1}}


def test_network_failure_returns_none(monkeypatch, client):
    def fake_urlopen(request, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    assert client.evaluate({}) is None


@pytest.mark.parametrize(
    ("body", "status"),
    [(b'{"ok": true}', 503), (b"[1, 2]", 200), (b"<html>", 200)],
)
def test_unusable_responses_return_none(monkeypatch, client, body, status):
    monkeypatch.setattr(urllib.request, "urlopen", lambda request, timeout: _Response(body, status))

    assert client.evaluate({}) is None


def test_client_is_disabled_by_default():
    assert not CoreEvaluationClient(RemoteSettings()).enabled
