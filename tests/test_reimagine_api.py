"""Tests for POST /api/reimagine."""

from types import SimpleNamespace

import pytest

from chameleon_docs.services.reimagine_service import LEVEL_INSTRUCTIONS


def chunk(text):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=text))])


@pytest.fixture()
def completion_calls(monkeypatch):
    import litellm

    calls = []

    def completion(**kwargs):
        calls.append(kwargs)
        return iter([chunk("Simple "), chunk("words.")])

    monkeypatch.setattr(litellm, "completion", completion)
    return calls


class TestReimagineEndpoint:

    def test_streams_plain_text(self, client, completion_calls):
        resp = client.post(
            "/api/reimagine",
            json={"content": "Complex words.", "simplificationLevel": "beginner"},
        )
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert resp.text == "Simple words."
        assert completion_calls[0]["messages"][0]["content"].startswith(LEVEL_INSTRUCTIONS["beginner"])

    def test_custom_prompt(self, client, completion_calls):
        client.post(
            "/api/reimagine",
            json={"content": "Text", "mode": "custom", "prompt": "Make it rhyme"},
        )
        assert "Instruction: Make it rhyme" in completion_calls[0]["messages"][0]["content"]

    def test_no_session_required(self, client, completion_calls):
        resp = client.post("/api/reimagine", json={"content": "Text"})
        assert resp.status_code == 200

    def test_missing_content(self, client, completion_calls):
        resp = client.post("/api/reimagine", json={"mode": "simple"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Content is required"}
        assert completion_calls == []

    def test_content_too_large(self, client, completion_calls, monkeypatch):
        from chameleon_docs.core.config import settings

        monkeypatch.setattr(settings, "reimagine_max_content_length", 5)
        resp = client.post("/api/reimagine", json={"content": "too long"})
        assert resp.status_code == 400
        assert resp.json() == {"error": "Content too large"}

    def test_upstream_failure(self, client, monkeypatch):
        import litellm

        def completion(**kwargs):
            raise RuntimeError("quota exceeded")

        monkeypatch.setattr(litellm, "completion", completion)
        resp = client.post("/api/reimagine", json={"content": "Text"})
        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to process content"}

    def test_invalid_json_body(self, client):
        resp = client.post(
            "/api/reimagine",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 422
