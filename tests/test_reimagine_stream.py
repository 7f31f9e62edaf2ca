"""Tests for the streaming reimagine client."""

import json
from types import SimpleNamespace

import httpx
import pytest

from chameleon_docs.client.reimagine_stream import GENERIC_ERROR, ReimagineClient, ReimagineStreamError
from chameleon_docs.editor.session import EditorSession
from chameleon_docs.reader.reimagine_view import VIEW_ORIGINAL, ReimagineView


def _client(handler):
    transport = httpx.MockTransport(handler)
    return ReimagineClient(client=httpx.Client(transport=transport, base_url="http://chameleon.test"))


class TestReimagineClient:

    def test_collects_chunks_and_reports_progress(self):
        captured = {}

        def handler(request):
            captured["path"] = request.url.path
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, text="Rewritten text", headers={"content-type": "text/plain"})

        progress = []
        with _client(handler) as client:
            result = client.reimagine(
                "Original",
                mode="custom",
                prompt="Shorter",
                simplification_level="beginner",
                on_progress=lambda chunk, buffer: progress.append(buffer),
            )

        assert result == "Rewritten text"
        assert progress[-1] == "Rewritten text"
        assert captured["path"] == "/api/reimagine"
        assert captured["body"] == {
            "content": "Original",
            "mode": "custom",
            "prompt": "Shorter",
            "simplificationLevel": "beginner",
        }

    def test_omits_unset_fields(self):
        captured = {}

        def handler(request):
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, text="ok")

        _client(handler).reimagine("Original")
        assert captured["body"] == {"content": "Original"}

    def test_client_error_uses_server_message(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Content is required"})

        with pytest.raises(ReimagineStreamError) as exc_info:
            _client(handler).reimagine("")
        assert exc_info.value.message == "Content is required"
        assert exc_info.value.status_code == 400

    def test_server_error_is_generic(self):
        def handler(request):
            return httpx.Response(500, json={"error": "stack trace details"})

        with pytest.raises(ReimagineStreamError) as exc_info:
            _client(handler).reimagine("Original")
        assert exc_info.value.message == GENERIC_ERROR
        assert exc_info.value.status_code == 500

    def test_non_json_error_body(self):
        def handler(request):
            return httpx.Response(400, text="bad request")

        with pytest.raises(ReimagineStreamError) as exc_info:
            _client(handler).reimagine("Original")
        assert exc_info.value.message == GENERIC_ERROR

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ReimagineStreamError) as exc_info:
            _client(handler).reimagine("Original")
        assert exc_info.value.message == GENERIC_ERROR
        assert exc_info.value.status_code is None

    def test_body_cut_off_mid_stream(self):
        class TruncatedBody(httpx.SyncByteStream):
            def __iter__(self):
                yield b"partial "
                raise httpx.RemoteProtocolError("peer closed connection without sending complete message body")

        def handler(request):
            return httpx.Response(200, stream=TruncatedBody(), headers={"content-type": "text/plain"})

        progress = []
        with pytest.raises(ReimagineStreamError) as exc_info:
            _client(handler).reimagine("Original", on_progress=lambda chunk, buffer: progress.append(buffer))
        assert exc_info.value.message == GENERIC_ERROR
        assert progress == ["partial "]


def _delta(part):
    return SimpleNamespace(choices=[SimpleNamespace(delta=SimpleNamespace(content=part))])


@pytest.fixture()
def interrupted_upstream(monkeypatch):
    """Model stream that sends one chunk, then drops."""
    import litellm

    def completion(**kwargs):
        yield _delta("partial ")
        raise RuntimeError("connection reset")

    monkeypatch.setattr(litellm, "completion", completion)


class TestAgainstApp:

    def test_end_to_end_with_test_client(self, client, monkeypatch):
        import litellm

        def completion(**kwargs):
            return iter([_delta(part) for part in ("Plain ", "and ", "simple.")])

        monkeypatch.setattr(litellm, "completion", completion)
        result = ReimagineClient(client=client).reimagine("Dense prose.", simplification_level="noob")
        assert result == "Plain and simple."

    def test_interrupted_rewrite_raises(self, client, interrupted_upstream):
        with pytest.raises(ReimagineStreamError) as exc_info:
            ReimagineClient(client=client).reimagine("Original text")
        assert exc_info.value.message == GENERIC_ERROR

    def test_interrupted_rewrite_keeps_editor_content(self, client, interrupted_upstream):
        saved = []
        session = EditorSession("p1", "Original text", lambda page_id, content: saved.append(content))

        assert session.reimagine(ReimagineClient(client=client)) is False
        assert session.content == "Original text"
        assert session.stream_buffer == ""
        assert session.last_error == GENERIC_ERROR
        assert session.is_reimagining is False
        assert saved == []

    def test_interrupted_rewrite_keeps_reader_view(self, client, interrupted_upstream):
        store = {}
        view = ReimagineView("acme", "intro", "Original text", store)

        assert view.reimagine(ReimagineClient(client=client), level="noob") is False
        assert view.mode == VIEW_ORIGINAL
        assert view.has_rewrite is False
        assert view.display_content == "Original text"
        assert view.last_error == GENERIC_ERROR
        assert store == {}
