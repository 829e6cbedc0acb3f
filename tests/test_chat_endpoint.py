"""
Tests for the echo endpoint.
Validates: echo template, untouched input, the fixed 400/500 bodies,
statelessness, CORS, and the page that carries the chat UI.
Run with: pytest tests/test_chat_endpoint.py -v
"""

import pytest
from fastapi.testclient import TestClient

import echobot.bot
from echobot.main import app

client = TestClient(app)

CHAT_PATH = "/api/chat"
INVALID_BODY = {"error": "Message parameter is required and must be a non-empty string."}
INTERNAL_BODY = {"error": "An unexpected error occurred while processing your request."}


# ── Success ──────────────────────────────────────────────────

class TestEchoReply:
    def test_hello_there(self):
        resp = client.post(CHAT_PATH, json={"message": "Hello there!"})
        assert resp.status_code == 200
        assert resp.json() == {"botResponse": "You said: 'Hello there!'"}

    def test_input_is_not_trimmed(self):
        resp = client.post(CHAT_PATH, json={"message": "  spaced out \n"})
        assert resp.status_code == 200
        assert resp.json()["botResponse"] == "You said: '  spaced out \n'"

    def test_quotes_and_unicode_pass_through(self):
        text = "it's \"quoted\" ✓ ünïcödé"
        resp = client.post(CHAT_PATH, json={"message": text})
        assert resp.json()["botResponse"] == f"You said: '{text}'"

    def test_extra_fields_are_ignored(self):
        resp = client.post(CHAT_PATH, json={"message": "hi", "session_id": "abc"})
        assert resp.status_code == 200
        assert resp.json() == {"botResponse": "You said: 'hi'"}

    def test_lone_surrogate_is_echoed(self):
        """Valid JSON that cannot be encoded as UTF-8 still gets its echo."""
        resp = client.post(
            CHAT_PATH,
            content=b'{"message": "a\\ud800b"}',
            headers={"Content-Type": "application/json", "Origin": "https://somewhere.example"},
        )
        assert resp.status_code == 200
        assert b"\\ud800" in resp.content
        assert resp.json() == {"botResponse": "You said: 'a\ud800b'"}
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_non_ascii_is_escaped_on_the_wire(self):
        resp = client.post(CHAT_PATH, json={"message": "ünï"})
        assert resp.content == b'{"botResponse":"You said: \'\\u00fcn\\u00ef\'"}'

    def test_same_input_gives_identical_bodies(self):
        first = client.post(CHAT_PATH, json={"message": "again"})
        second = client.post(CHAT_PATH, json={"message": "again"})
        assert first.content == second.content


# ── Validation failures ──────────────────────────────────────

class TestValidation:
    @pytest.mark.parametrize(
        "payload",
        [
            {"message": ""},
            {"message": "   "},
            {"message": "\t\n"},
            {},
            {"message": None},
            {"message": 42},
            {"message": ["hello"]},
            {"message": {"text": "hello"}},
        ],
    )
    def test_invalid_message_returns_400(self, payload):
        resp = client.post(CHAT_PATH, json=payload)
        assert resp.status_code == 400
        assert resp.json() == INVALID_BODY
        assert "botResponse" not in resp.json()

    def test_malformed_json_returns_400(self):
        resp = client.post(
            CHAT_PATH,
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert resp.status_code == 400
        assert resp.json() == INVALID_BODY

    def test_non_object_body_returns_400(self):
        resp = client.post(CHAT_PATH, json="Hello there!")
        assert resp.status_code == 400
        assert resp.json() == INVALID_BODY


# ── Internal faults ──────────────────────────────────────────

class TestInternalError:
    def test_handler_exception_returns_generic_500(self, monkeypatch):
        def explode(text):
            raise RuntimeError("database on fire")

        monkeypatch.setattr(echobot.bot, "handle_message", explode)
        resp = client.post(CHAT_PATH, json={"message": "hi"})
        assert resp.status_code == 500
        assert resp.json() == INTERNAL_BODY
        assert "database on fire" not in resp.text


# ── Transport surface ────────────────────────────────────────

class TestHttpSurface:
    def test_cors_preflight_allows_any_origin(self):
        resp = client.options(
            CHAT_PATH,
            headers={
                "Origin": "https://somewhere.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "content-type",
            },
        )
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_cors_header_on_post(self):
        resp = client.post(
            CHAT_PATH,
            json={"message": "hi"},
            headers={"Origin": "https://somewhere.example"},
        )
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_request_id_header(self):
        resp = client.post(CHAT_PATH, json={"message": "hi"})
        assert resp.headers.get("x-request-id")

    def test_get_is_not_allowed(self):
        resp = client.get(CHAT_PATH)
        assert resp.status_code == 405

    def test_index_page_points_at_chat_endpoint(self):
        resp = client.get("/")
        assert resp.status_code == 200
        assert "text/html" in resp.headers["content-type"]
        assert f'content="{CHAT_PATH}"' in resp.text
        assert "{{CHAT_ENDPOINT}}" not in resp.text

    def test_chat_script_is_served(self):
        resp = client.get("/static/chat.js")
        assert resp.status_code == 200
        assert "botResponse" in resp.text

    def test_page_template_is_not_served_raw(self):
        resp = client.get("/static/index.html")
        assert resp.status_code == 404

    def test_chat_script_ignores_unfilled_placeholder(self):
        script = client.get("/static/chat.js").text
        assert 'indexOf("{{") === -1' in script
        assert 'DEFAULT_ENDPOINT = "/api/chat"' in script

    def test_caller_request_id_is_reused(self):
        resp = client.post(CHAT_PATH, json={"message": "hi"}, headers={"x-request-id": "trace-123"})
        assert resp.headers["x-request-id"] == "trace-123"

    def test_oversized_request_id_is_replaced(self):
        resp = client.post(CHAT_PATH, json={"message": "hi"}, headers={"x-request-id": "x" * 500})
        assert resp.headers["x-request-id"] != "x" * 500
