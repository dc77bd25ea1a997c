"""
Tests for the text-to-speech HTTP endpoint.

The upstream provider is replaced by an httpx.MockTransport injected through
a dependency override, so every test can count provider calls.
"""
import json
import os
import unittest
from unittest.mock import patch

import httpx
from fastapi.testclient import TestClient

from server import app
from relay.routers.tts import get_upstream_transport


class UpstreamSpy:
    """Records provider requests and answers with a canned response."""

    def __init__(self, status_code: int = 200, content: bytes = b"\xff\xfb" * 512):
        self.status_code = status_code
        self.content = content
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.content)

    @property
    def call_count(self) -> int:
        return len(self.requests)


class TestTextToSpeechRoute(unittest.TestCase):
    """Test cases for POST/OPTIONS /api/text-to-speech."""

    def setUp(self):
        self.spy = UpstreamSpy()
        app.dependency_overrides[get_upstream_transport] = lambda: httpx.MockTransport(self.spy)
        self.env = patch.dict(os.environ, {"ELEVENLABS_API_KEY": "test-key"})
        self.env.start()
        self.client = TestClient(app)

    def tearDown(self):
        self.env.stop()
        app.dependency_overrides.clear()

    def assertCors(self, response):
        self.assertEqual(response.headers["access-control-allow-origin"], "*")
        self.assertIn("content-type", response.headers["access-control-allow-headers"])

    def test_success_returns_audio(self):
        """Healthy upstream yields the exact audio bytes as audio/mpeg."""
        response = self.client.post("/api/text-to-speech", json={"text": "Hello dear"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], "audio/mpeg")
        self.assertEqual(response.headers["cache-control"], "no-store")
        self.assertEqual(response.content, self.spy.content)
        self.assertEqual(int(response.headers["content-length"]), len(self.spy.content))
        self.assertCors(response)
        self.assertEqual(self.spy.call_count, 1)

    def test_default_voice_and_content_length(self):
        """No voiceId sends the default voice; a 1024-byte body gives Content-Length 1024."""
        self.spy.content = bytes(1024)
        response = self.client.post("/api/text-to-speech", json={"text": "Hello dear"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-length"], "1024")
        upstream = self.spy.requests[0]
        self.assertTrue(upstream.url.path.endswith("/v1/text-to-speech/9BWtsMINqrJLrRacOk9x"))
        self.assertEqual(upstream.headers["xi-api-key"], "test-key")
        self.assertEqual(upstream.headers["accept"], "audio/mpeg")

    def test_custom_voice_is_forwarded(self):
        response = self.client.post("/api/text-to-speech", json={"text": "Hi", "voiceId": "customVoice123"})
        self.assertEqual(response.status_code, 200)
        self.assertTrue(self.spy.requests[0].url.path.endswith("/customVoice123"))

    def test_upstream_payload(self):
        """Provider receives text, model and the fixed voice settings."""
        self.client.post("/api/text-to-speech", json={"text": "Time for tea"})
        body = json.loads(self.spy.requests[0].content)
        self.assertEqual(body["text"], "Time for tea")
        self.assertEqual(body["model_id"], "eleven_multilingual_v2")
        self.assertEqual(body["voice_settings"], {
            "stability": 0.5,
            "similarity_boost": 0.75,
            "style": 0.0,
            "use_speaker_boost": True,
        })

    def test_missing_text(self):
        """Empty body object gives 400 and never reaches the provider."""
        response = self.client.post("/api/text-to-speech", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Missing text parameter"})
        self.assertCors(response)
        self.assertEqual(self.spy.call_count, 0)

    def test_empty_text(self):
        """Falsy or non-string text is rejected as missing."""
        for payload in ({"text": ""}, {"text": None}, {"voiceId": "abc"}, {"text": 0}, {"text": False}, {"text": 42}):
            response = self.client.post("/api/text-to-speech", json=payload)
            self.assertEqual(response.status_code, 400, payload)
            self.assertEqual(response.json(), {"error": "Missing text parameter"})
        self.assertEqual(self.spy.call_count, 0)

    def test_not_configured(self):
        """Without a provider key every valid request is a 500."""
        with patch.dict(os.environ, {"ELEVENLABS_API_KEY": ""}):
            response = self.client.post("/api/text-to-speech", json={"text": "Hello dear"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "TTS service not configured"})
        self.assertCors(response)
        self.assertEqual(self.spy.call_count, 0)

    def test_not_configured_with_unset_key(self):
        with patch.dict(os.environ, {}):
            os.environ.pop("ELEVENLABS_API_KEY", None)
            response = self.client.post("/api/text-to-speech", json={"text": "Hello", "voiceId": "x"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "TTS service not configured")

    def test_upstream_unauthorized(self):
        """Provider 401 becomes 502 with the provider text in details."""
        self.spy.status_code = 401
        self.spy.content = b"unauthorized"
        response = self.client.post("/api/text-to-speech", json={"text": "Hello dear"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"error": "ElevenLabs TTS failed", "details": "unauthorized"})
        self.assertCors(response)
        self.assertEqual(self.spy.call_count, 1)

    def test_upstream_server_error_not_retried(self):
        self.spy.status_code = 503
        self.spy.content = b'{"detail": "overloaded"}'
        response = self.client.post("/api/text-to-speech", json={"text": "Hello dear"})
        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json()["details"], '{"detail": "overloaded"}')
        self.assertEqual(self.spy.call_count, 1)

    def test_malformed_json(self):
        response = self.client.post(
            "/api/text-to-speech",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 500)
        data = response.json()
        self.assertEqual(data["error"], "Server error")
        self.assertTrue(data["details"])
        self.assertCors(response)
        self.assertEqual(self.spy.call_count, 0)

    def test_non_object_body(self):
        """JSON arrays and scalars carry no text field and get 400."""
        for payload in (["Hello dear"], "Hello dear", 5, True):
            response = self.client.post("/api/text-to-speech", json=payload)
            self.assertEqual(response.status_code, 400, payload)
            self.assertEqual(response.json(), {"error": "Missing text parameter"})
            self.assertCors(response)
        self.assertEqual(self.spy.call_count, 0)

    def test_null_body(self):
        response = self.client.post(
            "/api/text-to-speech",
            content=b"null",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Server error")
        self.assertEqual(self.spy.call_count, 0)

    def test_rejections_are_logged(self):
        with self.assertLogs("relay.config", level="WARNING") as logs:
            self.client.post("/api/text-to-speech", json={})
        self.assertTrue(any("InvalidRequest" in line for line in logs.output))

    def test_network_failure(self):
        """Connection errors are reported as a 500 server error."""
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        app.dependency_overrides[get_upstream_transport] = lambda: httpx.MockTransport(refuse)
        response = self.client.post("/api/text-to-speech", json={"text": "Hello dear"})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Server error", "details": "connection refused"})

    def test_key_not_echoed(self):
        self.spy.status_code = 400
        self.spy.content = b"bad voice"
        response = self.client.post("/api/text-to-speech", json={"text": "Hello dear"})
        self.assertNotIn("test-key", response.text)
        self.assertNotIn("test-key", str(dict(response.headers)))

    def test_preflight(self):
        """OPTIONS is answered with an empty body and CORS headers."""
        response = self.client.options("/api/text-to-speech")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"")
        self.assertCors(response)
        self.assertEqual(self.spy.call_count, 0)

    def test_preflight_without_configuration(self):
        with patch.dict(os.environ, {"ELEVENLABS_API_KEY": ""}):
            response = self.client.options(
                "/api/text-to-speech",
                headers={"Origin": "http://localhost:5173", "Access-Control-Request-Method": "POST"},
            )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.content, b"")
        self.assertCors(response)


if __name__ == "__main__":
    unittest.main()
