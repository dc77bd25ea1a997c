import time
from typing import Any, Dict, Optional

import httpx

from .base import VendorAdapter
from ..config import logger, ELEVENLABS_API_BASE, ELEVENLABS_MODEL_ID, VOICE_SETTINGS
from ..errors import UpstreamError


class ElevenLabsAdapter(VendorAdapter):
    """ElevenLabs text-to-speech adapter.

    Issues exactly one request per call and buffers the whole MPEG body.
    Non-success responses raise UpstreamError with the provider body verbatim.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = ELEVENLABS_API_BASE,
        model_id: str = ELEVENLABS_MODEL_ID,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model_id = model_id
        self.timeout = timeout
        self.transport = transport

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {
            "text": text,
            "model_id": self.model_id,
            "voice_settings": dict(VOICE_SETTINGS),
        }

    async def synthesize(self, text: str, voice: str, **params) -> bytes:
        url = f"{self.base_url}/v1/text-to-speech/{voice}"
        headers = {
            "xi-api-key": self.api_key,
            "Content-Type": "application/json",
            "Accept": "audio/mpeg",
        }
        req_time = time.perf_counter()
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            resp = await client.post(url, headers=headers, json=self.build_payload(text))
        latency = time.perf_counter() - req_time
        if not resp.is_success:
            error_text = resp.text
            logger.error(f"ElevenLabs API error: {resp.status_code} {error_text}")
            raise UpstreamError(resp.status_code, error_text)
        audio = resp.content
        logger.info(f"ElevenLabs TTS API latency: {latency:.3f}s, size: {len(audio)} bytes")
        return audio
