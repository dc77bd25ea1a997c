from typing import Any, Optional

import httpx

from ..config import logger, DEFAULT_VOICE_ID, get_elevenlabs_api_key, get_upstream_timeout
from ..errors import InvalidRequest, NotConfigured
from ..models import SynthesisRequest, SynthesisResult
from ..vendors import ElevenLabsAdapter


def parse_request(payload: Any) -> SynthesisRequest:
    """Build a SynthesisRequest from a decoded JSON body.

    Any JSON value without a non-empty string `text` (arrays, scalars,
    `{"text": 0}`) is InvalidRequest. A JSON `null` body is not a request at all
    and raises ValueError.
    """
    if payload is None:
        raise ValueError("Request body must not be null")
    if not isinstance(payload, dict):
        raise InvalidRequest()
    text = payload.get("text")
    if not isinstance(text, str) or not text:
        raise InvalidRequest()
    return SynthesisRequest.model_validate(payload)


async def synthesize(
    request: SynthesisRequest,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SynthesisResult:
    """Turn one request into MPEG audio via a single upstream call.

    Raises InvalidRequest before anything else when text is missing, then
    NotConfigured when the provider key is absent. Upstream failures surface
    as UpstreamError from the adapter and are never retried here.
    """
    text = request.text
    if not text:
        raise InvalidRequest()

    api_key = get_elevenlabs_api_key()
    if not api_key:
        logger.error("ELEVENLABS_API_KEY not configured")
        raise NotConfigured()

    voice_id = request.voice_id or DEFAULT_VOICE_ID
    logger.info(f"Generating speech for text length: {len(text)}, voice: {voice_id}")

    adapter = ElevenLabsAdapter(api_key, timeout=get_upstream_timeout(), transport=transport)
    audio = await adapter.synthesize(text, voice_id)

    logger.info(f"Successfully generated audio, size: {len(audio)} bytes")
    return SynthesisResult(audio=audio, voice_id=voice_id)
