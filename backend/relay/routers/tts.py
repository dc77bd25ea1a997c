from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from ..config import logger, CORS_HEADERS
from ..errors import RelayError, InternalError
from ..services.synthesis_service import parse_request, synthesize


router = APIRouter(prefix="/api", tags=["tts"])


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport used for the provider call; None means the real network."""
    return None


def _error_response(error: RelayError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error.to_report().to_body(),
        headers=dict(CORS_HEADERS),
    )


@router.options("/text-to-speech")
async def text_to_speech_preflight():
    return Response(status_code=200, headers=dict(CORS_HEADERS))


@router.post("/text-to-speech")
async def text_to_speech(
    request: Request,
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_upstream_transport),
):
    try:
        payload = await request.json()
        synthesis_request = parse_request(payload)
        result = await synthesize(synthesis_request, transport=transport)
    except RelayError as e:
        logger.warning(f"TTS request failed: {e.error_kind} ({e.status_code}) {e.message}")
        return _error_response(e)
    except Exception as e:
        logger.error(f"TTS function error: {e}")
        return _error_response(InternalError.from_exception(e))

    return Response(
        content=result.audio,
        media_type=result.media_type,
        headers={
            **CORS_HEADERS,
            "Content-Length": str(result.byte_length),
            "Cache-Control": "no-store",
        },
    )
