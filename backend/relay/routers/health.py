from datetime import datetime, timezone

from fastapi import APIRouter

from ..config import get_elevenlabs_api_key
from ..models import HealthStatus


router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthStatus)
async def health_check():
    return HealthStatus(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        tts_configured=get_elevenlabs_api_key() is not None,
    )
