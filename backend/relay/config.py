import os
import logging
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Logging configuration
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Environment variables
ELEVENLABS_API_BASE = os.getenv("ELEVENLABS_API_BASE", "https://api.elevenlabs.io").rstrip("/")
ELEVENLABS_MODEL_ID = os.getenv("ELEVENLABS_MODEL_ID", "eleven_multilingual_v2")
DEFAULT_VOICE_ID = os.getenv("ELEVENLABS_DEFAULT_VOICE_ID", "9BWtsMINqrJLrRacOk9x")
RELAY_HOST = os.getenv("RELAY_HOST", "0.0.0.0")
RELAY_PORT = int(os.getenv("RELAY_PORT", "8001"))
RELAY_URL = os.getenv("RELAY_URL", f"http://localhost:{RELAY_PORT}")

# Fixed voice quality parameters sent with every synthesis request
VOICE_SETTINGS = {
    "stability": 0.5,
    "similarity_boost": 0.75,
    "style": 0.0,
    "use_speaker_boost": True,
}

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}


def get_elevenlabs_api_key() -> Optional[str]:
    """Read the provider key from the environment; None when absent or blank."""
    api_key = (os.getenv("ELEVENLABS_API_KEY") or "").strip()
    return api_key or None


def get_upstream_timeout() -> Optional[float]:
    raw = (os.getenv("ELEVENLABS_TIMEOUT") or "").strip()
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid ELEVENLABS_TIMEOUT value: {raw!r}")
        return None
    if timeout <= 0:
        logger.warning(f"Ignoring non-positive ELEVENLABS_TIMEOUT value: {raw!r}")
        return None
    return timeout
