"""
Granny.AI Speech-Synthesis Relay - FastAPI server

This module bootstraps the relay service:
- Configuration and environment setup
- Router inclusion
- Uvicorn server startup

The relay logic is organized into:
- relay/config.py: Environment variables, logging and fixed provider settings
- relay/models.py: Pydantic request/response models
- relay/errors.py: Error taxonomy mapped to HTTP statuses
- relay/vendors/: Upstream adapter (ElevenLabs)
- relay/services/: Synthesis flow (validation, configuration check, upstream call)
- relay/routers/: API route handlers

Cross-origin headers are set by the text-to-speech route on every response,
including errors and the pre-flight reply, so no CORS middleware is mounted.
"""
from fastapi import FastAPI

from relay.config import RELAY_HOST, RELAY_PORT
from relay.routers import health, tts

# Initialize FastAPI app
app = FastAPI(title="Granny.AI Speech-Synthesis Relay", version="1.0.0")

# Include all API routers
app.include_router(health.router)
app.include_router(tts.router)


def run() -> None:
    import uvicorn
    uvicorn.run("server:app", host=RELAY_HOST, port=RELAY_PORT)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("server:app", host=RELAY_HOST, port=RELAY_PORT, reload=True)
