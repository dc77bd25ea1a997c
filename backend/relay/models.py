from typing import Any, Dict, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


ErrorKind = Literal["InvalidRequest", "NotConfigured", "UpstreamError", "InternalError"]


class SynthesisRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[str] = None
    voice_id: Optional[str] = Field(None, alias="voiceId")  # falls back to the configured default voice


class SynthesisResult(BaseModel):
    audio: bytes
    voice_id: str
    media_type: str = "audio/mpeg"

    @property
    def byte_length(self) -> int:
        return len(self.audio)


class ErrorReport(BaseModel):
    error_kind: ErrorKind
    message: str
    provider_detail: Optional[str] = None

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.provider_detail is not None:
            body["details"] = self.provider_detail
        return body


class HealthStatus(BaseModel):
    status: str
    timestamp: str
    tts_configured: bool
