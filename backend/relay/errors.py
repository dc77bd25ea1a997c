"""
Error taxonomy for the speech-synthesis relay.

Every failure the relay can report is a RelayError subclass carrying the
HTTP status it maps to and the message returned to the caller. The route
handler is the only place these are caught and turned into JSON bodies.
"""
from typing import Optional

from .models import ErrorKind, ErrorReport


class RelayError(Exception):
    status_code: int = 500
    error_kind: ErrorKind = "InternalError"
    default_message: str = "Server error"

    def __init__(self, message: Optional[str] = None, provider_detail: Optional[str] = None):
        self.message = message or self.default_message
        self.provider_detail = provider_detail
        super().__init__(self.message)

    def to_report(self) -> ErrorReport:
        return ErrorReport(error_kind=self.error_kind, message=self.message, provider_detail=self.provider_detail)


class InvalidRequest(RelayError):
    """Caller error detected locally; the provider is never contacted."""

    status_code = 400
    error_kind = "InvalidRequest"
    default_message = "Missing text parameter"


class NotConfigured(RelayError):
    """The provider credential is missing from this deployment."""

    status_code = 500
    error_kind = "NotConfigured"
    default_message = "TTS service not configured"


class UpstreamError(RelayError):
    """The provider answered with a non-success status."""

    status_code = 502
    error_kind = "UpstreamError"
    default_message = "ElevenLabs TTS failed"

    def __init__(self, upstream_status: int, body: str):
        self.upstream_status = upstream_status
        super().__init__(provider_detail=body)


class InternalError(RelayError):
    status_code = 500
    error_kind = "InternalError"
    default_message = "Server error"

    @classmethod
    def from_exception(cls, exc: BaseException) -> "InternalError":
        return cls(provider_detail=str(exc) or type(exc).__name__)
