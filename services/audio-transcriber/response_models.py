"""Response models for the transcription API."""

from pydantic import BaseModel


class TranscribeResponse(BaseModel):
    """Returned after a successful transcription."""

    ok: bool = True
    transcript: str
    reply: str


class FailureResponse(BaseModel):
    """Returned when any pipeline stage fails."""

    ok: bool = False
    error: str


class ErrorResponse(BaseModel):
    """Returned when the request itself is invalid."""

    error: str
