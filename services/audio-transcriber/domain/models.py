"""Domain models for the audio transcription service."""

from pydantic import BaseModel

CANONICAL_MIME_TYPE = "audio/wav"


class TranscriptionRequest(BaseModel, frozen=True):
    """Inbound request to transcribe a remotely hosted audio clip."""

    audio_url: str | None = None
    language: str | None = None
    prompt: str | None = None


class RawAudio(BaseModel, frozen=True):
    """Audio bytes as downloaded from the source URL."""

    data: bytes
    content_type: str


class NormalizedAudio(BaseModel, frozen=True):
    """Audio re-encoded to mono 16 kHz PCM WAV."""

    data: bytes
    mime_type: str = CANONICAL_MIME_TYPE


class TranscriptionResult(BaseModel, frozen=True):
    """Non-empty transcript returned by the inference service."""

    transcript: str
