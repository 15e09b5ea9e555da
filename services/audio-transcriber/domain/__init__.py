"""Domain layer exports."""

from .instruction_builder import InstructionBuilder
from .models import (
    CANONICAL_MIME_TYPE,
    NormalizedAudio,
    RawAudio,
    TranscriptionRequest,
    TranscriptionResult,
)

__all__ = [
    "CANONICAL_MIME_TYPE",
    "InstructionBuilder",
    "NormalizedAudio",
    "RawAudio",
    "TranscriptionRequest",
    "TranscriptionResult",
]
