"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from domain.models import NormalizedAudio, TranscriptionResult


class TranscriptionService(ABC):
    """Abstract base class for audio transcription backends."""

    @abstractmethod
    async def transcribe(
        self,
        audio: NormalizedAudio,
        language: str | None = None,
        prompt: str | None = None,
    ) -> TranscriptionResult:
        """
        Transcribes canonical audio and returns the transcript text.

        Args:
            audio: Audio in the canonical format.
            language: Optional expected language hint.
            prompt: Optional extra instruction for the model.

        Returns:
            TranscriptionResult with a non-empty transcript.

        Raises:
            InferenceError: If the call fails or no text comes back.
        """
        pass
