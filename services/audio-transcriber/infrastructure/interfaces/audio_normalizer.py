"""Abstract interface for audio format normalization."""

from abc import ABC, abstractmethod

from domain.models import NormalizedAudio, RawAudio


class AudioNormalizer(ABC):
    """Abstract base class for transcoding backends."""

    @abstractmethod
    async def normalize(self, audio: RawAudio) -> NormalizedAudio:
        """
        Re-encodes audio into the canonical mono 16 kHz WAV format.

        Raises:
            NormalizationError: If the audio cannot be transcoded.
        """
        pass
