"""Infrastructure interface exports."""

from .audio_fetcher import AudioFetcher
from .audio_normalizer import AudioNormalizer
from .transcription_service import TranscriptionService

__all__ = ["AudioFetcher", "AudioNormalizer", "TranscriptionService"]
