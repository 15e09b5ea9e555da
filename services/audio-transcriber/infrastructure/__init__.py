"""Infrastructure layer exports."""

from .ffmpeg_normalizer import FfmpegAudioNormalizer
from .gemini_transcriber import GeminiTranscriber
from .http_fetcher import HttpAudioFetcher

__all__ = ["FfmpegAudioNormalizer", "GeminiTranscriber", "HttpAudioFetcher"]
