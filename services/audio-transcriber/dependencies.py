"""Dependency injection configuration for the audio-transcriber service."""

from google import genai
from voicenote_common import setup_logging

from config import AppConfig, load_config
from domain import InstructionBuilder
from exceptions import ConfigurationError
from handlers import TranscriptionHandler
from infrastructure import FfmpegAudioNormalizer, GeminiTranscriber, HttpAudioFetcher

logger = setup_logging()

try:
    _config = load_config()
except ConfigurationError:
    logger.exception("Configuration invalid, refusing to start")
    raise

# Gemini inference
_gemini_client = genai.Client(api_key=_config.gemini.api_key)
_transcriber = GeminiTranscriber(
    _gemini_client, _config.gemini.model_name, InstructionBuilder()
)

# Audio download and transcoding
_fetcher = HttpAudioFetcher(_config.fetch, _config.whatsapp)
_normalizer = FfmpegAudioNormalizer(_config.ffmpeg)

_handler = TranscriptionHandler(_fetcher, _normalizer, _transcriber)

logger.info(
    "Service composed",
    extra={
        "model": _config.gemini.model_name,
        "ffmpeg": _config.ffmpeg.binary_path,
        "whatsapp_token_configured": _config.whatsapp.token is not None,
    },
)


def get_config() -> AppConfig:
    """Returns the immutable application configuration."""
    return _config


def get_handler() -> TranscriptionHandler:
    """Returns the configured transcription handler."""
    return _handler
