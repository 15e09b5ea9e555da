"""Application configuration loaded from environment variables."""

import os
from pathlib import Path

from pydantic import BaseModel

from exceptions import ConfigurationError

WHATSAPP_MEDIA_HOST_PATTERN = r"graph\.facebook\.com|lookaside\.fbcdn\.net|\.fbsbx\.com"


class GeminiConfig(BaseModel, frozen=True):
    """Gemini inference configuration."""

    api_key: str
    model_name: str = "gemini-2.5-flash"


class WhatsAppConfig(BaseModel, frozen=True):
    """WhatsApp Cloud API media access configuration."""

    token: str | None = None
    media_host_pattern: str = WHATSAPP_MEDIA_HOST_PATTERN


class FetchConfig(BaseModel, frozen=True):
    """Outbound audio download configuration."""

    timeout_seconds: float = 30.0
    default_content_type: str = "audio/ogg"


class FfmpegConfig(BaseModel, frozen=True):
    """Transcoding engine configuration."""

    binary_path: str = "ffmpeg"
    channels: int = 1
    sample_rate: int = 16000
    scratch_dir: Path | None = None


class ServerConfig(BaseModel, frozen=True):
    """HTTP server configuration."""

    port: int = 8080
    max_body_bytes: int = 25 * 1024 * 1024
    disconnect_poll_seconds: float = 0.5


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    gemini: GeminiConfig
    whatsapp: WhatsAppConfig
    fetch: FetchConfig
    ffmpeg: FfmpegConfig
    server: ServerConfig


def load_config() -> AppConfig:
    """
    Loads configuration from environment variables.

    Raises:
        ConfigurationError: If no Gemini API key is set.
    """
    api_key = os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
    if not api_key:
        raise ConfigurationError("Missing GEMINI_API_KEY")

    scratch_dir = os.getenv("SCRATCH_DIR")

    return AppConfig(
        gemini=GeminiConfig(
            api_key=api_key,
            model_name=os.getenv("GEMINI_MODEL", "gemini-2.5-flash"),
        ),
        whatsapp=WhatsAppConfig(
            token=os.getenv("META_WA_TOKEN") or None,
        ),
        fetch=FetchConfig(
            timeout_seconds=float(os.getenv("FETCH_TIMEOUT_SECONDS", "30")),
        ),
        ffmpeg=FfmpegConfig(
            binary_path=os.getenv("FFMPEG_PATH", "ffmpeg"),
            scratch_dir=Path(scratch_dir) if scratch_dir else None,
        ),
        server=ServerConfig(
            port=int(os.getenv("PORT", "8080")),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", str(25 * 1024 * 1024))),
        ),
    )
