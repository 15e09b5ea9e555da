"""httpx implementation of the AudioFetcher interface."""

import re

import httpx
from voicenote_common.logging import setup_logging

from config import FetchConfig, WhatsAppConfig
from domain.models import RawAudio
from exceptions import ClientInputError, ConfigurationError, TransportError

from .interfaces import AudioFetcher

logger = setup_logging()


class HttpAudioFetcher(AudioFetcher):
    """Downloads audio over HTTP, authenticating against WhatsApp media hosts."""

    def __init__(
        self,
        fetch_config: FetchConfig,
        whatsapp_config: WhatsAppConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = fetch_config
        self._whatsapp = whatsapp_config
        self._media_host_re = re.compile(whatsapp_config.media_host_pattern)
        self._transport = transport

    async def fetch(self, url: str) -> RawAudio:
        """
        Downloads the audio at ``url`` with a single GET request.

        WhatsApp Cloud API media URLs get a bearer token; when the token is
        not configured the request is never attempted.
        """
        parsed = self._parse_url(url)
        headers = self._auth_headers(parsed)

        try:
            async with httpx.AsyncClient(
                timeout=self._config.timeout_seconds,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(parsed, headers=headers)
        except httpx.HTTPError as e:
            logger.exception("Audio download failed", extra={"host": parsed.host})
            raise TransportError(f"Failed to download audio: {e}", cause=e) from e

        if not response.is_success:
            logger.warning(
                "Audio source returned an error status",
                extra={"host": parsed.host, "status_code": response.status_code},
            )
            raise TransportError(
                f"Failed to download audio: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        content_type = self._normalize_content_type(response.headers.get("content-type"))
        logger.info(
            "Audio downloaded",
            extra={
                "host": parsed.host,
                "size_bytes": len(response.content),
                "content_type": content_type,
            },
        )
        return RawAudio(data=response.content, content_type=content_type)

    def _parse_url(self, url: str) -> httpx.URL:
        """Accepts only absolute http(s) URLs."""
        try:
            parsed = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise ClientInputError(f"Invalid audio_url: {url}", cause=e) from e
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise ClientInputError(f"audio_url must be an http(s) URL: {url}")
        return parsed

    def _auth_headers(self, url: httpx.URL) -> dict[str, str]:
        if not self._media_host_re.search(url.host):
            return {}
        if not self._whatsapp.token:
            raise ConfigurationError(
                "Audio requires a WhatsApp token. Set META_WA_TOKEN."
            )
        return {"Authorization": f"Bearer {self._whatsapp.token}"}

    def _normalize_content_type(self, header: str | None) -> str:
        """Lower-cases the media type and drops parameters such as codecs."""
        media_type = (header or "").split(";")[0].strip().lower()
        return media_type or self._config.default_content_type
