"""Abstract interface for audio retrieval."""

from abc import ABC, abstractmethod

from domain.models import RawAudio


class AudioFetcher(ABC):
    """Abstract base class for audio sources."""

    @abstractmethod
    async def fetch(self, url: str) -> RawAudio:
        """
        Downloads the audio referenced by a URL.

        Args:
            url: http(s) URL of the audio clip.

        Returns:
            RawAudio with the body bytes and normalized content type.

        Raises:
            ClientInputError: If the URL is not a valid http(s) URL.
            ConfigurationError: If the host requires a credential that is not set.
            TransportError: If the download fails or returns a non-2xx status.
        """
        pass
