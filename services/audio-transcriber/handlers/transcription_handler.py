"""Handler that runs the fetch, normalize and transcribe pipeline."""

from voicenote_common import setup_logging

from domain import TranscriptionRequest, TranscriptionResult
from exceptions import ClientInputError
from infrastructure.interfaces import AudioFetcher, AudioNormalizer, TranscriptionService

logger = setup_logging()


class TranscriptionHandler:
    """Orchestrates audio-to-transcript operations for one request."""

    def __init__(
        self,
        fetcher: AudioFetcher,
        normalizer: AudioNormalizer,
        transcription_service: TranscriptionService,
    ):
        self._fetcher = fetcher
        self._normalizer = normalizer
        self._transcription_service = transcription_service

    async def process(self, request: TranscriptionRequest) -> TranscriptionResult:
        """
        Downloads, normalizes and transcribes the audio referenced by a request.

        Each stage starts only after the previous one succeeded; the first
        failure propagates unchanged.

        Args:
            request: The inbound transcription request.

        Returns:
            TranscriptionResult with a non-empty transcript.

        Raises:
            ClientInputError: If audio_url is missing or not an http(s) URL.
            ConfigurationError: If the audio host needs a token that is not set.
            TransportError: If the audio download fails.
            NormalizationError: If transcoding fails.
            InferenceError: If transcription fails or returns no text.
        """
        audio_url = (request.audio_url or "").strip()
        if not audio_url:
            raise ClientInputError("Missing audio_url in request body")

        logger.info(
            "Processing transcription request",
            extra={
                "audio_url": audio_url,
                "language": request.language,
                "has_prompt": bool(request.prompt),
            },
        )

        raw_audio = await self._fetcher.fetch(audio_url)
        normalized_audio = await self._normalizer.normalize(raw_audio)
        result = await self._transcription_service.transcribe(
            normalized_audio,
            language=request.language,
            prompt=request.prompt,
        )

        logger.info(
            "Transcription request processed",
            extra={"audio_url": audio_url, "transcript_chars": len(result.transcript)},
        )
        return result
