"""Custom exceptions for the audio-transcriber service."""


class PipelineError(Exception):
    """Base class for every failure raised by the transcription pipeline."""

    def __init__(self, message: str, cause: Exception | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)


class ClientInputError(PipelineError):
    """Raised when the inbound request is missing or has malformed fields."""


class ConfigurationError(PipelineError):
    """Raised when a required credential or setting is absent."""


class TransportError(PipelineError):
    """Raised when downloading the source audio fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ):
        self.status_code = status_code
        super().__init__(message, cause)


class NormalizationError(PipelineError):
    """Raised when ffmpeg cannot transcode the audio."""

    def __init__(self, detail: str, cause: Exception | None = None):
        self.detail = detail
        super().__init__(f"Failed to normalize audio: {detail}", cause)


class InferenceError(PipelineError):
    """Raised when the inference call fails or yields no transcript."""
