"""Gemini implementation of the TranscriptionService interface."""

from typing import Callable

from google import genai
from google.genai import types
from voicenote_common.logging import setup_logging

from domain import InstructionBuilder
from domain.models import NormalizedAudio, TranscriptionResult
from exceptions import InferenceError

from .interfaces import TranscriptionService

logger = setup_logging()


def _from_text_accessor(response: types.GenerateContentResponse) -> str | None:
    """Current SDKs aggregate the text parts behind ``response.text``."""
    try:
        return response.text
    except ValueError:
        # Older SDK releases raise instead of returning None for non-text replies.
        return None


def _from_first_candidate(response: types.GenerateContentResponse) -> str | None:
    """Reads ``candidates[0].content.parts[0].text`` directly."""
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if content is None or not content.parts:
        return None
    return content.parts[0].text


# Tried in order; the first decoder yielding non-blank text wins.
RESPONSE_DECODERS: tuple[
    tuple[str, Callable[[types.GenerateContentResponse], str | None]], ...
] = (
    ("text_accessor", _from_text_accessor),
    ("first_candidate_part", _from_first_candidate),
)


def extract_transcript(response: types.GenerateContentResponse) -> str | None:
    """
    Returns the transcript from a Gemini response, or None.

    Surrounding whitespace is stripped from the model text, so a reply made
    only of whitespace counts as no transcript rather than a blank success.
    """
    for name, decoder in RESPONSE_DECODERS:
        text = decoder(response)
        if text and text.strip():
            logger.debug("Transcript decoded", extra={"decoder": name})
            return text.strip()
    return None


class GeminiTranscriber(TranscriptionService):
    """Transcribes audio with a Gemini multimodal model."""

    def __init__(
        self,
        client: genai.Client,
        model_name: str,
        instruction_builder: InstructionBuilder,
    ):
        self._client = client
        self._model_name = model_name
        self._instruction_builder = instruction_builder

    async def transcribe(
        self,
        audio: NormalizedAudio,
        language: str | None = None,
        prompt: str | None = None,
    ) -> TranscriptionResult:
        """
        Sends the instruction and inline audio as two user turns.

        Raises:
            InferenceError: If the Gemini call fails or returns no text.
        """
        instruction = self._instruction_builder.build(language=language, prompt=prompt)
        contents = [
            types.Content(role="user", parts=[types.Part.from_text(text=instruction)]),
            types.Content(
                role="user",
                parts=[types.Part.from_bytes(data=audio.data, mime_type=audio.mime_type)],
            ),
        ]

        try:
            response = await self._client.aio.models.generate_content(
                model=self._model_name,
                contents=contents,
            )
        except Exception as e:
            logger.exception("Gemini API call failed", extra={"model": self._model_name})
            raise InferenceError(f"Gemini transcription failed: {e}", cause=e) from e

        transcript = extract_transcript(response)
        if not transcript:
            logger.error("Gemini returned no text", extra={"model": self._model_name})
            raise InferenceError("Gemini returned no text")

        logger.info(
            "Audio transcription successful",
            extra={"model": self._model_name, "transcript_chars": len(transcript)},
        )
        return TranscriptionResult(transcript=transcript)
