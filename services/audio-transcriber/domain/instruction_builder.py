"""Core business logic for building the transcription instruction."""

ROLE_LINE = "You are a reliable transcriber."
FORMAT_LINE = "Return ONLY the transcript of the audio, with no notes or extra formatting."


class InstructionBuilder:
    """Builds the instruction text sent alongside the audio."""

    def build(self, language: str | None = None, prompt: str | None = None) -> str:
        """
        Builds the instruction from the fixed lines plus the optional hints.

        Args:
            language: Expected primary language of the audio, if known.
            prompt: Free-text instruction supplied by the caller.

        Returns:
            Newline-joined instruction; absent hints contribute no line.
        """
        lines = [
            ROLE_LINE,
            FORMAT_LINE,
            f"Expected primary language: {language}" if language else None,
            f"Additional instruction: {prompt}" if prompt else None,
        ]
        return "\n".join(line for line in lines if line)
