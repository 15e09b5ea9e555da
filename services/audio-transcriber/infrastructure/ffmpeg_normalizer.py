"""ffmpeg implementation of the AudioNormalizer interface."""

import asyncio
import contextlib
import mimetypes
from pathlib import Path

from voicenote_common.logging import setup_logging

from config import FfmpegConfig
from domain.models import NormalizedAudio, RawAudio
from exceptions import NormalizationError
from utils import scratch_paths

from .interfaces import AudioNormalizer

logger = setup_logging()

MAX_STDERR_CHARS = 1000


class FfmpegAudioNormalizer(AudioNormalizer):
    """Transcodes audio to mono 16 kHz WAV with an ffmpeg subprocess."""

    def __init__(self, config: FfmpegConfig):
        self._config = config

    async def normalize(self, audio: RawAudio) -> NormalizedAudio:
        """
        Converts the audio through scratch files that never outlive the call.

        Raises:
            NormalizationError: If ffmpeg is missing, fails, or writes nothing.
        """
        input_suffix = mimetypes.guess_extension(audio.content_type) or ".bin"

        async with scratch_paths(
            input_suffix, ".wav", directory=self._config.scratch_dir
        ) as (input_path, output_path):
            await asyncio.to_thread(input_path.write_bytes, audio.data)
            await self._run_ffmpeg(input_path, output_path)

            try:
                wav = await asyncio.to_thread(output_path.read_bytes)
            except FileNotFoundError as e:
                raise NormalizationError("ffmpeg produced no output", cause=e) from e

        if not wav:
            raise NormalizationError("ffmpeg produced no output")

        logger.info(
            "Audio normalized",
            extra={
                "input_bytes": len(audio.data),
                "input_content_type": audio.content_type,
                "output_bytes": len(wav),
            },
        )
        return NormalizedAudio(data=wav)

    def _build_command(self, input_path: Path, output_path: Path) -> list[str]:
        return [
            self._config.binary_path,
            "-hide_banner",
            "-loglevel",
            "error",
            "-y",
            "-i",
            str(input_path),
            "-ac",
            str(self._config.channels),
            "-ar",
            str(self._config.sample_rate),
            "-f",
            "wav",
            str(output_path),
        ]

    async def _run_ffmpeg(self, input_path: Path, output_path: Path) -> None:
        """Runs ffmpeg to completion; kills it if the awaiting task is cancelled."""
        try:
            process = await asyncio.create_subprocess_exec(
                *self._build_command(input_path, output_path),
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as e:
            logger.error(
                "ffmpeg binary not found",
                extra={"binary_path": self._config.binary_path},
            )
            raise NormalizationError(
                f"ffmpeg not found at '{self._config.binary_path}'", cause=e
            ) from e

        try:
            _, stderr = await process.communicate()
        except asyncio.CancelledError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            logger.warning("ffmpeg cancelled", extra={"pid": process.pid})
            raise

        if process.returncode != 0:
            detail = (stderr or b"").decode("utf-8", errors="ignore").strip()
            detail = detail[:MAX_STDERR_CHARS] or f"ffmpeg exited with status {process.returncode}"
            logger.error(
                "ffmpeg failed",
                extra={"returncode": process.returncode, "stderr": detail},
            )
            raise NormalizationError(detail)
