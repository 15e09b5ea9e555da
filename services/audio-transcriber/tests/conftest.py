import os

# dependencies.py loads configuration at import time.
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("DD_TRACE_ENABLED", "false")

import pytest

from domain import NormalizedAudio, RawAudio, TranscriptionResult
from infrastructure.interfaces import AudioFetcher, AudioNormalizer, TranscriptionService


class FakeFetcher(AudioFetcher):
    def __init__(self, audio: RawAudio | None = None, error: Exception | None = None):
        self.audio = audio or RawAudio(data=b"OggS-voice-note", content_type="audio/ogg")
        self.error = error
        self.calls: list[str] = []

    async def fetch(self, url: str) -> RawAudio:
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.audio


class FakeNormalizer(AudioNormalizer):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[RawAudio] = []

    async def normalize(self, audio: RawAudio) -> NormalizedAudio:
        self.calls.append(audio)
        if self.error:
            raise self.error
        return NormalizedAudio(data=b"RIFF" + audio.data)


class FakeTranscriber(TranscriptionService):
    def __init__(self, transcript: str = "hello world", error: Exception | None = None):
        self.transcript = transcript
        self.error = error
        self.calls: list[tuple[NormalizedAudio, str | None, str | None]] = []

    async def transcribe(self, audio, language=None, prompt=None) -> TranscriptionResult:
        self.calls.append((audio, language, prompt))
        if self.error:
            raise self.error
        return TranscriptionResult(transcript=self.transcript)


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def normalizer():
    return FakeNormalizer()


@pytest.fixture
def transcriber():
    return FakeTranscriber()
