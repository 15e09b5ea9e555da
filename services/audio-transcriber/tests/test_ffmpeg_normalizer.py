import asyncio
from pathlib import Path

import pytest

from config import FfmpegConfig
from domain import RawAudio
from exceptions import NormalizationError
from infrastructure import FfmpegAudioNormalizer

WAV_BYTES = b"RIFF\x24\x00\x00\x00WAVEfmt "


class FakeProcess:
    def __init__(self, returncode: int = 0, stderr: bytes = b"", hang: bool = False):
        self.pid = 4242
        self.returncode = None
        self.killed = False
        self._final_returncode = returncode
        self._stderr = stderr
        self._hang = hang

    async def communicate(self):
        if self._hang:
            await asyncio.Event().wait()
        self.returncode = self._final_returncode
        return b"", self._stderr

    def kill(self):
        self.killed = True
        self.returncode = -9

    async def wait(self):
        return self.returncode


class FakeFfmpeg:
    """Stands in for asyncio.create_subprocess_exec."""

    def __init__(self, process: FakeProcess, output: bytes | None = WAV_BYTES):
        self.process = process
        self.output = output
        self.args: tuple[str, ...] = ()
        self.input_bytes: bytes | None = None
        self.started = asyncio.Event()

    async def __call__(self, *args, **kwargs):
        self.args = args
        input_path = Path(args[args.index("-i") + 1])
        self.input_bytes = input_path.read_bytes()
        if self.output is not None:
            Path(args[-1]).write_bytes(self.output)
        self.started.set()
        return self.process


@pytest.fixture
def scratch_dir(tmp_path):
    directory = tmp_path / "scratch"
    directory.mkdir()
    return directory


@pytest.fixture
def normalizer(scratch_dir):
    return FfmpegAudioNormalizer(FfmpegConfig(binary_path="/opt/ffmpeg", scratch_dir=scratch_dir))


def install(monkeypatch, fake):
    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake)
    return fake


@pytest.mark.asyncio
async def test_normalize_returns_wav_and_removes_scratch_files(monkeypatch, normalizer, scratch_dir):
    fake = install(monkeypatch, FakeFfmpeg(FakeProcess(returncode=0)))

    result = await normalizer.normalize(RawAudio(data=b"OggS-data", content_type="audio/ogg"))

    assert result.data == WAV_BYTES
    assert result.mime_type == "audio/wav"
    assert fake.input_bytes == b"OggS-data"
    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_normalize_invokes_ffmpeg_with_canonical_format(monkeypatch, normalizer):
    fake = install(monkeypatch, FakeFfmpeg(FakeProcess(returncode=0)))

    await normalizer.normalize(RawAudio(data=b"data", content_type="audio/ogg"))

    args = list(fake.args)
    assert args[0] == "/opt/ffmpeg"
    assert args[args.index("-ac") + 1] == "1"
    assert args[args.index("-ar") + 1] == "16000"
    assert args[args.index("-f") + 1] == "wav"
    assert args[-1].endswith(".wav")


@pytest.mark.asyncio
async def test_normalize_failure_carries_stderr_and_cleans_up(monkeypatch, normalizer, scratch_dir):
    install(
        monkeypatch,
        FakeFfmpeg(
            FakeProcess(returncode=1, stderr=b"in.oga: Invalid data found when processing input\n"),
            output=None,
        ),
    )

    with pytest.raises(NormalizationError, match="Invalid data found") as exc_info:
        await normalizer.normalize(RawAudio(data=b"garbage", content_type="audio/ogg"))

    assert "Invalid data found" in exc_info.value.detail
    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_normalize_failure_without_stderr_reports_exit_status(monkeypatch, normalizer):
    install(monkeypatch, FakeFfmpeg(FakeProcess(returncode=69), output=None))

    with pytest.raises(NormalizationError, match="status 69"):
        await normalizer.normalize(RawAudio(data=b"garbage", content_type="audio/ogg"))


@pytest.mark.asyncio
async def test_normalize_missing_binary_raises_normalization_error(monkeypatch, normalizer, scratch_dir):
    async def missing_binary(*args, **kwargs):
        raise FileNotFoundError(args[0])

    install(monkeypatch, missing_binary)

    with pytest.raises(NormalizationError, match="ffmpeg not found"):
        await normalizer.normalize(RawAudio(data=b"data", content_type="audio/ogg"))

    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_normalize_empty_output_is_an_error(monkeypatch, normalizer, scratch_dir):
    install(monkeypatch, FakeFfmpeg(FakeProcess(returncode=0), output=b""))

    with pytest.raises(NormalizationError, match="no output"):
        await normalizer.normalize(RawAudio(data=b"data", content_type="audio/ogg"))

    assert list(scratch_dir.iterdir()) == []


@pytest.mark.asyncio
async def test_normalize_cancellation_kills_ffmpeg_and_cleans_up(monkeypatch, normalizer, scratch_dir):
    process = FakeProcess(hang=True)
    fake = install(monkeypatch, FakeFfmpeg(process))

    task = asyncio.create_task(normalizer.normalize(RawAudio(data=b"data", content_type="audio/ogg")))
    await fake.started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task

    assert process.killed
    assert list(scratch_dir.iterdir()) == []
