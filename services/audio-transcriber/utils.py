import contextlib
import tempfile
import uuid
from pathlib import Path
from typing import AsyncIterator


@contextlib.asynccontextmanager
async def scratch_paths(
    *suffixes: str, directory: Path | None = None
) -> AsyncIterator[tuple[Path, ...]]:
    """
    Yields one fresh, randomly named path per suffix and deletes them on exit.

    The files are not created here; callers write to them. Removal runs on
    every exit path, including errors and task cancellation, and a path that
    was never written (or was already removed) is ignored.
    """
    base = directory or Path(tempfile.gettempdir())
    paths = tuple(base / f"{uuid.uuid4().hex}{suffix}" for suffix in suffixes)
    try:
        yield paths
    finally:
        for path in paths:
            with contextlib.suppress(OSError):
                path.unlink()
