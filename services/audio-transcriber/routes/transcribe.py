"""Transcription endpoint consumed by ManyChat."""

import asyncio
import contextlib
from typing import Annotated, Awaitable, TypeVar

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from voicenote_common.logging import setup_logging

from config import AppConfig
from dependencies import get_config, get_handler
from domain import TranscriptionRequest
from exceptions import (
    ClientInputError,
    ConfigurationError,
    InferenceError,
    NormalizationError,
    PipelineError,
    TransportError,
)
from handlers import TranscriptionHandler
from response_models import ErrorResponse, FailureResponse, TranscribeResponse

logger = setup_logging()

router = APIRouter(tags=["transcription"])

HandlerDep = Annotated[TranscriptionHandler, Depends(get_handler)]
ConfigDep = Annotated[AppConfig, Depends(get_config)]

ERROR_STATUS_CODES: dict[type[PipelineError], int] = {
    ClientInputError: 400,
    ConfigurationError: 500,
    TransportError: 500,
    NormalizationError: 500,
    InferenceError: 500,
}

# nginx convention for "client closed request"
CLIENT_CLOSED_REQUEST = 499

T = TypeVar("T")


class ClientDisconnectedError(Exception):
    """Raised when the caller goes away before the pipeline finishes."""


def status_for(error: PipelineError) -> int:
    """Looks up the HTTP status for an error, honouring subclassing."""
    for error_type in type(error).__mro__:
        if error_type in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[error_type]
    return 500


async def run_until_disconnect(
    request: Request, work: Awaitable[T], poll_seconds: float
) -> T:
    """
    Awaits ``work`` as a task, cancelling it if the client disconnects.

    Cancellation reaches every in-flight stage: the HTTP download is aborted,
    ffmpeg is killed and scratch files are removed.

    Raises:
        ClientDisconnectedError: If the client disconnected first.
    """
    task = asyncio.ensure_future(work)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=poll_seconds)
            if done:
                return task.result()
            if await request.is_disconnected():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()


@router.post(
    "/transcribe",
    response_model=TranscribeResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": FailureResponse},
    },
)
async def transcribe(
    request: Request,
    handler: HandlerDep,
    config: ConfigDep,
    payload: TranscriptionRequest | None = None,
):
    """
    Downloads, normalizes and transcribes the audio at ``audio_url``.

    The transcript is returned under both ``transcript`` and ``reply`` so it
    can be mapped straight into a chat reply.
    """
    payload = payload or TranscriptionRequest()

    try:
        result = await run_until_disconnect(
            request,
            handler.process(payload),
            config.server.disconnect_poll_seconds,
        )
    except ClientInputError as e:
        logger.info("Rejected transcription request", extra={"reason": e.message})
        return JSONResponse(
            status_code=status_for(e),
            content=ErrorResponse(error=e.message).model_dump(),
        )
    except ClientDisconnectedError:
        logger.warning(
            "Client disconnected, transcription cancelled",
            extra={"audio_url": payload.audio_url},
        )
        return Response(status_code=CLIENT_CLOSED_REQUEST)
    except PipelineError as e:
        logger.exception(
            "Transcription failed",
            extra={"audio_url": payload.audio_url, "error_kind": type(e).__name__},
        )
        return JSONResponse(
            status_code=status_for(e),
            content=FailureResponse(error=e.message).model_dump(),
        )
    except Exception as e:
        logger.exception(
            "Unexpected transcription error", extra={"audio_url": payload.audio_url}
        )
        return JSONResponse(
            status_code=500,
            content=FailureResponse(error=str(e) or type(e).__name__).model_dump(),
        )

    return TranscribeResponse(transcript=result.transcript, reply=result.transcript)
