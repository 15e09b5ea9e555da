"""
Audio Transcriber Service.

FastAPI application that turns a voice note URL into a transcript:
- Downloading the audio (with WhatsApp Cloud API bearer auth when needed).
- Normalizing it to mono 16 kHz WAV with ffmpeg.
- Transcribing it with Gemini.
- Distributed tracing with Datadog.
- Structured JSON logging.
"""

import uvicorn
from ddtrace import patch_all
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from voicenote_common.logging import setup_logging

from dependencies import get_config
from middleware import BodySizeLimitMiddleware
from response_models import ErrorResponse
from routes import health_router, transcribe_router

patch_all()
logger = setup_logging()

app = FastAPI(title="Audio Transcriber Service")
app.add_middleware(
    BodySizeLimitMiddleware, max_body_bytes=get_config().server.max_body_bytes
)
app.include_router(transcribe_router)
app.include_router(health_router)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Renders malformed request bodies as a 400 error envelope."""
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=f"Invalid request body: {details}").model_dump(),
    )


def main():
    """Starts the HTTP server."""
    port = get_config().server.port
    logger.info("Starting audio-transcriber service", extra={"port": port})
    uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)


if __name__ == "__main__":
    main()
