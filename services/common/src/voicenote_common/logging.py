import logging
import os
import sys

from pythonjsonlogger import jsonlogger

_UVICORN_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")
_configured_handler: logging.Handler | None = None


def setup_logging(level: str | None = None) -> logging.Logger:
    """
    Configures structured JSON logging and returns the root logger.

    Every record carries timestamp, level, logger name, message and the
    Datadog trace_id/span_id injected by ddtrace. The root logger and the
    Uvicorn loggers share one stdout handler so request logs and pipeline
    logs end up in the same stream.

    The handler is installed once per process; later calls only return the
    root logger, so modules can call this at import time.

    Args:
        level: Log level name. Defaults to the LOG_LEVEL environment
            variable, then INFO.

    Returns:
        logging.Logger: The configured root logger instance.
    """
    global _configured_handler

    root_logger = logging.getLogger()
    if _configured_handler is not None:
        return root_logger

    resolved_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s %(trace_id)s %(span_id)s"
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger.setLevel(resolved_level)
    root_logger.handlers = [handler]

    for logger_name in _UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(logger_name)
        uvicorn_logger.setLevel(resolved_level)
        uvicorn_logger.handlers = [handler]
        uvicorn_logger.propagate = False

    _configured_handler = handler
    return root_logger
