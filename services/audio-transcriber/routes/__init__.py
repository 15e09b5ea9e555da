from .health import router as health_router
from .transcribe import router as transcribe_router

__all__ = ["health_router", "transcribe_router"]
