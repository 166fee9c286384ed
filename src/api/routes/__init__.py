"""API route modules."""

from .health import router as health_router
from .pairs import router as pairs_router

__all__ = ["health_router", "pairs_router"]
