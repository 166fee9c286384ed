"""API Pydantic models."""

from .responses import (
    EngineErrorModel,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    PairModel,
    PairsResponse,
    ProjectOverlapModel,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "PairModel",
    "PairsResponse",
    "ProjectOverlapModel",
    "EngineErrorModel",
]
