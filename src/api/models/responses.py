"""Pydantic response models for API endpoints."""

from pydantic import BaseModel

from models.assignments import EngineError, EngineResult, PairResult


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy"
    version: str
    timestamp: str  # ISO 8601 UTC


class ErrorResponse(BaseModel):
    """Error response for failed requests."""

    error: str


class ProjectOverlapModel(BaseModel):
    project: str
    days: int


class PairModel(BaseModel):
    empA: int | None
    empB: int | None
    projects: list[ProjectOverlapModel]
    totalDays: int

    @classmethod
    def from_pair(cls, pair: PairResult) -> "PairModel":
        return cls(
            empA=pair.emp_a,
            empB=pair.emp_b,
            projects=[
                ProjectOverlapModel(project=p.project, days=p.days)
                for p in pair.projects
            ],
            totalDays=pair.total_days,
        )


class EngineErrorModel(BaseModel):
    message: str
    type: str  # malformed_row, BadDate, parse_error, stream_error
    record: list[str] | None = None

    @classmethod
    def from_error(cls, error: EngineError) -> "EngineErrorModel":
        return cls(
            message=error.message,
            type=error.kind.value,
            record=list(error.record) if error.record is not None else None,
        )


class PairsResponse(BaseModel):
    """Ranked employee pairs, the top pair and any row errors."""

    pairs: list[PairModel]
    top: PairModel | None = None
    errors: list[EngineErrorModel] = []

    @classmethod
    def from_result(cls, result: EngineResult) -> "PairsResponse":
        pairs = [PairModel.from_pair(pair) for pair in result.pairs]
        return cls(
            pairs=pairs,
            top=pairs[0] if pairs else None,
            errors=[EngineErrorModel.from_error(error) for error in result.errors],
        )


class ErrorCodes:
    """Error code constants (request log only)."""

    INVALID_REQUEST = "INVALID_REQUEST"
    FILE_TOO_LARGE = "FILE_TOO_LARGE"
    SOURCE_ERROR = "SOURCE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"
