"""
Data models for assignment records, overlap results and engine errors.

Row events and decode results are small dataclasses so the engine loop can
branch on their type instead of catching exceptions.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

# Employee id after numeric coercion. None is the not-a-number sentinel.
EmployeeId = int | None


class ErrorKind(str, Enum):
    """Engine error taxonomy (values are the wire names)."""

    MALFORMED_ROW = "malformed_row"
    BAD_DATE = "BadDate"
    PARSE_ERROR = "parse_error"
    STREAM_ERROR = "stream_error"


@dataclass(frozen=True)
class AssignmentRecord:
    """One employee assigned to one project over a closed date range."""

    employee_id: EmployeeId
    project: str
    date_from: date
    date_to: date


@dataclass
class ProjectOverlap:
    """Overlapping days a pair shares on a single project."""

    project: str
    days: int


@dataclass(frozen=True)
class OverlapContribution:
    """Overlap between two intervals of one project, as found by the sweep."""

    employee_a: EmployeeId
    employee_b: EmployeeId
    days: int
    project: str


@dataclass
class PairResult:
    """Aggregated overlap for one canonical employee pair."""

    emp_a: EmployeeId
    emp_b: EmployeeId
    projects: list[ProjectOverlap] = field(default_factory=list)
    total_days: int = 0


@dataclass(frozen=True)
class EngineError:
    """Recoverable (or terminal, for stream errors) problem seen while reading."""

    message: str
    kind: ErrorKind
    record: tuple[str, ...] | None = None


@dataclass
class EngineResult:
    """Ranked pairs plus every error collected during the run."""

    pairs: list[PairResult] = field(default_factory=list)
    errors: list[EngineError] = field(default_factory=list)

    @property
    def top(self) -> PairResult | None:
        return self.pairs[0] if self.pairs else None


# =============================================================================
# ROW SOURCE EVENTS
# =============================================================================


@dataclass(frozen=True)
class RowRead:
    """A single CSV row, already split and trimmed."""

    fields: tuple[str, ...]


@dataclass(frozen=True)
class EndOfInput:
    """The source finished normally."""


@dataclass(frozen=True)
class TransportFailure:
    """The source itself failed; no further rows will arrive."""

    message: str


RowEvent = RowRead | EndOfInput | TransportFailure


# =============================================================================
# DECODE RESULTS
# =============================================================================


@dataclass(frozen=True)
class Decoded:
    record: AssignmentRecord


@dataclass(frozen=True)
class DecodeFailure:
    error: EngineError


DecodeResult = Decoded | DecodeFailure
