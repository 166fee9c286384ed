"""
Pairs engine: finds the employees who worked together the longest.

Reads assignment rows (employee, project, from, to), collects per-row errors
without stopping, sweeps each project for overlapping intervals and ranks
employee pairs by their total shared days across all projects.
"""

from collections.abc import Iterable
from datetime import date
from enum import Enum
from pathlib import Path
from typing import TextIO

from core.validation import decode_row
from models.assignments import (
    Decoded,
    EndOfInput,
    EngineError,
    EngineResult,
    ErrorKind,
    RowEvent,
    RowRead,
    TransportFailure,
)
from services.csv_source import events_from_rows, iter_csv_rows
from services.overlaps import ProjectGrouper, aggregate_pairs, sweep_project


class EngineState(Enum):
    READING = "reading"
    AGGREGATING = "aggregating"
    ABORTED = "aborted"


def _next_event(source) -> RowEvent:
    try:
        return next(source, EndOfInput())
    except Exception as e:
        # A source that raises instead of reporting failure is still a transport failure
        return TransportFailure(str(e))


def _close(source) -> None:
    close = getattr(source, "close", None)
    if close is not None:
        close()


def compute_pairs(events: Iterable[RowEvent], reference_date: date | None = None) -> EngineResult:
    """
    Run the engine over a sequence of row events.

    Args:
        events: RowRead events terminated by EndOfInput or TransportFailure
        reference_date: Date used for NULL/empty date tokens (defaults to today)

    Returns:
        EngineResult. Never raises for bad input: row problems are collected
        as errors, and a transport failure yields empty pairs plus a
        stream_error.
    """
    if reference_date is None:
        reference_date = date.today()

    grouper = ProjectGrouper()
    errors: list[EngineError] = []
    source = iter(events)
    state = EngineState.READING

    while state is EngineState.READING:
        event = _next_event(source)

        if isinstance(event, RowRead):
            outcome = decode_row(event.fields, reference_date)
            if isinstance(outcome, Decoded):
                grouper.add(outcome.record)
            else:
                errors.append(outcome.error)
        elif isinstance(event, TransportFailure):
            errors.append(
                EngineError(
                    message=f"Stream error: {event.message}",
                    kind=ErrorKind.STREAM_ERROR,
                    record=None,
                )
            )
            state = EngineState.ABORTED
        else:
            state = EngineState.AGGREGATING

    # Terminal state reached: the source is not read again
    _close(source)

    if state is EngineState.ABORTED or len(grouper) == 0:
        return EngineResult(pairs=[], errors=errors)

    contributions = []
    for project, records in grouper.items():
        contributions.extend(sweep_project(project, records))

    return EngineResult(pairs=aggregate_pairs(contributions), errors=errors)


def compute_pairs_from_rows(
    rows: Iterable[Iterable[str]], reference_date: date | None = None
) -> EngineResult:
    """Run the engine over already-split rows (lists of field strings)."""
    return compute_pairs(events_from_rows(rows), reference_date)


def compute_pairs_from_stream(stream: TextIO, reference_date: date | None = None) -> EngineResult:
    """Run the engine over an open CSV text stream."""
    return compute_pairs(iter_csv_rows(stream), reference_date)


def compute_pairs_from_path(input_file: Path, reference_date: date | None = None) -> EngineResult:
    """
    Run the engine over a CSV file.

    Raises:
        FileNotFoundError: if input_file does not exist
        OSError: if the file cannot be opened
    """
    if not input_file.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    with open(input_file, encoding="utf-8-sig", newline="") as stream:
        return compute_pairs_from_stream(stream, reference_date)


def flatten_pairs(result: EngineResult) -> list[dict]:
    """
    Per-project rows for tabular display.

    One row per (pair, project), in pair rank order then project order.
    """
    return [
        {
            "empA": pair.emp_a,
            "empB": pair.emp_b,
            "project": overlap.project,
            "days": overlap.days,
        }
        for pair in result.pairs
        for overlap in pair.projects
    ]
