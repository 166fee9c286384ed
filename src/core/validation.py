"""
Row validation and conversion into assignment records.
"""

import json
import math
from datetime import date

from core.dates import BadDateError, resolve_date
from models.assignments import (
    AssignmentRecord,
    DecodeFailure,
    DecodeResult,
    Decoded,
    EmployeeId,
    EngineError,
    ErrorKind,
)

REQUIRED_FIELDS = 4  # employee, project, from, to


def coerce_employee_id(raw: str) -> EmployeeId:
    """
    Numeric coercion of an employee id field.

    Empty text is 0, integral numbers (including "7.0" or "1e3") become ints,
    anything else becomes the None sentinel. No further validation is done.
    """
    text = raw.strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        pass
    try:
        value = float(text)
    except ValueError:
        return None
    if math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def decode_row(fields: tuple[str, ...] | list[str], reference_date: date) -> DecodeResult:
    """
    Convert one CSV row into an AssignmentRecord.

    Returns Decoded on success or DecodeFailure carrying a malformed_row,
    BadDate or parse_error EngineError. Never raises for bad row content.
    """
    fields = tuple(fields)
    if len(fields) < REQUIRED_FIELDS:
        return DecodeFailure(
            EngineError(
                message=f"Malformed row: {json.dumps(list(fields), separators=(',', ':'))}",
                kind=ErrorKind.MALFORMED_ROW,
                record=fields,
            )
        )

    employee_raw, project, from_raw, to_raw = fields[:REQUIRED_FIELDS]
    raw_record = (employee_raw, project, from_raw, to_raw)
    prefix = f"Error in record [{employee_raw}, {project}, {from_raw}, {to_raw}]"

    try:
        record = AssignmentRecord(
            employee_id=coerce_employee_id(employee_raw),
            project=project,
            date_from=resolve_date(from_raw, reference_date),
            date_to=resolve_date(to_raw, reference_date),
        )
    except BadDateError as e:
        return DecodeFailure(
            EngineError(f"{prefix}: {e}", ErrorKind.BAD_DATE, raw_record)
        )
    except Exception as e:
        # Any other conversion failure is reported as a parse error
        return DecodeFailure(
            EngineError(f"{prefix}: {e}", ErrorKind.PARSE_ERROR, raw_record)
        )

    return Decoded(record)
