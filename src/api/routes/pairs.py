"""CSV upload endpoint for the pairs engine."""

import asyncio
import tempfile
import time
from datetime import date, datetime
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status

from api.logging import RequestLog, log_request
from api.models.responses import ErrorCodes, PairsResponse
from core import config
from models.assignments import EngineResult
from services.pairs import compute_pairs_from_path

router = APIRouter(prefix="/api")


def get_client_ip(request: Request) -> str:
    """Extract client IP from request, handling proxies."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def parse_reference_date(date_str: str | None) -> date | None:
    """Parse reference date string to date object."""
    if not date_str:
        return None
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "Invalid reference_date format, expected YYYY-MM-DD",
                "code": ErrorCodes.INVALID_REQUEST,
            },
        )


def _process_in_thread(file_content: bytes, reference_date: date | None) -> EngineResult:
    """
    Run the engine in the thread pool.

    The upload is spooled to a temp file which is always removed afterwards.
    """
    # Use delete=False and explicit cleanup so the file can be reopened for reading
    tmp = tempfile.NamedTemporaryFile(suffix=".csv", delete=False)
    tmp_path = Path(tmp.name)
    try:
        tmp.write(file_content)
        tmp.flush()
        tmp.close()

        return compute_pairs_from_path(tmp_path, reference_date)
    finally:
        tmp_path.unlink(missing_ok=True)


@router.post("/upload", response_model=PairsResponse)
async def upload_endpoint(
    request: Request,
    file: Annotated[
        UploadFile | None, File(description="CSV of EmpID, ProjectID, DateFrom, DateTo rows")
    ] = None,
    reference_date: Annotated[
        str | None, Form(description="Date substituted for NULL dates (YYYY-MM-DD)")
    ] = None,
):
    """
    Find the pair of employees who worked together the longest.

    Row-level problems do not fail the request: they are returned in
    `errors` next to whatever pairs could be computed.
    """
    start_time = time.time()

    request_log = RequestLog(
        endpoint="/api/upload",
        method="POST",
        client_ip=get_client_ip(request),
        file_name=file.filename if file is not None else None,
        reference_date_override=reference_date,
    )

    try:
        if file is None or not file.filename:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"error": "File missing", "code": ErrorCodes.INVALID_REQUEST},
            )

        file_content = await file.read()
        request_log.file_size_bytes = len(file_content)

        if len(file_content) > config.MAX_UPLOAD_SIZE_BYTES:
            max_mb = config.MAX_UPLOAD_SIZE_BYTES // (1024 * 1024)
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail={
                    "error": f"File exceeds maximum size of {max_mb} MB",
                    "code": ErrorCodes.FILE_TOO_LARGE,
                },
            )

        parsed_date = parse_reference_date(reference_date)

        result = await asyncio.to_thread(_process_in_thread, file_content, parsed_date)

        request_log.status_code = 200
        request_log.pairs_found = len(result.pairs)
        request_log.errors_collected = len(result.errors)
        request_log.engine_errors = list(result.errors)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        return PairsResponse.from_result(result)

    except HTTPException as e:
        request_log.status_code = e.status_code
        if isinstance(e.detail, dict):
            request_log.error_code = e.detail.get("code")
            request_log.error_message = e.detail.get("error")
        else:
            request_log.error_message = str(e.detail)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)
        raise

    except OSError as e:
        # The row source could not be set up (temp file missing or unreadable)
        request_log.status_code = 400
        request_log.error_code = ErrorCodes.SOURCE_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": str(e), "code": ErrorCodes.SOURCE_ERROR},
        )

    except Exception as e:
        request_log.status_code = 500
        request_log.error_code = ErrorCodes.INTERNAL_ERROR
        request_log.error_message = str(e)
        request_log.processing_time_ms = int((time.time() - start_time) * 1000)

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Internal server error", "code": ErrorCodes.INTERNAL_ERROR},
        )

    finally:
        if config.REQUEST_LOG_ENABLED:
            try:
                log_request(request_log)
            except Exception:
                # Don't fail the request if logging fails
                pass
