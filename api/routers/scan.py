"""Scan endpoint."""

from fastapi import APIRouter
from fastapi.responses import ORJSONResponse

from api.exceptions import ScanFailedError
from api.metrics import record_scan_completed, record_scan_failed
from api.schemas.responses import ErrorResponse
from api.schemas.scan import ScanRequest, ScanResponse
from api.sentry import capture_exception, set_context
from scanner.tasks.scan import run_scan

router = APIRouter(tags=["Scan"])


@router.post(
    "/scan",
    response_model=ScanResponse,
    response_model_by_alias=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def scan(request: ScanRequest) -> ORJSONResponse:
    """
    Scan a URL and score its AI crawler accessibility.

    Network problems are part of the result, not errors: an unreachable
    site still returns 200 with a low (allow) or high (block) score.
    """
    try:
        result = await run_scan(request.url, request.mode)
    except ScanFailedError as e:
        record_scan_failed(request.mode or "unknown")
        set_context("scan", {"url": request.url, "mode": request.mode})
        capture_exception(e.__cause__ or e)
        raise

    record_scan_completed(result.mode.value, result.score)
    return ORJSONResponse(content=result.to_dict())
