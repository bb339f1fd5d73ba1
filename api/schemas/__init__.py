"""Pydantic schemas for API request/response validation."""

from api.schemas.responses import ErrorDetail, ErrorResponse
from api.schemas.scan import (
    CheckResultResponse,
    CrawlerVerdictResponse,
    InsightResponse,
    RecommendationResponse,
    ScanRequest,
    ScanResponse,
)

__all__ = [
    "CheckResultResponse",
    "CrawlerVerdictResponse",
    "ErrorDetail",
    "ErrorResponse",
    "InsightResponse",
    "RecommendationResponse",
    "ScanRequest",
    "ScanResponse",
]
