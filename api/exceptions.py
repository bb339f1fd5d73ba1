"""Custom exceptions and error handling."""

from typing import Any

from fastapi import status


class BotCheckError(Exception):
    """Base exception for the BotCheck application."""

    def __init__(
        self,
        message: str,
        code: str = "error",
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidRequestError(BotCheckError):
    """Scan request rejected before any network activity."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="invalid_request",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details,
        )


class ScanFailedError(BotCheckError):
    """Unexpected failure inside the scan pipeline.

    Retrieval problems never end up here, they are scored as data.
    """

    def __init__(self, message: str = "An unexpected error occurred", url: str | None = None):
        details = {"url": url} if url else {}
        super().__init__(
            message=message,
            code="scan_failed",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            details=details,
        )
