"""Sentry error tracking integration."""

from __future__ import annotations

import structlog

from api.config import get_settings

logger = structlog.get_logger(__name__)

# Flag to track if Sentry is initialized
_sentry_initialized = False


def init_sentry() -> bool:
    """Initialize Sentry SDK if configured.

    Returns True if Sentry was initialized, False otherwise.
    """
    global _sentry_initialized

    settings = get_settings()

    if not settings.sentry_dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return False

    if _sentry_initialized:
        return True

    import sentry_sdk
    from sentry_sdk.integrations.asyncio import AsyncioIntegration
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.httpx import HttpxIntegration
    from sentry_sdk.integrations.starlette import StarletteIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        release="botcheck@0.1.0",
        sample_rate=1.0,
        traces_sample_rate=0.1 if settings.is_production else 1.0,
        send_default_pii=False,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            StarletteIntegration(transaction_style="endpoint"),
            HttpxIntegration(),
            AsyncioIntegration(),
        ],
        before_send=_before_send,
        before_send_transaction=_before_send_transaction,
    )

    _sentry_initialized = True
    logger.info("Sentry initialized", environment=settings.env)
    return True


def _before_send(event: dict, hint: dict) -> dict | None:
    """Drop client errors and scrub credentials before sending."""
    if "exc_info" in hint:
        _, exc_value, _ = hint["exc_info"]

        from fastapi import HTTPException

        from api.exceptions import BotCheckError

        if isinstance(exc_value, HTTPException) and 400 <= exc_value.status_code < 500:
            return None
        if isinstance(exc_value, BotCheckError) and 400 <= exc_value.status_code < 500:
            return None

    # Scrub credentials a caller may have sent
    headers = event.get("request", {}).get("headers")
    if headers:
        for header in ("authorization", "cookie", "x-api-key"):
            if header in headers:
                headers[header] = "[Filtered]"

    return event


def _before_send_transaction(event: dict, hint: dict) -> dict | None:  # noqa: ARG001
    """Filter out health check and metrics transactions."""
    if event.get("transaction") in ["/api/health", "/api/ready", "/metrics"]:
        return None
    return event


def set_context(name: str, data: dict) -> None:
    """Set additional context for Sentry events."""
    if not _sentry_initialized:
        return

    import sentry_sdk

    sentry_sdk.set_context(name, data)


def capture_exception(exception: BaseException) -> str | None:
    """Capture an exception and send to Sentry.

    Returns the event ID if captured, None otherwise.
    """
    if not _sentry_initialized:
        return None

    import sentry_sdk

    event_id: str | None = sentry_sdk.capture_exception(exception)
    return event_id
