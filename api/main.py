"""FastAPI application factory and main entrypoint."""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

import structlog
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse, Response

from api.config import get_settings
from api.exceptions import BotCheckError
from api.logging import setup_logging
from api.schemas.responses import ErrorDetail, ErrorResponse
from api.sentry import capture_exception, init_sentry

# Initialize logging
setup_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    logger.info(
        "Starting BotCheck API",
        env=settings.env,
        debug=settings.debug,
        version="0.1.0",
    )

    init_sentry()

    yield

    logger.info("Shutting down BotCheck API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="BotCheck",
        description="Scan a website for AI crawler accessibility",
        version="0.1.0",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
    )

    # Middleware (order matters - first added = last executed)
    # CORS must be last (first to process)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.metrics import MetricsMiddleware, get_metrics, get_metrics_content_type
    from api.middleware import LoggingMiddleware, RequestIDMiddleware

    app.add_middleware(MetricsMiddleware)
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    from api.routers import health, v1

    app.include_router(health.router, prefix="/api")
    app.include_router(v1.router, prefix="/v1")

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Prometheus scrape endpoint."""
        return Response(content=get_metrics(), media_type=get_metrics_content_type())

    return app


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> ORJSONResponse:
    """Build the error envelope; `field` is lifted out of details, empty parts are omitted."""
    extra = dict(details or {})
    error = ErrorDetail(
        code=code,
        message=message,
        field=extra.pop("field", None),
        details=extra or None,
    )
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=error).model_dump(exclude_none=True),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers."""

    @app.exception_handler(BotCheckError)
    async def botcheck_error_handler(request: Request, exc: BotCheckError) -> ORJSONResponse:
        """Handle custom BotCheck exceptions."""
        logger.warning(
            "Application error",
            error_code=exc.code,
            message=exc.message,
            path=request.url.path,
        )
        return _error_response(exc.status_code, exc.code, exc.message, exc.details)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        """Malformed request bodies get the same envelope as scanner input errors."""
        errors = exc.errors()
        logger.warning(
            "Validation error",
            path=request.url.path,
            errors=errors,
        )
        return _error_response(
            status.HTTP_400_BAD_REQUEST,
            "invalid_request",
            "Missing required fields: url, mode",
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> ORJSONResponse:
        """Handle unhandled exceptions."""
        logger.error(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
            method=request.method,
        )
        capture_exception(exc)
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "internal_error",
            "An unexpected error occurred",
        )


app = create_app()
