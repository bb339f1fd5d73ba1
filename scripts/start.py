"""Production startup script for the BotCheck API.

Host, port and worker count come from Settings (API_HOST, API_PORT,
API_WORKERS); a platform-provided PORT takes precedence.
"""

import os

import uvicorn

from api.config import get_settings


def main() -> None:
    """Run the API under uvicorn."""
    settings = get_settings()
    port = int(os.getenv("PORT", settings.api_port))

    print(f"Starting BotCheck API on {settings.api_host}:{port} with {settings.api_workers} worker(s)...")

    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=port,
        workers=settings.api_workers,
        log_level=settings.log_level.lower(),
        proxy_headers=True,
        forwarded_allow_ips="*",
    )


if __name__ == "__main__":
    main()
