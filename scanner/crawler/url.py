"""Scan input normalization."""

from dataclasses import dataclass
from urllib.parse import urlparse

from api.exceptions import InvalidRequestError
from scanner.checks.models import Intent


@dataclass(frozen=True)
class ScanTarget:
    """A validated scan request."""

    url: str
    intent: Intent
    base_url: str  # scheme://host[:port]

    @property
    def robots_txt_url(self) -> str:
        return f"{self.base_url}/robots.txt"


def normalize_url(url: str) -> str:
    """Strip whitespace and default to https when no scheme is given."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = f"https://{url}"
    return url


def get_base_url(url: str) -> str:
    """Get the origin (scheme://host[:port]) of a URL."""
    parsed = urlparse(url)
    return f"{parsed.scheme}://{parsed.netloc}"


def normalize_scan_input(url: str | None, mode: str | None) -> ScanTarget:
    """
    Validate and canonicalize a raw url/mode pair.

    Args:
        url: URL as typed by the user, scheme optional
        mode: "block" or "allow"

    Returns:
        ScanTarget with the normalized URL and its origin

    Raises:
        InvalidRequestError: If either field is missing, the mode is unknown,
            or the URL has no host
    """
    if not url or not url.strip() or not mode:
        raise InvalidRequestError("Missing required fields: url, mode")

    if mode not in (Intent.BLOCK.value, Intent.ALLOW.value):
        raise InvalidRequestError('Mode must be "block" or "allow"', field="mode")

    normalized = normalize_url(url)
    try:
        parsed = urlparse(normalized)
        # Accessing .port validates it
        _ = parsed.port
    except ValueError as e:
        raise InvalidRequestError(f"Invalid URL: {e}", field="url") from e

    if not parsed.hostname:
        raise InvalidRequestError("Invalid URL", field="url")

    return ScanTarget(
        url=normalized,
        intent=Intent(mode),
        base_url=get_base_url(normalized),
    )
