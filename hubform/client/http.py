"""Shared httpx client construction."""

import httpx

from hubform import __version__

HUBSPOT_API_BASE = "https://api.hubapi.com"
HUBSPOT_FORMS_BASE = "https://api.hsforms.com"

# httpx's own default
DEFAULT_TIMEOUT = 5.0


def create_http_client(
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the AsyncClient used for all upstream calls.

    Args:
        timeout: Per-request timeout in seconds (default: httpx default).
        transport: Optional transport override (tests pass httpx.MockTransport).

    Returns:
        A new httpx.AsyncClient. The caller owns it and must close it.
    """
    return httpx.AsyncClient(
        timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        transport=transport,
        headers={"User-Agent": f"hubform/{__version__}"},
    )
