"""
HTTP client construction for the CGP digital library.

The client is built explicitly and handed to every component that talks to
the platform, so tests can pass a mock transport instead of patching globals.
"""

from __future__ import annotations

from typing import Optional

import httpx


LIBRARY_HOST = "https://library.cgpbooks.co.uk"
CONTENT_BASE_URL = f"{LIBRARY_HOST}/digitalcontent/"
ACCESS_URL_TEMPLATE = LIBRARY_HOST + "/digitalaccess/{book_id}/Online"

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/105.0.0.0 Safari/537.36 OPR/91.0.4516.36"
    ),
}


def create_client(transport: Optional[httpx.AsyncBaseTransport] = None,
                  timeout: float = 30.0) -> httpx.AsyncClient:
    """
    Create the async client used for grant issuance and page assets.

    Args:
        transport: Optional transport override (e.g. httpx.MockTransport)
        timeout: Read timeout in seconds

    Returns:
        An httpx.AsyncClient rooted at the digital content base URL
    """
    return httpx.AsyncClient(
        base_url=CONTENT_BASE_URL,
        headers=DEFAULT_HEADERS,
        timeout=httpx.Timeout(timeout, connect=10.0),
        transport=transport,
    )
