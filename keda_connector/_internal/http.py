"""Shared HTTP client configuration."""

import httpx

DEFAULT_TIMEOUT: float | None = None


def create_http_client(
    *,
    timeout: float | None = DEFAULT_TIMEOUT,
    follow_redirects: bool = True,
) -> httpx.Client:
    """Create configured HTTP client.

    Invocation requests carry only the headers supplied by the caller, so the
    client starts with no default headers.

    Args:
        timeout: Request timeout in seconds. None waits indefinitely.
        follow_redirects: Whether to follow redirect responses.

    Returns:
        Configured httpx.Client instance.
    """
    client = httpx.Client(timeout=timeout, follow_redirects=follow_redirects)
    client.headers.clear()
    return client
