"""httpx wrapper.

Why a wrapper:
- Standardises timeouts and headers for the few plain HTTPS probes the tool
  makes (the Step Functions API itself goes through boto3).
- Easy to swap for a mocked transport in tests.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings

USER_AGENT = "paw/0.1"


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with safe defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": USER_AGENT,
        "Accept": "application/json, */*;q=0.8",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=False,
        headers=headers,
        transport=transport,
    )


def states_endpoint(settings: AppSettings, region: str | None) -> str | None:
    """HTTPS endpoint serving the Step Functions API for `region`."""

    if settings.endpoint_url:
        return settings.endpoint_url
    if not region:
        return None
    return f"https://states.{region}.amazonaws.com"


async def probe_endpoint(
    url: str,
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> tuple[bool, str]:
    """Check that `url` answers over HTTP(S).

    Any HTTP status counts as reachable; only network errors fail.
    """

    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__
