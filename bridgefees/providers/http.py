"""Shared HTTP helpers for provider clients.

All provider traffic goes through get_json so that transport failures are
translated into QuoteError subclasses in one place.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import httpx
import structlog

from bridgefees.errors import ProviderError, UnsupportedRoute

logger = structlog.get_logger()

# Per-call network timeout (seconds)
DEFAULT_TIMEOUT = 30.0


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    provider: str,
    params: Mapping[str, Any] | Sequence[tuple[str, Any]] | None = None,
    headers: Mapping[str, str] | None = None,
    client_errors_are_unsupported: bool = False,
) -> Any:
    """GET url and decode the JSON body.

    Args:
        client: Injected async HTTP client
        url: Absolute URL
        provider: Provider name for error messages
        params: Query parameters
        headers: Extra request headers
        client_errors_are_unsupported: If True, a 4xx response means the
            provider could not compute the route and raises UnsupportedRoute

    Returns:
        Decoded JSON payload

    Raises:
        UnsupportedRoute: On 4xx when client_errors_are_unsupported is set
        ProviderError: On timeouts, transport errors, other HTTP errors and
            bodies that are not JSON
    """
    logger.debug("provider_http_get", provider=provider, url=url)
    try:
        response = await client.get(url, params=params, headers=headers)
        response.raise_for_status()
    except httpx.TimeoutException as err:
        raise ProviderError(f"{provider} request timed out") from err
    except httpx.HTTPStatusError as err:
        status = err.response.status_code
        detail = _error_detail(err.response)
        if client_errors_are_unsupported and 400 <= status < 500:
            raise UnsupportedRoute(f"{provider} rejected route ({status}): {detail}") from err
        raise ProviderError(f"{provider} HTTP {status}: {detail}") from err
    except httpx.HTTPError as err:
        raise ProviderError(f"{provider} transport error: {err}") from err

    try:
        return response.json()
    except ValueError as err:
        raise ProviderError(f"{provider} returned a non-JSON body") from err


def _error_detail(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(payload, dict):
        for key in ("error", "message", "msg"):
            if payload.get(key):
                return str(payload[key])
    return str(payload)[:200]


__all__ = ["DEFAULT_TIMEOUT", "get_json"]
