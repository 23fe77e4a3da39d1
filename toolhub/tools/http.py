from __future__ import annotations

from typing import Any

import httpx

from toolhub.core.errors import UpstreamError


async def fetch_json(
    url: str,
    *,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    timeout: float = 30.0,
) -> Any:
    """GET *url* and return the decoded JSON body.

    Raises UpstreamError on network failures, non-success statuses and
    bodies that are not JSON.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            response = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as exc:
        raise UpstreamError(f"Request failed: {exc}") from exc

    if response.status_code >= 400:
        raise UpstreamError(
            f"API request failed: {response.status_code} {response.reason_phrase}".rstrip()
        )
    try:
        return response.json()
    except ValueError as exc:
        raise UpstreamError("Upstream returned a malformed JSON body") from exc
