"""
HTTP helpers shared by the HTTP-backed tools.

Tools never raise on ordinary upstream failures: every failure becomes
an "Error: ..." string the model can read and explain to the user.

Dependencies: httpx
System role: In-band error reporting for tool adapters
"""

import json
import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def status_error(response: httpx.Response) -> str:
    """Format a non-success response the way every tool reports it."""
    return f"Error: {response.status_code} - {response.reason_phrase}"


async def get_text(
    client: httpx.AsyncClient,
    url: str,
    failure_label: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> str:
    """
    GET a URL and return the body text, or an error string.

    Args:
        client: Shared async HTTP client
        url: Absolute URL
        failure_label: Phrase used for transport failures ("getting current weather")
        params: Query parameters
        headers: Extra request headers (credentials stay in the caller's closure)

    Returns:
        str: Response body on 2xx, "Error: <status> - <reason>" otherwise
    """
    try:
        response = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as e:
        logger.warning(f"{__name__}:get_text - {failure_label} failed: {type(e).__name__}: {e}")
        return f"Error {failure_label}: {e}"

    if response.is_success:
        return response.text
    logger.warning(
        f"{__name__}:get_text - {failure_label} returned {response.status_code}",
        extra={"url": str(response.request.url.copy_with(query=None))},
    )
    return status_error(response)


def to_json(value: Any) -> str:
    """Serialize a tool result with the indentation the model sees elsewhere."""
    return json.dumps(value, indent=2, ensure_ascii=False)
