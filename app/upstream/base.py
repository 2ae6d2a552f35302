"""
Shared HTTP plumbing for the partner leaderboard APIs.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from app.utils.helpers import redact_params

# Set up logger for this module
logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """
    A partner API call failed.

    status_code is set only when the partner answered with a non-2xx
    response. A 2xx reply with an unreadable body carries the body but no
    status; transport failures (DNS, connect, timeout) carry neither.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


async def get_json(
    platform: str,
    url: str,
    params: Dict[str, Any],
    entries_key: str,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = 10.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Any:
    """
    Perform a single GET against a partner API. No retries.

    Args:
        platform: Platform label used in log lines
        url: Endpoint URL
        params: Query parameters
        entries_key: Field holding the result list, used only for logging
        headers: Extra request headers
        timeout: Request timeout in seconds
        transport: Optional httpx transport (tests inject a MockTransport)

    Returns:
        Parsed JSON body

    Raises:
        UpstreamError: on non-2xx status, transport failure, or a non-JSON body
    """
    log_url = httpx.URL(url, params=redact_params(params))
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            r = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"[{platform} API] Request to {log_url} failed: {e!r}")
        raise UpstreamError(f"{platform} request failed: {e}") from e

    logger.info(f"[{platform} API] Called: {log_url}")
    logger.info(f"[{platform} API] Status: {r.status_code} {r.reason_phrase}")

    if not r.is_success:
        raise UpstreamError(
            f"{platform} fetch failed: {r.status_code} {r.text}",
            status_code=r.status_code,
            body=r.text,
        )

    try:
        result = r.json()
    except ValueError as e:
        raise UpstreamError(f"{platform} returned a non-JSON body", body=r.text) from e

    entries = result.get(entries_key) if isinstance(result, dict) else None
    if isinstance(entries, list):
        logger.info(f"[{platform} API] Received {len(entries)} results.")
    else:
        logger.warning(f"[{platform} API] Unexpected response: {result!r}")

    return result
