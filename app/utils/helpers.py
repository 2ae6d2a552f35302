"""
Utility functions for the API.
"""
import logging
import re
from typing import Any, Dict

# Set up logging
logger = logging.getLogger(__name__)

_SECRET_PARAMS = ("key",)


def mask_username(username: Any) -> Any:
    """
    Obscure a username for public display.

    Args:
        username: Raw username from the upstream platform

    Returns:
        First 2 characters + '***' + last 2 characters. Non-string values
        and names of 4 characters or fewer are returned unchanged.
    """
    if not isinstance(username, str):
        return username
    if len(username) <= 4:
        return username
    return username[:2] + "***" + username[-2:]


def redact_params(params: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of query params safe to log."""
    return {k: ("***" if k in _SECRET_PARAMS else v) for k, v in params.items()}


# Leading decimal prefix, the same forms a JSON front-end parser accepts
_NUMERIC_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number_prefix(value: str):
    """
    Parse the leading numeric part of a string.

    Returns:
        The parsed float, or None when the string does not start with a number
    """
    match = _NUMERIC_PREFIX.match(value)
    if not match:
        return None
    return float(match.group(0))
