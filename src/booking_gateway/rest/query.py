"""
Query-string building for downstream GET requests
"""

from collections.abc import Mapping
from typing import Any


def _format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def add_params(url: str, parameters: Mapping[str, Any] | None) -> str:
    """Add query parameters to a URL.

    Only truthy values are included, so ``""``, ``0``, ``None``, ``False`` and
    empty lists are dropped (an ``id=0`` filter is dropped too; services rely
    on that). List values expand into repeated ``key=value`` pairs. Values are
    not escaped here; the client encodes the whole URL before sending.

    Args:
        url: Base URL without a query string
        parameters: Key values to add to the URL

    Returns:
        The URL with the parameters added, or ``url`` unchanged if none apply
    """
    pairs: list[str] = []
    for key, value in (parameters or {}).items():
        if not value:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend(f"{key}={_format_value(item)}" for item in value)
        else:
            pairs.append(f"{key}={_format_value(value)}")

    if not pairs:
        return url
    return f"{url}?{'&'.join(pairs)}"
