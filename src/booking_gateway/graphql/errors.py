"""
GraphQL error formatting
"""

from collections.abc import Mapping
from typing import Any

from graphql import GraphQLError

STRUCTURED_ERROR_FIELDS = ("id", "code", "description")


def structured_error(error: GraphQLError) -> Mapping[str, Any] | None:
    """Return the ``{id, code, description}`` body a service failed with, if any."""
    detail = getattr(error.original_error, "error", None)
    if isinstance(detail, Mapping) and all(key in detail for key in STRUCTURED_ERROR_FIELDS):
        return detail
    return None


def format_error(error: GraphQLError) -> dict[str, Any]:
    """Format an error for the response envelope.

    Structured downstream errors become ``{message, code, description, path}``
    with the service's ``id`` as message. Everything else keeps the standard
    GraphQL shape (``message``, ``locations``, ``path``).
    """
    data: dict[str, Any] = dict(error.formatted)
    detail = structured_error(error)
    if detail is None:
        return data
    return {
        "message": detail["id"],
        "code": detail["code"],
        "description": detail["description"],
        "path": data.get("path"),
    }
