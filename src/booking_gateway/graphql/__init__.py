"""GraphQL schema composed from the downstream REST services."""

from .errors import format_error
from .schema import build_executable_schema, create_schema, merge_resolvers, merge_schemas

__all__ = [
    "build_executable_schema",
    "create_schema",
    "format_error",
    "merge_resolvers",
    "merge_schemas",
]
