"""
Custom scalar implementations bound onto the composed schema
"""

from typing import Any

from graphql import GraphQLScalarType, ValueNode
from graphql.utilities import value_from_ast_untyped


def _identity(value: Any) -> Any:
    return value


def _parse_json_literal(value_node: ValueNode, variables: dict[str, Any] | None = None) -> Any:
    return value_from_ast_untyped(value_node, variables)


JSONScalar = GraphQLScalarType(
    name="JSON",
    description="Arbitrary JSON value, passed through untouched.",
    serialize=_identity,
    parse_value=_identity,
    parse_literal=_parse_json_literal,
)

SCALARS: dict[str, GraphQLScalarType] = {"JSON": JSONScalar}
