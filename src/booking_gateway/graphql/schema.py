"""
Schema composition: merges every domain into one executable GraphQL schema
"""

from collections.abc import Iterable, Mapping, Sequence

from graphql import (
    GraphQLError,
    GraphQLObjectType,
    GraphQLScalarType,
    GraphQLSchema,
    build_schema,
    get_introspection_query,
    graphql_sync,
)
from graphql import validate_schema as gql_validate_schema

from ..config import ServiceEndpoint
from ..errors import SchemaConfigurationError
from ..logging import get_logger
from .domain import ResolverMap, RestDomain
from .domains import build_domains
from .scalars import SCALARS

logger = get_logger(__name__)

ROOT_TYPES = ("Query", "Mutation")
SCALAR_DEFS = ["scalar JSON"]


def merge_schemas(
    type_defs: Sequence[str], queries: Sequence[str], mutations: Sequence[str]
) -> str:
    """Merge the schema fragments under a single Query and Mutation root.

    Args:
        type_defs: Type definition fragments
        queries: Root query field fragments
        mutations: Root mutation field fragments

    Returns:
        The SDL document; the same fragments always give the same text
    """

    def join(fragments: Sequence[str]) -> str:
        return "\n".join(fragment.strip("\n") for fragment in fragments if fragment.strip())

    return (
        f"{join(type_defs)}\n"
        f"type Query {{\n{join(queries)}\n}}\n"
        f"type Mutation {{\n{join(mutations)}\n}}\n"
    )


def merge_resolvers(*resolver_maps: ResolverMap) -> ResolverMap:
    """Merge resolver maps keyed by root type.

    Raises:
        SchemaConfigurationError: If two maps resolve the same root field
    """
    merged: ResolverMap = {}
    for resolver_map in resolver_maps:
        for root_name, fields in resolver_map.items():
            target = merged.setdefault(root_name, {})
            for field_name, resolver in fields.items():
                if field_name in target:
                    raise SchemaConfigurationError(
                        f"Field '{root_name}.{field_name}' is resolved more than once"
                    )
                target[field_name] = resolver
    return merged


def compose_domains(domains: Iterable[RestDomain]) -> tuple[str, ResolverMap]:
    """Compose the SDL document and merged resolver map of the given domains."""
    domains = list(domains)
    sdl = merge_schemas(
        [*SCALAR_DEFS, *(domain.type_defs for domain in domains)],
        [domain.query_defs for domain in domains],
        [domain.mutation_defs for domain in domains],
    )
    resolvers = merge_resolvers(*(domain.resolvers() for domain in domains))
    return sdl, resolvers


def _bind_scalars(schema: GraphQLSchema, scalars: Mapping[str, GraphQLScalarType]) -> None:
    for name, implementation in scalars.items():
        scalar = schema.type_map.get(name)
        if scalar is None:
            continue
        if not isinstance(scalar, GraphQLScalarType):
            raise SchemaConfigurationError(f"'{name}' is declared but is not a scalar")
        scalar.serialize = implementation.serialize  # type: ignore[method-assign]
        scalar.parse_value = implementation.parse_value  # type: ignore[method-assign]
        scalar.parse_literal = implementation.parse_literal  # type: ignore[method-assign]
        scalar.description = scalar.description or implementation.description


def _bind_resolvers(schema: GraphQLSchema, resolvers: ResolverMap) -> None:
    for root_name, fields in resolvers.items():
        root = schema.type_map.get(root_name)
        if not isinstance(root, GraphQLObjectType):
            raise SchemaConfigurationError(f"Resolvers given for unknown type '{root_name}'")
        for field_name, resolver in fields.items():
            field = root.fields.get(field_name)
            if field is None:
                raise SchemaConfigurationError(
                    f"Resolver '{root_name}.{field_name}' has no field in the schema"
                )
            field.resolve = resolver

    for root_name in ROOT_TYPES:
        root = schema.type_map.get(root_name)
        if not isinstance(root, GraphQLObjectType):
            continue
        bound = resolvers.get(root_name, {})
        missing = sorted(name for name in root.fields if name not in bound)
        if missing:
            raise SchemaConfigurationError(
                f"No resolver for {root_name} fields: {', '.join(missing)}"
            )


def build_executable_schema(
    sdl: str,
    resolvers: ResolverMap,
    scalars: Mapping[str, GraphQLScalarType] | None = None,
) -> GraphQLSchema:
    """Build the schema from SDL and bind every root resolver and scalar.

    Raises:
        SchemaConfigurationError: If the SDL is invalid (duplicate fields
            included) or resolvers and declared root fields do not match
    """
    try:
        schema = build_schema(sdl)
    except (GraphQLError, TypeError) as e:
        raise SchemaConfigurationError(f"Invalid schema definition: {e}") from e

    _bind_scalars(schema, scalars or {})
    _bind_resolvers(schema, resolvers)
    return schema


def create_schema(endpoints: Mapping[str, ServiceEndpoint]) -> GraphQLSchema:
    """Build the gateway schema from every configured domain."""
    sdl, resolvers = compose_domains(build_domains(endpoints))
    schema = build_executable_schema(sdl, resolvers, SCALARS)
    logger.info(
        "GraphQL schema composed",
        queries=len(resolvers.get("Query", {})),
        mutations=len(resolvers.get("Mutation", {})),
    )
    return schema


def validate_schema(schema: GraphQLSchema) -> None:
    """Validate the GraphQL schema at startup.

    Runs graphql-core's schema validation plus an introspection query so a
    broken schema stops the server before it accepts traffic.

    Raises:
        SchemaConfigurationError: If the schema is invalid
    """
    errors = gql_validate_schema(schema)
    if errors:
        error_messages = [str(e) for e in errors]
        logger.error("GraphQL schema validation failed", errors=error_messages)
        raise SchemaConfigurationError(
            f"GraphQL schema validation failed: {'; '.join(error_messages)}"
        )

    result = graphql_sync(schema, get_introspection_query())
    if result.errors:
        error_messages = [str(e) for e in result.errors]
        logger.error("GraphQL introspection failed", errors=error_messages)
        raise SchemaConfigurationError(
            f"GraphQL introspection failed: {'; '.join(error_messages)}"
        )

    logger.info("GraphQL schema validation successful")
