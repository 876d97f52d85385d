"""
REST-backed GraphQL domains

A domain is a small declarative record: the SDL types it owns and the root
operations it exposes, each operation mapped onto exactly one REST call
against the domain's service endpoint. ``RestDomain`` renders the SDL
fragments and the resolver map from that record.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from graphql import GraphQLError, GraphQLResolveInfo

from ..config import ServiceEndpoint
from ..errors import SchemaConfigurationError
from ..logging import get_logger
from ..rest.client import Method
from ..rest.query import add_params

logger = get_logger(__name__)

Resolver = Callable[..., Awaitable[Any]]
ResolverMap = dict[str, dict[str, Resolver]]

INDENT = "    "


@dataclass(frozen=True)
class TypeSpec:
    """An SDL object or input type."""

    name: str
    fields: tuple[tuple[str, str], ...]
    kind: Literal["type", "input"] = "type"

    def sdl(self) -> str:
        body = "\n".join(f"{INDENT}{name}: {type_}" for name, type_ in self.fields)
        return f"{self.kind} {self.name} {{\n{body}\n}}"


def object_type(name: str, fields: Mapping[str, str]) -> TypeSpec:
    return TypeSpec(name, tuple(fields.items()))


def input_type(name: str, fields: Mapping[str, str]) -> TypeSpec:
    return TypeSpec(name, tuple(fields.items()), kind="input")


def entity_types(
    name: str, fields: Mapping[str, str], key: tuple[str, str] | None = None
) -> tuple[TypeSpec, TypeSpec]:
    """Object type ``name`` (key field first) plus its ``<name>Input``."""
    object_fields = dict([key]) if key else {}
    object_fields.update(fields)
    return object_type(name, object_fields), input_type(f"{name}Input", fields)


@dataclass(frozen=True)
class Operation:
    """A root query or mutation field proxied to one REST call.

    The URL is ``endpoint.url(path)``, followed by ``/<args[key]>`` when
    ``key`` is set and by the query string built from ``args[params]`` when
    ``params`` is set. ``args[body]`` is sent as the JSON body.
    """

    name: str
    returns: str
    method: Method
    args: tuple[tuple[str, str], ...] = ()
    path: str = "base"
    key: str | None = None
    body: str | None = None
    params: str | None = None
    # Forward the caller's bearer token to the service
    forward_token: bool = False
    # Body field filled from the bearer token when the caller leaves it empty
    token_field: str | None = None

    def sdl(self) -> str:
        if not self.args:
            return f"{self.name}: {self.returns}"
        signature = ", ".join(f"{name}: {type_}" for name, type_ in self.args)
        return f"{self.name}({signature}): {self.returns}"

    @property
    def arg_names(self) -> frozenset[str]:
        return frozenset(name for name, _ in self.args)


# Standard operation shapes


def list_query(name: str, type_name: str) -> Operation:
    """``GET <base>`` with an optional ``filter`` forwarded as query parameters."""
    return Operation(
        name,
        f"[{type_name}]!",
        "GET",
        args=(("filter", "JSON"),),
        params="filter",
    )


def get_query(
    name: str,
    returns: str,
    key: str = "id",
    key_type: str = "Int!",
    path: str = "base",
) -> Operation:
    """``GET <path>/<key>``."""
    return Operation(name, returns, "GET", args=((key, key_type),), path=path, key=key)


def create_mutation(name: str, type_name: str, arg: str) -> Operation:
    """``POST <base>`` with the input object as body."""
    return Operation(
        name,
        f"{type_name}!",
        "POST",
        args=((arg, f"{type_name}Input!"),),
        body=arg,
    )


def update_mutation(name: str, type_name: str, arg: str, key: str = "id") -> Operation:
    """``PUT <base>/<key>`` with the input object as body."""
    return Operation(
        name,
        f"{type_name}!",
        "PUT",
        args=((key, "Int!"), (arg, f"{type_name}Input!")),
        key=key,
        body=arg,
    )


def delete_mutation(name: str, key: str = "id") -> Operation:
    """``DELETE <base>/<key>``."""
    return Operation(name, "Int", "DELETE", args=((key, "Int!"),), key=key)


SCALAR_TYPES = (str, int, float, bool, type(None))


def _is_query_value(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return all(isinstance(item, SCALAR_TYPES) for item in value)
    return isinstance(value, SCALAR_TYPES)


def query_parameters(operation: Operation, args: Mapping[str, Any]) -> Mapping[str, Any] | None:
    """Return the argument forwarded as query parameters, if any.

    Raises:
        GraphQLError: If the argument is not an object of scalar or list values
    """
    if not operation.params:
        return None
    parameters = args.get(operation.params)
    if parameters is None:
        return None
    if not isinstance(parameters, Mapping) or not all(
        _is_query_value(value) for value in parameters.values()
    ):
        raise GraphQLError(f"{operation.params} must be an object of scalar or list values")
    return parameters


def make_resolver(endpoint: ServiceEndpoint, operation: Operation) -> Resolver:
    """Build the resolver issuing ``operation``'s REST call.

    A successful call resolves to the service's JSON body, unmodified. A
    failed call raises ``DownstreamServiceError`` so the field is reported as
    an error instead of being read as data.
    """
    base_url = endpoint.url(operation.path)

    async def resolve(root: Any, info: GraphQLResolveInfo, **kwargs: Any) -> Any:
        _ = root
        context = info.context
        headers = context.auth_headers() if operation.forward_token else None

        if operation.method == "GET":
            path = kwargs[operation.key] if operation.key else ""
            parameters = query_parameters(operation, kwargs)
            result = await context.rest.get(base_url, path, parameters, headers=headers)
        else:
            url = base_url
            if operation.key:
                url = f"{url}/{kwargs[operation.key]}"
            if operation.params:
                url = add_params(url, query_parameters(operation, kwargs))

            body = kwargs.get(operation.body) if operation.body else None
            if operation.token_field and context.token:
                body = dict(body or {})
                if not body.get(operation.token_field):
                    body[operation.token_field] = context.token

            result = await context.rest.request(url, operation.method, body, headers=headers)

        if not result.ok:
            logger.debug("Resolver failed", field=operation.name, error=result.message)
        return result.unwrap()

    resolve.__name__ = f"resolve_{operation.name}"
    resolve.__qualname__ = resolve.__name__
    return resolve


@dataclass(frozen=True)
class RestDomain:
    """One downstream service exposed as a slice of the GraphQL schema."""

    name: str
    endpoint: ServiceEndpoint
    types: tuple[TypeSpec, ...]
    queries: tuple[Operation, ...] = ()
    mutations: tuple[Operation, ...] = ()

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for operation in (*self.queries, *self.mutations):
            if operation.name in seen:
                raise SchemaConfigurationError(
                    f"Domain '{self.name}' declares '{operation.name}' twice"
                )
            seen.add(operation.name)

            if operation.path not in self.endpoint.paths:
                raise SchemaConfigurationError(
                    f"{self.name}.{operation.name} targets unknown path '{operation.path}'"
                )
            for role in ("key", "body", "params"):
                arg = getattr(operation, role)
                if arg is not None and arg not in operation.arg_names:
                    raise SchemaConfigurationError(
                        f"{self.name}.{operation.name} {role} '{arg}' is not an argument"
                    )
            if operation.token_field and not operation.body:
                raise SchemaConfigurationError(
                    f"{self.name}.{operation.name} sets token_field without a body"
                )

    @property
    def type_defs(self) -> str:
        return "\n".join(type_.sdl() for type_ in self.types)

    @property
    def query_defs(self) -> str:
        return "\n".join(f"{INDENT}{operation.sdl()}" for operation in self.queries)

    @property
    def mutation_defs(self) -> str:
        return "\n".join(f"{INDENT}{operation.sdl()}" for operation in self.mutations)

    def resolvers(self) -> ResolverMap:
        return {
            "Query": {op.name: make_resolver(self.endpoint, op) for op in self.queries},
            "Mutation": {op.name: make_resolver(self.endpoint, op) for op in self.mutations},
        }
