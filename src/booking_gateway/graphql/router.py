"""
GraphQL over HTTP for FastAPI
"""

import json
from inspect import isawaitable
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from graphql import (
    ExecutionResult,
    GraphQLError,
    GraphQLSchema,
    OperationType,
    execute,
    get_operation_ast,
    parse,
    validate,
)
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..auth.context import RequestContext, extract_bearer_token
from ..logging import get_logger
from .errors import format_error
from .graphiql import render_graphiql

logger = get_logger(__name__)


class GraphQLRequest(BaseModel):
    """A GraphQL operation as sent over HTTP."""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    variables: dict[str, Any] | None = None
    operation_name: str | None = Field(default=None, alias="operationName")


def _envelope(result: ExecutionResult, status_code: int = 200) -> JSONResponse:
    content: dict[str, Any] = {"data": result.data}
    if result.errors:
        content["errors"] = [format_error(error) for error in result.errors]
    return JSONResponse(content, status_code=status_code)


def _request_error(message: str, status_code: int = 400, **kwargs: Any) -> JSONResponse:
    return JSONResponse(
        {"data": None, "errors": [{"message": message}]},
        status_code=status_code,
        **kwargs,
    )


def get_context(request: Request) -> RequestContext:
    """Build the resolver context for an incoming request."""
    return RequestContext(
        rest=request.app.state.rest_client,
        token=extract_bearer_token(request.headers.get("authorization")),
        request=request,
    )


async def run_operation(
    schema: GraphQLSchema,
    params: GraphQLRequest,
    context: RequestContext,
    allow_mutations: bool = True,
) -> JSONResponse:
    """Parse, validate and execute one operation against the schema."""
    try:
        document = parse(params.query)
    except GraphQLError as error:
        return _envelope(ExecutionResult(data=None, errors=[error]), status_code=400)

    validation_errors = validate(schema, document)
    if validation_errors:
        return _envelope(ExecutionResult(data=None, errors=validation_errors), status_code=400)

    if not allow_mutations:
        operation = get_operation_ast(document, params.operation_name)
        if operation is not None and operation.operation != OperationType.QUERY:
            return _request_error(
                f"Can only perform a {operation.operation.value} operation from a POST request.",
                status_code=405,
                headers={"Allow": "POST"},
            )

    result = execute(
        schema,
        document,
        context_value=context,
        variable_values=params.variables,
        operation_name=params.operation_name,
    )
    if isawaitable(result):
        result = await result
    return _envelope(result)


def create_graphql_router(
    schema: GraphQLSchema,
    path: str = "/graphql",
    graphiql_path: str | None = "/graphiql",
) -> APIRouter:
    """Create the GraphQL router: GET/POST on ``path`` plus the GraphiQL page."""
    router = APIRouter()

    @router.post(path)
    async def graphql_post(request: Request) -> JSONResponse:  # pyright: ignore [reportUnusedFunction]
        try:
            payload = await request.json()
        except ValueError:
            return _request_error("Request body is not valid JSON")

        try:
            params = GraphQLRequest.model_validate(payload)
        except ValidationError as e:
            logger.warning("Malformed GraphQL request", error_count=e.error_count())
            return _request_error("POST body must contain a 'query' string")

        return await run_operation(schema, params, get_context(request))

    @router.get(path)
    async def graphql_get(request: Request) -> JSONResponse:  # pyright: ignore [reportUnusedFunction]
        query_params = request.query_params
        query = query_params.get("query")
        if not query:
            return _request_error("GET query must contain a 'query' parameter")

        variables: Any = None
        raw_variables = query_params.get("variables")
        if raw_variables:
            try:
                variables = json.loads(raw_variables)
            except ValueError:
                return _request_error("Variables are invalid JSON")

        try:
            params = GraphQLRequest(
                query=query,
                variables=variables,
                operation_name=query_params.get("operationName"),
            )
        except ValidationError:
            return _request_error("Variables must be a JSON object")
        return await run_operation(schema, params, get_context(request), allow_mutations=False)

    if graphiql_path:

        @router.get(graphiql_path, response_class=HTMLResponse)
        async def graphiql() -> HTMLResponse:  # pyright: ignore [reportUnusedFunction]
            return HTMLResponse(render_graphiql(endpoint=path))

    return router
