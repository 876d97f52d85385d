"""
Main FastAPI application for the booking gateway
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..config import Settings, build_endpoints
from ..graphql.router import create_graphql_router
from ..graphql.schema import create_schema, validate_schema
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..rest.client import RestClient

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager: owns the downstream HTTP client."""
    settings: Settings = app.state.settings

    owns_client = app.state.rest_client is None
    if owns_client:
        app.state.rest_client = RestClient(
            show_urls=settings.show_urls,
            timeout=settings.request_timeout,
        )
    logger.info("Starting booking gateway", port=settings.port, show_urls=settings.show_urls)

    yield

    logger.info("Shutting down booking gateway")
    if owns_client:
        await app.state.rest_client.aclose()
        app.state.rest_client = None


def create_app(settings: Settings | None = None, rest_client: RestClient | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The schema is composed and validated here, so missing service
    coordinates or clashing field names fail before the server accepts
    traffic.

    Args:
        settings: Settings to use; read from the environment when omitted
        rest_client: Downstream client to use instead of one owned by the app
    """
    if settings is None:
        settings = Settings()  # pyright: ignore [reportCallIssue]

    configure_logging(debug=settings.debug, level=settings.log_level)

    endpoints = build_endpoints(settings)
    try:
        schema = create_schema(endpoints)
        validate_schema(schema)
    except Exception as e:
        logger.error("Failed to initialize GraphQL schema", error=str(e))
        raise

    app = FastAPI(
        title="Booking Gateway",
        description="GraphQL gateway over the booking platform REST services",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )
    app.state.settings = settings
    app.state.schema = schema
    app.state.rest_client = rest_client

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    app.include_router(create_graphql_router(schema))
    logger.info("GraphQL endpoint initialized", endpoint="/graphql", graphiql="/graphiql")

    return app
