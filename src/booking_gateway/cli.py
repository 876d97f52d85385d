#!/usr/bin/env python3
"""
Main CLI entry point for the booking gateway.
"""

import sys

import click
import uvicorn
from pydantic import ValidationError

from booking_gateway import __version__
from booking_gateway.config import Settings, build_endpoints
from booking_gateway.logging import configure_logging, get_logger

logger = get_logger(__name__)


def _load_settings(**overrides: object) -> Settings:
    try:
        settings = Settings()  # pyright: ignore [reportCallIssue]
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise click.ClickException(f"Invalid or missing configuration: {missing}") from e
    updates = {key: value for key, value in overrides.items() if value is not None}
    return settings.model_copy(update=updates) if updates else settings


@click.group()
@click.version_option(version=__version__, prog_name="booking-gateway")
def cli() -> None:
    """Booking gateway CLI - serve the GraphQL API and inspect its schema."""
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind to (default: HOST or 0.0.0.0)")
@click.option("--port", default=None, type=int, help="Port to bind to (default: PORT or 5000)")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: LOG_LEVEL or info)",
)
@click.option("--show-urls", is_flag=True, default=False, help="Log every downstream URL")
def serve(host: str | None, port: int | None, log_level: str | None, show_urls: bool) -> None:
    """Start the gateway server."""
    settings = _load_settings(
        host=host,
        port=port,
        log_level=log_level.upper() if log_level else None,
        debug=True if log_level == "debug" else None,
        show_urls=True if show_urls else None,
    )
    configure_logging(debug=settings.debug, level=settings.log_level)

    logger.info(
        "Starting booking gateway server",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )

    from booking_gateway.api.app import create_app

    try:
        app = create_app(settings)
    except Exception as e:
        logger.error("Gateway failed to start", error=str(e))
        sys.exit(1)

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("print-schema")
def print_schema() -> None:
    """Print the composed GraphQL schema."""
    from booking_gateway.graphql.domains import build_domains
    from booking_gateway.graphql.schema import compose_domains

    settings = _load_settings()
    sdl, _ = compose_domains(build_domains(build_endpoints(settings)))
    click.echo(sdl)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
