"""Exception hierarchy for the gateway."""

from __future__ import annotations

from typing import Any


class GatewayError(Exception):
    """Base class for gateway errors."""


class SchemaConfigurationError(GatewayError):
    """The composed schema or resolver map is inconsistent.

    Raised while building the schema at startup, never per request.
    """


class DownstreamServiceError(GatewayError):
    """A downstream REST call failed.

    ``error`` holds the parsed body the service answered with (``None`` for
    transport failures). Services that report structured errors send
    ``{"id": ..., "code": ..., "description": ...}``.
    """

    def __init__(
        self,
        message: str,
        *,
        error: Any = None,
        status_code: int | None = None,
        url: str | None = None,
        method: str | None = None,
    ):
        super().__init__(message)
        self.error = error
        self.status_code = status_code
        self.url = url
        self.method = method
