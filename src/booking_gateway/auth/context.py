"""Request context handed to every resolver."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..rest.client import RestClient

# RFC 6750 token68 characters
BEARER_PATTERN = re.compile(r"^\s*Bearer\s+([A-Za-z0-9\-._~+/]+=*)\s*$", re.IGNORECASE)


def extract_bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header.

    A missing or non-bearer header yields ``None``; it is not an error here.
    Verifying the token is left to the authentication service.
    """
    if not authorization:
        return None
    match = BEARER_PATTERN.match(authorization)
    return match.group(1) if match else None


@dataclass
class RequestContext:
    """Runtime context for one GraphQL request."""

    rest: RestClient
    token: str | None = None
    request: Any = None

    def auth_headers(self) -> dict[str, str] | None:
        """Headers forwarding the caller's bearer token downstream."""
        if self.token is None:
            return None
        return {"Authorization": f"Bearer {self.token}"}
