"""
Shared pytest fixtures and configuration for all tests.
"""

import json
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
import pytest_asyncio

from booking_gateway.auth.context import RequestContext
from booking_gateway.config import Settings, build_endpoints
from booking_gateway.rest.client import RestClient

SERVICE_SETTINGS: dict[str, Any] = {
    "users_url": "users.local",
    "users_port": 3000,
    "users_entry": "api/v1/users",
    "users_entry_email": "api/v1/users/email",
    "role_url": "roles.local",
    "role_port": 3001,
    "role_entry": "api/v1/role",
    "favorite_url": "favorites.local",
    "favorite_port": 3002,
    "favorite_entry": "api/v1/favorite",
    "favorite_entry_user": "api/v1/favorite/user",
    "location_url": "locations.local",
    "location_port": 3030,
    "location_entry": "api/v1/location",
    "lodging_image_url": "images.local",
    "lodging_image_port": 3031,
    "lodging_image_entry": "api/v1/lodging_image",
    "lodging_image_entry_lodging": "api/v1/lodging_image/lodging",
    "lodging_url": "lodgings.local",
    "lodging_port": 3032,
    "lodging_entry": "api/v1/lodging",
    "lodging_entry_name": "api/v1/lodging/name",
    "lodging_entry_user": "api/v1/lodging/user",
    "reservation_url": "reservations.local",
    "reservation_port": 3010,
    "reservation_entry": "api/v1/reservation",
    "reservation_entry_user": "api/v1/reservation/user",
    "billing_url": "billing.local",
    "billing_port": 3045,
    "billing_entry": "api/v1/payment",
    "ldap_url": "auth.local",
    "ldap_port": 3100,
    "ldap_entry_login": "auth",
    "ldap_entry_add": "add",
    "ldap_entry_update": "update",
    "ldap_entry_validate": "validate",
}


def make_settings(**overrides: Any) -> Settings:
    """Settings with every service coordinate filled in, ignoring .env files."""
    values = {**SERVICE_SETTINGS, **overrides}
    return Settings(_env_file=None, **values)  # type: ignore[call-arg]


@dataclass
class Downstream:
    """Records outgoing requests and answers them from registered routes."""

    requests: list[httpx.Request] = field(default_factory=list)
    routes: dict[tuple[str, str], Callable[[httpx.Request], httpx.Response]] = field(
        default_factory=dict
    )

    def add(
        self,
        method: str,
        url: str,
        status_code: int = 200,
        json: Any = None,
        content: bytes | None = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if content is not None:
                return httpx.Response(status_code, content=content)
            return httpx.Response(status_code, json=json)

        self.routes[(method, url)] = respond

    def fail(self, method: str, url: str, exc: Exception) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            raise exc

        self.routes[(method, url)] = respond

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        respond = self.routes.get((request.method, str(request.url)))
        if respond is None:
            return httpx.Response(404, json={"message": f"no route {request.url}"})
        return respond(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


@pytest.fixture
def settings_factory() -> Callable[..., Settings]:
    return make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def endpoints(settings: Settings):
    return build_endpoints(settings)


@pytest.fixture
def downstream() -> Downstream:
    return Downstream()


@pytest_asyncio.fixture
async def rest_client(downstream: Downstream) -> AsyncGenerator[RestClient, None]:
    client = RestClient(transport=httpx.MockTransport(downstream.handler))
    yield client
    await client.aclose()


@pytest.fixture
def context(rest_client: RestClient) -> RequestContext:
    return RequestContext(rest=rest_client)


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark test as unit test")  # type: ignore[reportUnknownMemberType]
    config.addinivalue_line("markers", "integration: mark test as integration test")  # type: ignore[reportUnknownMemberType]
