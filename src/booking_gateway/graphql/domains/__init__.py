"""
The downstream services exposed through the gateway, in schema order
"""

from collections.abc import Callable, Mapping

from ...config import ServiceEndpoint
from ..domain import RestDomain
from . import (
    auth,
    billing,
    favorites,
    locations,
    lodging_images,
    lodgings,
    reservations,
    roles,
    users,
)

DOMAIN_BUILDERS: dict[str, Callable[[ServiceEndpoint], RestDomain]] = {
    "users": users.build,
    "roles": roles.build,
    "favorites": favorites.build,
    "locations": locations.build,
    "lodging_images": lodging_images.build,
    "lodgings": lodgings.build,
    "reservations": reservations.build,
    "billing": billing.build,
    "auth": auth.build,
}


def build_domains(endpoints: Mapping[str, ServiceEndpoint]) -> list[RestDomain]:
    """Build every domain from its configured endpoint.

    Raises:
        KeyError: If a domain has no configured endpoint
    """
    return [build(endpoints[name]) for name, build in DOMAIN_BUILDERS.items()]


__all__ = ["DOMAIN_BUILDERS", "build_domains"]
