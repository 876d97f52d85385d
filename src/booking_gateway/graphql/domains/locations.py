"""Locations service."""

from ...config import ServiceEndpoint
from ..domain import (
    RestDomain,
    create_mutation,
    delete_mutation,
    entity_types,
    get_query,
    list_query,
    update_mutation,
)


def build(endpoint: ServiceEndpoint) -> RestDomain:
    return RestDomain(
        name="locations",
        endpoint=endpoint,
        types=entity_types(
            "Location",
            {"country": "String!", "city": "String!", "state": "String!"},
            key=("location_id", "Int!"),
        ),
        queries=(
            list_query("allLocations", "Location"),
            get_query("locationById", "Location!"),
        ),
        mutations=(
            create_mutation("createLocation", "Location", "location"),
            delete_mutation("deleteLocation"),
            update_mutation("updateLocation", "Location", "location"),
        ),
    )
