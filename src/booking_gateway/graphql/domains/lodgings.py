"""Lodgings service."""

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

# Flags (is_*, with_*) are 0/1 integers on the service side
LODGING_FIELDS = {
    "host_id": "Int!",
    "lodging_name": "String!",
    "phone_number": "Int!",
    "lodging_type": "Int!",
    "lodging_class": "Int!",
    "is_exclusive": "Int!",
    "is_company": "Int!",
    "guest_number": "Int!",
    "rooms_number": "Int!",
    "beds_number": "Int!",
    "bathrooms_number": "Int!",
    "location_id": "Int!",
    "address": "String!",
    "extra_address": "String!",
    "time_before_guest": "Int!",
    "time_arrive_start": "Int!",
    "time_arrive_end": "Int!",
    "with_wifi": "Int!",
    "with_cable_tv": "Int!",
    "with_air_conditioning": "Int!",
    "with_phone": "Int!",
    "with_kitchen": "Int!",
    "with_cleaning_items": "Int!",
    "price_per_person_and_nigth": "Float!",
    "lodging_description": "String!",
    "lodging_provide": "Int!",
}


def build(endpoint: ServiceEndpoint) -> RestDomain:
    return RestDomain(
        name="lodgings",
        endpoint=endpoint,
        types=entity_types("Lodging", LODGING_FIELDS, key=("lodging_id", "Int!")),
        queries=(
            list_query("allLodgings", "Lodging"),
            get_query("lodgingById", "Lodging!"),
            get_query("lodgingByName", "[Lodging]!", key="name", key_type="String!", path="name"),
            get_query("lodgingByUser", "[Lodging]!", key="user_id", path="user"),
        ),
        mutations=(
            create_mutation("createLodging", "Lodging", "lodging"),
            delete_mutation("deleteLodging"),
            update_mutation("updateLodging", "Lodging", "lodging"),
        ),
    )
