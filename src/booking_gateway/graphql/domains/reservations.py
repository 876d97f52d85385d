"""Reservations service."""

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

RESERVATION_FIELDS = {
    "user_id": "Int!",
    "start_date": "String!",
    "end_date": "String!",
    "guest_adult_number": "Int!",
    "guest_children_number": "Int!",
    "is_cancel": "Boolean!",
    "lodging_id": "Int!",
}


def build(endpoint: ServiceEndpoint) -> RestDomain:
    return RestDomain(
        name="reservations",
        endpoint=endpoint,
        types=entity_types("Reservation", RESERVATION_FIELDS, key=("reservation_id", "Int!")),
        queries=(
            list_query("allReservations", "Reservation"),
            get_query("reservationById", "Reservation!"),
            get_query("reservationByUser", "[Reservation]!", key="user_id", path="user"),
        ),
        mutations=(
            create_mutation("createReservation", "Reservation", "reservation"),
            delete_mutation("deleteReservation"),
            update_mutation("updateReservation", "Reservation", "reservation"),
        ),
    )
