"""Lodging images service."""

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
        name="lodging_images",
        endpoint=endpoint,
        types=entity_types(
            "Lodging_image",
            {"lodging_id": "Int!", "url": "String!"},
            key=("lodging_image_id", "Int!"),
        ),
        queries=(
            list_query("allLodging_image", "Lodging_image"),
            get_query("lodging_imageById", "Lodging_image!"),
            get_query(
                "lodging_imageByLodgingid",
                "[Lodging_image]!",
                key="lodging_id",
                path="lodging",
            ),
        ),
        mutations=(
            create_mutation("createLodging_image", "Lodging_image", "lodging_image"),
            delete_mutation("deleteLodging_image"),
            update_mutation("updateLodging_image", "Lodging_image", "lodging_image"),
        ),
    )
