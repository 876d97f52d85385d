"""Favorites service: lodgings a user has bookmarked."""

from ...config import ServiceEndpoint
from ..domain import (
    RestDomain,
    create_mutation,
    delete_mutation,
    entity_types,
    get_query,
    list_query,
)


def build(endpoint: ServiceEndpoint) -> RestDomain:
    return RestDomain(
        name="favorites",
        endpoint=endpoint,
        types=entity_types(
            "Favorite",
            {"user_id": "Int!", "lodging_id": "Int!"},
            key=("id", "Int!"),
        ),
        queries=(
            list_query("allFavorites", "Favorite"),
            get_query("favoriteById", "Favorite!"),
            get_query("favoriteByUserid", "[Favorite]!", key="user_id", path="user"),
        ),
        # Favorites are never edited in place, only created and removed
        mutations=(
            create_mutation("createFavorite", "Favorite", "favorite"),
            delete_mutation("deleteFavorite"),
        ),
    )
