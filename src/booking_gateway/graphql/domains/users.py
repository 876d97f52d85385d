"""Users service."""

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

USER_FIELDS = {
    "name": "String!",
    "lastname": "String!",
    "birthdate": "String!",
    "email": "String!",
    "password": "String!",
    "idrole": "Int!",
    "image": "String!",
}


def build(endpoint: ServiceEndpoint) -> RestDomain:
    return RestDomain(
        name="users",
        endpoint=endpoint,
        types=entity_types("User", USER_FIELDS, key=("id", "Int!")),
        queries=(
            list_query("allUsers", "User"),
            get_query("userById", "User!"),
            get_query("userByEmail", "User!", key="email", key_type="String!", path="email"),
        ),
        mutations=(
            create_mutation("createUser", "User", "user"),
            delete_mutation("deleteUser"),
            update_mutation("updateUser", "User", "user"),
        ),
    )
