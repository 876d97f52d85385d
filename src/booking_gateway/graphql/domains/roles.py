"""Roles service."""

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
        name="roles",
        endpoint=endpoint,
        types=entity_types("Role", {"namerole": "String!"}, key=("id", "Int!")),
        queries=(
            list_query("allRoles", "Role"),
            get_query("roleById", "Role!"),
        ),
        mutations=(
            create_mutation("createRole", "Role", "role"),
            delete_mutation("deleteRole"),
            update_mutation("updateRole", "Role", "role"),
        ),
    )
