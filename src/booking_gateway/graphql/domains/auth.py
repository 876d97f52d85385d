"""Authentication (LDAP) service.

Every call is a POST of the input object to its own entry point. The
caller's bearer token, when present, is forwarded to the service, and
``validate`` checks that token when no explicit one is given.
"""

from ...config import ServiceEndpoint
from ..domain import Operation, RestDomain, input_type, object_type

TYPES = (
    object_type("response", {"success": "String!", "data": "String!"}),
    object_type("correct", {"success": "Boolean!", "data": "String!", "token": "String!"}),
    object_type("only", {"message": "String!"}),
    input_type("UserInputld", {"email": "String!", "password": "String!"}),
    input_type("Token", {"token": "String"}),
    input_type("LoginInput", {"email": "String!", "password": "String!"}),
)


def _post(
    name: str,
    returns: str,
    arg: str,
    arg_type: str,
    path: str,
    token_field: str | None = None,
) -> Operation:
    return Operation(
        name,
        returns,
        "POST",
        args=((arg, arg_type),),
        path=path,
        body=arg,
        forward_token=True,
        token_field=token_field,
    )


def build(endpoint: ServiceEndpoint) -> RestDomain:
    return RestDomain(
        name="auth",
        endpoint=endpoint,
        types=TYPES,
        mutations=(
            _post("loginUser", "correct!", "credentials", "LoginInput!", "login"),
            _post("createUserld", "response!", "user", "UserInputld!", "add"),
            _post("updatePassword", "response!", "user", "UserInputld!", "update"),
            _post("validate", "only!", "credentials", "Token", "validate", token_field="token"),
        ),
    )
