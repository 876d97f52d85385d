"""Billing service.

Payments have no id of their own. ``paymentById`` is keyed by ``user_id`` and
lists that user's payments. ``updatePayment`` receives both ``user_id`` and
``reservation_id`` but the service path only carries one key, ``user_id``.
"""

from ...config import ServiceEndpoint
from ..domain import Operation, RestDomain, create_mutation, entity_types, get_query

PAYMENT_FIELDS = {
    "amount": "Int!",
    "method": "String!",
    "reservation_id": "Int!",
    "user_id": "Int!",
}

# Key used to build the updatePayment path
UPDATE_PAYMENT_KEY = "user_id"


def build(endpoint: ServiceEndpoint) -> RestDomain:
    return RestDomain(
        name="billing",
        endpoint=endpoint,
        types=entity_types("Payment", PAYMENT_FIELDS),
        queries=(get_query("paymentById", "[Payment]!", key="user_id"),),
        mutations=(
            create_mutation("createPayment", "Payment", "payment"),
            Operation(
                "updatePayment",
                "Payment!",
                "PUT",
                args=(
                    ("user_id", "Int!"),
                    ("reservation_id", "Int!"),
                    ("payment", "PaymentInput!"),
                ),
                key=UPDATE_PAYMENT_KEY,
                body="payment",
            ),
        ),
    )
