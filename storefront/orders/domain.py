"""Domain models and ports for orders.

This module contains the order status enumeration, the order dataclass,
and protocol definitions (ports) for the collaborators the order service
depends on: a customer resolver and a product resolver.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, List, Mapping, Protocol


# ---- Enums ----
class OrderStatus(str, Enum):
    """Enumeration of the possible order statuses.

    ``EM_ANDAMENTO`` is the initial status. No transition table is
    enforced: any recognized status may follow any other.
    """

    EM_ANDAMENTO = "EM_ANDAMENTO"
    ENTREGUE = "ENTREGUE"
    CANCELADO = "CANCELADO"

    @classmethod
    def parse(cls, raw: str) -> "OrderStatus":
        """Case-insensitive lookup; raises ValueError for unknown values."""
        return cls(raw.strip().upper())


# Keys never copied from a customer record into an order
CREDENTIAL_FIELDS = frozenset({"password", "password_hash", "senha"})


def redact(record: Mapping[str, Any]) -> dict:
    """Return a copy of a customer record without credential material."""
    return {k: v for k, v in record.items() if k.lower() not in CREDENTIAL_FIELDS}


# ---- Entities ----
@dataclass
class Order:
    """Container for order data.

    Attributes:
        id: Identifier assigned by the order service.
        customer: Redacted snapshot of the resolved customer record.
        products: Snapshots of the resolved product records.
        created_at: Creation instant taken from the clock; never changes.
        status: Current OrderStatus.
    """

    id: int
    customer: dict
    products: List[dict]
    created_at: datetime
    status: OrderStatus = OrderStatus.EM_ANDAMENTO

    @property
    def customer_id(self):
        return self.customer.get("id")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer": dict(self.customer),
            "products": [dict(p) for p in self.products],
            "created_at": self.created_at,
            "ordered_on": self.created_at.date(),
            "status": self.status.value,
        }


# ---- Ports (DIP) ----
class CustomerResolver(Protocol):
    """Port describing customer lookup used by the order service."""

    def resolve(self, customer_id: Any) -> Mapping[str, Any] | None:
        """Look up a customer.

        Args:
            customer_id: Identifier supplied by the caller.

        Returns:
            The customer record, or None when the customer does not exist.
        """
        raise NotImplementedError()


class ProductResolver(Protocol):
    """Port describing product lookup used by the order service."""

    def resolve(self, product_id: Any) -> Mapping[str, Any] | None:
        """Look up a product.

        Args:
            product_id: Identifier supplied by the caller.

        Returns:
            The product record, or None when the product does not exist.
        """
        raise NotImplementedError()
