"""Pydantic schemas for orders.

Lightweight request and read schemas used by the orders routes.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field


class CreateOrderDTO(BaseModel):
    """Schema for creating an order.

    Attributes:
        customer_id: Identifier of the ordering customer.
        product_ids: Identifiers of the ordered products; must be non-empty
            (checked by the order service).
    """

    customer_id: int | str | None = None
    product_ids: list[int] = Field(default_factory=list)


class UpdateStatusDTO(BaseModel):
    """Schema for an order status change; case is normalized by the service."""

    status: str | None = None


class OrderReadDTO(BaseModel):
    """Read schema for an order."""

    id: int
    customer: dict[str, Any]
    products: list[dict[str, Any]]
    created_at: datetime
    ordered_on: date
    status: str
