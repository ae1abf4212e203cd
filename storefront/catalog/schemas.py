"""Pydantic schemas for the catalog API.

Input schemas only check types; required-field rules are enforced by the
catalog services so every caller gets the same validation policy.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class CategoryIn(BaseModel):
    """Body for creating or editing a category."""

    name: str | None = None
    description: str | None = None


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None


class ProductIn(BaseModel):
    """Body for creating or editing a product.

    Attributes:
        name: Product name (required on creation).
        price: Unit price (required on creation).
        description: Optional free text.
        stock: Units available, non-negative.
        image: Optional image URL or path.
        category_id: Optional category reference.
    """

    name: str | None = None
    price: Decimal | None = None
    description: str | None = None
    stock: int | None = Field(default=None, ge=0)
    image: str | None = None
    category_id: int | None = None


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: Decimal
    description: str | None = None
    stock: int | None = None
    image: str | None = None
    category_id: int | None = None
