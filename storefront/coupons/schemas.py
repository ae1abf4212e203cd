"""Pydantic schemas for the coupons API."""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class CouponIn(BaseModel):
    """Body for issuing or editing a coupon.

    Attributes:
        code: Code typed by customers.
        value: Discount value, must be > 0.
        min_purchase: Minimum purchase amount, must be >= 0.
        expires_on: Expiry date in ``YYYY-MM-DD`` form.
    """

    code: str | None = None
    value: Decimal | None = None
    min_purchase: Decimal | None = None
    expires_on: date | None = None


class CouponOut(BaseModel):
    id: int
    code: str
    value: Decimal
    min_purchase: Decimal
    expires_on: date
    active: bool
