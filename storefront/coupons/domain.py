"""Domain model for discount coupons."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass
class Coupon:
    """A discount coupon with an expiry date.

    Activity is not stored on the coupon. It is derived from ``expires_on``
    against the date supplied by the caller, so a long-lived record can
    never carry a stale flag.

    Attributes:
        id: Identifier assigned by the ledger.
        code: Code typed by customers; uniqueness is not enforced.
        value: Discount value, always > 0.
        min_purchase: Minimum purchase amount for the coupon to apply, >= 0.
        expires_on: Last calendar day before the coupon lapses.
    """

    id: int
    code: str
    value: Decimal
    min_purchase: Decimal
    expires_on: date

    def is_active(self, today: date) -> bool:
        return self.expires_on > today

    def to_dict(self, today: date) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "value": self.value,
            "min_purchase": self.min_purchase,
            "expires_on": self.expires_on,
            "active": self.is_active(today),
        }
