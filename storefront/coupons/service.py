"""Coupon ledger service."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List

from storefront.clock import Clock, SystemClock
from storefront.errors import ConflictError, NotFound, NotFoundEmpty, ValidationError
from storefront.store import EntityStore

from .domain import Coupon

logger = logging.getLogger("storefront.coupons")


def _amount(value) -> Decimal | None:
    """Finite Decimal for ``value``, or None when missing or not a number."""
    if value is None or isinstance(value, bool):
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return amount if amount.is_finite() else None


def _valid_code(code) -> bool:
    return isinstance(code, str) and bool(code.strip())


class CouponLedger:
    """Holds coupons and evaluates their validity window.

    Every rule that depends on "today" reads the injected clock at the
    moment of the call.
    """

    def __init__(self, clock: Clock | None = None):
        self.clock = clock or SystemClock()
        self._store: EntityStore[Coupon] = EntityStore("coupons")

    def is_active(self, coupon: Coupon) -> bool:
        return coupon.is_active(self.clock.today())

    def render(self, coupon: Coupon) -> dict:
        """Plain record for callers, with ``active`` computed now."""
        return coupon.to_dict(self.clock.today())

    def create(self, code: str | None, value, min_purchase, expires_on: date | None) -> Coupon:
        """Issue a new coupon.

        Raises:
            ValidationError: ``INVALID_COUPON`` when the code is blank, the
                value is not > 0, the minimum purchase is missing or < 0, or
                the expiry date is absent.
        """
        amount = _amount(value)
        minimum = _amount(min_purchase)
        if (
            not _valid_code(code)
            or amount is None
            or amount <= 0
            or minimum is None
            or minimum < 0
            or expires_on is None
        ):
            raise ValidationError(
                "INVALID_COUPON",
                "All required fields must be filled in correctly.",
            )

        coupon = self._store.add(
            lambda cid: Coupon(id=cid, code=code, value=amount, min_purchase=minimum, expires_on=expires_on)
        )
        logger.info("coupon created", extra={"coupon_id": coupon.id, "active": self.is_active(coupon)})
        return coupon

    def get(self, coupon_id: int) -> Coupon:
        coupon = self._store.get(coupon_id)
        if coupon is None:
            raise NotFound("COUPON_NOT_FOUND", f"Coupon {coupon_id} not found.")
        return coupon

    def list_active(self) -> List[Coupon]:
        """Coupons still valid today.

        Raises:
            NotFoundEmpty: When no coupon is active.
        """
        today = self.clock.today()
        active = [c for c in self._store.all() if c.is_active(today)]
        if not active:
            raise NotFoundEmpty("No active coupons found.")
        return active

    def update(
        self,
        coupon_id: int,
        code: str | None = None,
        value=None,
        min_purchase=None,
        expires_on: date | None = None,
    ) -> Coupon:
        """Apply the supplied fields that pass validation; others are ignored."""
        amount = _amount(value)
        minimum = _amount(min_purchase)
        with self._store.lock:
            coupon = self.get(coupon_id)
            if _valid_code(code):
                coupon.code = code
            if amount is not None and amount > 0:
                coupon.value = amount
            if minimum is not None and minimum >= 0:
                coupon.min_purchase = minimum
            if expires_on is not None:
                coupon.expires_on = expires_on
            return coupon

    def delete(self, coupon_id: int) -> None:
        """Remove a coupon that has lapsed.

        Raises:
            NotFound: ``COUPON_NOT_FOUND`` if the id is unknown.
            ConflictError: ``COUPON_STILL_VALID`` if the coupon expires
                after today.
        """
        with self._store.lock:
            coupon = self.get(coupon_id)
            if self.is_active(coupon):
                logger.warning("coupon delete refused", extra={"coupon_id": coupon_id})
                raise ConflictError("COUPON_STILL_VALID", "Cannot remove a coupon that is still valid.")
            self._store.remove(coupon_id)
        logger.info("coupon deleted", extra={"coupon_id": coupon_id})
