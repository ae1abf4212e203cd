"""Unit tests for the coupon ledger.

A fixed clock drives every date comparison: "today" is 2026-10-19.
"""

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from storefront.clock import FixedClock
from storefront.coupons.service import CouponLedger
from storefront.errors import ConflictError, NotFound, NotFoundEmpty, ValidationError

TODAY = date(2026, 10, 19)
YESTERDAY = TODAY - timedelta(days=1)
TOMORROW = TODAY + timedelta(days=1)


@pytest.fixture
def clock():
    return FixedClock(datetime(2026, 10, 19, 9, 0))


@pytest.fixture
def ledger(clock):
    return CouponLedger(clock)


@pytest.mark.parametrize(
    "code, value, minimum, expires",
    [
        ("", 10, 0, TOMORROW),
        ("  ", 10, 0, TOMORROW),
        (None, 10, 0, TOMORROW),
        ("SAVE", 0, 0, TOMORROW),
        ("SAVE", -5, 0, TOMORROW),
        ("SAVE", 10, -1, TOMORROW),
        ("SAVE", 10, None, TOMORROW),
        ("SAVE", 10, 0, None),
        (123, 10, 0, TOMORROW),
        ("SAVE", float("nan"), 0, TOMORROW),
        ("SAVE", "Infinity", 0, TOMORROW),
        ("SAVE", 10, "NaN", TOMORROW),
    ],
)
def test_create_rejects_invalid_input(ledger, code, value, minimum, expires):
    with pytest.raises(ValidationError) as e:
        ledger.create(code, value, minimum, expires)
    assert str(e.value) == "INVALID_COUPON"


@pytest.mark.parametrize("expires, active", [(YESTERDAY, False), (TODAY, False), (TOMORROW, True)])
def test_active_means_expiry_strictly_after_today(ledger, expires, active):
    coupon = ledger.create("SAVE", 10, 0, expires)
    assert ledger.is_active(coupon) is active
    assert ledger.render(coupon)["active"] is active


def test_expired_coupon_scenario(ledger):
    coupon = ledger.create("SAVE10", 10, 0, YESTERDAY)
    assert ledger.render(coupon)["active"] is False
    ledger.delete(coupon.id)
    with pytest.raises(NotFound):
        ledger.get(coupon.id)


def test_delete_still_valid_coupon_is_refused(ledger):
    coupon = ledger.create("SAVE10", 10, 0, TOMORROW)
    with pytest.raises(ConflictError) as e:
        ledger.delete(coupon.id)
    assert str(e.value) == "COUPON_STILL_VALID"


def test_delete_coupon_expiring_today_succeeds(ledger):
    coupon = ledger.create("LAST", 5, 0, TODAY)
    ledger.delete(coupon.id)


def test_delete_unknown_coupon(ledger):
    with pytest.raises(NotFound):
        ledger.delete(1)


def test_activity_is_rederived_when_time_passes(ledger, clock):
    coupon = ledger.create("SAVE", 10, 0, TOMORROW)
    assert ledger.list_active() == [coupon]

    clock.advance_to(datetime(2026, 10, 20, 0, 1))
    assert ledger.is_active(coupon) is False
    with pytest.raises(NotFoundEmpty):
        ledger.list_active()
    ledger.delete(coupon.id)


def test_list_active_filters_expired(ledger):
    ledger.create("OLD", 10, 0, YESTERDAY)
    fresh = ledger.create("NEW", 10, 0, TOMORROW)
    assert ledger.list_active() == [fresh]


def test_update_applies_only_valid_fields_and_rederives_activity(ledger):
    coupon = ledger.create("SAVE", 10, 5, YESTERDAY)
    ledger.update(coupon.id, code=" ", value=-3, min_purchase=-1, expires_on=TOMORROW)

    assert coupon.code == "SAVE"
    assert coupon.value == Decimal("10")
    assert coupon.min_purchase == Decimal("5")
    assert ledger.render(coupon)["active"] is True

    ledger.update(coupon.id, value="12.5", min_purchase=0)
    assert coupon.value == Decimal("12.5")
    assert coupon.min_purchase == Decimal("0")


def test_update_ignores_non_string_code_and_non_finite_amounts(ledger):
    coupon = ledger.create("SAVE", 10, 5, TOMORROW)
    ledger.update(coupon.id, code=123, value="NaN", min_purchase=float("inf"))

    assert coupon.code == "SAVE"
    assert coupon.value == Decimal("10")
    assert coupon.min_purchase == Decimal("5")


def test_update_unknown_coupon(ledger):
    with pytest.raises(NotFound):
        ledger.update(9, code="X")
