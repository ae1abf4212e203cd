"""HTTP routes for coupons.

Every response renders ``active`` through the ledger at request time.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from storefront.providers import get_coupon_ledger

from .schemas import CouponIn, CouponOut
from .service import CouponLedger

router = APIRouter(prefix="/api/v1/cupom", tags=["cupons"])


@router.post("", response_model=CouponOut, status_code=status.HTTP_201_CREATED)
def create_coupon(body: CouponIn, ledger: CouponLedger = Depends(get_coupon_ledger)):
    coupon = ledger.create(body.code, body.value, body.min_purchase, body.expires_on)
    return ledger.render(coupon)


@router.get("", response_model=List[CouponOut])
def list_active_coupons(ledger: CouponLedger = Depends(get_coupon_ledger)):
    return [ledger.render(c) for c in ledger.list_active()]


@router.get("/{coupon_id}", response_model=CouponOut)
def get_coupon(coupon_id: int, ledger: CouponLedger = Depends(get_coupon_ledger)):
    return ledger.render(ledger.get(coupon_id))


@router.put("/{coupon_id}", response_model=CouponOut)
def update_coupon(coupon_id: int, body: CouponIn, ledger: CouponLedger = Depends(get_coupon_ledger)):
    coupon = ledger.update(
        coupon_id,
        code=body.code,
        value=body.value,
        min_purchase=body.min_purchase,
        expires_on=body.expires_on,
    )
    return ledger.render(coupon)


@router.delete("/{coupon_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_coupon(coupon_id: int, ledger: CouponLedger = Depends(get_coupon_ledger)):
    ledger.delete(coupon_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
