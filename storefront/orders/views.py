"""HTTP routes for orders.

Routes validate the body (via Pydantic), delegate to ``OrderService`` and
return ``OrderReadDTO`` payloads. When the customer resolver is the HTTP
user-service client and that service is down, it raises
``UpstreamUnavailable``, which the app answers with 503.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from storefront.providers import get_order_service

from .schemas import CreateOrderDTO, OrderReadDTO, UpdateStatusDTO
from .service import OrderService

router = APIRouter(prefix="/api/v1/pedido", tags=["pedidos"])


@router.post("", response_model=OrderReadDTO, status_code=status.HTTP_201_CREATED)
def create_order(body: CreateOrderDTO, service: OrderService = Depends(get_order_service)):
    return service.create(body.customer_id, body.product_ids).to_dict()


@router.get("", response_model=List[OrderReadDTO])
def list_orders(
    customer: str | None = None,
    status: str | None = None,
    date: str | None = None,
    service: OrderService = Depends(get_order_service),
):
    return [o.to_dict() for o in service.list(customer=customer, status=status, date=date)]


@router.get("/{order_id}", response_model=OrderReadDTO)
def get_order(order_id: int, service: OrderService = Depends(get_order_service)):
    return service.get(order_id).to_dict()


@router.put("/{order_id}", response_model=OrderReadDTO)
def update_order_status(order_id: int, body: UpdateStatusDTO, service: OrderService = Depends(get_order_service)):
    return service.update_status(order_id, body.status).to_dict()


@router.delete("/{order_id}", status_code=204)
def delete_order(order_id: int, service: OrderService = Depends(get_order_service)):
    service.delete(order_id)
    return Response(status_code=204)
