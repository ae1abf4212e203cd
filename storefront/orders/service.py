"""Order service: creation, status changes, filtering and deletion.

The service resolves the customer and every product through its ports
before anything is written, so a failed creation leaves no trace. It does
not handle persistence beyond the in-memory store or any HTTP concerns.
"""

import logging
import re
from datetime import date
from typing import Any, Iterable, List

from storefront.clock import Clock, SystemClock
from storefront.errors import ConflictError, NotFound, NotFoundEmpty, ValidationError
from storefront.store import EntityStore

from .domain import CustomerResolver, Order, OrderStatus, ProductResolver, redact

logger = logging.getLogger("storefront.orders")

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(raw: str) -> date:
    """Parse an exact ``YYYY-MM-DD`` calendar date.

    Raises:
        ValidationError: ``INVALID_DATE_FORMAT`` for anything else.
    """
    if not DATE_RE.match(raw):
        raise ValidationError("INVALID_DATE_FORMAT", "Invalid date format. Use YYYY-MM-DD.")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationError("INVALID_DATE_FORMAT", "Invalid date format. Use YYYY-MM-DD.")


def _matches_customer(order: Order, needle: str) -> bool:
    customer = order.customer
    candidates = [customer.get("id"), customer.get("name"), customer.get("nome")]
    return any(c is not None and str(c).casefold() == needle for c in candidates)


class OrderService:
    """Domain service responsible for the order lifecycle.

    Orders start as ``EM_ANDAMENTO``; only ``CANCELADO`` orders can be
    deleted.
    """

    def __init__(
        self,
        customers: CustomerResolver,
        products: ProductResolver,
        clock: Clock | None = None,
    ):
        """Initialize the service with required dependencies.

        Args:
            customers: CustomerResolver used to bind the ordering customer.
            products: ProductResolver used to bind each ordered product.
            clock: Source of the order creation instant.
        """
        self.customers = customers
        self.products = products
        self.clock = clock or SystemClock()
        self._store: EntityStore[Order] = EntityStore("orders")

    def create(self, customer_id: Any, product_ids: Iterable[Any] | None) -> Order:
        """Place an order for a customer and a non-empty list of products.

        Args:
            customer_id: Identifier of the ordering customer.
            product_ids: Identifiers of the ordered products.

        Returns:
            The stored Order with status ``EM_ANDAMENTO``.

        Raises:
            ValidationError: ``CUSTOMER_REQUIRED`` or ``EMPTY_ORDER``.
            NotFound: ``CUSTOMER_NOT_FOUND`` or ``PRODUCT_NOT_FOUND`` when a
                reference cannot be resolved.
        """
        if customer_id is None or (isinstance(customer_id, str) and not customer_id.strip()):
            raise ValidationError("CUSTOMER_REQUIRED", "The 'customer' field is required.")
        product_ids = list(product_ids or [])
        if not product_ids:
            raise ValidationError("EMPTY_ORDER", "The order must contain at least one product.")

        # 1) Resolve references
        customer = self.customers.resolve(customer_id)
        if customer is None:
            raise NotFound("CUSTOMER_NOT_FOUND", f"Customer {customer_id} not found.")
        products = []
        for pid in product_ids:
            product = self.products.resolve(pid)
            if product is None:
                raise NotFound("PRODUCT_NOT_FOUND", f"Product {pid} not found.")
            products.append(dict(product))

        # 2) Commit
        snapshot = redact(customer)
        snapshot.setdefault("id", customer_id)
        order = self._store.add(
            lambda oid: Order(
                id=oid,
                customer=snapshot,
                products=products,
                created_at=self.clock.now(),
            )
        )
        logger.info("order created", extra={"order_id": order.id, "customer_id": order.customer_id})
        return order

    def get(self, order_id: int) -> Order:
        order = self._store.get(order_id)
        if order is None:
            raise NotFound("ORDER_NOT_FOUND", f"Order {order_id} not found.")
        return order

    def update_status(self, order_id: int, new_status: str | None) -> Order:
        """Move an order to any recognized status.

        Raises:
            NotFound: ``ORDER_NOT_FOUND``.
            ValidationError: ``STATUS_REQUIRED`` when blank, ``INVALID_STATUS``
                when not one of EM_ANDAMENTO, ENTREGUE, CANCELADO.
        """
        with self._store.lock:
            order = self.get(order_id)
            if new_status is None or not str(new_status).strip():
                raise ValidationError("STATUS_REQUIRED", "The 'status' field is required.")
            try:
                status = OrderStatus.parse(str(new_status))
            except ValueError:
                raise ValidationError(
                    "INVALID_STATUS",
                    "Invalid status. Use: EM_ANDAMENTO, ENTREGUE or CANCELADO.",
                )
            previous, order.status = order.status, status
        logger.info(
            "order status changed",
            extra={"order_id": order_id, "from": previous.value, "to": status.value},
        )
        return order

    def list(
        self,
        customer: str | None = None,
        status: str | None = None,
        date: str | None = None,
    ) -> List[Order]:
        """Orders matching every supplied filter.

        Blank filters are ignored. Customer and status comparisons are
        case-insensitive; ``date`` matches the creation day.

        Raises:
            ValidationError: ``INVALID_DATE_FORMAT`` for an unparseable date.
            NotFoundEmpty: When no order matches.
        """
        day = parse_date(date.strip()) if date and date.strip() else None
        orders = self._store.all()
        if customer and customer.strip():
            needle = customer.strip().casefold()
            orders = [o for o in orders if _matches_customer(o, needle)]
        if status and status.strip():
            wanted = status.strip().casefold()
            orders = [o for o in orders if o.status.value.casefold() == wanted]
        if day is not None:
            orders = [o for o in orders if o.created_at.date() == day]
        if not orders:
            raise NotFoundEmpty("No orders found for the given filters.")
        return orders

    def delete(self, order_id: int) -> None:
        """Remove a cancelled order.

        Raises:
            NotFound: ``ORDER_NOT_FOUND``.
            ConflictError: ``ORDER_NOT_CANCELLED`` unless the status is
                ``CANCELADO``.
        """
        with self._store.lock:
            order = self.get(order_id)
            if order.status is not OrderStatus.CANCELADO:
                logger.warning(
                    "order delete refused",
                    extra={"order_id": order_id, "status": order.status.value},
                )
                raise ConflictError("ORDER_NOT_CANCELLED", "Only CANCELADO orders may be deleted.")
            self._store.remove(order_id)
        logger.info("order deleted", extra={"order_id": order_id})
