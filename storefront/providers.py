"""Service provider helpers for wiring the storefront components.

``build_services`` assembles one instance of every component around a
shared clock. The order service gets the HTTP customer client when
``settings.USE_HTTP_ADAPTERS`` is truthy, and the in-process customer
directory stub otherwise (tests, local development).

The request layer uses the process-wide instance returned by
``get_services``; ``reset_services`` drops it so the next call starts
from empty collections.
"""

import threading
from dataclasses import dataclass

from storefront import settings
from storefront.catalog.service import CategoryRegistry, ProductCatalog
from storefront.clock import Clock, SystemClock
from storefront.coupons.service import CouponLedger
from storefront.orders.adapters import CatalogProductResolver, CustomerDirectoryStub
from storefront.orders.domain import CustomerResolver
from storefront.orders.http_adapters import HttpCustomerClient
from storefront.orders.service import OrderService


@dataclass
class Services:
    clock: Clock
    categories: CategoryRegistry
    products: ProductCatalog
    coupons: CouponLedger
    customers: CustomerResolver
    orders: OrderService


def build_services(clock: Clock | None = None, customers: CustomerResolver | None = None) -> Services:
    """Return a freshly wired set of services.

    Args:
        clock: Clock shared by coupons and orders; the system clock by default.
        customers: Customer resolver override; chosen from settings when None.
    """
    clock = clock or SystemClock()
    if customers is None:
        if settings.USE_HTTP_ADAPTERS:
            customers = HttpCustomerClient()
        else:
            customers = CustomerDirectoryStub()

    categories = CategoryRegistry()
    products = ProductCatalog(categories)
    return Services(
        clock=clock,
        categories=categories,
        products=products,
        coupons=CouponLedger(clock),
        customers=customers,
        orders=OrderService(customers, CatalogProductResolver(products), clock),
    )


_lock = threading.Lock()
_services: Services | None = None


def get_services() -> Services:
    global _services
    with _lock:
        if _services is None:
            _services = build_services()
        return _services


def reset_services() -> None:
    global _services
    with _lock:
        _services = None


# FastAPI dependencies
def get_category_registry() -> CategoryRegistry:
    return get_services().categories


def get_product_catalog() -> ProductCatalog:
    return get_services().products


def get_coupon_ledger() -> CouponLedger:
    return get_services().coupons


def get_order_service() -> OrderService:
    return get_services().orders
