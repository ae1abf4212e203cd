"""In-process adapters for the orders domain ports.

``CatalogProductResolver`` reads products straight from the product
catalog. ``CustomerDirectoryStub`` implements ``CustomerResolver`` without
any network calls; it is intended for unit tests and local development
where the external user service is not available.
"""

from typing import Any, Mapping

from storefront.catalog.service import ProductCatalog

from .domain import CustomerResolver, ProductResolver


def _as_int(raw: Any) -> int | None:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


class CatalogProductResolver(ProductResolver):
    """``ProductResolver`` backed by the in-process ``ProductCatalog``."""

    def __init__(self, catalog: ProductCatalog):
        self.catalog = catalog

    def resolve(self, product_id: Any) -> dict | None:
        pid = _as_int(product_id)
        if pid is None:
            return None
        product = self.catalog.find(pid)
        return product.to_dict() if product else None


class CustomerDirectoryStub(CustomerResolver):
    """Stub implementation of ``CustomerResolver``.

    Holds customer records keyed by id. Records may carry credential
    fields; the order service strips them before embedding a customer.
    """

    def __init__(self, customers: Mapping[Any, Mapping[str, Any]] | None = None):
        self._customers: dict[str, dict] = {}
        for cid, record in (customers or {}).items():
            self.add(cid, record)

    def add(self, customer_id: Any, record: Mapping[str, Any]) -> None:
        self._customers[str(customer_id)] = {"id": customer_id, **record}

    def resolve(self, customer_id: Any) -> dict | None:
        record = self._customers.get(str(customer_id))
        return dict(record) if record else None
