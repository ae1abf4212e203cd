"""Category registry and product catalog services.

``CategoryRegistry`` owns categories and the product-category relationship
table. ``ProductCatalog`` owns products and is the only caller of the
registry's ``link_product``/``unlink_product``; it holds its own lock while
linking so a product write and its link change are one critical section.
Lock order is always products -> categories.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import List

from storefront.errors import ConflictError, NotFound, NotFoundEmpty, ValidationError
from storefront.store import EntityStore

from .domain import Category, Product

logger = logging.getLogger("storefront.catalog")


def _blank(value: str | None) -> bool:
    return value is None or not str(value).strip()


class CategoryRegistry:
    """Registry of categories and their linked-product sets."""

    def __init__(self):
        self._store: EntityStore[Category] = EntityStore("categories")
        self._links: dict[int, set[int]] = {}

    def create(self, name: str | None, description: str | None = None) -> Category:
        """Register a new category.

        Raises:
            ValidationError: ``CATEGORY_NAME_REQUIRED`` when the name is
                missing or blank.
        """
        if _blank(name):
            raise ValidationError("CATEGORY_NAME_REQUIRED", "The 'name' field is required.")

        with self._store.lock:
            category = self._store.add(lambda cid: Category(id=cid, name=name, description=description))
            self._links[category.id] = set()
        logger.info("category created", extra={"category_id": category.id})
        return category

    def get(self, category_id: int) -> Category:
        category = self._store.get(category_id)
        if category is None:
            raise NotFound("CATEGORY_NOT_FOUND", f"Category {category_id} not found.")
        return category

    def find(self, category_id: int) -> Category | None:
        return self._store.get(category_id)

    def list(self) -> List[Category]:
        categories = self._store.all()
        if not categories:
            raise NotFoundEmpty("No categories found.")
        return categories

    def update(self, category_id: int, name: str | None = None, description: str | None = None) -> Category:
        """Edit name and/or description; blank names are ignored."""
        with self._store.lock:
            category = self.get(category_id)
            if not _blank(name):
                category.name = name
            if description is not None:
                category.description = description
            return category

    def delete(self, category_id: int) -> None:
        """Remove a category that no product references.

        Raises:
            NotFound: ``CATEGORY_NOT_FOUND`` if the id is unknown.
            ConflictError: ``CATEGORY_HAS_LINKED_PRODUCTS`` while any
                product still references the category.
        """
        with self._store.lock:
            self.get(category_id)
            if self._links.get(category_id):
                logger.warning("category delete refused", extra={"category_id": category_id})
                raise ConflictError(
                    "CATEGORY_HAS_LINKED_PRODUCTS",
                    "Cannot delete category with linked products.",
                )
            self._store.remove(category_id)
            self._links.pop(category_id, None)
        logger.info("category deleted", extra={"category_id": category_id})

    # ---- Relationship table ----
    def link_product(self, category_id: int, product_id: int) -> None:
        with self._store.lock:
            linked = self._links.get(category_id)
            if linked is not None:
                linked.add(product_id)

    def unlink_product(self, category_id: int, product_id: int) -> None:
        with self._store.lock:
            linked = self._links.get(category_id)
            if linked is not None:
                linked.discard(product_id)

    def linked_products(self, category_id: int) -> frozenset[int]:
        with self._store.lock:
            return frozenset(self._links.get(category_id, ()))


class ProductCatalog:
    """Product records, each optionally linked to one category."""

    UPDATABLE = ("name", "price", "description", "stock", "image", "category_id")

    def __init__(self, categories: CategoryRegistry):
        self.categories = categories
        self._store: EntityStore[Product] = EntityStore("products")

    def create(
        self,
        name: str | None,
        price,
        description: str | None = None,
        stock: int | None = None,
        category_id: int | None = None,
        image: str | None = None,
    ) -> Product:
        """Add a product and register its category link.

        The category id is not checked for existence; linking to an unknown
        category is a no-op in the registry.

        Raises:
            ValidationError: ``PRODUCT_NAME_REQUIRED`` or
                ``PRODUCT_PRICE_REQUIRED`` when either is missing, or
                ``INVALID_PRICE`` when the price is not numeric.
        """
        if _blank(name):
            raise ValidationError("PRODUCT_NAME_REQUIRED", "The 'name' field is required.")
        if price is None:
            raise ValidationError("PRODUCT_PRICE_REQUIRED", "The 'price' field is required.")
        price = self._to_price(price)

        with self._store.lock:
            product = self._store.add(
                lambda pid: Product(
                    id=pid,
                    name=name,
                    price=price,
                    description=description,
                    stock=stock,
                    image=image,
                    category_id=category_id,
                )
            )
            if category_id is not None:
                self.categories.link_product(category_id, product.id)
        logger.info("product created", extra={"product_id": product.id, "category_id": category_id})
        return product

    def get(self, product_id: int) -> Product:
        product = self._store.get(product_id)
        if product is None:
            raise NotFound("PRODUCT_NOT_FOUND", f"Product {product_id} not found.")
        return product

    def find(self, product_id: int) -> Product | None:
        return self._store.get(product_id)

    def list(self) -> List[Product]:
        return self._store.all()

    def update(self, product_id: int, **fields) -> Product:
        """Apply the non-None fields in ``fields`` to a product.

        A new ``category_id`` moves the product's link from the old
        category to the new one.
        """
        unknown = set(fields) - set(self.UPDATABLE)
        if unknown:
            raise ValidationError("UNKNOWN_FIELDS", ", ".join(sorted(unknown)))
        changes = {k: v for k, v in fields.items() if v is not None}
        if "price" in changes:
            changes["price"] = self._to_price(changes["price"])
        if "name" in changes and _blank(changes["name"]):
            del changes["name"]

        with self._store.lock:
            product = self.get(product_id)
            new_category = changes.get("category_id")
            if new_category is not None and new_category != product.category_id:
                if product.category_id is not None:
                    self.categories.unlink_product(product.category_id, product.id)
                self.categories.link_product(new_category, product.id)
            for key, value in changes.items():
                setattr(product, key, value)
            return product

    def find_by_name_contains(self, text: str) -> List[Product]:
        needle = (text or "").casefold()
        return [p for p in self._store.all() if needle in p.name.casefold()]

    def find_by_category_contains(self, text: str) -> List[Product]:
        needle = (text or "").casefold()
        out = []
        for product in self._store.all():
            label = self._category_label(product)
            if label is not None and needle in label.casefold():
                out.append(product)
        return out

    def delete(self, product_id: int) -> None:
        with self._store.lock:
            product = self._store.remove(product_id)
            if product is None:
                raise NotFound("PRODUCT_NOT_FOUND", f"Product {product_id} not found.")
            if product.category_id is not None:
                self.categories.unlink_product(product.category_id, product.id)
        logger.info("product deleted", extra={"product_id": product_id})

    def _category_label(self, product: Product) -> str | None:
        if product.category_id is None:
            return None
        category = self.categories.find(product.category_id)
        return category.name if category else str(product.category_id)

    @staticmethod
    def _to_price(value) -> Decimal:
        try:
            price = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise ValidationError("INVALID_PRICE", "The 'price' field must be numeric.")
        if not price.is_finite():
            raise ValidationError("INVALID_PRICE", "The 'price' field must be a finite number.")
        return price
