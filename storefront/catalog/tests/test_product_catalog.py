"""Unit tests for the product catalog."""

from decimal import Decimal

import pytest

from storefront.catalog.service import CategoryRegistry, ProductCatalog
from storefront.errors import NotFound, ValidationError


@pytest.fixture
def registry():
    return CategoryRegistry()


@pytest.fixture
def catalog(registry):
    return ProductCatalog(registry)


def test_create_requires_name_and_price(catalog):
    with pytest.raises(ValidationError) as e:
        catalog.create(None, 10)
    assert str(e.value) == "PRODUCT_NAME_REQUIRED"

    with pytest.raises(ValidationError) as e:
        catalog.create("Phone", None)
    assert str(e.value) == "PRODUCT_PRICE_REQUIRED"


def test_create_rejects_non_numeric_price(catalog):
    with pytest.raises(ValidationError) as e:
        catalog.create("Phone", "cheap")
    assert str(e.value) == "INVALID_PRICE"


@pytest.mark.parametrize("price", [float("nan"), "NaN", "Infinity", float("-inf")])
def test_non_finite_price_is_rejected(catalog, price):
    with pytest.raises(ValidationError) as e:
        catalog.create("Phone", price)
    assert str(e.value) == "INVALID_PRICE"

    p = catalog.create("Phone", 10)
    with pytest.raises(ValidationError):
        catalog.update(p.id, price=price)
    assert p.price == Decimal("10")


def test_create_links_category(catalog, registry):
    cat = registry.create("Electronics")
    p = catalog.create("Phone", 999.9, stock=3, category_id=cat.id)
    assert p.price == Decimal("999.9")
    assert registry.linked_products(cat.id) == {p.id}


def test_create_accepts_unknown_category_id(catalog, registry):
    p = catalog.create("Orphan", 1, category_id=77)
    assert p.category_id == 77
    assert registry.linked_products(77) == frozenset()


def test_update_applies_only_supplied_fields(catalog):
    p = catalog.create("Phone", 100, description="old", stock=5)
    catalog.update(p.id, price="120.50", stock=None, description=None)
    assert p.price == Decimal("120.50")
    assert p.stock == 5
    assert p.description == "old"


def test_update_unknown_product(catalog):
    with pytest.raises(NotFound):
        catalog.update(5, name="x")


def test_update_rejects_unknown_fields(catalog):
    p = catalog.create("Phone", 100)
    with pytest.raises(ValidationError) as e:
        catalog.update(p.id, colour="red")
    assert str(e.value) == "UNKNOWN_FIELDS"


def test_update_moves_category_link(catalog, registry):
    a = registry.create("Phones")
    b = registry.create("Gadgets")
    p = catalog.create("Phone", 100, category_id=a.id)

    catalog.update(p.id, category_id=b.id)

    assert registry.linked_products(a.id) == frozenset()
    assert registry.linked_products(b.id) == {p.id}
    registry.delete(a.id)


def test_search_is_case_insensitive_and_never_fails(catalog, registry):
    cat = registry.create("Electronics")
    catalog.create("Smart Phone", 1, category_id=cat.id)
    catalog.create("Phone Case", 2)
    catalog.create("Laptop", 3, category_id=cat.id)

    assert [p.name for p in catalog.find_by_name_contains("PHONE")] == ["Smart Phone", "Phone Case"]
    assert [p.name for p in catalog.find_by_category_contains("tronic")] == ["Smart Phone", "Laptop"]
    assert catalog.find_by_name_contains("tablet") == []
    assert catalog.find_by_category_contains("books") == []


def test_delete_unlinks_and_unknown_fails(catalog, registry):
    cat = registry.create("Electronics")
    p = catalog.create("Phone", 1, category_id=cat.id)
    catalog.delete(p.id)
    assert registry.linked_products(cat.id) == frozenset()

    with pytest.raises(NotFound) as e:
        catalog.delete(p.id)
    assert str(e.value) == "PRODUCT_NOT_FOUND"
