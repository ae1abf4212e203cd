"""HTTP routes for categories and products.

Routes are kept intentionally small: they parse the body (via Pydantic),
delegate to the catalog services, and shape the response. Domain errors
propagate to the handlers registered in ``storefront.main``.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from storefront.providers import get_category_registry, get_product_catalog

from .schemas import CategoryIn, CategoryOut, ProductIn, ProductOut
from .service import CategoryRegistry, ProductCatalog

categories_router = APIRouter(prefix="/api/v1/categoria", tags=["categorias"])
products_router = APIRouter(prefix="/api/v1/produto", tags=["produtos"])


# ---- Categories ----
@categories_router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(body: CategoryIn, registry: CategoryRegistry = Depends(get_category_registry)):
    return registry.create(body.name, body.description)


@categories_router.get("", response_model=List[CategoryOut])
def list_categories(registry: CategoryRegistry = Depends(get_category_registry)):
    return registry.list()


@categories_router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, registry: CategoryRegistry = Depends(get_category_registry)):
    return registry.get(category_id)


@categories_router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    body: CategoryIn,
    registry: CategoryRegistry = Depends(get_category_registry),
):
    return registry.update(category_id, name=body.name, description=body.description)


@categories_router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(category_id: int, registry: CategoryRegistry = Depends(get_category_registry)):
    registry.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---- Products ----
@products_router.post("", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(body: ProductIn, catalog: ProductCatalog = Depends(get_product_catalog)):
    return catalog.create(
        body.name,
        body.price,
        description=body.description,
        stock=body.stock,
        category_id=body.category_id,
        image=body.image,
    )


@products_router.get("", response_model=List[ProductOut])
def list_products(catalog: ProductCatalog = Depends(get_product_catalog)):
    return catalog.list()


@products_router.get("/buscar/nome/{name}", response_model=List[ProductOut])
def search_products_by_name(name: str, catalog: ProductCatalog = Depends(get_product_catalog)):
    return catalog.find_by_name_contains(name)


@products_router.get("/buscar/categoria/{category}", response_model=List[ProductOut])
def search_products_by_category(category: str, catalog: ProductCatalog = Depends(get_product_catalog)):
    return catalog.find_by_category_contains(category)


@products_router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, catalog: ProductCatalog = Depends(get_product_catalog)):
    return catalog.get(product_id)


@products_router.put("/{product_id}", response_model=ProductOut)
def update_product(product_id: int, body: ProductIn, catalog: ProductCatalog = Depends(get_product_catalog)):
    return catalog.update(product_id, **body.model_dump(exclude_none=True))


@products_router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: int, catalog: ProductCatalog = Depends(get_product_catalog)):
    catalog.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
