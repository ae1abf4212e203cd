"""Storefront API built with FastAPI.

This module wires the catalog, coupon and order routers, the gateway
middleware (request id, body size limit), JSON logging, and the mapping
from domain errors to HTTP responses:

- ``ValidationError`` -> 400
- ``NotFound`` and ``NotFoundEmpty`` -> 404
- ``ConflictError`` -> 409
- ``UpstreamUnavailable`` -> 503

Request bodies failing schema validation are answered with 400 as well.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from storefront import settings
from storefront.catalog.views import categories_router, products_router
from storefront.coupons.views import router as coupons_router
from storefront.errors import (
    ConflictError,
    NotFound,
    NotFoundEmpty,
    StorefrontError,
    UpstreamUnavailable,
    ValidationError,
)
from storefront.gateway.logging_filters import configure_logging
from storefront.gateway.middleware import add_request_id, limit_api_body_size
from storefront.orders.views import router as orders_router

logger = configure_logging(settings.LOG_LEVEL)

app = FastAPI(title="Storefront")

STATUS_BY_ERROR = (
    (ValidationError, 400),
    (NotFound, 404),
    (NotFoundEmpty, 404),
    (ConflictError, 409),
    (UpstreamUnavailable, 503),
)


@app.exception_handler(StorefrontError)
async def storefront_error_handler(_request: Request, exc: StorefrontError):
    status_code = next((code for kind, code in STATUS_BY_ERROR if isinstance(exc, kind)), 400)
    body = {"detail": exc.code}
    if exc.message:
        body["message"] = exc.message
    return JSONResponse(body, status_code=status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(_request: Request, exc: RequestValidationError):
    errors = [{"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]} for e in exc.errors()]
    return JSONResponse({"detail": errors}, status_code=400)


# Registered last runs first: request id wraps everything, including 413s
app.middleware("http")(limit_api_body_size)
app.middleware("http")(add_request_id)

app.include_router(categories_router)
app.include_router(products_router)
app.include_router(coupons_router)
app.include_router(orders_router)


@app.get("/health")
def health():
    """Liveness/health probe endpoint.

    Returns:
        dict: A small JSON payload indicating service health.
    """
    return {"ok": True}
