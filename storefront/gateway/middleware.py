"""HTTP middleware that assigns request identifiers and limits body size.

Every incoming request receives a request identifier. It is read from the
incoming ``X-Request-ID`` header when provided by the client, or generated
server-side otherwise. The id is stored on ``request.state``, in a context
variable so code running downstream (services, HTTP adapters, log filters)
can read it without passing it explicitly, and echoed back in the
``X-Request-ID`` response header.
"""

import contextvars
import logging
import uuid

from fastapi import Request
from fastapi.responses import JSONResponse

from storefront import settings

REQUEST_ID_CTX = contextvars.ContextVar("request_id", default="-")
HEADER = "X-Request-ID"

logger = logging.getLogger("storefront.gateway")


async def add_request_id(request: Request, call_next):
    rid = request.headers.get(HEADER) or str(uuid.uuid4())
    request.state.request_id = rid
    token = REQUEST_ID_CTX.set(rid)
    try:
        response = await call_next(request)
    finally:
        logger.info("request handled", extra={"path": request.url.path, "method": request.method})
        REQUEST_ID_CTX.reset(token)
    response.headers[HEADER] = rid
    return response


async def limit_api_body_size(request: Request, call_next):
    if request.url.path.startswith("/api/"):
        clen = request.headers.get("content-length")
        if clen and clen.isdigit() and int(clen) > settings.API_MAX_BYTES:
            return JSONResponse({"detail": "PAYLOAD_TOO_LARGE"}, status_code=413)
    return await call_next(request)
