"""
Exception handlers producing the API's error shape.

Every failure response has the body ``{"error": <message>}``:

* ``HTTPException`` raised by endpoints keeps its status code and
  uses its ``detail`` as the message.
* Request validation failures (malformed JSON, a non‑integer id) are
  reported as 400 with the first validation message.
* Any other exception is reported as 500 with the exception message.
"""

import json
import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _to_str(x: Any) -> str:
    if isinstance(x, (bytes, bytearray)):
        return x.decode("utf-8", "replace")
    return str(x)


async def _http_exc_to_json(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    detail: Any = exc.detail
    try:
        json.dumps(detail)
    except (TypeError, ValueError):
        detail = _to_str(detail)
    return JSONResponse({"error": detail}, status_code=exc.status_code, headers=exc.headers)


async def _validation_exc_to_json(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request")
        if location:
            message = f"{location}: {message}"
    else:
        message = "Invalid request"
    return JSONResponse({"error": message}, status_code=400)


async def _unexpected_exc(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse({"error": _to_str(exc)}, status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the JSON error handlers to ``app``."""
    app.add_exception_handler(StarletteHTTPException, _http_exc_to_json)
    app.add_exception_handler(RequestValidationError, _validation_exc_to_json)
    app.add_exception_handler(Exception, _unexpected_exc)
