# backend/utils/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

# Location prefixes FastAPI puts in front of the field name
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}


def first_error(errors) -> dict:
    """Message and dotted field path of the first validation error."""
    err = errors[0]
    loc = [str(part) for part in err.get("loc", ())]
    field = ".".join(loc[1:] if loc and loc[0] in _LOC_SOURCES else loc)
    # Missing or non-object body: name the body itself
    if not field and loc:
        field = loc[0]
    return {"message": err.get("msg", "Invalid input"), "field": field}


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    body = first_error(exc.errors())
    logger.info(f"Rejected {request.method} {request.url.path}: {body['field']}: {body['message']}")
    return JSONResponse(status_code=400, content=body)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=getattr(exc, "headers", None))


def register_exception_handlers(app: FastAPI):
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
