import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import DataError, OperationalError

logger = logging.getLogger(__name__)

# Locations FastAPI prefixes to every validation error
_REQUEST_PARTS = {"body", "query", "path", "header", "cookie"}


class NotFoundError(Exception):
    """A referenced row does not exist."""

    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")


class ConstraintError(Exception):
    """The store rejected a write (foreign key, unique or check constraint)."""


def format_validation_errors(errors) -> list[dict]:
    """
    Flattens pydantic errors into [{"field": ..., "message": ...}].
    Every violation is kept, in the order pydantic reported them.
    """
    formatted = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if len(loc) > 1 and loc[0] in _REQUEST_PARTS:
            loc = loc[1:]
        msg = err.get("msg", "")
        # Custom ValueErrors come through as "Value error, <message>"
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        formatted.append({"field": ".".join(loc), "message": msg})
    return formatted


def _validation_response(errors) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Validation failed", "errors": format_validation_errors(errors)},
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _validation_response(exc.errors())


async def pydantic_validation_handler(request: Request, exc: ValidationError):
    return _validation_response(exc.errors())


async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning("%s %s -> %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})


async def constraint_handler(request: Request, exc: ConstraintError):
    logger.warning("%s %s -> constraint violation: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})


async def data_error_handler(request: Request, exc: DataError):
    # Values the column type cannot hold (out of range, bad encoding)
    logger.warning("%s %s -> rejected by the store: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid value for the database column"},
    )


async def database_unavailable_handler(request: Request, exc: OperationalError):
    logger.error("%s %s -> database unavailable: %s", request.method, request.url.path, exc.orig)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Database unavailable"},
    )


async def unhandled_error_handler(request: Request, exc: Exception):
    # Starlette re-raises after this response, so the server logs the traceback
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(ConstraintError, constraint_handler)
    app.add_exception_handler(DataError, data_error_handler)
    app.add_exception_handler(OperationalError, database_unavailable_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
