import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException

from app.core.exceptions import InventoryLedgerError
from app.schemas.response import ErrorResponse

log = logging.getLogger("uvicorn")


def _error_response(status_code: int, code: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=str(message), code=code, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body, exclude_none=True))


# ----------- Exception Handlers (called by FastAPI) -----------

def ledger_exception_handler(request: Request, exc: InventoryLedgerError):
    """Handles typed ledger errors (not found, insufficient stock, busy, ...)."""
    return _error_response(exc.status_code, exc.code, exc.message)


def http_exception_handler(request: Request, exc: HTTPException):
    """Handles exceptions raised by HTTPException (e.g., 404, 400)."""
    return _error_response(exc.status_code, "http_error", exc.detail)


def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handles Pydantic validation errors. Malformed input is a 400 like any other invalid request."""
    return _error_response(400, "validation_error", "Invalid input data", details=jsonable_encoder(exc.errors()))


def generic_exception_handler(request: Request, exc: Exception):
    """Handles all unhandled exceptions (500 Internal Server Error)."""
    log.error(f"Unhandled exception on path: {request.url.path}", exc_info=exc)
    return _error_response(500, "server_error", "Internal Server Error")


# ----------- Registration Function -----------

def setup_exception_handlers(app: FastAPI):
    """Registers all custom exception handlers with the FastAPI application."""

    app.add_exception_handler(InventoryLedgerError, ledger_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    return app
