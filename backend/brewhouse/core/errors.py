# brewhouse/core/errors.py

"""
Domain errors.

Every service raises one of the variants below; the API layer renders them
with a single exception handler as::

    {"error": "Conflict", "message": "...", "field": null}
"""

from typing import Any, Dict, Iterable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


class BrewhouseError(Exception):
    status_code = 500

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field

    @property
    def kind(self) -> str:
        return type(self).__name__

    def as_dict(self) -> Dict[str, Any]:
        return {"error": self.kind, "message": self.message, "field": self.field}


class ValidationError(BrewhouseError):
    status_code = 400


class NotFound(BrewhouseError):
    status_code = 404


class Conflict(BrewhouseError):
    status_code = 409


class DuplicateBatch(BrewhouseError):
    status_code = 409


class Unauthorized(BrewhouseError):
    status_code = 401


def reject_nulls(changes: Dict[str, Any], fields: Iterable[str]) -> None:
    """
    Partial updates may omit a required column but not set it to null.
    """
    for field in fields:
        if field in changes and changes[field] is None:
            raise ValidationError(f"{field} must not be null", field=field)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BrewhouseError)
    async def handle_brewhouse_error(request: Request, exc: BrewhouseError):
        return JSONResponse(status_code=exc.status_code, content=exc.as_dict())

    # malformed bodies (bad dates, unknown enum values) get the same shape, status 422
    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body") or None
        return JSONResponse(
            status_code=422,
            content={
                "error": "ValidationError",
                "message": first.get("msg", "Invalid request"),
                "field": field,
            },
        )
