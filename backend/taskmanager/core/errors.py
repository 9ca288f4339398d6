"""
Application error taxonomy.
Services raise these; the FastAPI exception handlers registered in
taskmanager.main turn each kind into an HTTP status and a JSON body.
"""
from dataclasses import dataclass, asdict

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse


@dataclass(frozen=True)
class FieldError:
    """A single rejected input field."""
    field: str
    message: str


class AppError(Exception):
    """Base class for errors that map onto a client-facing status code."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "BAD_REQUEST"

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def to_detail(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(AppError):
    """Malformed, missing, or out-of-range input (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"

    def __init__(self, errors: list[FieldError], message: str = "Validation failed"):
        super().__init__(message)
        self.errors = list(errors)

    def to_detail(self) -> dict:
        detail = super().to_detail()
        detail["errors"] = [asdict(e) for e in self.errors]
        return detail


class ConflictError(AppError):
    """Duplicate username (409)."""

    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"


class UnauthorizedError(AppError):
    """Missing/invalid/expired token or rejected credentials (401)."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_INVALID_TOKEN"


class NotFoundError(AppError):
    """Task absent or owned by someone else; the two are not distinguished (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.to_detail()}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Framework-level parse failures (wrong types, unknown fields, bad UUIDs) share the 400 shape
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append(FieldError(field=".".join(loc) or "body", message=err.get("msg", "invalid value")))
    return await app_error_handler(request, ValidationError(errors))
