"""Error taxonomy and the JSON error envelope.

Route handlers raise these; ``register_exception_handlers`` turns them into
``{"message": ..., "error": ...}`` responses with the matching status code.
"""
import logging
from typing import Any, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class CRMError(Exception):
    """Base exception for the CRM backend."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body: dict[str, Any] = {"message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class Unauthenticated(CRMError):
    """Missing, invalid or expired token, or unknown/inactive user."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Please authenticate"


class Forbidden(CRMError):
    """Role or ownership check failed."""
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFound(CRMError):
    """No document with the requested id."""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class InvalidUpdate(CRMError):
    """Submitted field outside the entity allow-list."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid updates"


class DuplicateResource(CRMError):
    """Unique field collision (e.g. email)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource already exists"


class ResourceInUse(CRMError):
    """Delete refused because another record still references the resource."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Resource is in use"


class ValidationFailed(CRMError):
    """Entity failed validation; carries the list of violations."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"

    def __init__(self, violations: List[dict], message: Optional[str] = None):
        super().__init__(message)
        self.violations = violations

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["violations"] = self.violations
        return body


def register_exception_handlers(app: FastAPI, expose_error_details: bool = False) -> None:
    """Map the taxonomy (and anything unexpected) onto the error envelope."""

    @app.exception_handler(CRMError)
    async def crm_error_handler(request: Request, exc: CRMError):
        headers = None
        if isinstance(exc, Unauthenticated):
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        violations = [
            {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Validation failed", "violations": violations},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception(
            "Unhandled error",
            extra={"path": request.url.path, "method": request.method, "type": type(exc).__name__},
        )
        body = {"message": "Server error"}
        if expose_error_details:
            body["error"] = str(exc)
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body)
