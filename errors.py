"""
Error kinds raised by the handlers and rendered by the API.

Each error is a FastAPI HTTPException carrying a short machine code next to
its message, so route code can keep raising exceptions the usual way.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException


class ApiError(HTTPException):
    status_code = 500
    code = "error"
    message = "Internal error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(status_code=self.status_code, detail=self.message)

    def to_payload(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.code}


class InvalidIdentifier(ApiError):
    status_code = 400
    code = "invalid_id"
    message = "Invalid id"


class ValidationFailed(ApiError):
    status_code = 400
    code = "validation_failed"

    def __init__(self, field: Optional[str], reason: str):
        self.field = field
        self.reason = reason
        super().__init__(reason)

    def to_payload(self) -> Dict[str, Any]:
        payload = super().to_payload()
        if self.field:
            payload["field"] = self.field
        return payload


class InvalidBody(ApiError):
    status_code = 400
    code = "invalid_body"
    message = "Invalid request body"


class Unauthenticated(ApiError):
    status_code = 401
    code = "unauthenticated"
    message = "Authentication required"


class Forbidden(ApiError):
    status_code = 403
    code = "forbidden"
    message = "Insufficient permissions"


class NotFound(ApiError):
    status_code = 404
    code = "not_found"
    message = "Not found"


class StoreUnavailable(ApiError):
    status_code = 500
    code = "store_unavailable"
    message = "Database error"
