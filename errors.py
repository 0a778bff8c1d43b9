"""Error types raised by the query layer and mapped to HTTP responses in main."""

from typing import Any, Dict, List, Optional


class ApiError(Exception):
    """Base error carrying the HTTP status and the client-facing message."""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def payload(self) -> Dict[str, Any]:
        return {"success": False, "error": self.message}


class RequestValidationFailed(ApiError):
    """Malformed or out-of-range request input."""

    status_code = 400

    def __init__(self, details: List[Dict[str, Any]]):
        super().__init__("Validation failed")
        self.details = details

    def payload(self) -> Dict[str, Any]:
        data = super().payload()
        data["details"] = self.details
        return data


class NotFoundError(ApiError):
    status_code = 404


class StoreError(ApiError):
    """The document store failed to serve a read.

    The client only ever sees "Database error"; ``detail`` keeps the
    underlying message for logs and development responses.
    """

    status_code = 500

    def __init__(self, detail: str):
        super().__init__("Database error")
        self.detail = detail
