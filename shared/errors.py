"""
Shared error handling for the Pokemon Fusion API.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, Field

from shared.logging import get_request_id


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class FusionServiceException(Exception):
    """Base exception for Pokemon Fusion services."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=get_request_id(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class NotFoundError(FusionServiceException):
    """A requested resource does not exist."""

    status_code = 404

    def __init__(self, message: str = "Resource not found", details: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_FOUND", message, details)


class UpstreamFetchError(FusionServiceException):
    """
    The upstream data source could not produce a record.

    Covers network failures, non-2xx responses and bodies that are not a
    JSON object. Lookup handlers treat this as an absent record.
    """

    status_code = 502

    def __init__(self, service: str, message: str = "Upstream fetch failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("UPSTREAM_FETCH_ERROR", f"{service}: {message}", details)
