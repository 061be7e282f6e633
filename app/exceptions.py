from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Service error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data is invalid or a precondition for a service call is not met.

    Covers missing required fields, non-positive quantities, duplicate unique
    keys (product_id, phone tail) and negative quantity overrides. http_status is 422.
    """

    http_status = 422
    default_message = "Invalid input"


class NotFoundError(ServiceError):
    """Raised when a referenced submission, ingredient or resource does not exist. http_status is 404."""

    http_status = 404
    default_message = "Not found"


class UnauthorizedError(ServiceError):
    """Raised when a privileged action is attempted without a valid organizer token. http_status is 401."""

    http_status = 401
    default_message = "Unauthorized"
