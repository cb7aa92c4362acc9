"""Custom exceptions and helpers for consistent error responses."""

import json
from typing import Any, Dict


class AppError(Exception):
    """Base class for application errors."""

    retryable = False

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.status_code = status_code


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str = "Invalid input"):
        super().__init__(message, status_code=422)


class InvalidAmountError(ValidationError):
    """Paid booking with an amount that is not a finite number."""

    def __init__(self, message: str = "Amount must be a number"):
        super().__init__(message)


class InvalidReferenceError(AppError):
    """A record reference that cannot be a store key."""

    def __init__(self, message: str = "Malformed record reference"):
        super().__init__(message, status_code=400)


class UnresolvableApplicantError(AppError):
    """Booking points at an applicant that does not exist."""

    def __init__(self, message: str = "Applicant not found"):
        super().__init__(message, status_code=404)


class DuplicateIdentifierError(AppError):
    """Every generated pass id collided with an existing one."""

    def __init__(self, message: str = "Could not allocate a unique pass id"):
        super().__init__(message, status_code=409)


class StoreUnavailableError(AppError):
    """Transient storage failure; safe to retry."""

    retryable = True

    def __init__(self, message: str = "Store unavailable"):
        super().__init__(message, status_code=503)


class EncodingUnavailableError(StoreUnavailableError):
    """QR rendering did not finish in time."""

    def __init__(self, message: str = "QR encoding timed out"):
        super().__init__(message)


def json_response(status: int, body: Dict[str, Any]) -> Dict[str, Any]:
    """Format a JSON API Gateway HTTP API response."""
    return {
        "statusCode": status,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body, default=str),
    }


def to_response(error: AppError) -> Dict[str, Any]:
    """Convert an AppError into a Lambda proxy integration response."""
    body = {"success": False, "msg": str(error), "status": "error"}
    if error.retryable:
        body["retryable"] = True
    return json_response(error.status_code, body)
