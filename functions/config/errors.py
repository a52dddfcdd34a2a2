"""VINQuoter error handling.

Custom exceptions and error codes for the quote boundary and client.
"""

from typing import Optional, Dict, Any


# Error Codes
class ErrorCode:
    """Error code constants."""

    # Validation Errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_VIN = "INVALID_VIN"
    INVALID_LABOR_RATE = "INVALID_LABOR_RATE"

    # Quote Request Errors
    QUOTE_TRANSPORT_ERROR = "QUOTE_TRANSPORT_ERROR"
    QUOTE_TIMEOUT = "QUOTE_TIMEOUT"
    QUOTE_BAD_STATUS = "QUOTE_BAD_STATUS"
    QUOTE_INVALID_RESPONSE = "QUOTE_INVALID_RESPONSE"

    # Server Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class VinQuoterError(Exception):
    """Base exception for VINQuoter errors.

    Provides structured error information for API responses.

    Attributes:
        code: Error code from ErrorCode constants
        message: Human-readable error message
        details: Additional error context
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for API response.

        Returns:
            Dictionary with code, message, and details.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(VinQuoterError):
    """Validation-specific error."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: str = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "field": field} if field else details
        )
        self.field = field


class QuoteRequestError(VinQuoterError):
    """Raised when the quote boundary cannot be reached or answers badly."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            details={**(details or {}), "status_code": status_code} if status_code else details
        )
        self.status_code = status_code
