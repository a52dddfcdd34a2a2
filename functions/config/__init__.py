"""VINQuoter configuration.

This package contains:
- settings: Environment variables and configuration
- errors: Custom exceptions and error codes
"""

from config.settings import settings
from config.errors import VinQuoterError, ValidationError, QuoteRequestError, ErrorCode

__all__ = [
    "settings",
    "VinQuoterError",
    "ValidationError",
    "QuoteRequestError",
    "ErrorCode",
]
