"""Utility modules for VINQuoter functions."""

from utils.logging_config import configure_logging
from utils.quote_logger import (
    log_quote_generated,
    log_quote_failed,
)

__all__ = [
    "configure_logging",
    "log_quote_generated",
    "log_quote_failed",
]
