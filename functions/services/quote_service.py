"""
Quote Request Service for VINQuoter.

Handles a single "generate quote" request end to end:
1. Validates the VIN and resolves the labor rate
2. Decodes the VIN into a vehicle description (placeholder on failure)
3. Prices the mock repair catalog at the labor rate
4. Returns a structured QuoteResult with boundary totals
"""

import math
from typing import Any, Optional

import structlog

from config.errors import ErrorCode, ValidationError
from config.settings import settings
from models.quote import BoundaryTotals, QuoteResult
from services.pricing import seed_lines
from services.repair_catalog import get_mock_repairs
from services.vin_decoder import describe_vehicle

logger = structlog.get_logger(__name__)


MIN_VIN_LENGTH = 8
INVALID_VIN_MESSAGE = "Invalid VIN. Must be at least 8 characters."
INVALID_LABOR_RATE_MESSAGE = "Please enter a valid labor rate greater than 0."


def validate_vin(vin: Any) -> str:
    """
    Validate the minimal VIN format.

    Args:
        vin: Raw VIN value from the request (None counts as empty)

    Returns:
        VIN as a string, unmodified

    Raises:
        ValidationError: If the VIN is shorter than 8 characters
    """
    vin_str = "" if vin is None else str(vin)
    if len(vin_str) < MIN_VIN_LENGTH:
        raise ValidationError(
            message=INVALID_VIN_MESSAGE,
            field="vin",
            code=ErrorCode.INVALID_VIN,
        )
    return vin_str


def validate_labor_rate(rate: float) -> float:
    """
    Require a positive, finite labor rate.

    Used where a bad rate must be reported rather than defaulted.

    Raises:
        ValidationError: If the rate is zero, negative or not finite
    """
    if not math.isfinite(rate) or rate <= 0:
        raise ValidationError(
            message=INVALID_LABOR_RATE_MESSAGE,
            field="laborRate",
            code=ErrorCode.INVALID_LABOR_RATE,
        )
    return rate


def resolve_labor_rate(value: Any, default: Optional[float] = None) -> float:
    """
    Resolve the requested labor rate.

    Absent, non-numeric, non-finite, or non-positive values fall back to the
    configured default rate.
    """
    fallback = default if default is not None else settings.default_labor_rate

    if value is None or isinstance(value, bool):
        return fallback
    try:
        rate = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(rate) or rate <= 0:
        return fallback
    return rate


async def request_quote(vin: Any, labor_rate: Any = None) -> QuoteResult:
    """
    Generate a quote for a VIN.

    Args:
        vin: Vehicle identification number
        labor_rate: Requested labor rate (defaults applied when invalid)

    Returns:
        QuoteResult with priced mock repairs

    Raises:
        ValidationError: If the VIN is too short
    """
    vin_str = validate_vin(vin)
    rate = resolve_labor_rate(labor_rate)

    logger.info(
        "quote_request_received",
        vin_prefix=vin_str[:MIN_VIN_LENGTH],
        labor_rate=rate,
    )

    vehicle = await describe_vehicle(vin_str)
    repairs = seed_lines(get_mock_repairs(), rate)
    totals = BoundaryTotals.from_lines(repairs)

    logger.info(
        "quote_generated",
        vin_prefix=vin_str[:MIN_VIN_LENGTH],
        vehicle=vehicle,
        line_count=len(repairs),
        grand_total=round(totals.grand_total, 2),
    )

    return QuoteResult(
        vin=vin_str,
        vehicle=vehicle,
        repairs=repairs,
        totals=totals,
        labor_rate=rate,
    )
