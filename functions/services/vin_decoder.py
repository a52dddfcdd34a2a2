"""
VIN Decoder Service for VINQuoter.

Turns a VIN into a human-readable vehicle description using the NHTSA vPIC
"DecodeVinValuesExtended" endpoint.

Architecture:
- Single GET per VIN, no retries
- Description built from ModelYear / Make / Model plus an engine hint
- Graceful fallback to a placeholder description on any failure

API Details:
- Endpoint: https://vpic.nhtsa.dot.gov/api/vehicles/DecodeVinValuesExtended/{vin}?format=json
- No API key required
- Unknown fields come back as empty strings
"""

from typing import Any, Dict, Optional
from urllib.parse import quote
import time

import httpx
import structlog

from config.settings import settings

logger = structlog.get_logger(__name__)


# Engine hint fields, in order of preference
ENGINE_FIELDS = ("EngineModel", "EngineConfiguration", "EngineCylinders")

PLACEHOLDER_PREFIX_LENGTH = 8


def placeholder_description(vin: str) -> str:
    """Description used when the VIN cannot be decoded."""
    return f"Mock Heavy-Duty Vehicle for VIN {vin[:PLACEHOLDER_PREFIX_LENGTH]}..."


def build_decode_url(vin: str, base_url: Optional[str] = None) -> str:
    """
    Build the vPIC decode URL for a VIN.

    Args:
        vin: Vehicle identification number (URL-encoded here)
        base_url: Override for the decode endpoint (defaults to settings)

    Returns:
        Full request URL without query string
    """
    base = (base_url or settings.vin_decode_url).rstrip("/")
    return f"{base}/{quote(vin, safe='')}"


def _field(row: Dict[str, Any], name: str) -> str:
    value = row.get(name)
    if value is None:
        return ""
    return str(value).strip()


def parse_vehicle_description(payload: Any) -> Optional[str]:
    """
    Build a vehicle description from a vPIC response body.

    Args:
        payload: Parsed JSON body

    Returns:
        "{year} {make} {model} ({engine})" with empty parts dropped,
        or None when nothing usable is present
    """
    if not isinstance(payload, dict):
        return None

    results = payload.get("Results")
    if not isinstance(results, list) or not results:
        return None

    row = results[0]
    if not isinstance(row, dict):
        return None

    pieces = " ".join(
        piece for piece in (_field(row, "ModelYear"), _field(row, "Make"), _field(row, "Model")) if piece
    )
    engine = next((_field(row, name) for name in ENGINE_FIELDS if _field(row, name)), "")

    description = f"{pieces} ({engine})" if engine else pieces
    return description or None


async def _fetch_vin_data(vin: str, timeout: float) -> Dict:
    """
    Fetch raw decode data from vPIC.

    Raises:
        httpx.HTTPError: On transport errors or non-success status
        ValueError: If the body is not JSON
    """
    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.get(build_decode_url(vin), params={"format": "json"})
        response.raise_for_status()
        return response.json()


async def describe_vehicle(vin: str, timeout: Optional[float] = None) -> str:
    """
    Describe a vehicle by VIN.

    Never raises: network errors, non-success statuses, and malformed payloads
    all fall back to placeholder_description().

    Args:
        vin: Vehicle identification number
        timeout: Request timeout in seconds (defaults to settings)

    Returns:
        Decoded description or placeholder
    """
    start_time = time.perf_counter()
    timeout = timeout or settings.vin_decode_timeout_seconds

    try:
        payload = await _fetch_vin_data(vin, timeout)
    except (httpx.HTTPError, ValueError) as e:
        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.warning(
            "vin_decode_failed",
            vin_prefix=vin[:PLACEHOLDER_PREFIX_LENGTH],
            error=str(e),
            error_type=type(e).__name__,
            latency_ms=round(latency_ms, 2),
        )
        return placeholder_description(vin)

    description = parse_vehicle_description(payload)
    latency_ms = (time.perf_counter() - start_time) * 1000

    if description is None:
        logger.warning(
            "vin_decode_empty",
            vin_prefix=vin[:PLACEHOLDER_PREFIX_LENGTH],
            latency_ms=round(latency_ms, 2),
        )
        return placeholder_description(vin)

    logger.info(
        "vin_decode_success",
        vin_prefix=vin[:PLACEHOLDER_PREFIX_LENGTH],
        vehicle=description,
        latency_ms=round(latency_ms, 2),
    )
    return description
