"""Pytest configuration and shared fixtures for VINQuoter tests."""

import os
import sys
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from typing import Dict, Any


# ============================================================================
# Ensure local imports work (config/, models/, services/, utils/)
# ============================================================================
#
# Our codebase uses absolute imports like `from models...` / `from services...`.
# This guarantees that `functions/` is importable as the top-level module root.
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


# ============================================================================
# Settings
# ============================================================================


@pytest.fixture(autouse=True)
def mock_settings():
    """Pin settings for all tests."""
    from config.settings import settings

    with patch.multiple(
        settings,
        default_labor_rate=165.0,
        default_shop_name="VINQuoter Demo Shop",
        vin_decode_url="https://vpic.test/api/vehicles/DecodeVinValuesExtended",
        vin_decode_timeout_seconds=5.0,
        quote_api_base_url="http://localhost:5002",
        quote_api_timeout_seconds=30.0,
        log_level="INFO",
    ):
        yield settings


# ============================================================================
# Quote Data
# ============================================================================


@pytest.fixture
def sample_vin():
    """VIN-like string long enough to pass validation."""
    return "1HTMKADN43H561234"


@pytest.fixture
def sample_lines():
    """Two priced lines: labor 100/50, parts 20/10."""
    from models.quote import RepairLine

    return [
        RepairLine(operation="Brake Adjustment", srt_hours=1.0, labor_rate=100.0, parts_cost=20.0),
        RepairLine(operation="Wiper Blades", srt_hours=0.5, labor_rate=100.0, parts_cost=10.0),
    ]


@pytest.fixture
def sample_quote_result(sample_vin):
    """QuoteResult as produced by the quote service at $165/hr."""
    from models.quote import BoundaryTotals, QuoteResult
    from services.pricing import seed_lines
    from services.repair_catalog import get_mock_repairs

    repairs = seed_lines(get_mock_repairs(), 165.0)
    return QuoteResult(
        vin=sample_vin,
        vehicle="2003 INTERNATIONAL 4000 Series (DT 466)",
        repairs=repairs,
        totals=BoundaryTotals.from_lines(repairs),
        labor_rate=165.0,
    )


@pytest.fixture
def vpic_payload() -> Dict[str, Any]:
    """Trimmed vPIC DecodeVinValuesExtended response."""
    return {
        "Count": 1,
        "Message": "Results returned successfully",
        "SearchCriteria": "VIN:1HTMKADN43H561234",
        "Results": [
            {
                "ModelYear": "2003",
                "Make": "INTERNATIONAL",
                "Model": "4000 Series",
                "EngineModel": "DT 466",
                "EngineConfiguration": "In-Line",
                "EngineCylinders": "6",
            }
        ],
    }


# ============================================================================
# httpx Mocks
# ============================================================================


@pytest.fixture
def mock_httpx_client():
    """Patch httpx.AsyncClient; yields the inner client used inside `async with`."""
    with patch("httpx.AsyncClient") as mock_client_cls:
        inner = MagicMock()
        inner.get = AsyncMock()
        inner.post = AsyncMock()
        mock_client_cls.return_value.__aenter__.return_value = inner
        mock_client_cls.return_value.__aexit__.return_value = False
        yield inner


def make_response(json_data: Any = None, status_code: int = 200, json_error: Exception = None) -> MagicMock:
    """Build a MagicMock shaped like an httpx.Response."""
    import httpx

    response = MagicMock()
    response.status_code = status_code
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data

    if status_code >= 400:
        request = httpx.Request("GET", "https://example.test")
        real_response = httpx.Response(status_code, request=request)
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            f"HTTP {status_code}", request=request, response=real_response
        )
    else:
        response.raise_for_status = MagicMock()
    return response


@pytest.fixture
def response_factory():
    """Expose make_response() to tests."""
    return make_response
