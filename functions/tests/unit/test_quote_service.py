"""Unit tests for the quote request service."""

import pytest
from unittest.mock import AsyncMock, patch

from config.errors import ErrorCode, ValidationError
from services.quote_service import (
    INVALID_LABOR_RATE_MESSAGE,
    INVALID_VIN_MESSAGE,
    request_quote,
    resolve_labor_rate,
    validate_labor_rate,
    validate_vin,
)
from services.repair_catalog import MOCK_REPAIR_CATALOG, get_mock_repairs


class TestValidateVin:
    """Tests for VIN validation."""

    def test_valid_vin_returned_unchanged(self):
        assert validate_vin("1HTMKADN") == "1HTMKADN"

    def test_scenario_d_seven_characters(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_vin("1HTMKAD")

        assert exc_info.value.message == INVALID_VIN_MESSAGE == "Invalid VIN. Must be at least 8 characters."
        assert exc_info.value.code == ErrorCode.INVALID_VIN
        assert exc_info.value.details == {"field": "vin"}

    @pytest.mark.parametrize("vin", [None, "", "   "])
    def test_empty_values_rejected(self, vin):
        with pytest.raises(ValidationError):
            validate_vin(vin)

    def test_non_string_is_stringified(self):
        assert validate_vin(123456789) == "123456789"


class TestValidateLaborRate:
    """Tests for strict labor rate validation."""

    def test_positive_rate_returned(self):
        assert validate_labor_rate(180.5) == 180.5

    @pytest.mark.parametrize("rate", [0.0, -5.0, float("nan"), float("inf")])
    def test_rejected_rates(self, rate):
        with pytest.raises(ValidationError) as exc_info:
            validate_labor_rate(rate)

        assert exc_info.value.code == ErrorCode.INVALID_LABOR_RATE
        assert exc_info.value.message == INVALID_LABOR_RATE_MESSAGE
        assert exc_info.value.details == {"field": "laborRate"}


class TestResolveLaborRate:
    """Tests for labor rate defaulting."""

    @pytest.mark.parametrize("value,expected", [(200, 200.0), ("180.5", 180.5), (0.01, 0.01)])
    def test_valid_rates(self, value, expected):
        assert resolve_labor_rate(value) == expected

    @pytest.mark.parametrize("value", [None, 0, -50, "abc", "", True, float("nan"), float("inf"), [], {}])
    def test_invalid_rates_use_default(self, value):
        assert resolve_labor_rate(value) == 165.0

    def test_explicit_default(self):
        assert resolve_labor_rate(None, default=99.0) == 99.0

    def test_default_follows_settings(self, mock_settings):
        mock_settings.default_labor_rate = 150.0
        assert resolve_labor_rate(-1) == 150.0


class TestRepairCatalog:
    """Tests for the mock repair catalog."""

    def test_three_fixed_operations(self):
        repairs = get_mock_repairs()

        assert [(r.operation, r.srt_hours, r.parts_cost) for r in repairs] == [
            ("Aftertreatment DPF Cleaning", 3.5, 450),
            ("NOx Sensor Replacement", 1.2, 320),
            ("PM Service Level 2", 2.0, 280),
        ]

    def test_returns_copy(self):
        repairs = get_mock_repairs()
        repairs.clear()
        assert len(MOCK_REPAIR_CATALOG) == 3


class TestRequestQuote:
    """Tests for the full request flow."""

    @pytest.mark.asyncio
    async def test_builds_quote(self, sample_vin):
        with patch(
            "services.quote_service.describe_vehicle",
            AsyncMock(return_value="2003 INTERNATIONAL 4000 Series (DT 466)"),
        ) as mock_describe:
            result = await request_quote(sample_vin, 165)

        mock_describe.assert_awaited_once_with(sample_vin)
        assert result.vin == sample_vin
        assert result.vehicle == "2003 INTERNATIONAL 4000 Series (DT 466)"
        assert result.labor_rate == 165.0
        assert len(result.repairs) == 3
        assert result.repairs[0].labor_cost == 577.5
        assert result.repairs[0].total_cost == 1027.5
        assert all(r.labor_rate == 165.0 for r in result.repairs)

    @pytest.mark.asyncio
    async def test_boundary_totals(self, sample_vin):
        with patch("services.quote_service.describe_vehicle", AsyncMock(return_value="Truck")):
            result = await request_quote(sample_vin, 100)

        assert result.totals.labor_cost == pytest.approx(350 + 120 + 200)
        assert result.totals.parts_cost == pytest.approx(1050)
        assert result.totals.grand_total == pytest.approx(670 + 1050)

    @pytest.mark.asyncio
    async def test_invalid_rate_defaults(self, sample_vin):
        with patch("services.quote_service.describe_vehicle", AsyncMock(return_value="Truck")):
            result = await request_quote(sample_vin, "not-a-number")

        assert result.labor_rate == 165.0
        assert result.repairs[0].labor_rate == 165.0

    @pytest.mark.asyncio
    async def test_short_vin_skips_lookup(self):
        with patch("services.quote_service.describe_vehicle", AsyncMock()) as mock_describe:
            with pytest.raises(ValidationError):
                await request_quote("SHORT", 165)

        mock_describe.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_placeholder_when_lookup_fails(self, mock_httpx_client, sample_vin):
        import httpx

        mock_httpx_client.get.side_effect = httpx.ConnectError("Connection refused")

        result = await request_quote(sample_vin, 165)

        assert result.vehicle == "Mock Heavy-Duty Vehicle for VIN 1HTMKADN..."
        assert len(result.repairs) == 3
