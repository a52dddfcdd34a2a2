"""
Unit Tests for the VIN Decoder Service.

Test Coverage:
- Description building from vPIC rows
- URL construction
- Fallback to placeholder on transport errors, bad statuses and malformed bodies
"""

import pytest
import httpx

from services.vin_decoder import (
    build_decode_url,
    describe_vehicle,
    parse_vehicle_description,
    placeholder_description,
)


# =============================================================================
# Test parse_vehicle_description
# =============================================================================


class TestParseVehicleDescription:
    """Tests for turning a vPIC body into a description."""

    def test_full_row(self, vpic_payload):
        assert parse_vehicle_description(vpic_payload) == "2003 INTERNATIONAL 4000 Series (DT 466)"

    def test_engine_falls_back_to_configuration(self, vpic_payload):
        vpic_payload["Results"][0]["EngineModel"] = ""

        assert parse_vehicle_description(vpic_payload) == "2003 INTERNATIONAL 4000 Series (In-Line)"

    def test_engine_falls_back_to_cylinders(self, vpic_payload):
        row = vpic_payload["Results"][0]
        row["EngineModel"] = ""
        row["EngineConfiguration"] = ""

        assert parse_vehicle_description(vpic_payload) == "2003 INTERNATIONAL 4000 Series (6)"

    def test_no_engine(self):
        payload = {"Results": [{"ModelYear": "2019", "Make": "FREIGHTLINER", "Model": "Cascadia"}]}

        assert parse_vehicle_description(payload) == "2019 FREIGHTLINER Cascadia"

    def test_missing_pieces_are_skipped(self):
        payload = {"Results": [{"ModelYear": "", "Make": "KENWORTH", "Model": None}]}

        assert parse_vehicle_description(payload) == "KENWORTH"

    def test_engine_only(self):
        payload = {"Results": [{"EngineModel": "ISX15"}]}

        assert parse_vehicle_description(payload) == " (ISX15)"

    def test_empty_row_returns_none(self):
        assert parse_vehicle_description({"Results": [{"ModelYear": "", "Make": "", "Model": ""}]}) is None

    @pytest.mark.parametrize(
        "payload",
        [None, [], "oops", {}, {"Results": []}, {"Results": "nope"}, {"Results": ["row"]}],
    )
    def test_malformed_payloads(self, payload):
        assert parse_vehicle_description(payload) is None


# =============================================================================
# Test helpers
# =============================================================================


class TestHelpers:
    """Tests for URL and placeholder helpers."""

    def test_placeholder_uses_first_eight_characters(self):
        assert placeholder_description("1HTMKADN43H561234") == "Mock Heavy-Duty Vehicle for VIN 1HTMKADN..."

    def test_build_decode_url_uses_settings(self):
        assert build_decode_url("1HTMKADN43H561234") == (
            "https://vpic.test/api/vehicles/DecodeVinValuesExtended/1HTMKADN43H561234"
        )

    def test_build_decode_url_encodes_vin(self):
        url = build_decode_url("ABC/123 45", base_url="https://example.test/decode/")
        assert url == "https://example.test/decode/ABC%2F123%2045"


# =============================================================================
# Test describe_vehicle
# =============================================================================


class TestDescribeVehicle:
    """Tests for the async lookup with fallback."""

    @pytest.mark.asyncio
    async def test_success(self, mock_httpx_client, response_factory, vpic_payload, sample_vin):
        mock_httpx_client.get.return_value = response_factory(vpic_payload)

        description = await describe_vehicle(sample_vin)

        assert description == "2003 INTERNATIONAL 4000 Series (DT 466)"
        mock_httpx_client.get.assert_awaited_once()
        args, kwargs = mock_httpx_client.get.call_args
        assert args[0].endswith(f"/{sample_vin}")
        assert kwargs["params"] == {"format": "json"}

    @pytest.mark.asyncio
    async def test_bad_status_falls_back(self, mock_httpx_client, response_factory, sample_vin):
        mock_httpx_client.get.return_value = response_factory(status_code=503)

        assert await describe_vehicle(sample_vin) == placeholder_description(sample_vin)

    @pytest.mark.asyncio
    async def test_connection_error_falls_back(self, mock_httpx_client, sample_vin):
        mock_httpx_client.get.side_effect = httpx.ConnectError("Connection refused")

        assert await describe_vehicle(sample_vin) == placeholder_description(sample_vin)

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self, mock_httpx_client, sample_vin):
        mock_httpx_client.get.side_effect = httpx.ReadTimeout("Timeout")

        assert await describe_vehicle(sample_vin) == placeholder_description(sample_vin)

    @pytest.mark.asyncio
    async def test_invalid_json_falls_back(self, mock_httpx_client, response_factory, sample_vin):
        mock_httpx_client.get.return_value = response_factory(json_error=ValueError("Expecting value"))

        assert await describe_vehicle(sample_vin) == placeholder_description(sample_vin)

    @pytest.mark.asyncio
    async def test_empty_results_fall_back(self, mock_httpx_client, response_factory, sample_vin):
        mock_httpx_client.get.return_value = response_factory({"Results": []})

        assert await describe_vehicle(sample_vin) == placeholder_description(sample_vin)

    @pytest.mark.asyncio
    async def test_no_retry_on_failure(self, mock_httpx_client, sample_vin):
        mock_httpx_client.get.side_effect = httpx.ConnectError("Connection refused")

        await describe_vehicle(sample_vin)

        assert mock_httpx_client.get.await_count == 1
