"""Cloud Function entry points for VINQuoter.

Provides HTTP endpoints for:
- Generating a repair quote for a VIN
"""

import asyncio
import json
from typing import Any, Dict, Tuple

import structlog
from firebase_functions import https_fn, options

from config.errors import ErrorCode, ValidationError
from services.quote_service import request_quote

logger = structlog.get_logger()

# ============================================================================
# Helper Functions
# ============================================================================


def error_response(code: str, message: str, details: Dict[str, Any] = None) -> Dict[str, Any]:
    """Build error response.

    The human-readable message sits under ``error`` so clients can show it
    directly.
    """
    body = {"error": message, "code": code}
    if details:
        body["details"] = details
    return body


def get_request_json(req: https_fn.Request) -> Dict[str, Any]:
    """Extract JSON from request body.

    An unparseable or non-object body is treated as empty, which then fails
    VIN validation with a 400.

    Args:
        req: HTTP request object.

    Returns:
        Parsed JSON data.
    """
    data = req.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        logger.warning("quote_request_body_not_object", body_type=type(data).__name__)
        return {}
    return data


def handle_quote_request(data: Dict[str, Any]) -> Tuple[Dict[str, Any], int]:
    """Run a quote request and map the outcome to a response body and status.

    Request body:
    {
        "vin": "1HTMKADN43H561234",
        "laborRate": 165
    }

    Response (200):
    {
        "vin": "1HTMKADN43H561234",
        "vehicle": "2003 INTERNATIONAL 4000 Series (DT 466)",
        "repairs": [{"operation": ..., "srtHours": ..., "laborRate": ...,
                     "laborCost": ..., "partsCost": ..., "totalCost": ...}],
        "totals": {"laborCost": ..., "partsCost": ..., "grandTotal": ...},
        "laborRate": 165
    }

    Response (400):
    {
        "error": "Invalid VIN. Must be at least 8 characters.",
        "code": "INVALID_VIN"
    }
    """
    try:
        result = asyncio.run(request_quote(data.get("vin"), data.get("laborRate")))
        return result.to_dict(), 200

    except ValidationError as e:
        logger.info("quote_request_rejected", code=e.code, error=e.message)
        return error_response(e.code, e.message), 400
    except Exception as e:
        logger.exception("quote_request_exception", error=str(e))
        return error_response(
            ErrorCode.INTERNAL_ERROR,
            f"Failed to generate quote: {str(e)}"
        ), 500


# ============================================================================
# Quote Entry Point
# ============================================================================


@https_fn.on_request(
    timeout_sec=60,
    memory=options.MemoryOption.MB_256,
    region="us-central1"
)
def quote(req: https_fn.Request) -> https_fn.Response:
    """Generate a repair quote for a VIN.

    See handle_quote_request() for the request and response shapes.
    """
    if req.method == "OPTIONS":
        return _cors_response()

    body, status = handle_quote_request(get_request_json(req))
    return _json_response(body, status=status)


# ============================================================================
# Response Helpers
# ============================================================================


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "3600"
}


def _cors_response() -> https_fn.Response:
    """Return CORS preflight response."""
    return https_fn.Response(
        "",
        status=204,
        headers=CORS_HEADERS
    )


def _json_response(data: dict, status: int = 200) -> https_fn.Response:
    """Return JSON response with CORS headers."""
    return https_fn.Response(
        json.dumps(data),
        status=status,
        mimetype="application/json",
        headers=CORS_HEADERS
    )
