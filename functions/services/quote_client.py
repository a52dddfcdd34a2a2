"""HTTP client for the VINQuoter quote endpoint.

Used by QuoteSession when the quote boundary runs as a separate service
(Cloud Function or the local Flask server).
"""

from typing import Optional

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from config.errors import ErrorCode, QuoteRequestError
from config.settings import settings
from models.quote import QuoteResult

logger = structlog.get_logger(__name__)


QUOTE_PATH = "/api/quote"


class QuoteApiClient:
    """Client for POST /api/quote.

    Every failure surfaces as QuoteRequestError; callers decide how to present it.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        path: str = QUOTE_PATH
    ):
        """Initialize QuoteApiClient.

        Args:
            base_url: Service base URL (defaults to settings.quote_api_base_url)
            timeout: Request timeout in seconds (defaults to settings)
            path: Endpoint path appended to base_url
        """
        self.base_url = (base_url or settings.quote_api_base_url).rstrip("/")
        self.timeout = timeout or settings.quote_api_timeout_seconds
        self.path = path

    @property
    def url(self) -> str:
        """Full endpoint URL."""
        return f"{self.base_url}{self.path}"

    async def request_quote(self, vin: str, labor_rate: float) -> QuoteResult:
        """Request a quote from the service.

        Args:
            vin: Vehicle identification number
            labor_rate: Labor rate per hour

        Returns:
            Parsed QuoteResult.

        Raises:
            QuoteRequestError: On transport errors, timeouts, non-2xx status,
                or an unparseable response body.
        """
        payload = {"vin": vin, "laborRate": labor_rate}

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
                body = response.json()
        except httpx.TimeoutException as e:
            logger.warning("quote_request_timeout", url=self.url, error=str(e))
            raise QuoteRequestError(
                code=ErrorCode.QUOTE_TIMEOUT,
                message=f"Quote request timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning("quote_request_bad_status", url=self.url, status_code=status_code)
            raise QuoteRequestError(
                code=ErrorCode.QUOTE_BAD_STATUS,
                message=f"Quote service returned HTTP {status_code}",
                status_code=status_code
            ) from e
        except httpx.HTTPError as e:
            logger.warning("quote_request_transport_error", url=self.url, error=str(e))
            raise QuoteRequestError(
                code=ErrorCode.QUOTE_TRANSPORT_ERROR,
                message=f"Failed to reach quote service: {e}"
            ) from e
        except ValueError as e:
            logger.warning("quote_request_invalid_json", url=self.url, error=str(e))
            raise QuoteRequestError(
                code=ErrorCode.QUOTE_INVALID_RESPONSE,
                message="Quote service returned a non-JSON body"
            ) from e

        try:
            return QuoteResult.model_validate(body)
        except PydanticValidationError as e:
            logger.warning("quote_response_invalid", url=self.url, errors=e.error_count())
            raise QuoteRequestError(
                code=ErrorCode.QUOTE_INVALID_RESPONSE,
                message="Quote service returned an unexpected payload",
                details={"errors": e.errors(include_url=False)}
            ) from e
