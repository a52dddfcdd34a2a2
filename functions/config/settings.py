"""VINQuoter configuration settings.

Loads configuration from environment variables with sensible defaults.
A local .env file is honoured for development overrides.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Load .env file for local overrides (decoder URL, quote API host, log level)
load_dotenv()


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # Pricing defaults
    default_labor_rate: float = field(default_factory=lambda: float(os.getenv("DEFAULT_LABOR_RATE", "165")))
    default_shop_name: str = field(default_factory=lambda: os.getenv("DEFAULT_SHOP_NAME", "VINQuoter Demo Shop"))

    # VIN decoding (NHTSA vPIC)
    vin_decode_url: str = field(
        default_factory=lambda: os.getenv(
            "VIN_DECODE_URL",
            "https://vpic.nhtsa.dot.gov/api/vehicles/DecodeVinValuesExtended",
        )
    )
    vin_decode_timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("VIN_DECODE_TIMEOUT_SECONDS", "10"))
    )

    # Quote API (used by the HTTP client)
    quote_api_base_url: str = field(default_factory=lambda: os.getenv("QUOTE_API_BASE_URL", "http://127.0.0.1:5002"))
    quote_api_timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("QUOTE_API_TIMEOUT_SECONDS", "30"))
    )

    # Logging
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    def validate(self) -> None:
        """Validate settings values.

        Raises:
            ValueError: If a setting is out of range.
        """
        if self.default_labor_rate <= 0:
            raise ValueError("DEFAULT_LABOR_RATE must be greater than 0")
        if self.vin_decode_timeout_seconds <= 0:
            raise ValueError("VIN_DECODE_TIMEOUT_SECONDS must be greater than 0")


# Singleton settings instance
settings = Settings()
