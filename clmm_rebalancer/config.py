"""
Configuration settings for the CLMM rebalancer

Loads environment variables and provides library configuration.
"""
import logging
import os
from typing import Optional

from dotenv import load_dotenv

from .constants import DEFAULT_MAX_REMAIN_RATE, MAX_SEARCH_ITERATIONS

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Library settings"""

    def __init__(self):
        # Swap router (aggregator) API
        self.AGGREGATOR_URL: str = os.getenv(
            "CLMM_AGGREGATOR_URL",
            "https://api-sui.cetus.zone/router_v2/find_routes"
        )
        self.AGGREGATOR_PROVIDERS: str = os.getenv("CLMM_AGGREGATOR_PROVIDERS", "CETUS")
        self.AGGREGATOR_DEPTH: int = int(os.getenv("CLMM_AGGREGATOR_DEPTH", 3))
        self.AGGREGATOR_VERSION: int = int(os.getenv("CLMM_AGGREGATOR_VERSION", 1001600))

        # Request limits
        self.REQUEST_TIMEOUT: float = float(os.getenv("CLMM_REQUEST_TIMEOUT", 10))
        self.MAX_RETRIES: int = int(os.getenv("CLMM_MAX_RETRIES", 3))
        self.RETRY_DELAY: float = float(os.getenv("CLMM_RETRY_DELAY", 1.0))

        # Deposit optimizer
        self.MAX_REMAIN_RATE: int = int(os.getenv("CLMM_MAX_REMAIN_RATE", DEFAULT_MAX_REMAIN_RATE))
        self.MAX_SEARCH_ITERATIONS: int = int(os.getenv("CLMM_MAX_SEARCH_ITERATIONS", MAX_SEARCH_ITERATIONS))

        # Logging
        self.LOG_LEVEL: str = os.getenv("CLMM_LOG_LEVEL", "INFO").upper()


# Create global settings instance
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and services using this library"""
    logging.basicConfig(
        level=level or settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
