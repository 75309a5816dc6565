"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Storefront routes
    STORE_ROOT_URL: str = os.getenv("STORE_ROOT_URL", "http://localhost:3000/")
    DEFAULT_SECTION_URL: str = os.getenv(
        "DEFAULT_SECTION_URL",
        "/recommendations/products?limit=4",
    )
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

    # Recommendation defaults
    FALLBACK_SECTION_ID: str = os.getenv(
        "FALLBACK_SECTION_ID",
        "product-recommendations",
    )
    DEFAULT_INTENT: str = os.getenv("DEFAULT_INTENT", "related")
    DEFAULT_RESULT_LIMIT: int = int(os.getenv("DEFAULT_RESULT_LIMIT", "4"))

    # Widget behaviour
    WIDGET_TAG: str = os.getenv("WIDGET_TAG", "product-recommendations")
    PROXIMITY_MARGIN_PX: int = int(os.getenv("PROXIMITY_MARGIN_PX", "400"))
    ERROR_MESSAGE: str = os.getenv(
        "ERROR_MESSAGE",
        "Error loading product recommendations",
    )

    # Theme editor / preview signal
    DESIGN_MODE: bool = os.getenv("DESIGN_MODE", "false").lower() == "true"

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    def __init__(self):
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            f"Config initialized with env={self.ENVIRONMENT}, debug={self.debug}, "
            f"log_level={self.log_level}"
        )


# Create a global settings instance for import
settings = Settings()
