"""
Application Configuration
Load settings from environment variables with validation
"""
import os
from typing import Optional

class Settings:
    """Application configuration from environment variables"""

    # MongoDB Configuration
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
    MONGODB_DB_NAME: str = os.getenv("MONGODB_DB_NAME", "bid_management")
    MONGODB_TLS: bool = os.getenv("MONGODB_TLS", "False").lower() == "true"

    # Auth Configuration
    ADMIN_API_KEY: Optional[str] = os.getenv("ADMIN_API_KEY")

    # Application Configuration
    APP_NAME: str = "Bid Analytics Backend"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "True").lower() == "true"

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    # Analytics Configuration
    ANALYTICS_FETCH_WORKERS: int = int(os.getenv("ANALYTICS_FETCH_WORKERS", "5"))

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

# Initialize settings
settings = Settings()

def validate_settings() -> bool:
    """
    Validate that all required settings are configured

    Returns:
        True if all required settings are present

    Raises:
        ValueError: If required settings are missing
    """
    required_keys = {
        "MONGODB_URI": settings.MONGODB_URI,
        "MONGODB_DB_NAME": settings.MONGODB_DB_NAME,
        "ADMIN_API_KEY": settings.ADMIN_API_KEY,
    }

    missing_keys = [key for key, value in required_keys.items() if not value]
    if missing_keys:
        raise ValueError(f"Missing required environment variables: {', '.join(missing_keys)}")

    if settings.ANALYTICS_FETCH_WORKERS < 1:
        raise ValueError("ANALYTICS_FETCH_WORKERS must be at least 1")

    return True
