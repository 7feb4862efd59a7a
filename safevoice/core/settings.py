"""
Core settings and environment variables for SafeVoice Admin.
Uses pydantic-settings for type-safe environment variable loading.
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Create a .env file in the root directory to configure these.
    """

    # Application
    APP_NAME: str = "SafeVoice Admin"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # CORS - Dashboard frontends allowed to access this API
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # Firebase/Firestore
    FIREBASE_PROJECT_ID: Optional[str] = None
    FIREBASE_CREDENTIALS_PATH: Optional[str] = None  # Path to service account JSON

    # Severity classification
    AI_ENABLED: bool = True  # If False, only the keyword classifier is used
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-1.5-flash"
    AI_TIMEOUT_SECONDS: float = 10.0
    ELABORATE_DESCRIPTIONS: bool = True  # Expand short descriptions before scoring

    # Hotspot radii (meters)
    PANIC_HOTSPOT_RADIUS_METERS: float = 500.0
    CASE_HOTSPOT_RADIUS_METERS: float = 800.0

    # Reverse geocoding
    # - GEOCODING_PROVIDER: "nominatim" (default, no API key) or "google"
    # - GOOGLE_MAPS_API_KEY: optional; only used when provider is "google"
    GEOCODING_PROVIDER: str = "nominatim"
    GOOGLE_MAPS_API_KEY: Optional[str] = None
    GEOCODE_CACHE_SIZE: int = 256
    GEOCODE_CACHE_PRECISION: int = 4  # Decimal places used for cache keys

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings = Settings()
