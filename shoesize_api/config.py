import os
from typing import Optional


class Settings:
    # Security
    JWT_SECRET: str = os.getenv("JWT_SECRET", "dev-secret-change-me-please-32-bytes")
    JWT_ALG: str = os.getenv("JWT_ALG", "HS256")
    JWT_AUD: Optional[str] = os.getenv("JWT_AUD")
    JWT_ISS: Optional[str] = os.getenv("JWT_ISS")
    JWT_TTL_SECONDS: int = int(os.getenv("JWT_TTL_SECONDS", "3600"))
    # Rate limiting
    RATE_LIMIT_PER_MIN: int = int(os.getenv("RATE_LIMIT_PER_MIN", "120"))
    RATE_LIMIT_BURST: int = int(os.getenv("RATE_LIMIT_BURST", "60"))
    # Caching
    CACHE_TTL_SECONDS: int = int(os.getenv("CACHE_TTL_SECONDS", "600"))
    CACHE_MAX_ITEMS: int = int(os.getenv("CACHE_MAX_ITEMS", "1024"))
    # Size chart
    CHART_MAX_ROWS: int = int(os.getenv("CHART_MAX_ROWS", "200"))
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    # API
    API_PREFIX: str = os.getenv("API_PREFIX", "/v1")


settings = Settings()
