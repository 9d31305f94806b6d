import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


def _optional_float(name: str) -> float | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return float(raw)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # TMDB (server tier upstream)
    tmdb_api_key: str | None = os.getenv("TMDB_API_KEY")
    tmdb_base_url: str = os.getenv("TMDB_BASE_URL", "https://api.themoviedb.org/3")
    tmdb_language: str = os.getenv("TMDB_LANGUAGE", "fr-FR")
    tmdb_timeout: float = float(os.getenv("TMDB_TIMEOUT", "10"))

    # StreamFlix proxy (client tier upstream)
    proxy_base_url: str = os.getenv("CATALOG_PROXY_URL", "http://localhost:8000/api/tmdb")

    # Response cache
    cache_ttl_seconds: float = float(os.getenv("CACHE_TTL_SECONDS", "900"))  # 15 minutes

    # Rate limiter
    rate_limit_max_requests: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "35"))
    rate_limit_window_seconds: float = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "10"))
    rate_limit_safety_margin: float = float(os.getenv("RATE_LIMIT_SAFETY_MARGIN", "0.05"))
    # Unset means callers wait as long as the window requires
    rate_limit_max_wait: float | None = _optional_float("RATE_LIMIT_MAX_WAIT")

    # Circuit breaker
    breaker_failure_threshold: int = int(os.getenv("BREAKER_FAILURE_THRESHOLD", "5"))
    breaker_reset_timeout: float = float(os.getenv("BREAKER_RESET_TIMEOUT", "60"))

    # Entitlements
    unlimited_device_display_cap: int = int(os.getenv("UNLIMITED_DEVICE_CAP", "10"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "info")
    log_json: bool = os.getenv("LOG_JSON", "false").lower() == "true"

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    @property
    def has_tmdb_api_key(self) -> bool:
        """Check whether a non-empty TMDB API key is configured.

        Returns:
            True if the server tier can call TMDB, False otherwise
        """
        return bool(self.tmdb_api_key and self.tmdb_api_key.strip())

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl_seconds <= 0:
            raise ValueError("CACHE_TTL_SECONDS must be positive")

        if self.rate_limit_max_requests < 1:
            raise ValueError("RATE_LIMIT_MAX_REQUESTS must be at least 1")

        if self.rate_limit_window_seconds <= 0:
            raise ValueError("RATE_LIMIT_WINDOW_SECONDS must be positive")

        if self.rate_limit_safety_margin < 0:
            raise ValueError("RATE_LIMIT_SAFETY_MARGIN cannot be negative")

        if self.rate_limit_max_wait is not None and self.rate_limit_max_wait < 0:
            raise ValueError("RATE_LIMIT_MAX_WAIT cannot be negative")

        if self.breaker_failure_threshold < 1:
            raise ValueError("BREAKER_FAILURE_THRESHOLD must be at least 1")

        if self.unlimited_device_display_cap < 1:
            raise ValueError(
                f"UNLIMITED_DEVICE_CAP must be at least 1, got {self.unlimited_device_display_cap}"
            )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
