import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


DEFAULT_INVIDIOUS_INSTANCES = (
    "https://inv.tux.pizza",
    "https://invidious.fdn.fr",
    "https://vid.puffyan.us",
    "https://invidious.nerdvpn.de",
)

DEFAULT_PIPED_INSTANCES = (
    "https://pipedapi.kavin.rocks",
    "https://pipedapi.adminforge.de",
)

DEFAULT_ALLOWED_DOMAINS = (
    "inv.tux.pizza",
    "invidious.fdn.fr",
    "vid.puffyan.us",
    "invidious.nerdvpn.de",
    "iv.ggtyler.dev",
    "pipedapi.kavin.rocks",
    "pipedapi.adminforge.de",
    "api.piped.projectsegfau.lt",
    "maps.googleapis.com",
    "maps.google.com",
    "i.ytimg.com",  # YouTube thumbnails
    "yt3.ggpht.com",
)


def _env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Read a comma-separated environment variable as an ordered tuple."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Outbound requests
    user_agent: str = os.getenv(
        "GATEWAY_USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    )

    # Passthrough
    proxy_cache_ttl: int = int(os.getenv("PROXY_CACHE_TTL", "300"))
    proxy_timeout: float = float(os.getenv("PROXY_TIMEOUT", "15.0"))
    allowed_domains: tuple[str, ...] = _env_list("ALLOWED_DOMAINS", DEFAULT_ALLOWED_DOMAINS)
    allowed_exact_hosts: tuple[str, ...] = _env_list("ALLOWED_EXACT_HOSTS", ())

    # Search
    search_cache_ttl: int = int(os.getenv("SEARCH_CACHE_TTL", "600"))
    search_attempt_timeout: float = float(os.getenv("SEARCH_ATTEMPT_TIMEOUT", "6.0"))
    search_result_limit: int = int(os.getenv("SEARCH_RESULT_LIMIT", "15"))
    invidious_instances: tuple[str, ...] = _env_list(
        "INVIDIOUS_INSTANCES", DEFAULT_INVIDIOUS_INSTANCES
    )
    piped_instances: tuple[str, ...] = _env_list("PIPED_INSTANCES", DEFAULT_PIPED_INSTANCES)

    # Embed page
    embed_base_url: str = os.getenv("EMBED_BASE_URL", "https://inv.tux.pizza")

    # API
    cors_allow_origins: tuple[str, ...] = _env_list("CORS_ALLOW_ORIGINS", ("*",))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.search_attempt_timeout <= 0:
            raise ValueError("SEARCH_ATTEMPT_TIMEOUT must be greater than 0")

        if self.proxy_timeout <= 0:
            raise ValueError("PROXY_TIMEOUT must be greater than 0")

        if self.search_result_limit < 1:
            raise ValueError(
                f"SEARCH_RESULT_LIMIT must be at least 1, got {self.search_result_limit}"
            )

        if self.proxy_cache_ttl < 0 or self.search_cache_ttl < 0:
            raise ValueError("Cache TTL values must not be negative")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def configure_logging(level: str | None = None) -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
