"""
PTAX Configuration Management

All settings are read from environment variables (or a local .env file).
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # === External Provider Configuration ===
    bcb_base_url: str = Field(
        default="https://olinda.bcb.gov.br/olinda/servico/PTAX/versao/v1/odata",
        description="Banco Central do Brasil PTAX OData endpoint"
    )
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Abort threshold for a single fetch attempt"
    )
    max_network_retries: int = Field(
        default=3,
        ge=1,
        description="Total attempts per probed date on transport failure"
    )
    initial_retry_delay_ms: int = Field(
        default=1000,
        ge=0,
        description="Base delay for exponential backoff (doubles per attempt)"
    )

    # === Bimonth Resolution ===
    max_lookahead_days: int = Field(
        default=5,
        ge=1,
        description="Maximum candidate days probed from the bimonth start"
    )
    cache_ttl_seconds: int = Field(
        default=7 * 24 * 60 * 60,
        gt=0,
        description="How long a resolved rate stays eligible in the cache"
    )
    calendar_timezone: str = Field(
        default="America/Sao_Paulo",
        description="Civil calendar used to decide which bimonth 'today' is in"
    )

    # === API Configuration ===
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)

    # === Logging ===
    log_level: str = Field(default="INFO")

    @property
    def initial_retry_delay_seconds(self) -> float:
        return self.initial_retry_delay_ms / 1000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
