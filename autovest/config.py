"""Configuration management using Pydantic Settings"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

RoundUpCap = Literal[10, 50, 100]


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "autovest-engine"
    log_level: str = "INFO"

    # Scoring defaults
    default_market_volatility: float = Field(0.15, ge=0.0, le=1.0)
    default_round_up_cap: RoundUpCap = 10
    currency_symbol: str = "₹"

    # External ML prediction service
    prediction_api_base: str = "http://localhost:8003"

    # HTTP Client
    http_timeout_seconds: float = Field(5.0, gt=0)


settings = Settings()
