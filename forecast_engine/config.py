"""Configuration management using Pydantic Settings"""

from decimal import Decimal
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="FORECAST_", extra="ignore"
    )

    # Service
    service_name: str = "forecast-engine"
    log_level: str = "INFO"

    # Horizons
    average_window_months: int = 3
    default_projection_months: int = 3
    default_simulation_months: int = 6
    max_projection_months: int = 24
    max_horizon_months: int = 36

    # Priority classification
    critical_keywords: List[str] = ["rent", "insurance", "loan"]
    fixed_critical_threshold: Decimal = Decimal("10000")
    fixed_important_threshold: Decimal = Decimal("2000")
    subscription_important_threshold: Decimal = Decimal("1000")


settings = Settings()
