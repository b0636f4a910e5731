"""
icuwatch Configuration Module

Centralized configuration management using Pydantic Settings.
Supports environment variables and .env files.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


DataSourceType = Literal["mock", "mimic-api", "mimic-json"]


class AppSettings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="ICUWATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: str = "INFO"
    log_json: bool = True

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000


class GeneratorSettings(BaseSettings):
    """Synthetic patient population settings."""

    model_config = SettingsConfigDict(
        env_prefix="ICUWATCH_GENERATOR_",
        env_file=".env",
        extra="ignore",
    )

    seed: int | None = None
    patient_count: int = Field(default=12, ge=0)

    # Risk mix of the generated ward
    low_risk_weight: float = 0.60
    medium_risk_weight: float = 0.25
    high_risk_weight: float = 0.15

    @property
    def risk_weights(self) -> dict[str, float]:
        return {
            "low": self.low_risk_weight,
            "medium": self.medium_risk_weight,
            "high": self.high_risk_weight,
        }


class DataSourceSettings(BaseSettings):
    """Patient data source settings."""

    model_config = SettingsConfigDict(
        env_prefix="ICUWATCH_DATA_SOURCE_",
        env_file=".env",
        extra="ignore",
    )

    type: DataSourceType = "mock"
    api_url: str | None = None
    api_key: SecretStr | None = None
    json_path: str | None = None
    timeout_seconds: float = 30.0

    def to_config(self) -> "DataSourceConfig":
        """Build the explicit config value handed to the repository."""
        return DataSourceConfig(
            type=self.type,
            api_url=self.api_url,
            api_key=self.api_key.get_secret_value() if self.api_key else None,
            json_path=self.json_path,
            timeout_seconds=self.timeout_seconds,
        )


class DataSourceConfig(BaseModel):
    """Which patient data source to use and how to reach it."""

    type: DataSourceType = "mock"
    api_url: str | None = None
    api_key: str | None = None
    json_path: str | None = None
    timeout_seconds: float = 30.0

    # Mock source only
    patient_count: int = 12
    seed: int | None = None


class Settings:
    """
    Aggregated settings container.

    Usage:
        from icuwatch.config import get_settings
        settings = get_settings()
        print(settings.app.api_port)
        print(settings.data_source.type)
    """

    def __init__(self):
        self.app = AppSettings()
        self.generator = GeneratorSettings()
        self.data_source = DataSourceSettings()

    @property
    def is_development(self) -> bool:
        return self.app.env == "development"

    @property
    def is_production(self) -> bool:
        return self.app.env == "production"

    def data_source_config(self) -> DataSourceConfig:
        config = self.data_source.to_config()
        config.patient_count = self.generator.patient_count
        config.seed = self.generator.seed
        return config


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: The application settings
    """
    return Settings()
