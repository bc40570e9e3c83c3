"""
Application settings and configuration management using Pydantic Settings.
"""
from typing import Dict, Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Gateway settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Application Settings
    app_name: str = Field(default="Reservation Gateway", description="Application name")
    app_env: str = Field(default="development", description="Environment (development, staging, production)")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    timezone: str = Field(default="Europe/Madrid", description="Timezone used for local timestamps")

    # Backend API
    api_base_url: str = Field(default="http://127.0.0.1:8000/api", description="Backend REST API base URL")
    customers_path: str = Field(default="customers", description="Customer collection path")
    tables_path: str = Field(default="tables", description="Table collection path")
    reservations_path: str = Field(default="reservations", description="Reservation collection path")
    request_timeout_seconds: Optional[float] = Field(
        default=None,
        gt=0,
        description="Client-side request timeout; unset means wait indefinitely"
    )
    offline_mode: bool = Field(default=False, description="Report no network connectivity to repositories")

    # Normalization
    table_label_template: str = Field(
        default="Mesa #{table_id}",
        description="Label used for a reservation table known only by its id"
    )

    # Notifications
    notification_default_timeout_ms: int = Field(
        default=5000,
        description="Auto-removal delay for notifications added without a timeout"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the allowed values."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed_levels:
            raise ValueError(f"log_level must be one of {allowed_levels}")
        return v_upper

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        """Validate environment is one of the allowed values."""
        allowed_envs = ["development", "staging", "production"]
        v_lower = v.lower()
        if v_lower not in allowed_envs:
            raise ValueError(f"app_env must be one of {allowed_envs}")
        return v_lower

    @field_validator("customers_path", "tables_path", "reservations_path")
    @classmethod
    def strip_resource_path(cls, v: str) -> str:
        """Resource paths are joined onto the base URL, so keep them relative."""
        return v.strip("/")

    @property
    def endpoints(self) -> Dict[str, str]:
        """Absolute collection URLs keyed by resource."""
        base = self.api_base_url.rstrip("/")
        return {
            "customers": f"{base}/{self.customers_path}",
            "tables": f"{base}/{self.tables_path}",
            "reservations": f"{base}/{self.reservations_path}",
        }

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"


# Global settings instance
settings = Settings()
