"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="COPILOT_", extra="ignore"
    )

    # Service
    service_name: str = "copilot-engine"
    log_level: str = "INFO"
    docs_enabled: bool = True

    # Request limits
    max_debts: int = 50


settings = Settings()
