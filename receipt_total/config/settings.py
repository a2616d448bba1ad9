from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    gcp_project_id: str = "gestion-20"
    gcp_location: str = "us-central1"

    credentials_mode: Literal["service_account", "ambient"] = "service_account"
    credentials_key_file: str = "service-account-key.json"

    storage_bucket: str = "gestion-20.firebasestorage.app"
    storage_path_field: str = "storagePath"
    max_file_size_bytes: int = 10 * 1024 * 1024

    analysis_provider: str = "vertex"
    vertex_model_name: str = "gemini-2.0-flash"
    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"
    openai_base_url: str | None = None
    ai_temperature: float = 0.0
    ai_timeout_seconds: int = 45

    endpoint_name: str = "getTotalAmount"
    rate_limit_per_minute: int = 60
    rate_limit_per_hour: int = 1000
    rate_limit_cleanup_interval_seconds: int = 600

    cors_allow_origin: str = "*"
    api_host: str = "0.0.0.0"
    api_port: int = 8080
