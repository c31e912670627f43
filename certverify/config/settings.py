from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    gateway_provider: str = "http"
    api_base_url: str = "http://localhost:8000"
    api_token: str = ""

    upload_timeout_seconds: int = 30
    ocr_timeout_seconds: int = 60
    detection_timeout_seconds: int = 60
    verify_timeout_seconds: int = 30
    health_timeout_seconds: int = 10

    code_reader_engine: str = "opencv"

    registry_path: str = ""
