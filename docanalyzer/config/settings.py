from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "docanalyzer"
    db_username: str = "docanalyzer"
    db_password: str = "secret"

    blob_root: str = "/app/blobs"
    max_upload_size_bytes: int = 5 * 1024 * 1024

    analysis_provider: str = "gemini"
    analysis_timeout_seconds: int = 30
    analysis_temperature: float = 0.4
    analysis_top_k: int = 32
    analysis_top_p: float = 1.0
    analysis_max_output_tokens: int = 4096

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"

    openai_api_key: str = ""
    openai_model_name: str = ""
    openai_base_url: str | None = None
