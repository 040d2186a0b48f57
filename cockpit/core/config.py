"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "Vibe Cockpit"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"  # Bind to all interfaces for external access
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./vibe_cockpit.db"

    # Authentication
    api_token: str = ""  # Bearer token for dashboard API calls
    generation_service_token: str = ""  # Bearer token for the generation trigger endpoint

    # LLM provider (OpenAI-compatible chat completions)
    openai_api_key: str = ""
    openai_model: str = "gpt-3.5-turbo"
    openai_draft_model: str = "gpt-4o"
    openai_base_url: str = "https://api.openai.com/v1"
    llm_timeout_seconds: float = 30.0

    # GitHub
    github_token: str = ""  # Personal access token used for repo analysis
    github_api_url: str = "https://api.github.com"
    github_timeout_seconds: float = 30.0

    # Website analysis
    website_timeout_seconds: float = 10.0

    # Background jobs
    generation_enabled: bool = True
    changelog_sync_interval_minutes: int = 60


settings = Settings()
