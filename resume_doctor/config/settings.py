from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_document_bytes: int = 1024 * 1024
    min_document_bytes: int = 100

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = 3

    short_text_word_threshold: int = 200
    short_file_word_threshold: int = 100
    long_word_threshold: int = 1200
    max_page_estimate: int = 3
    words_per_page: int = 500

    generation_provider: str = "gemini"
    generation_model_name: str = "gemini-2.0-flash"
    generation_openai_compatible_base_url: str = ""
    generation_timeout_seconds: int = 60
    generation_temperature: float = 0.7
    generation_max_output_tokens: int = 8192

    cooldown_seconds: int = 60
    bot_action_name: str = "submit_analysis"
    bot_static_token: str = ""

    credential_store_path: Path = Path.home() / ".resume_doctor" / "credentials.json"
