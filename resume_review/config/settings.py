from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    analyzer_provider: str = "openai"
    analyzer_api_key: str = ""
    analyzer_model_name: str = "gpt-4o"
    analyzer_base_url: str = ""
    analyzer_timeout_seconds: int = 60
    analyzer_temperature: float = 0.2

    pdf_engine: str = "pdfplumber"

    review_max_attempts: int = 3
    ats_target_limit: int = 5
    resume_format: str = "standard"

    review_document_path: str = ""
    review_target_path: str = ""
    review_domain_tag: str = "technology"
    review_document_id: str = "resume"
