"""Application configuration using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Fields without a default are required; a missing value raises a
    validation error when this module is imported, which stops the process.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    database_url: str

    # Object storage (hosted bucket API)
    storage_url: str
    storage_service_key: str
    max_upload_bytes: int = 50 * 1024 * 1024

    # Transactional email (MailerSend)
    mailersend_api_key: str
    mail_from_email: str = "noreply@thedirectorbala.com"
    mail_from_name: str = "thedirectorbala.com Contact Form"
    mail_to_email: str = "houseofeleven11films@gmail.com"
    mail_to_name: str = "House of Eleven 11 Films"

    # Outbound HTTP
    http_timeout: int = 30

    # Admin sessions
    secret_key: str
    admin_session_max_age: int = 12 * 60 * 60

    # API settings
    site_name: str = "Bala"
    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:8080"]
    log_level: str = "INFO"
    api_host: str = "0.0.0.0"
    api_port: int = 8000


# Global settings instance
settings = Settings()
