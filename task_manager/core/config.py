"""
Configuration settings for Task Manager.
"""
import os
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings:
    """Application settings"""

    # Service information
    service_name: str = os.getenv("SERVICE_NAME", "task_manager")
    service_version: str = "1.0.0"
    debug: bool = _as_bool(os.getenv("DEBUG", "False"))
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Database configuration
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./task_manager.db")
    db_init_retries: int = int(os.getenv("DB_INIT_RETRIES", "10"))
    db_init_delay: int = int(os.getenv("DB_INIT_DELAY", "5"))

    # API configuration
    api_prefix: str = os.getenv("API_PREFIX", "/api")
    max_page_size: int = int(os.getenv("MAX_PAGE_SIZE", "100"))
    default_page_size: int = int(os.getenv("DEFAULT_PAGE_SIZE", "10"))
    allowed_origins: List[str] = os.getenv("ALLOWED_ORIGINS", "*").split(",")

    # Security
    secret_key: str = os.getenv(
        "SECRET_KEY",
        "task-manager-secret-key-change-in-production"
    )
    algorithm: str = os.getenv("ALGORITHM", "HS256")
    access_token_expire_minutes: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Bootstrap data
    seed_defaults: bool = _as_bool(os.getenv("SEED_DEFAULTS", "True"))
    admin_email: str = os.getenv("ADMIN_EMAIL", "")
    admin_password: str = os.getenv("ADMIN_PASSWORD", "")


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get settings instance."""
    return settings
