"""Configuration for Linus PR Bot."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class ConfigurationError(Exception):
    """Raised at startup when a required setting is missing."""


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # App
    environment: str = Field(default="development", env="ENVIRONMENT")
    debug: bool = Field(default=False, env="DEBUG")
    host: str = Field(default="0.0.0.0", env="HOST")
    port: int = Field(default=3000, env="PORT")

    # LLM - OpenAI directly or OpenRouter (multi-provider gateway)
    openai_api_key: Optional[str] = Field(default=None, env="OPENAI_API_KEY")
    openrouter_api_key: Optional[str] = Field(default=None, env="OPENROUTER_API_KEY")
    review_model: str = Field(default="gpt-4o", env="REVIEW_MODEL")
    comment_temperature: float = Field(default=0.8, env="COMMENT_TEMPERATURE")
    inspection_temperature: float = Field(default=0.0, env="INSPECTION_TEMPERATURE")

    # GitHub
    github_token: Optional[str] = Field(default=None, env="GITHUB_TOKEN")
    github_webhook_secret: Optional[str] = Field(default=None, env="GITHUB_WEBHOOK_SECRET")

    # Bot identity
    bot_name: str = Field(default="linus-pr-bot", env="BOT_NAME")

    # Default Repository (for #123 shorthand on the command line)
    default_repo_owner: Optional[str] = Field(default=None, env="DEFAULT_REPO_OWNER")
    default_repo_name: Optional[str] = Field(default=None, env="DEFAULT_REPO_NAME")

    # Review Configuration
    review_timeout_seconds: float = Field(default=45.0, env="REVIEW_TIMEOUT_SECONDS")
    max_files_per_inspection: int = Field(default=50, env="MAX_FILES_PER_INSPECTION")
    max_concurrent_inspections: int = Field(default=5, env="MAX_CONCURRENT_INSPECTIONS")
    max_line_length: int = Field(default=120, env="MAX_LINE_LENGTH")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openrouter_api_key or self.openai_api_key)


settings = Settings()


def validate_settings(config: Settings = settings) -> None:
    """Fail fast on missing required configuration.

    Raises:
        ConfigurationError: If GITHUB_TOKEN is not set
    """
    from src.core.logging import get_logger

    logger = get_logger("config")

    if not config.github_token:
        raise ConfigurationError("GITHUB_TOKEN is required")

    if not config.github_webhook_secret:
        if config.environment == "production":
            logger.warning("GITHUB_WEBHOOK_SECRET is recommended for production")
        else:
            logger.info("No GITHUB_WEBHOOK_SECRET configured, webhook signatures will not be checked")

    if not config.llm_enabled:
        logger.info("No LLM API key configured, using template comments and rule-based checks")

    logger.info("Configuration validated")
