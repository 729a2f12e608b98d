"""
Configuration management using pydantic-settings and python-dotenv
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///offline.db",
        description="Async database connection URL",
        alias="DATABASE_URL"
    )
    database_echo: bool = Field(
        default=False,
        description="Echo SQL queries for debugging",
        alias="DATABASE_ECHO"
    )

    # Supabase Auth
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
        alias="SUPABASE_URL"
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase key used to verify user access tokens",
        alias="SUPABASE_KEY"
    )

    # OpenAI
    openai_api_key: Optional[str] = Field(
        default=None,
        description="OpenAI API key for idea generation",
        alias="OPENAI_API_KEY"
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="Model used for idea generation",
        alias="OPENAI_MODEL"
    )
    generation_temperature: float = Field(
        default=0.6,
        ge=0.0,
        le=2.0,
        alias="GENERATION_TEMPERATURE"
    )
    generation_top_p: float = Field(
        default=0.8,
        gt=0.0,
        le=1.0,
        description="Nucleus sampling threshold",
        alias="GENERATION_TOP_P"
    )
    generation_max_tokens: int = Field(
        default=8192,
        gt=0,
        description="Maximum output tokens per generation",
        alias="GENERATION_MAX_TOKENS"
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Provider request timeout in seconds",
        alias="REQUEST_TIMEOUT"
    )
    rate_limit_max_retries: int = Field(
        default=3,
        ge=0,
        description="Additional attempts after a provider rate limit",
        alias="RATE_LIMIT_MAX_RETRIES"
    )
    rate_limit_base_delay: float = Field(
        default=2.0,
        ge=0,
        description="First backoff delay in seconds, doubled on each retry",
        alias="RATE_LIMIT_BASE_DELAY"
    )
    prompt_template_path: Optional[str] = Field(
        default=None,
        description="Optional path to a Jinja2 prompt template override",
        alias="PROMPT_TEMPLATE_PATH"
    )
    save_on_generate: bool = Field(
        default=False,
        description="Persist every generated idea for an anonymous owner",
        alias="SAVE_ON_GENERATE"
    )

    # Application
    environment: str = Field(
        default="development",
        description="Application environment",
        alias="ENVIRONMENT"
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
        alias="LOG_LEVEL"
    )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        populate_by_name = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
