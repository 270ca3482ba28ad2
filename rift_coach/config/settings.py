"""
Configuration settings using Pydantic Settings.

All sensitive configuration must be loaded from environment variables.
Never hardcode API keys or credentials in the code.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Order: init kwargs > .env (dotenv) > env vars > file secrets
    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ):
        return (
            init_settings,
            dotenv_settings,
            env_settings,
            file_secret_settings,
        )

    # Riot API Configuration
    riot_api_key: str | None = Field(None, validation_alias=AliasChoices("RIOT_API_KEY"))
    riot_platform: str = Field("euw1", alias="RIOT_PLATFORM")
    riot_request_timeout: int = Field(10, alias="RIOT_REQUEST_TIMEOUT")
    riot_api_rate_limit_per_second: int = Field(20, ge=1, alias="RIOT_API_RATE_LIMIT_PER_SECOND")
    riot_api_rate_limit_per_two_minutes: int = Field(
        100, ge=1, alias="RIOT_API_RATE_LIMIT_PER_TWO_MINUTES"
    )
    riot_api_max_concurrency: int = Field(20, ge=1, alias="RIOT_API_MAX_CONCURRENCY")

    # Database Configuration
    database_url: str | None = Field(None, alias="DATABASE_URL")
    database_pool_min_size: int = Field(2, alias="DATABASE_POOL_MIN_SIZE")
    database_pool_size: int = Field(10, alias="DATABASE_POOL_SIZE")
    database_pool_timeout: int = Field(30, alias="DATABASE_POOL_TIMEOUT")

    # LLM Provider selection (gemini | openai | claude)
    llm_provider: str = Field("gemini", alias="LLM_PROVIDER")

    # Google Gemini Configuration
    gemini_api_key: str | None = Field(None, alias="GEMINI_API_KEY")
    gemini_model: str = Field("gemini-1.5-flash", alias="GEMINI_MODEL")
    gemini_temperature: float = Field(0.7, alias="GEMINI_TEMPERATURE")
    gemini_max_output_tokens: int = Field(2048, alias="GEMINI_MAX_OUTPUT_TOKENS")

    # OpenAI-compatible Chat Completions Configuration
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    openai_api_base: str | None = Field(None, alias="OPENAI_API_BASE")
    openai_model: str | None = Field(None, alias="OPENAI_MODEL")
    openai_temperature: float = Field(0.7, alias="OPENAI_TEMPERATURE")
    openai_max_tokens: int = Field(2048, alias="OPENAI_MAX_TOKENS")

    # Anthropic Claude Configuration
    anthropic_api_key: str | None = Field(None, alias="ANTHROPIC_API_KEY")
    anthropic_model: str = Field("claude-sonnet-4-20250514", alias="ANTHROPIC_MODEL")
    anthropic_temperature: float = Field(0.7, alias="ANTHROPIC_TEMPERATURE")
    anthropic_max_tokens: int = Field(2048, alias="ANTHROPIC_MAX_TOKENS")

    # Coaching
    coach_match_count: int = Field(10, ge=1, le=100, alias="COACH_MATCH_COUNT")


# Global settings instance loaded from environment.
# Nothing is required here; adapters validate what they need on construction.
settings = Settings()  # type: ignore[call-arg]


def get_settings() -> Settings:
    """Get the global settings instance.

    This function provides dependency injection support for settings.
    """
    return settings
