from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Provider credentials (the web client's VITE_* names are accepted too)
    openai_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("openai_api_key", "vite_openai_api_key"),
    )
    google_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("google_api_key", "vite_google_api_key"),
    )
    anthropic_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("anthropic_api_key", "vite_anthropic_api_key"),
    )
    cohere_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("cohere_api_key", "vite_cohere_api_key"),
    )

    # Provider endpoints and models
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-pro"
    anthropic_base_url: str = "https://api.anthropic.com/v1"
    anthropic_model: str = "claude-3-sonnet-20240229"
    anthropic_version: str = "2023-06-01"
    cohere_base_url: str = "https://api.cohere.ai/v1"
    cohere_model: str = "command"

    # Generation
    max_output_tokens: int = 800
    temperature: float = 0.7

    # Orchestration
    request_timeout_seconds: float = 30.0
    context_window_messages: int = 10
    retry_transient_once: bool = False

    # URLs
    frontend_url: str = "http://localhost:5173"

    # Logging
    log_level: str = "INFO"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
