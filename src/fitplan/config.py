"""Application configuration."""

import os
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from fitplan.services.completion import PROVIDER_NONE, GenerationConfig

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

Provider = Literal["none", "openai", "gemini"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    llm_provider: Provider = "none"
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    gemini_api_key: str | None = None
    gemini_model: str = "models/gemini-1.5-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    llm_timeout_seconds: float = 30.0
    meal_plan_max_output_tokens: int = 1500
    workout_plan_max_output_tokens: int = 2000
    strict_tolerance: bool = False
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def provider_credentials(self) -> str | None:
        """Return the API key for the selected provider."""
        if self.llm_provider == "openai":
            return self.openai_api_key
        if self.llm_provider == "gemini":
            return self.gemini_api_key
        return None


def generation_config(settings: Settings, max_output_tokens: int) -> GenerationConfig:
    """Build the explicit generation config handed to plan services."""
    credentials = settings.provider_credentials()
    return GenerationConfig(
        provider=settings.llm_provider if credentials else PROVIDER_NONE,
        credentials=credentials,
        timeout_seconds=settings.llm_timeout_seconds,
        max_output_tokens=max_output_tokens,
        strict_tolerance=settings.strict_tolerance,
    )
