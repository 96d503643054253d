"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

from health_estimator.services.retry import RetryPolicy

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

AVAILABLE_MODELS: tuple[str, ...] = (
    "gpt-4.1-nano",
    "gpt-4.1-mini",
    "gpt-4.1",
    "gpt-4o-mini",
    "gpt-4o",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    openai_temperature: float | None = 0.3
    openai_top_p: float | None = 0.95
    openai_max_output_tokens: int | None = 256
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    estimation_max_retries: int = 2
    estimation_initial_delay_ms: float = 500
    estimation_max_delay_ms: float = 3000
    estimation_backoff_multiplier: float = 2
    estimation_timeout_ms: float = 10_000
    estimation_structural_retries: int = 1
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def retry_policy(self) -> RetryPolicy:
        """Build the immutable retry policy from settings."""
        return RetryPolicy(
            max_retries=self.estimation_max_retries,
            initial_delay_ms=self.estimation_initial_delay_ms,
            max_delay_ms=self.estimation_max_delay_ms,
            backoff_multiplier=self.estimation_backoff_multiplier,
            attempt_timeout_ms=self.estimation_timeout_ms,
        )

    @property
    def supabase_enabled(self) -> bool:
        """Return True when Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)


def list_available_models() -> list[dict[str, str]]:
    """Return the static list of selectable model names."""
    return [{"name": name} for name in AVAILABLE_MODELS]
