"""Dependency container wiring for the estimator."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from health_estimator.adapters.openai_text_generator import OpenAITextGeneratorFactory
from health_estimator.adapters.supabase_app_settings_repository import (
    SupabaseAppSettingsRepository,
)
from health_estimator.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from health_estimator.config import Settings
from health_estimator.services.credentials import SettingsCredentialProvider
from health_estimator.services.estimation import CredentialProvider, EstimationClient
from health_estimator.services.profiles import ProfileRepository
from health_estimator.services.retry import RetryScheduler


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    estimation_client: EstimationClient
    profile_repository: ProfileRepository | None
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    credentials: CredentialProvider = SettingsCredentialProvider(resolved_settings)
    profile_repository: ProfileRepository | None = None
    if resolved_settings.supabase_enabled:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        credentials = SupabaseAppSettingsRepository(supabase_client)
        profile_repository = SupabaseProfileRepository(supabase_client)

    generator_factory = OpenAITextGeneratorFactory(
        model=resolved_settings.openai_model,
        temperature=resolved_settings.openai_temperature,
        top_p=resolved_settings.openai_top_p,
        max_output_tokens=resolved_settings.openai_max_output_tokens,
    )
    estimation_client = EstimationClient(
        credentials=credentials,
        generator_factory=generator_factory,
        scheduler=RetryScheduler(policy=resolved_settings.retry_policy()),
        structural_retries=resolved_settings.estimation_structural_retries,
    )

    async def close_resources() -> None:
        await generator_factory.close()

    return AppContainer(
        settings=resolved_settings,
        estimation_client=estimation_client,
        profile_repository=profile_repository,
        close_resources=close_resources,
    )
