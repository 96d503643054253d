"""Supabase repository for application settings."""

from dataclasses import dataclass

from supabase import Client

from health_estimator.services.estimation import CredentialProvider


@dataclass
class SupabaseAppSettingsRepository(CredentialProvider):
    """Supabase implementation for the stored API credential."""

    client: Client

    def get_api_key(self) -> str | None:
        """Return the stored OpenAI API key, if any."""
        response = (
            self.client.table("app_settings")
            .select("openai_api_key")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("openai_api_key")
