"""Credential providers backed by local configuration."""

from dataclasses import dataclass

from health_estimator.config import Settings
from health_estimator.services.estimation import CredentialProvider


@dataclass
class SettingsCredentialProvider(CredentialProvider):
    """Reads the API key from environment-backed settings."""

    settings: Settings

    def get_api_key(self) -> str | None:
        """Return the configured OpenAI API key."""
        return self.settings.openai_api_key
