"""User profile persistence interface."""

from typing import Protocol

from health_estimator.domain.profiles import UserProfile


class ProfileRepository(Protocol):
    """Persistence interface for the user profile."""

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile if one exists."""
