"""Supabase repository for user profiles."""

from dataclasses import dataclass

from supabase import Client

from health_estimator.domain.profiles import UserProfile
from health_estimator.services.profiles import ProfileRepository


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for profile lookups."""

    client: Client

    def get_profile(self) -> UserProfile | None:
        """Return the earliest stored profile."""
        response = (
            self.client.table("user_profiles")
            .select("height,weight,age,gender,activity_level,goal")
            .order("created_at")
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_profile(response.data[0])


def _to_profile(row: dict[str, object]) -> UserProfile:
    """Map a profile row to a domain profile."""
    try:
        return UserProfile(
            height_cm=float(row["height"]),
            weight_kg=float(row["weight"]),
            age=int(row["age"]),
            gender=str(row["gender"]),
            activity_level=str(row["activity_level"]),
            goal=str(row["goal"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise RuntimeError("Malformed user profile row in Supabase") from exc
