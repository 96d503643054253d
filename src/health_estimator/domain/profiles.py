"""User profile models consumed by estimation prompts."""

from dataclasses import dataclass
from typing import Literal

Gender = Literal["male", "female", "other"]
ActivityLevel = Literal["sedentary", "light", "moderate", "active", "very_active"]
Goal = Literal["lose", "maintain", "gain"]


@dataclass(frozen=True)
class UserProfile:
    """Body metrics and goals of the person being estimated for."""

    height_cm: float
    weight_kg: float
    age: int
    gender: Gender
    activity_level: ActivityLevel
    goal: Goal


@dataclass(frozen=True)
class EstimationRequest:
    """A single estimation input: free text plus a profile snapshot."""

    profile: UserProfile
    description: str | None = None
