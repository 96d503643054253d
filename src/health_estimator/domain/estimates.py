"""Models for structured estimates derived from model output."""

from dataclasses import dataclass

from pydantic import BaseModel, Field


class MealEstimate(BaseModel):
    """Macronutrient estimate for a described meal."""

    protein: float = Field(default=0.0, ge=0.0)
    carbs: float = Field(default=0.0, ge=0.0)
    fats: float = Field(default=0.0, ge=0.0)
    calories: float = Field(default=0.0, ge=0.0)


class WorkoutEstimate(BaseModel):
    """Calorie burn estimate for a described workout."""

    calories_burned: float = Field(default=0.0, ge=0.0)
    duration: float = Field(default=0.0, ge=0.0)


class DailyTargets(BaseModel):
    """Personalized daily intake and recovery targets."""

    water_target: float = Field(default=3000.0, ge=0.0)
    sleep_target: float = Field(default=8.0, ge=0.0)
    calorie_target: float = Field(default=2000.0, ge=0.0)
    protein_target: float = Field(default=150.0, ge=0.0)


@dataclass(frozen=True)
class RetryAttempt:
    """A failed attempt that is about to be retried."""

    index: int
    delay_ms: float
    error: Exception
