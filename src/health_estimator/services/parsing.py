"""Defensive extraction of numeric records from free-form model output."""

import json
import math
import re
from dataclasses import dataclass
from typing import Generic, NamedTuple, TypeVar

from pydantic import BaseModel

from health_estimator.domain.errors import ParseError
from health_estimator.domain.estimates import (
    DailyTargets,
    MealEstimate,
    WorkoutEstimate,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Greedy and unanchored: models like to wrap the object in commentary.
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class PayloadField(NamedTuple):
    """Where a record field lives in the payload and what replaces a bad value."""

    key: str
    default: float
    allow_zero: bool = True


def extract_payload(raw_text: str) -> dict[str, object]:
    """Return the first brace-delimited JSON object found in ``raw_text``."""
    match = _JSON_OBJECT.search(raw_text)
    if match is None:
        raise ParseError("no structured payload found")
    try:
        payload = json.loads(match.group(0))
    except ValueError as exc:
        raise ParseError(f"structured payload is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ParseError("structured payload is not an object")
    return payload


def coerce_number(value: object, default: float, *, allow_zero: bool = True) -> float:
    """Coerce a payload value to a non-negative float, else return ``default``."""
    if isinstance(value, bool) or value is None:
        return default
    if isinstance(value, int | float):
        try:
            number = float(value)
        except OverflowError:
            return default
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default
    if not math.isfinite(number) or number < 0:
        return default
    if number == 0 and not allow_zero:
        return default
    return number


@dataclass(frozen=True)
class ResponseParser(Generic[ModelT]):
    """Turns raw model text into a validated estimate record."""

    model: type[ModelT]
    fields: dict[str, PayloadField]

    def parse(self, raw_text: str) -> ModelT:
        """Parse raw text, substituting per-field defaults for missing values."""
        payload = extract_payload(raw_text)
        values = {
            name: coerce_number(
                payload.get(field.key), field.default, allow_zero=field.allow_zero
            )
            for name, field in self.fields.items()
        }
        return self.model.model_validate(values)


MEAL_PARSER = ResponseParser(
    MealEstimate,
    {
        "protein": PayloadField("protein", 0.0),
        "carbs": PayloadField("carbs", 0.0),
        "fats": PayloadField("fats", 0.0),
        "calories": PayloadField("calories", 0.0),
    },
)

WORKOUT_PARSER = ResponseParser(
    WorkoutEstimate,
    {
        "calories_burned": PayloadField("caloriesBurned", 0.0),
        "duration": PayloadField("duration", 0.0),
    },
)

# A zero target is meaningless, so it falls back like a missing one.
DAILY_TARGETS_PARSER = ResponseParser(
    DailyTargets,
    {
        "water_target": PayloadField("waterTarget", 3000.0, allow_zero=False),
        "sleep_target": PayloadField("sleepTarget", 8.0, allow_zero=False),
        "calorie_target": PayloadField("calorieTarget", 2000.0, allow_zero=False),
        "protein_target": PayloadField("proteinTarget", 150.0, allow_zero=False),
    },
)
