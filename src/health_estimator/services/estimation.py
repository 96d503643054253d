"""Estimation client facade over the remote text-completion service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol, TypeVar

from pydantic import BaseModel

from health_estimator.domain.errors import (
    ConfigurationError,
    EstimationFailedError,
    ParseError,
)
from health_estimator.domain.estimates import (
    DailyTargets,
    MealEstimate,
    WorkoutEstimate,
)
from health_estimator.domain.profiles import EstimationRequest, UserProfile
from health_estimator.services import prompts
from health_estimator.services.classifier import failure_reason, user_message
from health_estimator.services.parsing import (
    DAILY_TARGETS_PARSER,
    MEAL_PARSER,
    WORKOUT_PARSER,
    ResponseParser,
)
from health_estimator.services.retry import RetryScheduler

ModelT = TypeVar("ModelT", bound=BaseModel)

_logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Interface for a remote text-completion call."""

    async def generate(self, prompt: str) -> str:
        """Return raw model text for a prompt, raising TransportError on failure."""


class CredentialProvider(Protocol):
    """Interface for reading the remote service credential."""

    def get_api_key(self) -> str | None:
        """Return the configured API key, if any."""


GeneratorFactory = Callable[[str], TextGenerator]


@dataclass
class EstimationClient:
    """Produces typed estimates from free text and a user profile."""

    credentials: CredentialProvider
    generator_factory: GeneratorFactory
    scheduler: RetryScheduler = field(default_factory=RetryScheduler)
    structural_retries: int = 1

    async def estimate_meal(
        self, description: str, profile: UserProfile
    ) -> MealEstimate:
        """Estimate macronutrients for a described meal."""
        return await self._estimate(
            EstimationRequest(profile=profile, description=description),
            prompts.build_meal_prompt,
            MEAL_PARSER,
            label="Meal estimation",
            subject="meal",
        )

    async def estimate_workout(
        self, description: str, profile: UserProfile
    ) -> WorkoutEstimate:
        """Estimate calories burned and duration for a described workout."""
        return await self._estimate(
            EstimationRequest(profile=profile, description=description),
            prompts.build_workout_prompt,
            WORKOUT_PARSER,
            label="Workout estimation",
            subject="workout",
        )

    async def estimate_daily_targets(self, profile: UserProfile) -> DailyTargets:
        """Estimate personalized daily water, sleep, calorie and protein targets."""
        return await self._estimate(
            EstimationRequest(profile=profile),
            prompts.build_daily_targets_prompt,
            DAILY_TARGETS_PARSER,
            label="Daily targets estimation",
            subject="daily targets",
        )

    async def _estimate(  # noqa: PLR0913
        self,
        request: EstimationRequest,
        build_prompt: Callable[[EstimationRequest], str],
        parser: ResponseParser[ModelT],
        *,
        label: str,
        subject: str,
    ) -> ModelT:
        api_key = self.credentials.get_api_key()
        if not api_key or not api_key.strip():
            raise ConfigurationError("Please configure your OpenAI API key in settings")

        generator = self.generator_factory(api_key)
        prompt = build_prompt(request)

        async def attempt() -> ModelT:
            raw_text = await generator.generate(prompt)
            return parser.parse(raw_text)

        structural_attempt = 0
        while True:
            try:
                return await self.scheduler.execute(attempt, context=label)
            except ParseError as exc:
                # Parse failures get a fresh scheduled request with its own backoff.
                if structural_attempt < self.structural_retries:
                    structural_attempt += 1
                    _logger.warning(
                        "%s returned an unusable payload (%s/%s). Requesting again: %s",
                        label,
                        structural_attempt,
                        self.structural_retries,
                        exc,
                    )
                    continue
                raise _final_failure(exc, label, subject) from exc
            except Exception as exc:
                raise _final_failure(exc, label, subject) from exc


def _final_failure(error: Exception, label: str, subject: str) -> EstimationFailedError:
    """Log the underlying error and wrap it in a user-presentable one."""
    _logger.error("%s failed: %s", label, error, exc_info=error)
    reason = failure_reason(error)
    return EstimationFailedError(reason, user_message(reason, subject))
