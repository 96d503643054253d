"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from health_estimator.config import Settings
from health_estimator.domain.profiles import UserProfile
from health_estimator.services.estimation import (
    CredentialProvider,
    EstimationClient,
    TextGenerator,
)
from health_estimator.services.retry import RetryPolicy, RetryScheduler

MEAL_RESPONSE = 'Sure! {"protein": 14, "carbs": 30, "fats": 10, "calories": 280}'


@dataclass
class StaticCredentials(CredentialProvider):
    """Credential provider returning a fixed key."""

    api_key: str | None = "test-key"

    def get_api_key(self) -> str | None:
        return self.api_key


@dataclass
class ScriptedTextGenerator(TextGenerator):
    """Fake generator that replays queued responses or errors."""

    responses: list[str | Exception] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if len(self.responses) > 1:
            outcome = self.responses.pop(0)
        else:
            outcome = self.responses[0]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    @property
    def calls(self) -> int:
        return len(self.prompts)


@dataclass
class RecordingSleep:
    """Sleep stand-in that records requested delays in seconds."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        height_cm=175,
        weight_kg=70,
        age=30,
        gender="male",
        activity_level="moderate",
        goal="maintain",
    )


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def scheduler(recording_sleep: RecordingSleep) -> RetryScheduler:
    return RetryScheduler(policy=RetryPolicy(), sleep=recording_sleep)


def build_client(
    generator: ScriptedTextGenerator,
    *,
    api_key: str | None = "test-key",
    scheduler: RetryScheduler | None = None,
    structural_retries: int = 1,
) -> EstimationClient:
    """Build an estimation client around a scripted generator."""
    return EstimationClient(
        credentials=StaticCredentials(api_key),
        generator_factory=lambda _key: generator,
        scheduler=scheduler or RetryScheduler(sleep=RecordingSleep()),
        structural_retries=structural_retries,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        openai_api_key="openai-key",
        supabase_url=None,
        supabase_service_key=None,
    )
