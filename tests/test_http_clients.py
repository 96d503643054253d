"""Tests for the OpenAI-backed text generator."""

import asyncio

import httpx
import pytest
from openai import (
    APIConnectionError,
    APITimeoutError,
    InternalServerError,
    RateLimitError,
)

from health_estimator.adapters.openai_text_generator import (
    OpenAITextGenerator,
    OpenAITextGeneratorFactory,
)
from health_estimator.domain.errors import TransportError, TransportErrorKind

_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/responses")


class _FakeResponses:
    def __init__(self, outcome: object) -> None:
        self.outcome = outcome
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if isinstance(self.outcome, Exception):
            raise self.outcome
        return type("Resp", (), {"output_text": self.outcome})()


class _FakeOpenAI:
    def __init__(self, outcome: object) -> None:
        self.responses = _FakeResponses(outcome)


def _status_error(cls, status_code: int):  # type: ignore[no-untyped-def]
    response = httpx.Response(status_code, request=_REQUEST)
    return cls(f"Error code: {status_code}", response=response, body=None)


def test_generator_returns_output_text_and_sends_settings() -> None:
    fake = _FakeOpenAI('{"protein": 1}')
    generator = OpenAITextGenerator(
        client=fake,
        model="gpt-4.1-mini",
        temperature=0.3,
        top_p=0.95,
        max_output_tokens=256,
    )

    text = asyncio.run(generator.generate("Estimate"))

    assert text == '{"protein": 1}'
    assert fake.responses.last_payload == {
        "model": "gpt-4.1-mini",
        "input": "Estimate",
        "temperature": 0.3,
        "top_p": 0.95,
        "max_output_tokens": 256,
    }


def test_generator_omits_unset_sampling_options() -> None:
    fake = _FakeOpenAI("")
    generator = OpenAITextGenerator(client=fake, model="gpt-4.1")

    text = asyncio.run(generator.generate("Estimate"))

    assert text == ""
    assert fake.responses.last_payload == {"model": "gpt-4.1", "input": "Estimate"}


@pytest.mark.parametrize(
    ("error", "kind", "status_code"),
    [
        (
            _status_error(RateLimitError, 429),
            TransportErrorKind.RATE_LIMITED,
            429,
        ),
        (
            _status_error(InternalServerError, 503),
            TransportErrorKind.SERVICE_UNAVAILABLE,
            503,
        ),
        (
            APITimeoutError(request=_REQUEST),
            TransportErrorKind.CONNECTION_TIMEOUT,
            None,
        ),
        (
            APIConnectionError(request=_REQUEST),
            TransportErrorKind.CONNECTION_RESET,
            None,
        ),
    ],
)
def test_generator_tags_sdk_errors(
    error: Exception, kind: TransportErrorKind, status_code: int | None
) -> None:
    generator = OpenAITextGenerator(client=_FakeOpenAI(error), model="gpt-4.1-mini")

    with pytest.raises(TransportError) as excinfo:
        asyncio.run(generator.generate("Estimate"))

    assert excinfo.value.kind is kind
    assert excinfo.value.status_code == status_code
    assert excinfo.value.__cause__ is error


def test_factory_reuses_client_per_key_and_closes() -> None:
    factory = OpenAITextGeneratorFactory(model="gpt-4.1-mini", temperature=0.3)

    first = factory("key-a")
    second = factory("key-a")
    other = factory("key-b")

    assert first.client is second.client
    assert first.client is not other.client
    assert first.client.max_retries == 0
    assert first.temperature == 0.3

    asyncio.run(factory.close())
