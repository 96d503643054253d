"""OpenAI Responses API client for text estimation."""

from dataclasses import dataclass, field

from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from health_estimator.domain.errors import TransportError, TransportErrorKind
from health_estimator.services.estimation import TextGenerator


@dataclass
class OpenAITextGenerator(TextGenerator):
    """Text generator backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    temperature: float | None = None
    top_p: float | None = None
    max_output_tokens: int | None = None

    async def generate(self, prompt: str) -> str:
        """Call OpenAI and return the raw output text."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": prompt,
        }
        if self.temperature is not None:
            request_payload["temperature"] = self.temperature
        if self.top_p is not None:
            request_payload["top_p"] = self.top_p
        if self.max_output_tokens is not None:
            request_payload["max_output_tokens"] = self.max_output_tokens

        try:
            response = await self.client.responses.create(**request_payload)
        except APIStatusError as exc:
            raise TransportError.from_status(exc.status_code, str(exc)) from exc
        except APITimeoutError as exc:
            raise TransportError(
                str(exc), kind=TransportErrorKind.CONNECTION_TIMEOUT
            ) from exc
        except APIConnectionError as exc:
            raise TransportError(
                str(exc), kind=TransportErrorKind.CONNECTION_RESET
            ) from exc
        return response.output_text or ""


@dataclass
class OpenAITextGeneratorFactory:
    """Builds generators per API key, reusing one SDK client per key."""

    model: str
    temperature: float | None = None
    top_p: float | None = None
    max_output_tokens: int | None = None
    _clients: dict[str, AsyncOpenAI] = field(default_factory=dict, repr=False)

    def __call__(self, api_key: str) -> OpenAITextGenerator:
        client = self._clients.get(api_key)
        if client is None:
            # Retries are handled by RetryScheduler, not the SDK.
            client = AsyncOpenAI(api_key=api_key, max_retries=0)
            self._clients[api_key] = client
        return OpenAITextGenerator(
            client=client,
            model=self.model,
            temperature=self.temperature,
            top_p=self.top_p,
            max_output_tokens=self.max_output_tokens,
        )

    async def close(self) -> None:
        """Close every cached SDK client."""
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
