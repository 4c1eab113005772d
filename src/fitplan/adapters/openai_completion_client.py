"""OpenAI Responses API client for plan completions."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from fitplan.domain.errors import ExternalServiceError
from fitplan.services.completion import CompletionClient
from fitplan.services.prompts import SYSTEM_INSTRUCTIONS


@dataclass
class OpenAICompletionClient(CompletionClient):
    """Completion client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    temperature: float = 0.7

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAICompletionClient":
        """Create an OpenAI completion client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def complete(
        self, prompt: str, max_output_tokens: int
    ) -> str | dict[str, object]:
        """Call OpenAI Responses API and return the output text."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "instructions": SYSTEM_INSTRUCTIONS,
            "input": [
                {
                    "role": "user",
                    "content": [{"type": "input_text", "text": prompt}],
                }
            ],
            "max_output_tokens": max_output_tokens,
            "temperature": self.temperature,
            "store": False,
        }
        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise ExternalServiceError(f"OpenAI request failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise ExternalServiceError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
