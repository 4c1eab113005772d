"""Google Gemini generateContent client."""

import json
from dataclasses import dataclass

import httpx

from fitplan.domain.errors import ExternalServiceError
from fitplan.services.completion import CompletionClient
from fitplan.services.prompts import SYSTEM_INSTRUCTIONS

_GENERATION_CONFIG: dict[str, float] = {
    "temperature": 0.9,
    "topP": 0.95,
    "topK": 40,
}


@dataclass
class GeminiCompletionClient(CompletionClient):
    """HTTPX-backed Gemini client."""

    api_key: str
    model: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str, model: str, base_url: str
    ) -> "GeminiCompletionClient":
        """Create a Gemini client with a managed httpx session."""
        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url,
            http_client=httpx.AsyncClient(),
        )

    async def complete(
        self, prompt: str, max_output_tokens: int
    ) -> str | dict[str, object]:
        """Generate content and return the joined candidate text."""
        url = f"{self.base_url}/v1beta/{self.model}:generateContent"
        payload = {
            "contents": [
                {"role": "user", "parts": [{"text": SYSTEM_INSTRUCTIONS}]},
                {"role": "user", "parts": [{"text": prompt}]},
            ],
            "generationConfig": {
                **_GENERATION_CONFIG,
                "maxOutputTokens": max_output_tokens,
            },
        }
        try:
            response = await self.http_client.post(
                url,
                params={"key": self.api_key},
                json=payload,
                timeout=60,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                f"Gemini API error: {exc.response.status_code}"
            ) from exc
        except (httpx.HTTPError, ValueError) as exc:
            raise ExternalServiceError(f"Gemini request failed: {exc}") from exc

        text = _candidate_text(data)
        if text:
            return text
        return json.dumps(data)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _candidate_text(data: object) -> str | None:
    """Extract text from the first candidate of a Gemini response.

    Returns ``None`` when the response carries no text; raises
    ``ExternalServiceError`` when the body does not have the documented shape.
    """
    if not isinstance(data, dict):
        raise ExternalServiceError("Unexpected Gemini response body")
    candidates = data.get("candidates") or []
    if not isinstance(candidates, list):
        raise ExternalServiceError("Unexpected Gemini candidates")
    if not candidates:
        return None
    candidate = candidates[0]
    if not isinstance(candidate, dict):
        raise ExternalServiceError("Unexpected Gemini candidate")
    content = candidate.get("content") or {}
    if not isinstance(content, dict):
        raise ExternalServiceError("Unexpected Gemini candidate content")
    parts = content.get("parts") or []
    if not isinstance(parts, list) or not all(
        isinstance(part, dict) for part in parts
    ):
        raise ExternalServiceError("Unexpected Gemini content parts")
    texts = [str(part["text"]) for part in parts if part.get("text")]
    if texts:
        return "\n".join(texts)
    if content.get("text"):
        return str(content["text"])
    if candidate.get("text"):
        return str(candidate["text"])
    return None
