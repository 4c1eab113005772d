"""Completion service interface and generation settings."""

import asyncio
from dataclasses import dataclass
from typing import Protocol

from fitplan.domain.errors import ExternalServiceError

PROVIDER_NONE = "none"


class CompletionClient(Protocol):
    """Interface for single-shot text completion."""

    async def complete(
        self, prompt: str, max_output_tokens: int
    ) -> str | dict[str, object]:
        """Return the model output for a prompt."""


@dataclass(frozen=True)
class GenerationConfig:
    """Explicit settings for calling the completion service."""

    provider: str = PROVIDER_NONE
    credentials: str | None = None
    timeout_seconds: float | None = 30.0
    max_output_tokens: int = 1500
    strict_tolerance: bool = False

    @property
    def enabled(self) -> bool:
        """Whether a provider with credentials is configured."""
        return self.provider != PROVIDER_NONE and bool(self.credentials)


async def request_completion(
    client: CompletionClient | None, config: GenerationConfig, prompt: str
) -> str | dict[str, object]:
    """Call the completion service once, bounded by the configured timeout.

    Missing configuration, timeouts and transport errors all surface as
    ``ExternalServiceError``.
    """
    if client is None or not config.enabled:
        raise ExternalServiceError(
            f"No completion provider configured (provider={config.provider})"
        )
    try:
        return await asyncio.wait_for(
            client.complete(prompt, max_output_tokens=config.max_output_tokens),
            timeout=config.timeout_seconds,
        )
    except TimeoutError as exc:
        raise ExternalServiceError(
            f"Completion timed out after {config.timeout_seconds}s"
        ) from exc
