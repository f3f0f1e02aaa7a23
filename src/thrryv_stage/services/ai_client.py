"""Client for the external AI text-generation capability.

The evaluator only needs one operation from the provider: given system
instructions, a prompt and a temperature, return free text. Any
OpenAI-compatible chat-completions endpoint satisfies that contract; the
default configuration targets Gemini's compatibility endpoint.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from openai import APIConnectionError, APIError, APITimeoutError, AsyncOpenAI

from thrryv_stage.core.errors import EvaluationError, EvaluationTimeoutError
from thrryv_stage.core.settings import settings

# Configure logger for this module
logger = logging.getLogger(__name__)


class TextGenerator(Protocol):
    """Anything able to turn instructions plus a prompt into text."""

    async def generate(
        self,
        system_instructions: str,
        prompt: str,
        temperature: float,
    ) -> str:
        ...


@dataclass(frozen=True)
class AIConfig:
    """Immutable configuration for the AI provider."""

    base_url: str | None
    api_key: str | None
    model: str
    timeout_seconds: float

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)


def load_ai_config() -> AIConfig:
    """Build configuration object from global settings."""

    return AIConfig(
        base_url=settings.evaluator_base_url,
        api_key=settings.evaluator_api_key,
        model=settings.evaluator_model,
        timeout_seconds=float(settings.evaluator_timeout_seconds),
    )


class AIClient:
    """Chat-completions wrapper exposing the `TextGenerator` contract."""

    def __init__(self, config: AIConfig | None = None) -> None:
        self.config = config or load_ai_config()
        self._client: AsyncOpenAI | None = None
        self._client_lock = asyncio.Lock()

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    async def _ensure_client(self) -> AsyncOpenAI:
        if not self.enabled:
            raise EvaluationError("AI evaluator is not configured")

        async with self._client_lock:
            if self._client is None:
                # Retries belong to the caller; a failed call is surfaced once.
                self._client = AsyncOpenAI(
                    api_key=self.config.api_key,
                    base_url=self.config.base_url,
                    timeout=self.config.timeout_seconds,
                    max_retries=0,
                )
        return self._client

    async def generate(
        self,
        system_instructions: str,
        prompt: str,
        temperature: float,
    ) -> str:
        """Return the provider's text reply for a single prompt.

        Raises:
            EvaluationTimeoutError: If the provider does not answer in time.
            EvaluationError: If the provider is unreachable or rejects the call.
        """
        client = await self._ensure_client()
        try:
            response = await client.chat.completions.create(
                model=self.config.model,
                messages=[
                    {"role": "system", "content": system_instructions},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
            )
        except APITimeoutError as exc:
            logger.warning("AI provider timed out after %.1fs", self.config.timeout_seconds)
            raise EvaluationTimeoutError("AI evaluation timed out") from exc
        except APIConnectionError as exc:
            logger.warning("AI provider unreachable: %s", exc)
            raise EvaluationError("AI provider is unreachable") from exc
        except APIError as exc:
            logger.warning("AI provider rejected the request: %s", exc)
            raise EvaluationError("AI provider rejected the request") from exc

        if not response.choices:
            raise EvaluationError("AI provider returned no choices")
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        if self._client is not None:
            await self._client.close()
            self._client = None
