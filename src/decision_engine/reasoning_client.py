"""Anthropic AsyncClient wrapper for the reasoning model."""

from __future__ import annotations

import asyncio

import structlog
from anthropic import AsyncAnthropic
from tenacity import retry, stop_after_attempt, wait_exponential

from decision_engine.config import Settings

logger = structlog.get_logger()


class ReasoningClient:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def complete(self, system: str, user: str) -> str:
        """Return the model's raw text. Empty string on timeout or API error."""
        try:
            response = await self._call_api(system, user)
            text = response.content[0].text
            logger.info("reasoning_call", model=self.settings.REASONING_MODEL, chars=len(text))
            return text
        except asyncio.TimeoutError:
            logger.warning(
                "reasoning_timeout", timeout=self.settings.MAX_REASONING_TIMEOUT_SECONDS
            )
            return ""
        except Exception as e:
            logger.warning("reasoning_error", error=str(e))
            return ""

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=1, max=10), reraise=True)
    async def _call_api(self, system: str, user: str):
        """Low-level Anthropic API call with retry. Each attempt gets its own timeout."""
        client = AsyncAnthropic(api_key=self.settings.ANTHROPIC_API_KEY)
        return await asyncio.wait_for(
            client.messages.create(
                model=self.settings.REASONING_MODEL,
                max_tokens=self.settings.REASONING_MAX_TOKENS,
                temperature=self.settings.REASONING_TEMPERATURE,
                system=system,
                messages=[{"role": "user", "content": user}],
            ),
            timeout=self.settings.MAX_REASONING_TIMEOUT_SECONDS,
        )
