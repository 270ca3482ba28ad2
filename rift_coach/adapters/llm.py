"""LLM adapter for coaching advice generation.

Implements LLMPort on top of Google's Gemini SDK, Anthropic's Claude SDK or an
OpenAI-compatible Chat Completions endpoint, selected by LLM_PROVIDER.

Design Principles:
- Async-first: Gemini SDK calls run in asyncio.to_thread, Claude uses AsyncAnthropic
- Error handling: every provider failure is wrapped in LLMAPIError
- Security: API keys loaded from environment, never logged
"""

import asyncio
import logging
import math
import time
from typing import Any

import aiohttp
import anthropic
import google.generativeai as genai

from rift_coach.config.settings import settings
from rift_coach.core.metrics import mark_external_error, observe_llm_latency
from rift_coach.core.observability import llm_debug_wrapper
from rift_coach.core.ports import LLMPort

logger = logging.getLogger(__name__)

SUPPORTED_PROVIDERS = ("gemini", "openai", "claude")
_OPENAI_RATE_LIMIT_ATTEMPTS = 3


class LLMAPIError(Exception):
    """Raised when the LLM provider fails or returns no usable content."""

    pass


class LLMAdapter(LLMPort):
    """Text completion through Gemini, Claude or an OpenAI-compatible API.

    Attributes:
        provider: 'gemini', 'claude' or 'openai'
        model_name: Model used for completions
    """

    def __init__(self, provider: str | None = None) -> None:
        self.provider = (provider or settings.llm_provider or "gemini").strip().lower()
        if self.provider not in SUPPORTED_PROVIDERS:
            raise ValueError(f"Unsupported LLM provider: {self.provider}")

        if self.provider == "openai":
            if not settings.openai_api_key or not settings.openai_api_base:
                raise ValueError(
                    "OPENAI_API_KEY and OPENAI_API_BASE must be configured for OpenAI-compatible provider"
                )
            self.model_name = settings.openai_model or "gpt-4o-mini"
            logger.info(f"LLM provider=openai base={settings.openai_api_base} model={self.model_name}")
        elif self.provider == "claude":
            if not settings.anthropic_api_key:
                raise ValueError("ANTHROPIC_API_KEY must be configured for the Claude provider")
            self._anthropic = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
            self.model_name = settings.anthropic_model
            logger.info(f"LLM provider=claude model={self.model_name}")
        else:
            if not settings.gemini_api_key:
                raise ValueError(
                    "GEMINI_API_KEY not configured. Set environment variable or update .env file."
                )
            genai.configure(api_key=settings.gemini_api_key)
            self.model_name = settings.gemini_model
            logger.info(
                f"LLM provider=gemini model={self.model_name} temperature={settings.gemini_temperature}"
            )

    @llm_debug_wrapper(capture_result=False, capture_args=False, add_metadata={"layer": "adapter"})
    async def complete(self, system_prompt: str, user_prompt: str) -> str:
        """Generate coaching text for the given prompts.

        Raises:
            LLMAPIError: provider error or empty response
        """
        t0 = time.perf_counter()
        try:
            if self.provider == "openai":
                text = await self._call_openai_chat_completion(system_prompt, user_prompt)
            elif self.provider == "claude":
                text = await self._call_claude(system_prompt, user_prompt)
            else:
                text = await self._call_gemini(system_prompt, user_prompt)
        except LLMAPIError:
            mark_external_error(self.provider, "api_error")
            raise
        except Exception as e:
            mark_external_error(self.provider, type(e).__name__)
            logger.error(f"{self.provider} completion failed: {e}")
            raise LLMAPIError(f"{self.provider} completion failed: {e}") from e

        observe_llm_latency(self.provider, time.perf_counter() - t0)
        return text

    async def _call_gemini(self, system_prompt: str, user_prompt: str) -> str:
        model = genai.GenerativeModel(
            model_name=self.model_name,
            generation_config={
                "temperature": settings.gemini_temperature,
                "max_output_tokens": settings.gemini_max_output_tokens,
            },
            system_instruction=system_prompt,
        )
        response: Any = await asyncio.to_thread(model.generate_content, user_prompt)
        if not response or not getattr(response, "text", None):
            raise LLMAPIError("Empty response from Gemini API")
        return response.text.strip()

    async def _call_claude(self, system_prompt: str, user_prompt: str) -> str:
        response: Any = await self._anthropic.messages.create(
            model=self.model_name,
            max_tokens=int(settings.anthropic_max_tokens),
            temperature=float(settings.anthropic_temperature),
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        text = "".join(
            block.text for block in response.content if getattr(block, "type", None) == "text"
        )
        if not text.strip():
            raise LLMAPIError("Empty response from Claude API")
        return text.strip()

    async def _call_openai_chat_completion(self, system_prompt: str, user_prompt: str) -> str:
        """Invoke an OpenAI-compatible Chat Completions endpoint."""
        url = f"{settings.openai_api_base.rstrip('/')}/v1/chat/completions"
        headers = {
            "Authorization": f"Bearer {settings.openai_api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model_name,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": float(settings.openai_temperature),
            "max_tokens": int(settings.openai_max_tokens),
        }
        base_delay = 1.0

        async with aiohttp.ClientSession() as session:
            for attempt in range(_OPENAI_RATE_LIMIT_ATTEMPTS):
                async with session.post(url, headers=headers, json=payload) as resp:
                    if resp.status == 429:
                        if attempt == _OPENAI_RATE_LIMIT_ATTEMPTS - 1:
                            break
                        delay = _retry_delay(resp.headers.get("Retry-After"), base_delay * (2**attempt))
                        logger.warning(
                            "OpenAI-compatible API rate limited",
                            extra={"attempt": attempt + 1, "delay": delay},
                        )
                        await asyncio.sleep(delay)
                        continue
                    if resp.status != 200:
                        text = await resp.text()
                        raise LLMAPIError(f"OpenAI-compatible API error {resp.status}: {text}")

                    data = await resp.json()
                    choices = data.get("choices") or []
                    if not choices:
                        raise LLMAPIError("OpenAI-compatible API returned no choices")

                    content = (choices[0].get("message") or {}).get("content")
                    if not content:
                        raise LLMAPIError("OpenAI-compatible API returned empty content")
                    return str(content).strip()

        raise LLMAPIError("OpenAI-compatible API rate limit retries exhausted")


def _retry_delay(retry_after: str | None, fallback: float) -> float:
    """Seconds to wait from a Retry-After header; HTTP-date or junk values use ``fallback``."""
    if not retry_after:
        return fallback
    try:
        delay = float(retry_after)
    except ValueError:
        return fallback
    if not math.isfinite(delay) or delay < 0:
        return fallback
    return delay
