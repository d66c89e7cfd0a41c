"""
OpenAI Provider - GPT client for prompt engineering.

The user's prompt is wrapped in the prompt-engineering template
(see app.ai.prompts.engineer_prompts) and sent as a single user message
to the chat completions API.

API Documentation: https://platform.openai.com/docs/api-reference
"""

import time
import logging
from typing import Optional

from openai import AsyncOpenAI

from app.core.config import settings
from app.ai.prompts.engineer_prompts import build_engineer_prompt
from app.ai.providers.base import (
    AIProvider,
    AIResponse,
    ErrorKind,
    ProviderType,
    TokenUsage
)

logger = logging.getLogger("consensus.ai.openai")


class OpenAIProvider(AIProvider):
    """
    OpenAI GPT provider implementation.

    Usage:
        provider = OpenAIProvider()
        response = await provider.generate("Summarize this article")
        print(response.content)  # an engineered version of the prompt
    """

    provider_type = ProviderType.OPENAI

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the OpenAI provider.

        Args:
            model: Model name (default: from settings.OPENAI_MODEL)
            api_key: API key (default: from settings.OPENAI_API_KEY)
            timeout: Request timeout in seconds (default: settings.AI_REQUEST_TIMEOUT)
        """
        self.model = model or settings.OPENAI_MODEL
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT

        # Initialize async client (no SDK-level retries)
        if self.api_key:
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
            logger.info(f"OpenAI provider initialized with model: {self.model}")
        else:
            self._client = None
            logger.warning("OpenAI API key not configured - provider unavailable")

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate an engineered prompt using OpenAI GPT.

        Args:
            prompt: The user's prompt
            temperature: Optional sampling temperature
            max_tokens: Optional cap on the response length

        Returns:
            AIResponse with the generated content
        """
        start_time = time.time()

        if not self._client:
            return self._not_configured(start_time)

        options = {}
        if temperature is not None:
            options["temperature"] = temperature
        if max_tokens is not None:
            options["max_tokens"] = max_tokens

        try:
            response = await self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": build_engineer_prompt(prompt)}],
                **options,
            )
        except Exception as e:
            logger.error(f"OpenAI generation failed: {e}")
            return self._create_error_response(
                error=str(e),
                model=self.model,
                latency_ms=self._measure_latency(start_time)
            )

        latency_ms = self._measure_latency(start_time)

        # Extract content
        content = response.choices[0].message.content if response.choices else None
        if not content:
            return self._create_error_response(
                error="OpenAI returned an empty completion",
                model=self.model,
                kind=ErrorKind.INVALID_RESPONSE,
                latency_ms=latency_ms
            )

        # Extract usage
        usage = TokenUsage(
            prompt_tokens=response.usage.prompt_tokens if response.usage else 0,
            completion_tokens=response.usage.completion_tokens if response.usage else 0,
        )

        logger.info(f"OpenAI request completed in {latency_ms:.0f}ms, tokens: {usage.total_tokens}")

        return AIResponse(
            content=content,
            provider=self.provider_type,
            model=self.model,
            usage=usage,
            latency_ms=latency_ms,
            success=True,
            raw_response=response,
        )


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
openai_provider = OpenAIProvider()
