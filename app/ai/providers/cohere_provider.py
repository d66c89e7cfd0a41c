"""
Cohere Provider - Command models over the Cohere v2 REST API.

Cohere is called with plain httpx instead of an SDK: one POST to
/v2/chat per generation, on a short-lived AsyncClient that is closed
as soon as the answer has been read.

API Documentation: https://docs.cohere.com/reference/chat
"""

import time
import logging
from typing import Optional, Any, Dict

import httpx

from app.core.config import settings
from app.ai.providers.base import (
    AIProvider,
    AIResponse,
    ErrorKind,
    ProviderType,
    TokenUsage
)

logger = logging.getLogger("consensus.ai.cohere")


class CohereProvider(AIProvider):
    """
    Cohere provider implementation.

    Usage:
        provider = CohereProvider()
        response = await provider.generate("Write a haiku about rain")
    """

    provider_type = ProviderType.COHERE

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the Cohere provider.

        Args:
            model: Model name (default: from settings.COHERE_MODEL)
            api_key: API key (default: from settings.COHERE_API_KEY)
            base_url: API root (default: from settings.COHERE_BASE_URL)
            timeout: Request timeout in seconds (default: settings.AI_REQUEST_TIMEOUT)
        """
        self.model = model or settings.COHERE_MODEL
        self.api_key = api_key or settings.COHERE_API_KEY
        self.base_url = (base_url or settings.COHERE_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT

        if self.api_key:
            logger.info(f"Cohere provider initialized with model: {self.model}")
        else:
            logger.warning("Cohere API key not configured - provider unavailable")

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate a response using Cohere chat.

        Args:
            prompt: The user's prompt
            temperature: Optional sampling temperature
            max_tokens: Optional cap on the response length

        Returns:
            AIResponse with the generated content
        """
        start_time = time.time()

        if not self.api_key:
            return self._not_configured(start_time)

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
        }
        if temperature is not None:
            payload["temperature"] = temperature
        if max_tokens is not None:
            payload["max_tokens"] = max_tokens

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(f"{self.base_url}/v2/chat", headers=headers, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPError as e:
            logger.error(f"Cohere request failed: {e}")
            return self._create_error_response(
                error=str(e) or e.__class__.__name__,
                model=self.model,
                latency_ms=self._measure_latency(start_time)
            )
        except ValueError as e:
            return self._create_error_response(
                error=f"Cohere returned a non-JSON body: {e}",
                model=self.model,
                kind=ErrorKind.INVALID_RESPONSE,
                latency_ms=self._measure_latency(start_time)
            )

        latency_ms = self._measure_latency(start_time)

        try:
            content = data["message"]["content"][0]["text"]
        except (KeyError, IndexError, TypeError) as e:
            return self._create_error_response(
                error=f"Malformed Cohere response: missing {e}",
                model=self.model,
                kind=ErrorKind.INVALID_RESPONSE,
                latency_ms=latency_ms
            )

        if not isinstance(content, str):
            return self._create_error_response(
                error=f"Malformed Cohere response: text is {type(content).__name__}, not str",
                model=self.model,
                kind=ErrorKind.INVALID_RESPONSE,
                latency_ms=latency_ms
            )

        if not content:
            return self._create_error_response(
                error="Cohere returned an empty generation",
                model=self.model,
                kind=ErrorKind.INVALID_RESPONSE,
                latency_ms=latency_ms
            )

        usage = self._extract_usage(data)
        logger.info(f"Cohere request completed in {latency_ms:.0f}ms, tokens: {usage.total_tokens}")

        return AIResponse(
            content=content,
            provider=self.provider_type,
            model=self.model,
            usage=usage,
            latency_ms=latency_ms,
            success=True,
            raw_response=data,
        )

    def _extract_usage(self, data: Dict[str, Any]) -> TokenUsage:
        # Usage is informational only: a missing or odd block counts as zero
        try:
            tokens = (data.get("usage") or {}).get("tokens") or {}
            return TokenUsage(
                prompt_tokens=int(tokens.get("input_tokens") or 0),
                completion_tokens=int(tokens.get("output_tokens") or 0),
            )
        except (AttributeError, TypeError, ValueError):
            logger.warning("Cohere response carried unreadable usage data")
            return TokenUsage()


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
cohere_provider = CohereProvider()
