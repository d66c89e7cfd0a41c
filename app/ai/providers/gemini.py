"""
Gemini Provider - Google's GenAI SDK, streaming variant.

Gemini answers as a stream of chunks. The provider reads the whole
stream and joins it into one string: the text of every part of every
candidate is appended in delivery order, and CHUNK_SEPARATOR is appended
after each delivered chunk (including the last one) to mark where chunk
boundaries fell.
"""

import time
import logging
from typing import Optional

from google import genai
from google.genai import types

from app.core.config import settings
from app.ai.providers.base import (
    AIProvider,
    AIResponse,
    ErrorKind,
    ProviderType,
    TokenUsage
)

logger = logging.getLogger("consensus.ai.gemini")

CHUNK_SEPARATOR = "---"


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(
        self,
        model: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.model = model or settings.GEMINI_MODEL
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT

        if self.api_key:
            # HttpOptions.timeout is expressed in milliseconds
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=int(self.timeout * 1000)),
            )
            logger.info(f"Gemini provider initialized with model: {self.model}")
        else:
            self._client = None
            logger.warning("Gemini API key not configured")

    async def generate(
        self,
        prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        start_time = time.time()

        if not self._client:
            return self._not_configured(start_time)

        config = types.GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
        )

        parts_text = []
        received_text = False
        chunk_count = 0
        usage = TokenUsage()

        try:
            stream = await self._client.aio.models.generate_content_stream(
                model=self.model,
                contents=prompt,
                config=config,
            )
            async for chunk in stream:
                chunk_count += 1
                for candidate in chunk.candidates or []:
                    if candidate.content is None:
                        continue
                    for part in candidate.content.parts or []:
                        if part.text:
                            parts_text.append(part.text)
                            received_text = True
                parts_text.append(CHUNK_SEPARATOR)

                # Usage is cumulative; the last chunk carrying it wins
                if chunk.usage_metadata:
                    usage = self._extract_usage(chunk)
        except Exception as e:
            logger.error(f"Gemini generation failed: {e}")
            return self._error(str(e), start_time)

        if not received_text:
            return self._error(
                f"Gemini stream produced no text ({chunk_count} chunks)",
                start_time,
                kind=ErrorKind.INVALID_RESPONSE,
            )

        latency_ms = self._measure_latency(start_time)
        logger.info(f"Gemini stream completed in {latency_ms:.0f}ms, chunks: {chunk_count}")

        return AIResponse(
            content="".join(parts_text),
            provider=self.provider_type,
            model=self.model,
            usage=usage,
            latency_ms=latency_ms,
            success=True,
            metadata={"chunks": chunk_count},
        )

    # --- PRIVATE HELPERS ---

    def _extract_usage(self, chunk):
        prompt_t = chunk.usage_metadata.prompt_token_count or 0
        comp_t = chunk.usage_metadata.candidates_token_count or 0
        return TokenUsage(prompt_tokens=prompt_t, completion_tokens=comp_t)

    def _error(self, msg, start_time, kind=ErrorKind.TRANSPORT):
        return self._create_error_response(
            error=msg, model=self.model, kind=kind, latency_ms=self._measure_latency(start_time)
        )


# Singleton instance
gemini_provider = GeminiProvider()
