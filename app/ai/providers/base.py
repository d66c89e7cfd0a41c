"""
Base AI Provider - Abstract interface for all LLM providers.

This module defines the contract that all AI providers must follow.
It ensures consistent behavior regardless of which provider is used.

Design Pattern: Strategy Pattern
================================
The base class defines the interface, and each provider implements it.
This allows the aggregator to iterate over providers uniformly, wrap
them in deadlines, and swap in fakes for testing.

Example:
    provider = GeminiProvider()  # or OpenAIProvider() or CohereProvider()
    response = await provider.generate("Hello, world!")
    print(response.content)
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Any, Dict
from enum import Enum
import logging

from app.ai.errors import (
    ConfigurationError,
    InvalidResponseError,
    TransportError,
)

# Configure logging for AI operations
logger = logging.getLogger("consensus.ai")


class ProviderType(str, Enum):
    """
    Enum of supported AI providers.

    Declaration order is the fixed provider order: it decides tie-breaks
    in the selector and failure attribution in the aggregator.
    """
    OPENAI = "openai"
    GEMINI = "gemini"
    COHERE = "cohere"

    @property
    def display_name(self) -> str:
        """Human-readable provider name for user-facing messages."""
        return {
            ProviderType.OPENAI: "OpenAI",
            ProviderType.GEMINI: "Gemini",
            ProviderType.COHERE: "Cohere",
        }[self]


class ErrorKind(str, Enum):
    """Why a provider call failed."""
    CONFIGURATION = "configuration"
    TRANSPORT = "transport"
    INVALID_RESPONSE = "invalid_response"


_ERROR_TYPES = {
    ErrorKind.CONFIGURATION: ConfigurationError,
    ErrorKind.TRANSPORT: TransportError,
    ErrorKind.INVALID_RESPONSE: InvalidResponseError,
}


@dataclass
class TokenUsage:
    """
    Token usage statistics for an AI request.

    Not every provider reports usage; missing values stay at zero.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        """Calculate total if not provided."""
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Standardized result from any AI provider.

    Either generated text (success=True) or a failure reason tagged with
    the provider that produced it (success=False, error, error_kind).

    Attributes:
        content: The generated text response
        provider: Which provider generated this response
        model: The specific model used
        usage: Token usage statistics
        latency_ms: How long the request took
        success: Whether the request succeeded
        error: Error message if failed
        error_kind: Failure category if failed
        raw_response: Original provider response (for debugging)
        metadata: Additional provider-specific data
        created_at: Timestamp of the response
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    raw_response: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def raise_for_error(self) -> None:
        """
        Raise the typed ProviderError matching this failed response.

        Does nothing for successful responses. A failure without an
        explicit kind is reported as a transport failure.
        """
        if self.success:
            return
        error_type = _ERROR_TYPES.get(self.error_kind, TransportError)
        raise error_type(self.provider, self.error or "unknown error")


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    All AI providers (OpenAI, Gemini, Cohere) must implement this interface.
    This ensures consistent behavior and makes providers interchangeable.

    Responsibilities:
    - Generate text responses from prompts
    - Capture failures in the returned AIResponse instead of raising
    - Track token usage and latency
    - Apply their own request timeout

    Usage:
        class MyProvider(AIProvider):
            async def generate(self, prompt, **kwargs):
                # Implementation here
                pass
    """

    provider_type: ProviderType
    model: str

    @abstractmethod
    async def generate(self, prompt: str, **kwargs) -> AIResponse:
        """
        Generate a response from the AI model.

        Args:
            prompt: The user's prompt (non-empty)
            **kwargs: Provider-specific options

        Returns:
            AIResponse with the generated content

        Raises:
            This method should NOT raise exceptions.
            Errors are captured in AIResponse.error / AIResponse.error_kind
        """
        pass

    def _measure_latency(self, start_time: float) -> float:
        """Calculate latency in milliseconds."""
        return (time.time() - start_time) * 1000

    def _create_error_response(
        self,
        error: str,
        model: str,
        kind: ErrorKind = ErrorKind.TRANSPORT,
        latency_ms: float = 0.0
    ) -> AIResponse:
        """
        Create a standardized error response.

        Used when a provider fails to ensure consistent error handling.
        """
        logger.error(f"AI Provider Error [{self.provider_type.value}] ({kind.value}): {error}")
        return AIResponse(
            content="",
            provider=self.provider_type,
            model=model,
            latency_ms=latency_ms,
            success=False,
            error=error,
            error_kind=kind,
        )

    def _not_configured(self, start_time: float) -> AIResponse:
        return self._create_error_response(
            error=f"{self.provider_type.display_name} API key not configured",
            model=self.model,
            kind=ErrorKind.CONFIGURATION,
            latency_ms=self._measure_latency(start_time),
        )
