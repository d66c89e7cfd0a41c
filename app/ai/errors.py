"""
AI Errors - Exception taxonomy for the consensus pipeline.

Providers never raise these themselves: they capture failures in
AIResponse (success=False, error_kind=...). The aggregator converts a
failed AIResponse into one of these exceptions via
AIResponse.raise_for_error(), and the HTTP layer maps them to status codes.

Hierarchy:
    ConsensusError
    ├── ProviderError              (tagged with the failing provider)
    │   ├── ConfigurationError     credential missing, never retried
    │   ├── TransportError         network / service / timeout failure
    │   └── InvalidResponseError   empty or unparseable upstream result
    └── PreconditionError          selector called with != 3 responses
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.ai.providers.base import ProviderType


class ConsensusError(Exception):
    """Base class for every error raised by the consensus pipeline."""


class ProviderError(ConsensusError):
    """A single provider failed to produce a usable response."""

    def __init__(self, provider: "ProviderType", message: str):
        self.provider = provider
        self.message = message
        super().__init__(f"[{provider.value}] {message}")


class ConfigurationError(ProviderError):
    """Required credential for the provider is absent."""


class TransportError(ProviderError):
    """Network or service-level failure, including timeouts."""


class InvalidResponseError(ProviderError):
    """Provider answered, but with an empty or unparseable result."""


class PreconditionError(ConsensusError):
    """A caller broke an input contract (e.g. wrong number of responses)."""
