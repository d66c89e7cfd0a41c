"""
AI Providers Module - Unified clients for the three generation services.

This module provides consistent interfaces to different AI providers:
- OpenAI (GPT, prompt-engineering template applied)
- Google Gemini (streamed, chunks joined with a separator)
- Cohere (Command models over REST)

Each provider has the same interface, making them interchangeable:
    response = await provider.generate(prompt, **kwargs)

The aggregator fans a prompt out to all three and picks the consensus
answer; see app.ai.consensus.
"""

from app.ai.providers.base import AIProvider, AIResponse, ErrorKind, ProviderType, TokenUsage
from app.ai.providers.openai_provider import OpenAIProvider, openai_provider
from app.ai.providers.gemini import GeminiProvider, gemini_provider
from app.ai.providers.cohere_provider import CohereProvider, cohere_provider

__all__ = [
    "AIProvider",
    "AIResponse",
    "ErrorKind",
    "ProviderType",
    "TokenUsage",
    "OpenAIProvider",
    "openai_provider",
    "GeminiProvider",
    "gemini_provider",
    "CohereProvider",
    "cohere_provider",
]
