"""
Configuration module - centralized settings for the entire application.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    To override in production, set environment variables:
        export OPENAI_API_KEY=sk-...
        export AI_REQUEST_TIMEOUT=15
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    # model_config: Tells pydantic-settings how to load configuration
    model_config = SettingsConfigDict(
        env_file=".env",        # Load from .env file in project root
        env_file_encoding="utf-8",  # File encoding
        extra="ignore",         # Ignore extra env vars not defined here
    )

    # ---------------------------------------------------------------------------
    # APPLICATION SETTINGS
    # ---------------------------------------------------------------------------
    # APP_NAME: Display name shown in API docs and logging
    APP_NAME: str = "Prompt Consensus"

    # DEBUG: Verbose (DEBUG level) logging for the AI pipeline
    DEBUG: bool = False

    # ---------------------------------------------------------------------------
    # AI/LLM PROVIDER CREDENTIALS
    # ---------------------------------------------------------------------------
    # One key per provider. A missing key does not stop the app from booting;
    # the provider answers every call with a configuration error instead.
    OPENAI_API_KEY: str = ""
    GEMINI_API_KEY: str = ""
    COHERE_API_KEY: str = ""

    # ---------------------------------------------------------------------------
    # AI MODEL CONFIGURATION
    # ---------------------------------------------------------------------------
    OPENAI_MODEL: str = "gpt-4"
    GEMINI_MODEL: str = "gemini-2.0-flash"
    COHERE_MODEL: str = "command-r"

    # COHERE_BASE_URL: Cohere REST API root (v2 chat endpoint lives under it)
    COHERE_BASE_URL: str = "https://api.cohere.com"

    # AI Request timeout in seconds
    # - Applied by every provider client to its own HTTP calls
    # - Also the default deadline for one whole fan-out
    AI_REQUEST_TIMEOUT: float = 30.0

    # AI_CONCURRENT_FANOUT: Call the three providers at the same time (True)
    # or one after another in provider order (False)
    AI_CONCURRENT_FANOUT: bool = True

    def missing_credentials(self) -> List[str]:
        """Names of providers whose API key is not configured."""
        keys = {
            "openai": self.OPENAI_API_KEY,
            "gemini": self.GEMINI_API_KEY,
            "cohere": self.COHERE_API_KEY,
        }
        return [name for name, key in keys.items() if not key]


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Create a single instance to import throughout the app
# Usage: from app.core.config import settings
# Then:  settings.OPENAI_API_KEY, settings.AI_REQUEST_TIMEOUT, etc.
settings = Settings()
