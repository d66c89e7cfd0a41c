"""
Prompts Module - Centralized prompt templates for AI interactions.
"""

from app.ai.prompts.engineer_prompts import (
    ENGINEER_PROMPT_TEMPLATE,
    build_engineer_prompt,
)

__all__ = [
    "ENGINEER_PROMPT_TEMPLATE",
    "build_engineer_prompt",
]
