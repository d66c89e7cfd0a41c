"""
Engineer Prompts - Template used to ask a model to improve a user prompt.

The OpenAI provider wraps every incoming prompt in this template; the
other providers receive the prompt as-is.
"""

# ---------------------------------------------------------------------------
# PROMPT ENGINEERING TEMPLATE
# ---------------------------------------------------------------------------
# {text} is replaced with the caller's raw prompt

ENGINEER_PROMPT_TEMPLATE = "Engineer the specified prompt for better performance. {text}"


def build_engineer_prompt(text: str) -> str:
    """Render the caller's prompt into ENGINEER_PROMPT_TEMPLATE."""
    return ENGINEER_PROMPT_TEMPLATE.format(text=text)
