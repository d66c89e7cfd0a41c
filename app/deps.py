"""
Dependencies module - reusable FastAPI dependencies for route handlers.
The main dependency here is get_aggregator, which tests override to
inject fake providers.
"""

from app.ai.consensus import ResponseAggregator, response_aggregator
from app.ai.monitoring import AIMonitor, ai_monitor


def get_aggregator() -> ResponseAggregator:
    """
    Provide the response aggregator used by the prompt endpoints.

    Override in tests with:
        app.dependency_overrides[get_aggregator] = lambda: ResponseAggregator(providers=[...])
    """
    return response_aggregator


def get_monitor() -> AIMonitor:
    """Provide the process-wide AI monitor."""
    return ai_monitor
