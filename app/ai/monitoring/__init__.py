"""
Monitoring Module - Unified logging and metrics tracking for AI operations.

This module provides observability for the consensus pipeline:
- Request/response logging per provider
- Token usage tracking
- Latency metrics
- Error tracking
- Consensus wins per provider

Usage:
======
    from app.ai.monitoring import ai_monitor

    ai_monitor.track_request(request_id, prompt, provider, model)
    ai_monitor.track_response_from_ai_response(request_id, response)

    stats = ai_monitor.get_stats()
"""

from app.ai.monitoring.monitor import AIMonitor, AggregatedMetrics, RequestMetrics, ai_monitor

__all__ = [
    "AIMonitor",
    "AggregatedMetrics",
    "RequestMetrics",
    "ai_monitor",
]
