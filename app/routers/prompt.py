"""
Prompt Router - API endpoint for consensus prompt engineering.

This router only handles HTTP concerns. All fan-out and selection logic
lives in the ResponseAggregator.

Architecture:
=============
```
┌─────────────────┐
│ {"input": "..."}│
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│  Prompt Router  │  ← HTTP handling only (this file)
│  (FastAPI)      │
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│   Aggregator    │  ← fan-out + consensus selection
└────────┬────────┘
         │
   ┌─────┼─────┐
   ▼     ▼     ▼
 OpenAI Gemini Cohere
```
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.deps import get_aggregator, get_monitor
from app.ai.consensus import ResponseAggregator
from app.ai.errors import ProviderError
from app.ai.monitoring import AIMonitor


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/engineer-prompt", tags=["prompt"])


# ---------------------------------------------------------------------------
# REQUEST/RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class PromptRequest(BaseModel):
    """
    Request schema for the /engineer-prompt endpoint.

    Example:
    {
        "input": "Write a prompt that gets a model to summarize legal contracts"
    }
    """
    input: str = Field(
        ...,
        min_length=1,
        description="Prompt text to send to every provider"
    )


class PromptResponse(BaseModel):
    """
    Response schema for the /engineer-prompt endpoint.

    Example:
    {
        "openai_response": "...",
        "gemini_response": "...---",
        "cohere_response": "...",
        "best_response": "..."
    }
    """
    openai_response: str = Field(description="Text generated by OpenAI")
    gemini_response: str = Field(description="Text generated by Gemini, chunks separated by ---")
    cohere_response: str = Field(description="Text generated by Cohere")
    best_response: str = Field(description="Consensus response: most similar to the other two")


class AIStatsResponse(BaseModel):
    """Response schema for /engineer-prompt/stats endpoint."""
    total_requests: int
    successful_requests: int
    failed_requests: int
    success_rate: str
    total_tokens: int
    prompt_tokens: int
    completion_tokens: int
    avg_latency_ms: float
    requests_by_provider: Dict[str, int]
    failures_by_provider: Dict[str, int]
    tokens_by_provider: Dict[str, int]
    consensus_wins_by_provider: Dict[str, int]


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.post("", response_model=PromptResponse)
async def engineer_prompt(
    request: PromptRequest,
    aggregator: ResponseAggregator = Depends(get_aggregator),
):
    """
    Send a prompt to OpenAI, Gemini and Cohere and return all three
    answers plus the consensus pick.

    Any provider failure fails the whole request with a 500 naming the
    provider; the upstream error itself is only logged.
    """
    try:
        bundle = await aggregator.aggregate(request.input)
    except ProviderError as e:
        logger.error(f"{e.provider.display_name} error: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"failed to get response from {e.provider.display_name}",
        )

    return PromptResponse(**bundle.to_dict())


@router.get("/stats", response_model=AIStatsResponse)
async def get_ai_stats(monitor: AIMonitor = Depends(get_monitor)):
    """
    Get AI usage statistics.

    Returns aggregated metrics about provider calls including:
    - Total calls processed
    - Success/failure rates
    - Token usage
    - How often each provider won the consensus
    """
    return AIStatsResponse(**monitor.get_stats().to_dict())
