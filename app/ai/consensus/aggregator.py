"""
Response Aggregator - Fans a prompt out to every provider and picks the consensus.

Flow:
=====

┌──────────────────────────────┐
│  "Write a prompt for a       │
│   product launch email"      │
└──────────────┬───────────────┘
               │
     ┌─────────┼─────────┐
     ▼         ▼         ▼
 ┌────────┐┌────────┐┌────────┐
 │ OpenAI ││ Gemini ││ Cohere │   concurrent (default) or sequential
 └───┬────┘└───┬────┘└───┬────┘
     └─────────┼─────────┘
               ▼
┌──────────────────────────────┐
│  Selector: highest summed    │
│  cosine similarity wins      │
└──────────────┬───────────────┘
               ▼
         ResponseBundle

Failure policy: first failure aborts. Any provider failure fails the
whole request with that provider's typed error; no partial bundles are
ever returned.
- Sequential: providers after the failing one are never invoked.
- Concurrent: the remaining calls are cancelled and drained before the
  error is raised. If several providers have failed by then, the earliest
  in provider order is reported.

A deadline is threaded through every provider call. A provider still
running when it expires fails with TransportError.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from uuid import uuid4

from app.core.config import settings
from app.ai.errors import PreconditionError, ProviderError, TransportError
from app.ai.consensus.selector import EXPECTED_RESPONSES, best_index, score_responses
from app.ai.monitoring import AIMonitor, ai_monitor
from app.ai.providers import (
    AIProvider,
    AIResponse,
    ProviderType,
    cohere_provider,
    gemini_provider,
    openai_provider,
)

logger = logging.getLogger("consensus.ai.aggregator")


@dataclass
class ResponseBundle:
    """
    The outcome of one successful fan-out.

    Attributes:
        responses: One successful AIResponse per provider, in provider order
        best_response: Text of the consensus response
        best_provider: Provider that produced the consensus response
        scores: Similarity sum per provider
        request_id: Tracking id shared by every log line of this request
        latency_ms: Wall time of the whole fan-out plus selection
    """
    responses: List[AIResponse]
    best_response: str
    best_provider: ProviderType
    scores: Dict[ProviderType, float] = field(default_factory=dict)
    request_id: str = ""
    latency_ms: float = 0.0

    def to_dict(self) -> Dict[str, str]:
        """Wire shape: one "<provider>_response" key per provider plus "best_response"."""
        result = {f"{r.provider.value}_response": r.content for r in self.responses}
        result["best_response"] = self.best_response
        return result


class ResponseAggregator:
    """
    Calls all three providers for a prompt and selects the consensus answer.

    Usage:
        aggregator = ResponseAggregator()
        bundle = await aggregator.aggregate("Draft a prompt for ...")
        print(bundle.best_provider, bundle.best_response)

        # Fakes for testing / alternate providers:
        aggregator = ResponseAggregator(providers=[fake_a, fake_b, fake_c])
    """

    def __init__(
        self,
        providers: Optional[Sequence[AIProvider]] = None,
        concurrent: Optional[bool] = None,
        timeout: Optional[float] = None,
        monitor: Optional[AIMonitor] = None,
    ):
        """
        Args:
            providers: Exactly three providers, in provider order
                (default: the OpenAI, Gemini and Cohere singletons)
            concurrent: Run providers concurrently (default: settings.AI_CONCURRENT_FANOUT)
            timeout: Default deadline in seconds (default: settings.AI_REQUEST_TIMEOUT)
            monitor: Where to log and count calls (default: ai_monitor)
        """
        if providers is None:
            providers = [openai_provider, gemini_provider, cohere_provider]
        self.providers = list(providers)
        if len(self.providers) != EXPECTED_RESPONSES:
            raise PreconditionError(
                f"aggregator needs exactly {EXPECTED_RESPONSES} providers, got {len(self.providers)}"
            )

        self.concurrent = settings.AI_CONCURRENT_FANOUT if concurrent is None else concurrent
        self.timeout = settings.AI_REQUEST_TIMEOUT if timeout is None else timeout
        self._monitor = monitor or ai_monitor

    async def aggregate(
        self,
        prompt: str,
        timeout: Optional[float] = None,
        request_id: Optional[str] = None,
    ) -> ResponseBundle:
        """
        Generate with every provider and select the consensus response.

        Args:
            prompt: Non-empty prompt text
            timeout: Deadline in seconds for the whole fan-out (default: self.timeout)
            request_id: Tracking id (generated if omitted)

        Returns:
            ResponseBundle with all three responses and the consensus pick

        Raises:
            PreconditionError: prompt is empty
            ConfigurationError / TransportError / InvalidResponseError:
                the first provider that failed
        """
        if not prompt:
            raise PreconditionError("prompt must be a non-empty string")

        request_id = request_id or uuid4().hex[:12]
        deadline = self.timeout if timeout is None else timeout
        start_time = time.time()

        mode = "concurrent" if self.concurrent else "sequential"
        logger.debug(f"[{request_id}] fan-out ({mode}) to {len(self.providers)} providers, deadline {deadline}s")

        try:
            if self.concurrent:
                responses = await self._fan_out_concurrent(prompt, request_id, deadline)
            else:
                responses = await self._fan_out_sequential(prompt, request_id, deadline)
        except ProviderError as e:
            self._monitor.track_error(
                request_id=request_id,
                error=e.message,
                stage=e.provider.value,
                metadata={"kind": type(e).__name__, "mode": mode},
            )
            raise

        texts = [response.content for response in responses]
        scores = score_responses(*texts)
        winner = best_index(scores)
        latency_ms = (time.time() - start_time) * 1000

        bundle = ResponseBundle(
            responses=responses,
            best_response=texts[winner],
            best_provider=responses[winner].provider,
            scores={r.provider: score for r, score in zip(responses, scores)},
            request_id=request_id,
            latency_ms=latency_ms,
        )

        self._monitor.track_selection(
            request_id=request_id,
            provider=bundle.best_provider.value,
            scores={p.value: s for p, s in bundle.scores.items()},
            latency_ms=latency_ms,
        )
        return bundle

    # -----------------------------------------------------------------------
    # FAN-OUT STRATEGIES
    # -----------------------------------------------------------------------

    async def _fan_out_sequential(
        self, prompt: str, request_id: str, deadline: float
    ) -> List[AIResponse]:
        loop = asyncio.get_running_loop()
        expires_at = loop.time() + deadline
        responses = []

        for provider in self.providers:
            remaining = expires_at - loop.time()
            if remaining <= 0:
                raise self._timeout_error(provider, deadline)
            try:
                response = await asyncio.wait_for(
                    self._invoke(provider, prompt, request_id), timeout=remaining
                )
            except asyncio.TimeoutError:
                raise self._timeout_error(provider, deadline) from None
            responses.append(response)

        return responses

    async def _fan_out_concurrent(
        self, prompt: str, request_id: str, deadline: float
    ) -> List[AIResponse]:
        tasks = [
            asyncio.create_task(self._invoke(provider, prompt, request_id))
            for provider in self.providers
        ]
        try:
            await asyncio.wait(tasks, timeout=deadline, return_when=asyncio.FIRST_EXCEPTION)
        finally:
            # Nothing may outlive the request: cancel stragglers and drain them
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        # Real failures take precedence over calls cancelled at the deadline
        for task in tasks:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()

        for provider, task in zip(self.providers, tasks):
            if task.cancelled():
                raise self._timeout_error(provider, deadline)

        return [task.result() for task in tasks]

    # -----------------------------------------------------------------------
    # PRIVATE HELPERS
    # -----------------------------------------------------------------------

    async def _invoke(self, provider: AIProvider, prompt: str, request_id: str) -> AIResponse:
        """Call one provider, track it, and raise its typed error on failure."""
        provider_name = provider.provider_type.value
        self._monitor.track_request(
            request_id=request_id,
            prompt=prompt,
            provider=provider_name,
            model=provider.model,
        )

        response = await provider.generate(prompt)

        self._monitor.track_response_from_ai_response(request_id, response)
        response.raise_for_error()
        return response

    def _timeout_error(self, provider: AIProvider, deadline: float) -> TransportError:
        return TransportError(provider.provider_type, f"timed out after {deadline}s")


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------
response_aggregator = ResponseAggregator()
