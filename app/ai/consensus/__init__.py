"""
Consensus Module - Fan-out to every provider and pick the consensus answer.

- similarity: bag-of-words cosine similarity
- selector: highest summed similarity wins, ties go to provider order
- aggregator: concurrent/sequential fan-out with first-failure-aborts
"""

from app.ai.consensus.aggregator import ResponseAggregator, ResponseBundle, response_aggregator
from app.ai.consensus.selector import score_responses, select_best, select_best_index
from app.ai.consensus.similarity import cosine_similarity, dot_product, magnitude, to_vector

__all__ = [
    "ResponseAggregator",
    "ResponseBundle",
    "response_aggregator",
    "score_responses",
    "select_best",
    "select_best_index",
    "cosine_similarity",
    "dot_product",
    "magnitude",
    "to_vector",
]
