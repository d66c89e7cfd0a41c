"""
Selector - Picks the consensus response out of three candidates.

Each candidate is scored by the sum of its cosine similarity to the other
two; the highest score wins. Equal scores resolve to the earliest
candidate, so callers must pass responses in provider order
(OpenAI, Gemini, Cohere).
"""

from typing import List

from app.ai.errors import PreconditionError
from app.ai.consensus.similarity import cosine_similarity

EXPECTED_RESPONSES = 3


def score_responses(*responses: str) -> List[float]:
    """
    Similarity sum of each response against the other two.

    Raises:
        PreconditionError: if not called with exactly three responses
    """
    if len(responses) != EXPECTED_RESPONSES:
        raise PreconditionError(
            f"selector needs exactly {EXPECTED_RESPONSES} responses, got {len(responses)}"
        )

    a, b, c = responses
    sim_ab = cosine_similarity(a, b)
    sim_ac = cosine_similarity(a, c)
    sim_bc = cosine_similarity(b, c)

    return [sim_ab + sim_ac, sim_ab + sim_bc, sim_ac + sim_bc]


def best_index(scores: List[float]) -> int:
    """Position of the highest score; ties go to the lowest position."""
    best = 0
    for index, score in enumerate(scores):
        if score > scores[best]:
            best = index
    return best


def select_best_index(*responses: str) -> int:
    """Index of the consensus response; ties go to the lowest index."""
    return best_index(score_responses(*responses))


def select_best(*responses: str) -> str:
    """The consensus response itself."""
    return responses[select_best_index(*responses)]
