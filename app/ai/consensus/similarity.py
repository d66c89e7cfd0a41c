"""
Similarity - Bag-of-words cosine similarity between two texts.

Texts are tokenized on whitespace only. Tokens are case- and
punctuation-sensitive: "Cat", "cat" and "cat." are three different words.
"""

import math
from collections import Counter
from typing import Mapping


def to_vector(text: str) -> Counter:
    """Frequency vector of the whitespace-delimited tokens in ``text``."""
    return Counter(text.split())


def dot_product(vec_a: Mapping[str, float], vec_b: Mapping[str, float]) -> float:
    """Sum of count products over tokens present in both vectors."""
    if len(vec_b) < len(vec_a):
        vec_a, vec_b = vec_b, vec_a
    return float(sum(count * vec_b[token] for token, count in vec_a.items() if token in vec_b))


def _squared_norm(vec: Mapping[str, float]) -> float:
    return float(sum(count * count for count in vec.values()))


def magnitude(vec: Mapping[str, float]) -> float:
    """Euclidean norm of a frequency vector."""
    return math.sqrt(_squared_norm(vec))


def cosine_similarity(text_a: str, text_b: str) -> float:
    """
    Cosine similarity of the frequency vectors of two texts.

    Returns 0.0 when either text has no tokens (zero-magnitude vector).
    """
    vec_a = to_vector(text_a)
    vec_b = to_vector(text_b)

    # sqrt(|a|^2 * |b|^2) rather than |a| * |b|: identical texts score exactly 1.0
    norm = math.sqrt(_squared_norm(vec_a) * _squared_norm(vec_b))
    if norm == 0:
        return 0.0
    return dot_product(vec_a, vec_b) / norm
