"""
Tests for the bag-of-words similarity utility.
"""

import math

import pytest

from app.ai.consensus.similarity import (
    cosine_similarity,
    dot_product,
    magnitude,
    to_vector,
)


class TestToVector:
    """Tests for to_vector."""

    def test_counts_repeated_tokens(self):
        vec = to_vector("to be or not to be")

        assert vec == {"to": 2, "be": 2, "or": 1, "not": 1}

    def test_splits_on_any_whitespace(self):
        vec = to_vector("  alpha\tbeta\n\nalpha  ")

        assert vec == {"alpha": 2, "beta": 1}

    def test_case_and_punctuation_sensitive(self):
        vec = to_vector("Cat cat cat.")

        assert vec == {"Cat": 1, "cat": 1, "cat.": 1}

    def test_empty_text_gives_empty_vector(self):
        assert to_vector("") == {}
        assert to_vector("   \n ") == {}


class TestVectorMath:
    """Tests for dot_product and magnitude."""

    def test_dot_product_only_counts_shared_tokens(self):
        vec_a = {"a": 2, "b": 1}
        vec_b = {"a": 3, "c": 5}

        assert dot_product(vec_a, vec_b) == 6.0

    def test_dot_product_disjoint_is_zero(self):
        assert dot_product({"a": 1}, {"b": 1}) == 0.0

    def test_magnitude(self):
        assert magnitude({"a": 3, "b": 4}) == 5.0

    def test_magnitude_of_empty_vector(self):
        assert magnitude({}) == 0.0


class TestCosineSimilarity:
    """Tests for cosine_similarity."""

    @pytest.mark.parametrize("text", [
        "hello",
        "the cat sat on the mat",
        "a a a b",
    ])
    def test_identical_texts_score_one(self, text):
        assert cosine_similarity(text, text) == 1.0

    def test_disjoint_texts_score_zero(self):
        assert cosine_similarity("red green", "blue yellow") == 0.0

    def test_is_symmetric(self):
        text_a = "the quick brown fox jumps"
        text_b = "the lazy dog jumps over the fox"

        assert cosine_similarity(text_a, text_b) == cosine_similarity(text_b, text_a)

    def test_partial_overlap(self):
        # dot = 1, |a| = sqrt(2), |b| = sqrt(2)
        assert cosine_similarity("a b", "b c") == pytest.approx(0.5)

    def test_empty_text_is_zero_not_division_error(self):
        result = cosine_similarity("", "anything")

        assert result == 0.0
        assert not math.isnan(result)

    def test_both_empty_is_zero(self):
        assert cosine_similarity("", "  ") == 0.0

    def test_range_is_zero_to_one(self):
        score = cosine_similarity("one two two three", "two three three four")

        assert 0.0 <= score <= 1.0
