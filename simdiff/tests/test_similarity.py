"""Tests for cosine similarity calculations."""

import logging

import pytest
import numpy as np
from simdiff.core.embeddings import embed_text
from simdiff.core.similarity import cosine_similarity, compute_similarities


class TestCosineSimilarity:
    """Tests for the cosine_similarity function."""

    def test_identical_vectors(self):
        """Identical vectors should have similarity of 1.0."""
        vec = np.array([1.0, 2.0, 3.0], dtype=np.float32)
        assert cosine_similarity(vec, vec) == pytest.approx(1.0)

    def test_opposite_vectors(self):
        vec_a = np.array([1.0, 0.0, 0.0], dtype=np.float32)
        vec_b = np.array([-1.0, 0.0, 0.0], dtype=np.float32)
        assert cosine_similarity(vec_a, vec_b) == pytest.approx(-1.0)

    def test_orthogonal_vectors(self):
        vec_a = np.array([1.0, 0.0, 0.0], dtype=np.float32)
        vec_b = np.array([0.0, 1.0, 0.0], dtype=np.float32)
        assert cosine_similarity(vec_a, vec_b) == pytest.approx(0.0)

    def test_different_magnitudes(self):
        """Vectors with same direction but different magnitudes should be 1.0."""
        vec_a = np.array([1.0, 1.0, 1.0], dtype=np.float32)
        vec_b = np.array([100.0, 100.0, 100.0], dtype=np.float32)
        assert cosine_similarity(vec_a, vec_b) == pytest.approx(1.0)

    def test_zero_vector_scores_zero(self):
        zero = np.zeros(3, dtype=np.float32)
        vec = np.array([1.0, 2.0, 3.0], dtype=np.float32)
        assert cosine_similarity(vec, zero) == 0.0
        assert cosine_similarity(zero, vec) == 0.0

    def test_two_zero_vectors_score_zero(self):
        zero = np.zeros(3, dtype=np.float32)
        assert cosine_similarity(zero, zero) == 0.0

    def test_empty_vector_scores_zero(self):
        empty = np.array([], dtype=np.float32)
        vec = np.array([1.0, 2.0], dtype=np.float32)
        assert cosine_similarity(empty, vec) == 0.0
        assert cosine_similarity(empty, empty) == 0.0

    def test_dimension_mismatch_truncates(self, caplog):
        """The longer vector is cut to the shorter length, not padded."""
        vec_a = np.array([1.0, 0.0], dtype=np.float32)
        vec_b = np.array([1.0, 0.0, 5.0], dtype=np.float32)
        with caplog.at_level(logging.DEBUG, logger="simdiff.core.similarity"):
            assert cosine_similarity(vec_a, vec_b) == pytest.approx(1.0)
        assert "mismatch" in caplog.text

    def test_truncation_to_zero_magnitude(self):
        """If truncation leaves only zeros, the score is 0.0."""
        vec_a = np.array([1.0], dtype=np.float32)
        vec_b = np.array([0.0, 3.0], dtype=np.float32)
        assert cosine_similarity(vec_a, vec_b) == 0.0

    def test_accepts_python_lists(self):
        assert cosine_similarity([1.0, 0.0], [1.0, 0.0]) == pytest.approx(1.0)

    def test_result_clamped_to_valid_range(self):
        vec = np.array([1e-3, 2e-3, 3e-3], dtype=np.float32)
        sim = cosine_similarity(vec, vec)
        assert -1.0 <= sim <= 1.0

    @pytest.mark.parametrize("a,b", [
        ([1.0, 2.0, 3.0], [3.0, 1.0, 0.5]),
        ([0.2, 0.0, 0.9, 0.1], [0.5, 0.5]),
        ([0.0, 0.0], [1.0, 1.0]),
    ])
    def test_symmetric(self, a, b):
        vec_a = np.array(a, dtype=np.float32)
        vec_b = np.array(b, dtype=np.float32)
        assert cosine_similarity(vec_a, vec_b) == cosine_similarity(vec_b, vec_a)

    def test_embedded_sentence_with_itself(self):
        vec = embed_text("Water boils at 100 degrees Celsius.")
        assert cosine_similarity(vec, vec) == pytest.approx(1.0, abs=1e-6)

    def test_embedded_sentences_symmetric(self):
        vec_a = embed_text("The sky is blue.")
        vec_b = embed_text("Water boils at 100 degrees Celsius.")
        assert cosine_similarity(vec_a, vec_b) == cosine_similarity(vec_b, vec_a)


class TestComputeSimilarities:
    """Tests for one-to-many scoring."""

    def test_empty_list(self):
        vec = np.array([1.0, 0.0], dtype=np.float32)
        assert compute_similarities(vec, []) == []

    def test_preserves_order(self):
        query = np.array([1.0, 0.0], dtype=np.float32)
        docs = [
            np.array([0.0, 1.0], dtype=np.float32),
            np.array([1.0, 0.0], dtype=np.float32),
            np.zeros(2, dtype=np.float32),
        ]
        sims = compute_similarities(query, docs)
        assert sims == pytest.approx([0.0, 1.0, 0.0])
