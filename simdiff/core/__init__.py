"""
Core sentence comparison engine.

This module provides the foundational logic for:
- Sentence preparation
- Feature-hashing embeddings
- Cosine similarity calculation
- Greedy sentence alignment and classification
- Summary statistics and discrepancy notes
"""

from simdiff.core.sentences import build_document, split_into_sentences
from simdiff.core.embeddings import embed_text, embed_texts, HashingEmbedder
from simdiff.core.similarity import cosine_similarity
from simdiff.core.alignment import align_sentence
from simdiff.core.summary import summarize_comparisons
from simdiff.core.engine import compare_documents, compare_texts
from simdiff.core.errors import (
    ComparisonError,
    ExtractionEmptyError,
    InvalidRequestError,
)
from simdiff.core.models import (
    AlignmentStatus,
    Sentence,
    Document,
    SentenceComparison,
    ComparisonSummary,
    ComparisonResult,
    classify_similarity,
)

__all__ = [
    # Sentence preparation
    "build_document",
    "split_into_sentences",
    # Embedding and scoring
    "embed_text",
    "embed_texts",
    "HashingEmbedder",
    "cosine_similarity",
    # Alignment and aggregation
    "align_sentence",
    "classify_similarity",
    "summarize_comparisons",
    "compare_documents",
    "compare_texts",
    # Errors
    "ComparisonError",
    "ExtractionEmptyError",
    "InvalidRequestError",
    # Models
    "AlignmentStatus",
    "Sentence",
    "Document",
    "SentenceComparison",
    "ComparisonSummary",
    "ComparisonResult",
]
