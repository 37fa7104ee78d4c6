"""
SimDiff - Sentence-Level Document Discrepancy Analyzer

Compares a target document against a source document sentence by
sentence using local feature-hashing fingerprints and cosine similarity,
and flags target sentences with no counterpart in the source.
"""

from simdiff.core.engine import compare_documents, compare_texts, ComparisonConfig
from simdiff.core.embeddings import EmbeddingConfig, HashingEmbedder
from simdiff.core.errors import (
    ComparisonError,
    ExtractionEmptyError,
    InvalidRequestError,
)
from simdiff.core.models import (
    AlignmentStatus,
    BestMatch,
    ComparisonResult,
    ComparisonSummary,
    Document,
    Sentence,
    SentenceComparison,
)
from simdiff.core.sentences import build_document
from simdiff.core.notes import generate_note, validate_note, Discrepancy, DiscrepancyKind

__version__ = "0.1.0"
__all__ = [
    # Comparison
    "compare_documents",
    "compare_texts",
    "ComparisonConfig",
    "EmbeddingConfig",
    "HashingEmbedder",
    "build_document",
    # Models
    "AlignmentStatus",
    "BestMatch",
    "ComparisonResult",
    "ComparisonSummary",
    "Document",
    "Sentence",
    "SentenceComparison",
    # Errors
    "ComparisonError",
    "ExtractionEmptyError",
    "InvalidRequestError",
    # Notes
    "generate_note",
    "validate_note",
    "Discrepancy",
    "DiscrepancyKind",
]
