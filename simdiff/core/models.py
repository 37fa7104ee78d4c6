"""
Data models for the sentence comparison engine.

These dataclasses define the structured types used throughout the
comparison pipeline. They are frozen: every entity is created once per
comparison run and is read-only afterwards. Attaching an embedding to a
sentence produces a new Sentence rather than mutating the old one.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence
from enum import Enum
import numpy as np
from numpy.typing import NDArray


# Type alias for embedding vectors
Vector = NDArray[np.float32]


class AlignmentStatus(Enum):
    """
    Classification of a target sentence against the source document.

    - MATCH: near-verbatim counterpart found in the source
    - PARAPHRASE: similar wording, likely the same claim
    - UNIQUE: no adequate counterpart in the source
    - MISSING: reserved for reverse-direction analysis, never produced
    """
    MATCH = "match"
    PARAPHRASE = "paraphrase"
    UNIQUE = "unique"
    MISSING = "missing"


@dataclass(frozen=True)
class Sentence:
    """
    A single sentence of a document.

    Attributes:
        text: The sentence text
        index: Position in the original document (0-indexed, stable)
        section: Section heading the sentence came from (if known)
        embedding: Fingerprint vector, attached once per comparison run
    """
    text: str
    index: int
    section: Optional[str] = None
    embedding: Optional[Vector] = field(default=None, compare=False, repr=False)

    @property
    def char_count(self) -> int:
        """Number of characters in this sentence."""
        return len(self.text)

    @property
    def word_count(self) -> int:
        """Approximate number of words in this sentence."""
        return len(self.text.split())

    @property
    def has_embedding(self) -> bool:
        """Whether a non-empty embedding is attached."""
        return self.embedding is not None and self.embedding.size > 0

    def with_embedding(self, embedding: Vector) -> "Sentence":
        """Return a copy of this sentence carrying the given embedding."""
        return replace(self, embedding=embedding)


@dataclass(frozen=True)
class Document:
    """
    An ordered sequence of sentences plus provenance.

    Attributes:
        title: Document title (used as the comparison topic by default)
        url: Where the document came from
        sentences: Sentences in document order
        content: Normalized full text, if the caller kept it
    """
    title: str
    url: str
    sentences: List[Sentence]
    content: str = ""

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    def with_embeddings(self, embeddings: Sequence[Vector]) -> "Document":
        """
        Return a copy of this document with one embedding per sentence.

        Raises:
            ValueError: If the number of embeddings does not match
        """
        if len(embeddings) != len(self.sentences):
            raise ValueError(
                f"Expected {len(self.sentences)} embeddings, got {len(embeddings)}"
            )
        sentences = [
            sentence.with_embedding(vector)
            for sentence, vector in zip(self.sentences, embeddings)
        ]
        return replace(self, sentences=sentences)


@dataclass(frozen=True)
class BestMatch:
    """The best-scoring source sentence for one target sentence."""
    source_sentence: Sentence
    similarity: float


@dataclass(frozen=True)
class SentenceComparison:
    """
    Alignment of one target sentence against the source document.

    Attributes:
        target_sentence: The sentence being evaluated
        best_match: Highest-scoring source sentence, None if nothing scored
        status: Classification of the similarity score
        similarity: Cosine similarity of the best match (0.0 if none)
    """
    target_sentence: Sentence
    best_match: Optional[BestMatch]
    status: AlignmentStatus
    similarity: float

    @property
    def is_potential_hallucination(self) -> bool:
        return is_potential_hallucination(self.status, self.similarity)


@dataclass(frozen=True)
class ComparisonSummary:
    """
    Aggregate counts over all alignments of one document pair.

    Attributes:
        total_target_sentences: Number of target sentences compared
        matches: Sentences classified MATCH
        paraphrases: Sentences classified PARAPHRASE
        unique: Sentences classified UNIQUE
        missing: Always 0 (reverse-direction analysis is not performed)
        potential_hallucinations: UNIQUE alignments below the hallucination
            threshold, in target order
    """
    total_target_sentences: int
    matches: int
    paraphrases: int
    unique: int
    missing: int
    potential_hallucinations: List[SentenceComparison]

    @property
    def hallucination_count(self) -> int:
        return len(self.potential_hallucinations)

    @property
    def match_rate(self) -> float:
        """Share of target sentences classified MATCH (0.0 for empty)."""
        if self.total_target_sentences == 0:
            return 0.0
        return self.matches / self.total_target_sentences


@dataclass(frozen=True)
class ComparisonResult:
    """
    Complete result of comparing a target document against a source.

    This is the primary return type from compare_documents().

    Attributes:
        topic: What the two documents are about
        source_document: Reference document, with embeddings attached
        target_document: Evaluated document, with embeddings attached
        comparisons: One alignment per target sentence, in target order
        summary: Aggregate statistics
        embedder_name: Name of the embedding provider used
        embedding_dim: Dimensionality of the embeddings
    """
    topic: str
    source_document: Document
    target_document: Document
    comparisons: List[SentenceComparison]
    summary: ComparisonSummary
    embedder_name: str = ""
    embedding_dim: int = 0

    def get_comparisons_by_status(
        self, status: AlignmentStatus
    ) -> List[SentenceComparison]:
        """Return alignments with the given status, in target order."""
        return [c for c in self.comparisons if c.status == status]

    def get_comparisons_below_threshold(
        self, threshold: float
    ) -> List[SentenceComparison]:
        """Return alignments with similarity < threshold."""
        return [c for c in self.comparisons if c.similarity < threshold]


# Classification thresholds. Lower bounds are inclusive.
MATCH_THRESHOLD = 0.85
PARAPHRASE_THRESHOLD = 0.60
# Stricter secondary bound for flagging UNIQUE sentences for review (exclusive).
HALLUCINATION_THRESHOLD = 0.30


def classify_similarity(score: float) -> AlignmentStatus:
    """
    Map a similarity score to an alignment status.

    Args:
        score: Cosine similarity of the best match

    Returns:
        MATCH for score >= 0.85, PARAPHRASE for 0.60 <= score < 0.85,
        UNIQUE otherwise
    """
    if score >= MATCH_THRESHOLD:
        return AlignmentStatus.MATCH
    elif score >= PARAPHRASE_THRESHOLD:
        return AlignmentStatus.PARAPHRASE
    else:
        return AlignmentStatus.UNIQUE


def is_potential_hallucination(status: AlignmentStatus, score: float) -> bool:
    """Whether an alignment should be flagged as a potential hallucination."""
    return status == AlignmentStatus.UNIQUE and score < HALLUCINATION_THRESHOLD


def similarity_label(score: float) -> str:
    """Human-readable label for a similarity score."""
    status = classify_similarity(score)
    if status == AlignmentStatus.MATCH:
        return "Match"
    elif status == AlignmentStatus.PARAPHRASE:
        return "Paraphrase"
    else:
        return "Unique/Hallucination"
