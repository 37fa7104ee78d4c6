"""
Main comparison engine orchestrating the full analysis pipeline.

This module provides the high-level API for comparing a target document
against a source document. It coordinates:
1. Input validation
2. Embedding generation (source and target concurrently)
3. Sentence alignment and classification
4. Result aggregation

The primary entry point is compare_documents(), which takes two
Documents and returns a structured ComparisonResult. compare_texts()
does the same starting from raw text.

Design Principles:
- Fail-fast: invalid or empty documents are rejected before any embedding
- Degrade, don't abort: one bad sentence lowers one score, nothing more
- Deterministic: same inputs produce same outputs
- No side effects: no persistence, no module-level state
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional

from simdiff.core.alignment import align_documents
from simdiff.core.embeddings import (
    EmbeddingConfig,
    EmbeddingProvider,
    HashingEmbedder,
    embed_texts,
)
from simdiff.core.errors import (
    ComparisonError,
    ExtractionEmptyError,
    InvalidRequestError,
)
from simdiff.core.models import (
    ComparisonResult,
    Document,
    Sentence,
    SentenceComparison,
)
from simdiff.core.sentences import MIN_SENTENCE_CHARS, build_document
from simdiff.core.summary import summarize_comparisons


logger = logging.getLogger(__name__)


@dataclass
class ComparisonConfig:
    """
    Configuration for a comparison run.

    Attributes:
        embedding: Batch embedding settings
        align_workers: Threads used to align target sentences (default: 1)
        min_sentence_chars: Fragment filter used by compare_texts (default: 10)
    """
    embedding: EmbeddingConfig = field(default_factory=EmbeddingConfig)
    align_workers: int = 1
    min_sentence_chars: int = MIN_SENTENCE_CHARS


DEFAULT_COMPARISON_CONFIG = ComparisonConfig()


def _validate_document(document, role: str) -> None:
    """
    Validate one document.

    Raises:
        InvalidRequestError: If the document is missing or malformed
        ExtractionEmptyError: If the document has no sentences
    """
    if document is None:
        raise InvalidRequestError(f"{role.capitalize()} document cannot be None")

    if not isinstance(document, Document):
        raise InvalidRequestError(
            f"{role.capitalize()} document must be a Document, "
            f"got {type(document).__name__}"
        )

    if document.sentences is None:
        raise InvalidRequestError(f"{role.capitalize()} document has no sentence list")

    for position, sentence in enumerate(document.sentences):
        if not isinstance(sentence, Sentence) or not isinstance(sentence.text, str):
            raise InvalidRequestError(
                f"{role.capitalize()} document sentence {position} is malformed"
            )

    if not document.sentences:
        raise ExtractionEmptyError(role)


def _validate_inputs(source, target) -> None:
    _validate_document(source, "source")
    _validate_document(target, "target")


def _embed_document(
    document: Document,
    provider: EmbeddingProvider,
    config: EmbeddingConfig,
) -> Document:
    vectors = embed_texts(
        [sentence.text for sentence in document.sentences],
        provider=provider,
        config=config,
    )
    return document.with_embeddings(vectors)


def compare_documents(
    source: Document,
    target: Document,
    embedder: Optional[EmbeddingProvider] = None,
    config: Optional[ComparisonConfig] = None,
    topic: Optional[str] = None,
) -> ComparisonResult:
    """
    Compare a target document against a source document, sentence by sentence.

    This is the main entry point for the comparison engine. It:
    1. Validates both documents
    2. Embeds all source and target sentences (the two sets concurrently)
    3. Aligns each target sentence with its best source sentence
    4. Classifies each alignment as match / paraphrase / unique
    5. Aggregates counts and potential hallucinations

    Args:
        source: Reference document
        target: Document being evaluated
        embedder: Embedding provider (default: HashingEmbedder built from config)
        config: Pipeline settings (default: DEFAULT_COMPARISON_CONFIG)
        topic: Label for the comparison (default: target title)

    Returns:
        ComparisonResult with one alignment per target sentence

    Raises:
        InvalidRequestError: If either document is missing or malformed
        ExtractionEmptyError: If either document has no sentences

    Example:
        >>> source = build_document("Sky", "", "The sky is blue. Water boils at 100 degrees.")
        >>> target = build_document("Sky", "", "The sky is blue.")
        >>> result = compare_documents(source, target)
        >>> result.comparisons[0].status
        <AlignmentStatus.MATCH: 'match'>
    """
    # Step 0: Validate inputs, before any embedding work
    _validate_inputs(source, target)

    config = config or DEFAULT_COMPARISON_CONFIG
    provider = embedder or HashingEmbedder(config.embedding.dimension)

    logger.info(
        "Comparing %d target sentences against %d source sentences (%s)",
        target.sentence_count, source.sentence_count, provider.name,
    )

    # Step 1: Embed both documents concurrently
    with ThreadPoolExecutor(max_workers=2) as executor:
        source_future = executor.submit(
            _embed_document, source, provider, config.embedding
        )
        target_future = executor.submit(
            _embed_document, target, provider, config.embedding
        )
        embedded_source = source_future.result()
        embedded_target = target_future.result()

    # Step 2: Align and classify
    comparisons: List[SentenceComparison] = align_documents(
        embedded_target.sentences,
        embedded_source.sentences,
        max_workers=config.align_workers,
    )

    # Step 3: Aggregate
    summary = summarize_comparisons(comparisons)

    logger.info(
        "Comparison finished: %d match, %d paraphrase, %d unique, "
        "%d potential hallucinations",
        summary.matches, summary.paraphrases, summary.unique,
        summary.hallucination_count,
    )

    return ComparisonResult(
        topic=topic if topic is not None else target.title,
        source_document=embedded_source,
        target_document=embedded_target,
        comparisons=comparisons,
        summary=summary,
        embedder_name=provider.name,
        embedding_dim=provider.dimension,
    )


def compare_texts(
    source_text: str,
    target_text: str,
    source_title: str = "Source",
    target_title: str = "Target",
    source_url: str = "",
    target_url: str = "",
    is_markup: bool = False,
    embedder: Optional[EmbeddingProvider] = None,
    config: Optional[ComparisonConfig] = None,
) -> ComparisonResult:
    """
    Split two raw texts into sentences and compare them.

    Args:
        source_text: Reference text (HTML when is_markup is True)
        target_text: Text being evaluated
        source_title: Title for the source document
        target_title: Title for the target document, also the topic
        source_url: Provenance of the source text
        target_url: Provenance of the target text
        is_markup: Strip HTML before splitting
        embedder: Embedding provider
        config: Pipeline settings

    Returns:
        ComparisonResult

    Raises:
        InvalidRequestError: If either text is None or not a string
        ExtractionEmptyError: If either text yields no sentences
    """
    config = config or DEFAULT_COMPARISON_CONFIG

    documents = []
    for role, text, title, url in (
        ("source", source_text, source_title, source_url),
        ("target", target_text, target_title, target_url),
    ):
        if not isinstance(text, str):
            raise InvalidRequestError(f"{role.capitalize()} text must be a string")
        try:
            documents.append(build_document(
                title, url, text,
                is_markup=is_markup,
                min_chars=config.min_sentence_chars,
            ))
        except ExtractionEmptyError as e:
            raise ExtractionEmptyError(role, reason=e.reason) from e

    return compare_documents(
        documents[0], documents[1], embedder=embedder, config=config
    )

