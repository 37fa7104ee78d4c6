"""
Greedy sentence alignment.

Each target sentence is scored against every source sentence and paired
with the highest-scoring one. This is an exhaustive
O(|source| x |target|) scan with no indexing or pruning; article-length
documents stay well within budget.

Alignment is not a one-to-one assignment. Several target sentences may
align to the same source sentence, and a source sentence nobody picks
is simply unused.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from simdiff.core.models import (
    AlignmentStatus,
    BestMatch,
    Sentence,
    SentenceComparison,
    classify_similarity,
)
from simdiff.core.similarity import cosine_similarity


def _unmatched(target: Sentence) -> SentenceComparison:
    return SentenceComparison(
        target_sentence=target,
        best_match=None,
        status=AlignmentStatus.UNIQUE,
        similarity=0.0,
    )


def find_best_match(
    target: Sentence,
    sources: Sequence[Sentence],
) -> Optional[BestMatch]:
    """
    Find the source sentence most similar to the target.

    Ties go to the first source sentence reaching the maximum. Source
    sentences without an embedding are skipped.

    Returns:
        BestMatch, or None if the target or every source lacks an embedding
    """
    if not target.has_embedding:
        return None

    best: Optional[BestMatch] = None
    for source in sources:
        if not source.has_embedding:
            continue
        similarity = cosine_similarity(target.embedding, source.embedding)
        if best is None or similarity > best.similarity:
            best = BestMatch(source_sentence=source, similarity=similarity)
    return best


def align_sentence(
    target: Sentence,
    sources: Sequence[Sentence],
) -> SentenceComparison:
    """
    Align one target sentence against the source document.

    Args:
        target: Target sentence with its embedding attached
        sources: Source sentences with embeddings attached, in order

    Returns:
        SentenceComparison classified from the best similarity. A target
        without an embedding is UNIQUE with similarity 0.0 and no match.
    """
    best = find_best_match(target, sources)
    if best is None:
        return _unmatched(target)

    return SentenceComparison(
        target_sentence=target,
        best_match=best,
        status=classify_similarity(best.similarity),
        similarity=best.similarity,
    )


def align_documents(
    targets: Sequence[Sentence],
    sources: Sequence[Sentence],
    max_workers: int = 1,
) -> List[SentenceComparison]:
    """
    Align every target sentence, preserving target order.

    Args:
        targets: Target sentences with embeddings
        sources: Source sentences with embeddings
        max_workers: Threads to align with; 1 aligns sequentially

    Returns:
        One SentenceComparison per target sentence
    """
    if max_workers <= 1 or len(targets) < 2:
        return [align_sentence(target, sources) for target in targets]

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        return list(executor.map(lambda t: align_sentence(t, sources), targets))
