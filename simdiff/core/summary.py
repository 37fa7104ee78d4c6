"""
Aggregate statistics over sentence alignments.

This module reduces the per-sentence alignments of one document pair to
counts per status plus the ordered list of potential hallucinations:
UNIQUE sentences whose best match scores below HALLUCINATION_THRESHOLD.

This module does NOT:
- Recompute embeddings or similarity scores
- Detect source sentences missing from the target. `missing` is always
  0; finding them needs a second, source-to-target alignment pass.
"""

from typing import Dict, List, Sequence

from simdiff.core.models import (
    AlignmentStatus,
    ComparisonSummary,
    SentenceComparison,
)


def summarize_comparisons(
    comparisons: Sequence[SentenceComparison],
) -> ComparisonSummary:
    """
    Tally alignments by status in a single pass.

    Args:
        comparisons: Alignments in target order

    Returns:
        ComparisonSummary; potential_hallucinations keeps target order
    """
    counts: Dict[AlignmentStatus, int] = {status: 0 for status in AlignmentStatus}
    flagged: List[SentenceComparison] = []

    for comparison in comparisons:
        counts[comparison.status] += 1
        if comparison.is_potential_hallucination:
            flagged.append(comparison)

    return ComparisonSummary(
        total_target_sentences=len(comparisons),
        matches=counts[AlignmentStatus.MATCH],
        paraphrases=counts[AlignmentStatus.PARAPHRASE],
        unique=counts[AlignmentStatus.UNIQUE],
        missing=0,
        potential_hallucinations=flagged,
    )
