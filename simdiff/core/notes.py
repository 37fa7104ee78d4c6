"""
Discrepancy notes built from a ComparisonResult.

This module turns alignments into a short, reviewable list of
discrepancies and wraps them in a JSON-LD style note dict that can be
edited by a person or handed to a publisher.

Selection:
- Alignments that are UNIQUE or score below PARAPHRASE_THRESHOLD
- Target order, capped at DEFAULT_DISCREPANCY_LIMIT

Each discrepancy carries both sentences (truncated), the rounded score,
links to both documents as evidence, and a note templated from the
similarity tier.

This module does NOT:
- Publish notes anywhere
- Persist notes
- Recompute any score
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import re
from typing import Any, Dict, List, Optional, Sequence

from simdiff.core.models import (
    AlignmentStatus,
    ComparisonResult,
    SentenceComparison,
    HALLUCINATION_THRESHOLD,
    PARAPHRASE_THRESHOLD,
)


DEFAULT_DISCREPANCY_LIMIT = 10
MAX_SENTENCE_CHARS = 500
DEFAULT_AUTHOR = "did:example:anonymous"
NOTE_CONTEXT = "https://www.schema.org"

HALLUCINATION_NOTE = (
    "Potential hallucination: claim not found in the source document "
    "or reliable sources."
)
INCONSISTENCY_NOTE = (
    "Content differs significantly from the source document. "
    "Verify with additional sources."
)


class DiscrepancyKind(Enum):
    """What kind of problem a discrepancy points at."""
    HALLUCINATION = "hallucination"
    FACTUAL_INCONSISTENCY = "factual_inconsistency"


@dataclass
class Discrepancy:
    """
    One reviewable difference between target and source.

    Attributes:
        id: Identifier unique within its note
        target_sentence: Evaluated sentence (truncated)
        source_sentence: Best source match (truncated, empty if none)
        similarity_score: Similarity rounded to 3 decimals
        evidence: Links supporting the discrepancy
        note: Human-readable explanation
        kind: Discrepancy category
    """
    id: str
    target_sentence: str
    source_sentence: str
    similarity_score: float
    evidence: List[str] = field(default_factory=list)
    note: str = ""
    kind: DiscrepancyKind = DiscrepancyKind.FACTUAL_INCONSISTENCY

    def to_dict(self) -> Dict[str, Any]:
        return {
            "@id": self.id,
            "@type": "Comment",
            "target_sentence": self.target_sentence,
            "source_sentence": self.source_sentence,
            "similarity_score": self.similarity_score,
            "evidence": list(self.evidence),
            "note": self.note,
            "status": self.kind.value,
        }


def truncate(text: str, max_chars: int = MAX_SENTENCE_CHARS) -> str:
    """Cut text to max_chars, marking the cut with '...'."""
    if text and len(text) > max_chars:
        return text[:max_chars] + "..."
    return text


def topic_slug(topic: str) -> str:
    return re.sub(r"\s+", "-", topic.strip().lower())


def select_discrepancies(
    comparisons: Sequence[SentenceComparison],
    limit: int = DEFAULT_DISCREPANCY_LIMIT,
) -> List[SentenceComparison]:
    """
    Pick the alignments worth a note, in target order.

    Args:
        comparisons: Alignments from a ComparisonResult
        limit: Maximum number returned

    Returns:
        UNIQUE or low-scoring alignments, at most `limit`
    """
    selected = [
        c for c in comparisons
        if c.status == AlignmentStatus.UNIQUE or c.similarity < PARAPHRASE_THRESHOLD
    ]
    return selected[:limit]


def build_discrepancy(
    comparison: SentenceComparison,
    discrepancy_id: str,
    evidence: Sequence[str],
) -> Discrepancy:
    """Build one Discrepancy, choosing note and kind by similarity tier."""
    is_hallucination = comparison.similarity < HALLUCINATION_THRESHOLD
    source_text = ""
    if comparison.best_match is not None:
        source_text = comparison.best_match.source_sentence.text

    return Discrepancy(
        id=discrepancy_id,
        target_sentence=truncate(comparison.target_sentence.text),
        source_sentence=truncate(source_text),
        similarity_score=round(comparison.similarity, 3),
        evidence=[link for link in evidence if link],
        note=HALLUCINATION_NOTE if is_hallucination else INCONSISTENCY_NOTE,
        kind=(
            DiscrepancyKind.HALLUCINATION if is_hallucination
            else DiscrepancyKind.FACTUAL_INCONSISTENCY
        ),
    )


def generate_note(
    result: ComparisonResult,
    author: Optional[str] = None,
    now: Optional[datetime] = None,
    limit: int = DEFAULT_DISCREPANCY_LIMIT,
) -> Dict[str, Any]:
    """
    Build a discrepancy note for a comparison.

    Args:
        result: Output of compare_documents()
        author: Author identifier (default: DEFAULT_AUTHOR)
        now: Publication timestamp (default: current UTC time)
        limit: Maximum discrepancies included

    Returns:
        JSON-serializable note dict

    Example:
        >>> note = generate_note(result)
        >>> note["summary"]
        'Auto-detected 3 discrepancies between target and source. Found 1 potential hallucinations.'
    """
    now = now or datetime.now(timezone.utc)
    session_id = int(now.timestamp() * 1000)
    note_id = f"urn:simdiff:note:{topic_slug(result.topic)}:{session_id}"
    evidence = [result.source_document.url, result.target_document.url]

    discrepancies = [
        build_discrepancy(comparison, f"{note_id}:discrepancy:{i + 1}", evidence)
        for i, comparison in enumerate(
            select_discrepancies(result.comparisons, limit=limit)
        )
    ]

    return {
        "@context": NOTE_CONTEXT,
        "@type": "CreativeWork",
        "@id": note_id,
        "name": f"SimDiff: {result.topic} discrepancy summary",
        "about": result.topic,
        "author": author or DEFAULT_AUTHOR,
        "published": now.isoformat(),
        "summary": (
            f"Auto-detected {len(discrepancies)} discrepancies between target "
            f"and source. Found {result.summary.hallucination_count} potential "
            f"hallucinations."
        ),
        "discrepancies": [d.to_dict() for d in discrepancies],
    }


REQUIRED_NOTE_FIELDS = ("@context", "@type", "@id", "name", "about", "published", "summary")


def validate_note(note: Dict[str, Any]) -> bool:
    """
    Check that a note has every required field and that each
    discrepancy carries an @id and @type.
    """
    if not isinstance(note, dict):
        return False
    if not all(note.get(key) for key in REQUIRED_NOTE_FIELDS):
        return False
    discrepancies = note.get("discrepancies")
    if not isinstance(discrepancies, list):
        return False
    return all(
        isinstance(d, dict) and d.get("@id") and d.get("@type")
        for d in discrepancies
    )
