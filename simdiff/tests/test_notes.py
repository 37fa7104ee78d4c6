"""Tests for discrepancy note generation."""

from datetime import datetime, timezone

import pytest
from simdiff.core.models import (
    AlignmentStatus,
    BestMatch,
    ComparisonResult,
    Document,
    Sentence,
    SentenceComparison,
    classify_similarity,
)
from simdiff.core.notes import (
    build_discrepancy,
    generate_note,
    select_discrepancies,
    topic_slug,
    truncate,
    validate_note,
    DiscrepancyKind,
    HALLUCINATION_NOTE,
    INCONSISTENCY_NOTE,
    MAX_SENTENCE_CHARS,
)
from simdiff.core.summary import summarize_comparisons


SOURCE_URL = "https://example.org/source"
TARGET_URL = "https://example.org/target"
NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def _comparison(index, similarity, source_text="A source sentence here."):
    return SentenceComparison(
        target_sentence=Sentence(text=f"Target sentence {index}.", index=index),
        best_match=BestMatch(
            source_sentence=Sentence(text=source_text, index=0),
            similarity=similarity,
        ),
        status=classify_similarity(similarity),
        similarity=similarity,
    )


def _result(comparisons, topic="Blue Sky"):
    return ComparisonResult(
        topic=topic,
        source_document=Document(title="Source", url=SOURCE_URL, sentences=[]),
        target_document=Document(title="Target", url=TARGET_URL, sentences=[]),
        comparisons=comparisons,
        summary=summarize_comparisons(comparisons),
    )


class TestHelpers:

    def test_truncate_short_text(self):
        assert truncate("short") == "short"

    def test_truncate_long_text(self):
        text = "x" * (MAX_SENTENCE_CHARS + 20)
        truncated = truncate(text)
        assert truncated == "x" * MAX_SENTENCE_CHARS + "..."

    def test_truncate_empty(self):
        assert truncate("") == ""

    def test_topic_slug(self):
        assert topic_slug("  Blue   Sky ") == "blue-sky"


class TestSelectDiscrepancies:

    def test_selects_unique_and_low_scores(self):
        comparisons = [
            _comparison(0, 0.95),
            _comparison(1, 0.7),
            _comparison(2, 0.5),
            _comparison(3, 0.1),
        ]
        selected = select_discrepancies(comparisons)
        assert [c.target_sentence.index for c in selected] == [2, 3]

    def test_caps_at_limit(self):
        comparisons = [_comparison(i, 0.1) for i in range(15)]
        assert len(select_discrepancies(comparisons)) == 10
        assert len(select_discrepancies(comparisons, limit=3)) == 3

    def test_keeps_target_order(self):
        comparisons = [_comparison(i, 0.5 - i / 100) for i in range(5)]
        selected = select_discrepancies(comparisons)
        assert [c.target_sentence.index for c in selected] == [0, 1, 2, 3, 4]


class TestBuildDiscrepancy:

    def test_hallucination_tier(self):
        discrepancy = build_discrepancy(
            _comparison(0, 0.12345), "d1", [SOURCE_URL, TARGET_URL]
        )
        assert discrepancy.kind == DiscrepancyKind.HALLUCINATION
        assert discrepancy.note == HALLUCINATION_NOTE
        assert discrepancy.similarity_score == 0.123
        assert discrepancy.evidence == [SOURCE_URL, TARGET_URL]

    def test_inconsistency_tier(self):
        discrepancy = build_discrepancy(_comparison(0, 0.3), "d1", [SOURCE_URL])
        assert discrepancy.kind == DiscrepancyKind.FACTUAL_INCONSISTENCY
        assert discrepancy.note == INCONSISTENCY_NOTE

    def test_without_best_match(self):
        comparison = SentenceComparison(
            target_sentence=Sentence(text="Orphan sentence here.", index=0),
            best_match=None,
            status=AlignmentStatus.UNIQUE,
            similarity=0.0,
        )
        discrepancy = build_discrepancy(comparison, "d1", ["", TARGET_URL])
        assert discrepancy.source_sentence == ""
        assert discrepancy.evidence == [TARGET_URL]

    def test_long_sentences_truncated(self):
        comparison = _comparison(0, 0.2, source_text="y" * 600)
        discrepancy = build_discrepancy(comparison, "d1", [])
        assert discrepancy.source_sentence.endswith("...")
        assert len(discrepancy.source_sentence) == MAX_SENTENCE_CHARS + 3

    def test_to_dict(self):
        data = build_discrepancy(_comparison(0, 0.2), "d1", [SOURCE_URL]).to_dict()
        assert data["@id"] == "d1"
        assert data["@type"] == "Comment"
        assert data["status"] == "hallucination"
        assert data["target_sentence"] == "Target sentence 0."


class TestGenerateNote:

    def test_note_structure(self):
        result = _result([_comparison(0, 0.9), _comparison(1, 0.5), _comparison(2, 0.1)])
        note = generate_note(result, now=NOW)
        session = int(NOW.timestamp() * 1000)
        assert note["@id"] == f"urn:simdiff:note:blue-sky:{session}"
        assert note["about"] == "Blue Sky"
        assert note["author"] == "did:example:anonymous"
        assert note["published"] == NOW.isoformat()
        assert len(note["discrepancies"]) == 2
        assert note["discrepancies"][0]["@id"] == f"{note['@id']}:discrepancy:1"
        assert "2 discrepancies" in note["summary"]
        assert "1 potential hallucinations" in note["summary"]

    def test_custom_author(self):
        note = generate_note(_result([_comparison(0, 0.1)]), author="did:web:alice", now=NOW)
        assert note["author"] == "did:web:alice"

    def test_only_produced_kinds_and_fields(self):
        result = _result([_comparison(0, 0.5), _comparison(1, 0.1)])
        note = generate_note(result, now=NOW)
        assert set(note) == {
            "@context", "@type", "@id", "name", "about", "author",
            "published", "summary", "discrepancies",
        }
        assert [d["status"] for d in note["discrepancies"]] == [
            "factual_inconsistency", "hallucination",
        ]
        assert {kind.value for kind in DiscrepancyKind} == {
            "hallucination", "factual_inconsistency",
        }

    def test_generated_note_is_valid(self):
        note = generate_note(_result([_comparison(0, 0.1)]), now=NOW)
        assert validate_note(note)

    def test_no_discrepancies(self):
        note = generate_note(_result([_comparison(0, 0.99)]), now=NOW)
        assert note["discrepancies"] == []
        assert validate_note(note)


class TestValidateNote:

    def _note(self):
        return generate_note(_result([_comparison(0, 0.1)]), now=NOW)

    @pytest.mark.parametrize("key", ["@context", "@type", "@id", "name", "about", "published", "summary"])
    def test_missing_field(self, key):
        note = self._note()
        del note[key]
        assert not validate_note(note)

    def test_discrepancies_must_be_list(self):
        note = self._note()
        note["discrepancies"] = {}
        assert not validate_note(note)

    def test_discrepancy_needs_id(self):
        note = self._note()
        del note["discrepancies"][0]["@id"]
        assert not validate_note(note)

    def test_not_a_dict(self):
        assert not validate_note(None)
