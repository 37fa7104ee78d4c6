"""
SimDiff - Interactive Streamlit Playground

A lightweight UI layer for comparing a target document against a source
document sentence by sentence. This app wraps the comparison engine and
the discrepancy note builder with no additional semantic logic.

Usage:
    streamlit run app.py

Design Principles:
- Thin UI layer: all comparison logic lives in simdiff.core
- Explicit actions: user triggers each step manually
- Side-by-side: every target sentence shown next to its best source match
- No persistence: session resets on reload
"""

import json
import logging

import streamlit as st
from markitdown import MarkItDown

from simdiff.core.engine import compare_texts, ComparisonError
from simdiff.core.models import AlignmentStatus, similarity_label
from simdiff.core.notes import generate_note, validate_note


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


# =============================================================================
# Session State Initialization
# =============================================================================

def init_session_state():
    """
    Initialize session state variables.

    Session state tracks:
    - comparison_result: Output of compare_texts()
    - note: Discrepancy note built from the result
    - status_message: Current status for user feedback
    - error_message: Current error message (if any)
    """
    defaults = {
        "comparison_result": None,
        "note": None,
        "status_message": "",
        "error_message": "",
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def clear_results():
    """Clear comparison results when inputs change."""
    st.session_state.comparison_result = None
    st.session_state.note = None
    st.session_state.status_message = ""
    st.session_state.error_message = ""


def fetch_url_as_text(url: str) -> tuple[bool, str]:
    """
    Fetch a URL (or local file path) and convert it to text with markitdown.

    Args:
        url: The webpage URL or file path to convert

    Returns:
        Tuple of (success: bool, content_or_error: str)
    """
    try:
        md = MarkItDown()
        result = md.convert(url)
        content = result.text_content
        if content and len(content.strip()) > 0:
            return True, content
        else:
            return False, "Conversion returned empty content"
    except Exception as e:
        return False, f"Error: {str(e)}"


# =============================================================================
# Backend Integration
# =============================================================================

def run_comparison(
    source_text: str,
    target_text: str,
    topic: str,
    source_url: str,
    target_url: str,
) -> bool:
    """
    Run the full comparison pipeline and build the discrepancy note.

    Returns True on success, False on error.
    """
    try:
        st.session_state.error_message = ""

        result = compare_texts(
            source_text,
            target_text,
            source_title="Source",
            target_title=topic or "Untitled",
            source_url=source_url,
            target_url=target_url,
        )
        st.session_state.comparison_result = result
        st.session_state.note = generate_note(result)

        st.session_state.status_message = (
            f"Analysis complete. {result.summary.total_target_sentences} target "
            f"sentences compared against {result.source_document.sentence_count} "
            f"source sentences."
        )
        return True

    except ComparisonError as e:
        st.session_state.error_message = f"Comparison failed: {e}"
        st.session_state.comparison_result = None
        return False


# =============================================================================
# UI Components
# =============================================================================

def render_header():
    """Render the app header."""
    st.title("SimDiff")
    st.caption("Sentence-level discrepancy check between a source and a target document")

    with st.expander("How to read the results", expanded=False):
        st.markdown(
            """
Each **target** sentence is paired with the most similar **source** sentence.

- **Match** (>= 0.85): near-verbatim counterpart in the source
- **Paraphrase** (0.60-0.85): similar wording, likely the same claim
- **Unique** (< 0.60): no adequate counterpart in the source
- **Potential hallucination**: unique and below 0.30

Scores come from lexical fingerprints (shared words and character
trigrams), not from a language model. A faithful paraphrase that uses
different words can still score low.
            """.strip()
        )


def _render_document_input(label: str, key: str) -> tuple[str, str]:
    """Render URL fetch + text area for one document. Returns (text, url)."""
    url = st.text_input(
        f"{label} URL",
        placeholder="https://example.com/article",
        key=f"{key}_url",
    )
    if st.button(
        f"Fetch {label.lower()}",
        type="secondary",
        disabled=not (url and url.strip()),
        key=f"{key}_fetch",
    ):
        with st.spinner("Fetching and converting..."):
            success, content = fetch_url_as_text(url.strip())
            if success:
                st.session_state[f"{key}_text"] = content
                clear_results()
                st.rerun()
            else:
                st.error(f"Failed to fetch: {content}")

    text = st.text_area(
        f"{label} text",
        placeholder=f"Paste the {label.lower()} document here, or fetch it above...",
        height=250,
        key=f"{key}_text",
    )
    if text:
        st.caption(f"{len(text):,} characters, ~{len(text.split()):,} words")
    return text, url


def render_input_section():
    """
    Render topic plus side-by-side source and target inputs.

    Returns tuple of (topic, source_text, source_url, target_text, target_url).
    """
    st.subheader("Inputs")
    topic = st.text_input("Topic", placeholder="e.g., Photosynthesis", key="topic_input")

    col1, col2 = st.columns(2)
    with col1:
        source_text, source_url = _render_document_input("Source", "source")
    with col2:
        target_text, target_url = _render_document_input("Target", "target")

    return topic, source_text, source_url, target_text, target_url


def render_action_buttons(topic, source_text, source_url, target_text, target_url):
    """Render the Compare button and status messages."""
    st.subheader("Actions")

    col1, col2 = st.columns([1, 2])

    with col1:
        can_compare = bool(source_text and source_text.strip()) and bool(
            target_text and target_text.strip()
        )
        if not can_compare:
            st.caption("Paste a source and a target document to begin")

        if st.button(
            "Compare Documents",
            disabled=not can_compare,
            type="primary",
            use_container_width=True,
        ):
            with st.spinner("Comparing..."):
                if run_comparison(source_text, target_text, topic, source_url, target_url):
                    st.rerun()

    with col2:
        if st.session_state.error_message:
            st.error(st.session_state.error_message)
        elif st.session_state.status_message:
            st.success(st.session_state.status_message)


def get_status_color(status: AlignmentStatus) -> str:
    """Text indicator for an alignment status."""
    return {
        AlignmentStatus.MATCH: "🟢",
        AlignmentStatus.PARAPHRASE: "🟡",
        AlignmentStatus.UNIQUE: "🔴",
        AlignmentStatus.MISSING: "⚪",
    }[status]


def render_summary_metrics():
    """Render summary counts."""
    result = st.session_state.comparison_result
    if not result:
        return

    summary = result.summary
    st.divider()
    st.subheader("Summary")

    col1, col2, col3, col4, col5 = st.columns(5)
    with col1:
        st.metric("Target Sentences", summary.total_target_sentences)
    with col2:
        st.metric("Matches", summary.matches)
    with col3:
        st.metric("Paraphrases", summary.paraphrases)
    with col4:
        st.metric("Unique", summary.unique)
    with col5:
        st.metric(
            "Potential Hallucinations",
            summary.hallucination_count,
            help="Unique sentences scoring below 0.30",
        )


def render_side_by_side():
    """Render every target sentence next to its best source match."""
    result = st.session_state.comparison_result
    if not result:
        return

    st.divider()
    st.subheader("Sentence Alignment")

    only_flagged = st.checkbox("Show unique sentences only", value=False, key="only_flagged")

    comparisons = result.comparisons
    if only_flagged:
        comparisons = result.get_comparisons_by_status(AlignmentStatus.UNIQUE)

    for comparison in comparisons:
        with st.container():
            col1, col2, col3 = st.columns([1, 3, 3])
            with col1:
                color = get_status_color(comparison.status)
                st.write(f"{color} **{comparison.similarity:.3f}**")
                st.caption(similarity_label(comparison.similarity))
                if comparison.is_potential_hallucination:
                    st.caption("⚠️ review")
            with col2:
                st.write(f"**#{comparison.target_sentence.index + 1}** "
                         f"{comparison.target_sentence.text}")
            with col3:
                if comparison.best_match is not None:
                    source = comparison.best_match.source_sentence
                    st.write(f"**#{source.index + 1}** {source.text}")
                else:
                    st.caption("No source sentence could be scored")
            st.divider()


def render_note_panel():
    """Render the discrepancy note with a JSON download."""
    note = st.session_state.note
    if not note:
        return

    st.divider()
    st.subheader("Discrepancy Note")
    st.write(note["summary"])

    if not validate_note(note):
        st.warning("Generated note failed validation")

    st.download_button(
        "Download note (JSON-LD)",
        data=json.dumps(note, indent=2),
        file_name=f"{note['about'].lower().replace(' ', '-') or 'note'}.jsonld",
        mime="application/ld+json",
    )
    with st.expander("Note JSON"):
        st.json(note)


def render_debug_panel():
    """Render optional debug information."""
    result = st.session_state.comparison_result
    if not result:
        return

    with st.expander("Debug Info"):
        st.write(f"- Topic: `{result.topic}`")
        st.write(f"- Embedder: `{result.embedder_name}`")
        st.write(f"- Embedding Dim: {result.embedding_dim}")
        st.write(f"- Source Sentences: {result.source_document.sentence_count}")
        st.write(f"- Target Sentences: {result.target_document.sentence_count}")


# =============================================================================
# Main App
# =============================================================================

def main():
    """Main application entry point."""
    st.set_page_config(
        page_title="SimDiff",
        page_icon="🔍",
        layout="wide",
    )

    init_session_state()

    render_header()

    topic, source_text, source_url, target_text, target_url = render_input_section()

    render_action_buttons(topic, source_text, source_url, target_text, target_url)

    if st.session_state.comparison_result:
        alignment_tab, note_tab = st.tabs(["Alignment", "Discrepancy Note"])

        with alignment_tab:
            render_summary_metrics()
            render_side_by_side()
            render_debug_panel()

        with note_tab:
            render_note_panel()

    st.divider()
    st.caption("SimDiff v0.1.0 | Local-only lexical comparison | No data leaves your machine")


if __name__ == "__main__":
    main()
