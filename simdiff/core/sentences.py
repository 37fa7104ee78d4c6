"""
Sentence preparation for document comparison.

This module turns raw text (or lightly cleaned HTML) into the ordered
sentence lists the comparison engine consumes. It is intentionally
simple and dependency-free:

Strategy:
1. Strip markup and decode entities (when the input is HTML)
2. Drop reference markers ([1], [citation needed], [edit]) and collapse whitespace
3. Split after . ! ? when followed by whitespace and a capital letter
4. Drop fragments of MIN_SENTENCE_CHARS characters or fewer

Design Decisions:
- Regex splitting, no NLP dependency (abbreviations like "U.S. Army"
  may split; acceptable for article-length comparison)
- Capital-letter lookahead avoids most splits inside numbers and
  lower-case abbreviations ("approx. two")
- Short fragments are filtered here so the engine never sees them
"""

import html
import re
from typing import List, Optional, Sequence

from simdiff.core.errors import ExtractionEmptyError
from simdiff.core.models import Document, Sentence


# Fragments this short or shorter are dropped (headings, list bullets, "See also.").
MIN_SENTENCE_CHARS = 10

_TAG_PATTERN = re.compile(r"<[^>]*>")
_WHITESPACE_PATTERN = re.compile(r"\s+")
_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+(?=[A-Z])")

# Wiki-style page furniture removed before normalization
_BOILERPLATE_PATTERNS = [
    re.compile(r'<div class="navbox[^"]*">[\s\S]*?</div>', re.IGNORECASE),
    re.compile(r'<div class="reference[^"]*">[\s\S]*?</div>', re.IGNORECASE),
    re.compile(r"<sup[^>]*>[\s\S]*?</sup>", re.IGNORECASE),
    re.compile(r'<span class="mw-editsection[^"]*">[\s\S]*?</span>', re.IGNORECASE),
]

# Bracketed markers left in plain text by wiki renderers ("blue.[1] Water")
_REFERENCE_MARKER_PATTERNS = [
    re.compile(r"\[\d+\]"),
    re.compile(r"\[citation needed\]", re.IGNORECASE),
    re.compile(r"\[edit\]", re.IGNORECASE),
    re.compile(r"\[source\]", re.IGNORECASE),
]


def normalize_text(markup: str) -> str:
    """
    Convert HTML (or plain text) to a single line of plain text.

    Tags are replaced with spaces and entities are decoded. Reference
    markers such as [1], [citation needed], [edit] and [source] are
    removed, so a sentence ending in ".[1]" still splits from the next
    one. Runs of whitespace collapse to one space.

    Args:
        markup: HTML fragment or plain text

    Returns:
        Normalized plain text
    """
    text = _TAG_PATTERN.sub(" ", markup)
    text = html.unescape(text)
    for pattern in _REFERENCE_MARKER_PATTERNS:
        text = pattern.sub("", text)
    return _WHITESPACE_PATTERN.sub(" ", text).strip()


def extract_main_content(markup: str) -> str:
    """
    Remove navigation boxes, reference lists, footnote markers and
    edit links from article HTML, then normalize it.
    """
    content = markup
    for pattern in _BOILERPLATE_PATTERNS:
        content = pattern.sub("", content)
    return normalize_text(content)


def split_into_sentences(
    text: str,
    min_chars: int = MIN_SENTENCE_CHARS,
) -> List[str]:
    """
    Split normalized text into sentences.

    Args:
        text: Plain text (see normalize_text)
        min_chars: Fragments with this many characters or fewer are dropped

    Returns:
        List of trimmed sentence strings in document order
    """
    pieces = _SENTENCE_BOUNDARY.split(text)
    sentences = [piece.strip() for piece in pieces]
    return [s for s in sentences if len(s) > min_chars]


def build_sentences(
    texts: Sequence[str],
    section: Optional[str] = None,
) -> List[Sentence]:
    """Index a pre-split list of sentence strings, starting at 0."""
    return [
        Sentence(text=text, index=i, section=section)
        for i, text in enumerate(texts)
    ]


def build_document(
    title: str,
    url: str,
    text: str,
    is_markup: bool = False,
    min_chars: int = MIN_SENTENCE_CHARS,
) -> Document:
    """
    Build a Document from raw text.

    Args:
        title: Document title
        url: Source URL (may be empty)
        text: Plain text, or HTML when is_markup is True
        is_markup: Strip boilerplate and tags before splitting
        min_chars: Minimum fragment length (exclusive)

    Returns:
        Document with indexed sentences

    Raises:
        ExtractionEmptyError: If no sentence survives splitting
    """
    content = extract_main_content(text) if is_markup else normalize_text(text or "")
    sentences = split_into_sentences(content, min_chars=min_chars)

    if not sentences:
        raise ExtractionEmptyError(
            title or "untitled",
            reason=f"no sentences longer than {min_chars} characters",
        )

    return Document(
        title=title,
        url=url,
        sentences=build_sentences(sentences),
        content=content,
    )
