"""
Explainer text helpers for the info panel.

The collapsed panel shows at most three sentences; an expand control is
offered only when the explainer is longer than that.
"""
import re
from typing import List, Optional

SENTENCE_PATTERN = re.compile(r'[^.!?]+[.!?]+')

PREVIEW_SENTENCES = 3


def as_text(value) -> str:
    """Explainer value as text; missing values become "", numbers become strings."""
    if value is None:
        return ''
    return value if isinstance(value, str) else str(value)


def split_sentences(text: Optional[str]) -> List[str]:
    """Split text into sentences, each keeping its terminator(s)."""
    text = as_text(text)
    if not text:
        return []
    # Leading whitespace belongs to the gap between sentences, not the sentence
    return [sentence.strip() for sentence in SENTENCE_PATTERN.findall(text)]


def preview_text(text: Optional[str]) -> str:
    """
    Short preview for the collapsed panel.

    Returns the first three sentences joined by a single space. Text without
    any terminated sentence is returned unchanged; missing text gives "".
    """
    text = as_text(text)
    if not text:
        return ''
    sentences = split_sentences(text)
    if not sentences:
        return text
    return ' '.join(sentences[:PREVIEW_SENTENCES])


def is_expandable(text: Optional[str]) -> bool:
    """True if the text has more sentences than the preview shows."""
    return len(split_sentences(text)) > PREVIEW_SENTENCES
