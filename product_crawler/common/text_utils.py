"""
Text Utilities

Helper functions for preparing page HTML before it is sent to the LLM.
"""

import re

_WHITESPACE_RE = re.compile(r'\s+')


def collapse_whitespace(text: str) -> str:
    """
    Trim text and collapse every whitespace run to a single space.

    Args:
        text: Raw text (usually page body HTML)

    Returns:
        Cleaned text; empty/None input is returned unchanged
    """
    if not text:
        return text

    return _WHITESPACE_RE.sub(' ', text.strip())


def prepare_llm_input(html: str, max_chars: int) -> str:
    """Normalize whitespace and cut the result to at most ``max_chars`` characters."""
    return (collapse_whitespace(html) or "")[:max_chars]
