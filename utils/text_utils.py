"""
Text utilities for OCR workflow.

Handles cleanup of text blocks returned by the OCR model.
"""
import re

from core.constants import (
    HTML_TAG_PATTERN,
    QUOTE_CHARS,
    TRAILING_COORDINATE_PAREN,
    TRAILING_PAREN
)

_QUOTE_TRIM = re.compile(rf'^[{QUOTE_CHARS}\s]+|[{QUOTE_CHARS}\s]+$')


def strip_trailing_annotation(text: str) -> str:
    """
    Remove a trailing coordinate parenthetical, then any other trailing one.

    Args:
        text: Block text after the ordinal marker

    Returns:
        Text without trailing ``(...)`` groups
    """
    text = re.sub(TRAILING_COORDINATE_PAREN, '', text, flags=re.IGNORECASE).strip()
    return re.sub(TRAILING_PAREN, '', text).strip()


def strip_quotes(text: str) -> str:
    """Trim straight and curly quotes (and whitespace) from both ends."""
    return _QUOTE_TRIM.sub('', text)


def strip_html_tags(text: str) -> str:
    """Remove HTML-like tags, including an unterminated trailing one."""
    return re.sub(HTML_TAG_PATTERN, '', text)


def clean_block_text(text: str) -> str:
    """
    Full cleanup applied to a numbered block.

    Example:
        '"Abra" (from: {x:1, y:2}, to: {x:3, y:4})' -> 'Abra'
    """
    text = strip_trailing_annotation(text.strip())
    return strip_html_tags(strip_quotes(text)).strip()
