#!/usr/bin/env python3
"""
HTML to plain text conversion for documentation pages.

Paragraphs are word-wrapped, links keep only their text and images are
dropped. html2text is event driven, so deeply nested pages convert fine.
"""

from typing import Optional

import html2text

from .models import ExtractionError

DEFAULT_WORDWRAP = 130


def _make_converter(wordwrap: Optional[int]) -> html2text.HTML2Text:
    converter = html2text.HTML2Text()
    converter.ignore_links = True
    converter.ignore_images = True
    converter.ignore_emphasis = True
    converter.ignore_tables = True
    converter.body_width = wordwrap or 0  # 0 means no wrapping
    return converter


def html_to_text(html: str, wordwrap: Optional[int] = DEFAULT_WORDWRAP) -> str:
    """
    Convert an HTML document to plain text.

    Args:
        html: Raw HTML
        wordwrap: Column to wrap paragraphs at; None or 0 disables wrapping

    Returns:
        Plain text rendering of the document

    Raises:
        ExtractionError: If the document cannot be converted
    """
    try:
        return _make_converter(wordwrap).handle(html).strip()
    except Exception as e:
        raise ExtractionError(f"Failed to convert HTML to text: {e}") from e
