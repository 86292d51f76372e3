"""Header recognition and document parsing for third-party notices files."""

from .document import parse_document, parse_text, split_lines
from .headers import is_separator_line, parse_headers

__all__ = [
    "is_separator_line",
    "parse_document",
    "parse_headers",
    "parse_text",
    "split_lines",
]
