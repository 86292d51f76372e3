"""Third-party notices parsing, merging and regeneration."""

from .errors import (
    AmbiguousSourceError,
    CandidateParseError,
    MalformedHeaderError,
    NoSectionsFoundError,
    TpnError,
)
from .merge import MergeResult, merge_documents
from .models.document import ExternalDocument, TpnDocument
from .models.section import Section, SectionHeader, SectionHeaderFormat
from .parsing import parse_document, parse_headers, parse_text
from .serializer import render_document

__all__ = [
    "AmbiguousSourceError",
    "CandidateParseError",
    "ExternalDocument",
    "MalformedHeaderError",
    "MergeResult",
    "NoSectionsFoundError",
    "Section",
    "SectionHeader",
    "SectionHeaderFormat",
    "TpnDocument",
    "TpnError",
    "merge_documents",
    "parse_document",
    "parse_headers",
    "parse_text",
    "render_document",
]
