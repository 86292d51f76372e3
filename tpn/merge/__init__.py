"""Section identity and merging of notices documents."""

from .comparer import distinct_sections, same_section, section_key, sections_except
from .merger import ImportedSection, MergeResult, merge_documents

__all__ = [
    "ImportedSection",
    "MergeResult",
    "distinct_sections",
    "merge_documents",
    "same_section",
    "section_key",
    "sections_except",
]
