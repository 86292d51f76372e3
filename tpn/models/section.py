from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SectionHeaderFormat(str, Enum):
    """Header conventions found in third-party notices files.

    SEPARATED::

        {blank line}
        {3+ separator chars}
        {blank line}
        {name (multiline)}

    UNDERLINED::

        {blank line}
        {name (multiline)}
        {3+ separator chars}
        {blank line}

    NUMBERED::

        {blank line}
        {number}.{tab}{name}
        {blank line}
    """

    SEPARATED = "separated"
    UNDERLINED = "underlined"
    NUMBERED = "numbered"


@dataclass(frozen=True, slots=True)
class SectionHeader:
    """Location and name of one section header within a line sequence."""

    name: str
    format: SectionHeaderFormat
    separator_line: str
    start_line: int
    line_length: int

    @property
    def end_line(self) -> int:
        """Index of the last line occupied by the header syntax."""

        return self.start_line + self.line_length - 1


@dataclass(frozen=True, slots=True)
class Section:
    """A header plus the trimmed text that follows it."""

    header: SectionHeader
    content: str

    @property
    def name(self) -> str:
        return self.header.name


__all__ = ["Section", "SectionHeader", "SectionHeaderFormat"]
