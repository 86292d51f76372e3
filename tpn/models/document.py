from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from tpn.models.section import Section


@dataclass(frozen=True, slots=True)
class TpnDocument:
    """A parsed third-party notices file: free-form preamble plus ordered sections."""

    preamble: str
    sections: Tuple[Section, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.sections, tuple):
            object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def section_names(self) -> list[str]:
        return [section.header.name for section in self.sections]

    def __str__(self) -> str:
        from tpn.serializer import render_document

        return render_document(self)


@dataclass(frozen=True, slots=True)
class ExternalDocument:
    """A notices document harvested from somewhere other than the local file."""

    source: str
    document: TpnDocument


__all__ = ["ExternalDocument", "TpnDocument"]
