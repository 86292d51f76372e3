from __future__ import annotations

from tpn.models.document import TpnDocument
from tpn.models.section import Section, SectionHeader, SectionHeaderFormat


def render_header(header: SectionHeader) -> str:
    """Rebuild the canonical header syntax for the header's format."""

    if header.format is SectionHeaderFormat.SEPARATED:
        if not header.name:
            # The blank line render_section adds stands in for the empty name line.
            return f"{header.separator_line}\n"
        return f"{header.separator_line}\n\n{header.name}"
    if header.format is SectionHeaderFormat.UNDERLINED:
        return f"{header.name}\n{header.separator_line}"
    if header.format is SectionHeaderFormat.NUMBERED:
        return header.separator_line
    raise ValueError(f"Unknown section header format: {header.format!r}")


def render_section(section: Section) -> str:
    return f"{render_header(section.header)}\n\n{section.content}"


def render_document(document: TpnDocument) -> str:
    """Render a document back to text, one blank line between the preamble and each section."""

    body = "\n\n".join(render_section(section) for section in document.sections)
    preamble = _strip_trailing_blank_lines(document.preamble)
    if not preamble:
        # Headers are never recognized on the first line.
        return f"\n{body}"
    return f"{preamble}\n\n{body}"


def _strip_trailing_blank_lines(text: str) -> str:
    lines = text.split("\n")
    while lines and not lines[-1].strip():
        lines.pop()
    return "\n".join(lines)


__all__ = ["render_document", "render_header", "render_section"]
