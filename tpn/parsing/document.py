from __future__ import annotations

from typing import List, Sequence, Tuple

from tpn.errors import MalformedHeaderError, NoSectionsFoundError
from tpn.models.document import TpnDocument
from tpn.models.section import Section, SectionHeader
from tpn.parsing.headers import parse_headers


def split_lines(text: str) -> Tuple[str, ...]:
    """Break raw text into the immutable line sequence the parser works on."""

    return tuple(text.splitlines())


def parse_text(text: str) -> TpnDocument:
    return parse_document(split_lines(text))


def parse_document(lines: Sequence[str]) -> TpnDocument:
    """Partition ``lines`` into a preamble and the sections introduced by each header."""

    lines = tuple(lines)
    headers = list(parse_headers(lines))
    if not headers:
        raise NoSectionsFoundError()

    _check_ordering(headers)

    sections: List[Section] = []
    for index, header in enumerate(headers):
        # One blank line always follows the header syntax.
        body_start = header.start_line + header.line_length + 1
        body_end = headers[index + 1].start_line if index + 1 < len(headers) else len(lines)
        body = _trim_trailing_blank(lines[body_start:body_end])
        sections.append(Section(header=header, content="\n".join(body)))

    return TpnDocument(
        preamble="\n".join(lines[: headers[0].start_line]),
        sections=tuple(sections),
    )


def _check_ordering(headers: Sequence[SectionHeader]) -> None:
    for previous, current in zip(headers, headers[1:]):
        if current.start_line <= previous.end_line:
            raise MalformedHeaderError(
                f"Header '{current.name}' at line {current.start_line + 1} overlaps "
                f"header '{previous.name}' at line {previous.start_line + 1}"
            )


def _trim_trailing_blank(lines: Sequence[str]) -> Sequence[str]:
    end = len(lines)
    while end > 0 and not lines[end - 1].strip():
        end -= 1
    return lines[:end]


__all__ = ["parse_document", "parse_text", "split_lines"]
