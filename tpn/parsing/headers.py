from __future__ import annotations

import re
from typing import Iterator, Optional, Sequence

from tpn.errors import MalformedHeaderError
from tpn.models.section import SectionHeader, SectionHeaderFormat


_SEPARATOR_CHARS = frozenset("-=")
_NUMBERED_PATTERN = re.compile(r"^[0-9]+\.\t(?P<name>.*)$")


def is_separator_line(text: str) -> bool:
    """True when the stripped text is made up only of separator characters."""

    stripped = text.strip()
    return bool(stripped) and all(char in _SEPARATOR_CHARS for char in stripped)


def _is_blank(text: str) -> bool:
    return not text.strip()


def parse_headers(lines: Sequence[str]) -> Iterator[SectionHeader]:
    """Yield every section header in ``lines`` in order of appearance."""

    last_end = -1
    # A header needs a line on both sides, so the first and last lines never start one.
    for i in range(1, len(lines) - 1):
        line_above = lines[i - 1].strip()
        line = lines[i].strip()
        line_below = lines[i + 1].strip()

        if len(line) > 2 and is_separator_line(line) and not line_below:
            if not line_above:
                header = _parse_separated(lines, i)
                if header is not None:
                    last_end = header.end_line
                    yield header
            else:
                header = _parse_underlined(lines, i)
                last_end = header.end_line
                yield header

        # A line already inside a header cannot also be a numbered header.
        if i <= last_end:
            continue

        numbered = _parse_numbered(lines, i)
        if numbered is not None:
            last_end = numbered.end_line
            yield numbered


def _parse_separated(lines: Sequence[str], i: int) -> Optional[SectionHeader]:
    name_lines = []
    for candidate in lines[i + 2 :]:
        if _is_blank(candidate):
            break
        name_lines.append(candidate)

    name = "\n".join(name_lines)

    if any(is_separator_line(text) for text in name_lines):
        # A separator as the last name line underlines that name; the scan reaches it later.
        if any(is_separator_line(text) for text in name_lines[:-1]):
            raise MalformedHeaderError(f"Separator line detected inside name '{name}'")
        return None

    return SectionHeader(
        name=name,
        format=SectionHeaderFormat.SEPARATED,
        separator_line=lines[i],
        start_line=i,
        line_length=2 + len(name_lines),
    )


def _parse_underlined(lines: Sequence[str], i: int) -> SectionHeader:
    name_start = i
    while name_start > 0 and not _is_blank(lines[name_start - 1]):
        name_start -= 1

    name_lines = lines[name_start:i]
    return SectionHeader(
        name="\n".join(name_lines),
        format=SectionHeaderFormat.UNDERLINED,
        separator_line=lines[i],
        start_line=name_start,
        line_length=len(name_lines) + 1,
    )


def _parse_numbered(lines: Sequence[str], i: int) -> Optional[SectionHeader]:
    if not (_is_blank(lines[i - 1]) and _is_blank(lines[i + 1])):
        return None

    match = _NUMBERED_PATTERN.match(lines[i])
    if match is None:
        return None

    return SectionHeader(
        name=match.group("name"),
        format=SectionHeaderFormat.NUMBERED,
        separator_line=lines[i],
        start_line=i,
        line_length=1,
    )


__all__ = ["is_separator_line", "parse_headers"]
