from __future__ import annotations

from typing import Iterable, List, Set

from tpn.models.section import Section


def section_key(section: Section) -> str:
    """Identity of a section: its full header name, case-insensitive."""

    return section.header.name.casefold()


def same_section(left: Section, right: Section) -> bool:
    return section_key(left) == section_key(right)


def distinct_sections(sections: Iterable[Section]) -> List[Section]:
    """Drop later sections whose name was already seen; first occurrence wins."""

    return sections_except(sections, ())


def sections_except(sections: Iterable[Section], excluded: Iterable[Section]) -> List[Section]:
    seen: Set[str] = {section_key(section) for section in excluded}
    result: List[Section] = []
    for section in sections:
        key = section_key(section)
        if key in seen:
            continue
        seen.add(key)
        result.append(section)
    return result


__all__ = ["distinct_sections", "same_section", "section_key", "sections_except"]
