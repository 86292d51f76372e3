from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple, Union

from tpn.merge.comparer import section_key
from tpn.models.document import ExternalDocument, TpnDocument
from tpn.models.section import Section


@dataclass(frozen=True, slots=True)
class ImportedSection:
    """An external section together with where it came from."""

    section: Section
    source: str
    sources: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def name(self) -> str:
        return self.section.header.name


@dataclass(frozen=True, slots=True)
class MergeResult:
    """Merged document plus what happened to every external section."""

    document: TpnDocument
    new_sections: List[ImportedSection]
    already_imported: List[ImportedSection]
    duplicates: List[ImportedSection]

    @property
    def new_section_names(self) -> List[str]:
        return [item.name for item in self.new_sections]


def merge_documents(
    local: TpnDocument,
    externals: Sequence[Union[TpnDocument, ExternalDocument]],
) -> MergeResult:
    """Append the external sections missing from ``local`` as one name-sorted block."""

    sourced = [_as_external(item, index) for index, item in enumerate(externals)]
    all_external: List[Tuple[str, Section]] = [
        (external.source, section)
        for external in sourced
        for section in external.document.sections
    ]

    sources_by_key: Dict[str, List[str]] = {}
    for source, section in all_external:
        carriers = sources_by_key.setdefault(section_key(section), [])
        if source not in carriers:
            carriers.append(source)

    local_keys = {section_key(section) for section in local.sections}
    chosen: Dict[str, ImportedSection] = {}
    already_imported: List[ImportedSection] = []
    duplicates: List[ImportedSection] = []

    for source, section in all_external:
        key = section_key(section)
        item = ImportedSection(section=section, source=source, sources=tuple(sources_by_key[key]))
        if key in local_keys:
            already_imported.append(item)
        elif key in chosen:
            duplicates.append(item)
        else:
            chosen[key] = item

    new_sections = sorted(chosen.values(), key=_name_order)
    already_imported.sort(key=_name_order)
    duplicates.sort(key=_name_order)

    document = TpnDocument(
        preamble=local.preamble,
        sections=local.sections + tuple(item.section for item in new_sections),
    )
    return MergeResult(
        document=document,
        new_sections=new_sections,
        already_imported=already_imported,
        duplicates=duplicates,
    )


def _as_external(item: Union[TpnDocument, ExternalDocument], index: int) -> ExternalDocument:
    if isinstance(item, ExternalDocument):
        return item
    return ExternalDocument(source=f"external[{index}]", document=item)


def _name_order(item: ImportedSection) -> str:
    return section_key(item.section)


__all__ = ["ImportedSection", "MergeResult", "merge_documents"]
