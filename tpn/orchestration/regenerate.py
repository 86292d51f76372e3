from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from tpn.merge import ImportedSection, merge_documents
from tpn.models.configs import RegenerationConfig
from tpn.models.document import TpnDocument
from tpn.models.section import SectionHeaderFormat
from tpn.orchestration.fetcher import (
    CandidateResult,
    FetchFn,
    build_candidates,
    fetch_text,
    gather_candidates,
)
from tpn.orchestration.sources import SourceResolution, resolve_sources
from tpn.parsing import parse_text
from tpn.serializer import render_document
from tpn.settings import Settings, get_settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExistingSectionSummary:
    """A section of the local file with its 1-based, inclusive header line range."""

    first_line: int
    last_line: int
    format: SectionHeaderFormat
    name: str


@dataclass(slots=True)
class RegenerationReport:
    """Everything a caller needs to explain what a regeneration run did."""

    sources: List[SourceResolution]
    existing_sections: List[ExistingSectionSummary]
    new_sections: List[ImportedSection]
    already_imported: List[ImportedSection]
    duplicates: List[ImportedSection]
    output_path: Path
    written: bool
    rendered: str = field(repr=False, default="")

    def log(self, log: logging.Logger = logger) -> None:
        for resolution in self.sources:
            log.info("%s [%s]: %s", resolution.source, resolution.branch, resolution.describe())

        for summary in self.existing_sections:
            log.info(
                "%d:%d %s '%s'",
                summary.first_line,
                summary.last_line,
                summary.format.value,
                summary.name,
            )

        for item in self.already_imported:
            log.info("Found already-imported section: '%s'", item.name)

        for item in self.duplicates:
            log.info("Skipping duplicate section: '%s' of %s", item.name, item.source)

        for item in self.new_sections:
            log.info(
                "New section to import: '%s' of %s line %d",
                item.name,
                ", ".join(item.sources),
                item.section.header.start_line,
            )

        log.info("Importing %d sections...", len(self.new_sections))
        if self.written:
            log.info("Wrote new TPN contents to %s.", self.output_path)
        else:
            log.info("Dry run: %s left unchanged.", self.output_path)


class TpnRegenerator:
    """Refreshes a local notices file with sections published by other repositories."""

    def __init__(
        self,
        config: RegenerationConfig,
        *,
        fetch: Optional[FetchFn] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.config = config
        self.settings = settings or get_settings()
        self.fetch = fetch or fetch_text

    @property
    def potential_paths(self) -> List[str]:
        return list(self.config.potential_paths or self.settings.default_paths)

    @property
    def base_url(self) -> str:
        return self.config.base_url or self.settings.raw_base_url

    def run(self) -> RegenerationReport:
        requests = build_candidates(self.config.repos, self.potential_paths, self.base_url)
        results = gather_candidates(requests, fetch=self.fetch, timeout=self.settings.http_timeout)
        return self.regenerate(results)

    def regenerate(self, results: Sequence[CandidateResult]) -> RegenerationReport:
        """Merge already fetched candidates into the local file.

        Nothing is written unless every source resolved and every document parsed.
        """

        resolved = resolve_sources(results)

        tpn_path = self.config.tpn_file
        if not tpn_path.exists():
            raise FileNotFoundError(f"TPN file not found: {tpn_path}")
        raw = tpn_path.read_text(encoding="utf-8")
        has_bom = raw.startswith("\ufeff")
        existing = parse_text(raw[1:] if has_bom else raw)
        logger.info("Existing TPN file preamble: %s...", existing.preamble[:10])

        merged = merge_documents(existing, resolved.documents)
        rendered = render_document(merged.document)

        written = False
        if not self.config.dry_run:
            # Keep a byte order mark the local file already had.
            tpn_path.write_text(rendered + "\n", encoding="utf-8-sig" if has_bom else "utf-8")
            written = True

        return RegenerationReport(
            sources=resolved.resolutions,
            existing_sections=_summarize(existing),
            new_sections=merged.new_sections,
            already_imported=merged.already_imported,
            duplicates=merged.duplicates,
            output_path=tpn_path,
            written=written,
            rendered=rendered,
        )


def _summarize(document: TpnDocument) -> List[ExistingSectionSummary]:
    summaries = [
        ExistingSectionSummary(
            first_line=section.header.start_line + 1,
            last_line=section.header.start_line + section.header.line_length,
            format=section.header.format,
            name=section.header.name,
        )
        for section in document.sections
    ]
    return sorted(summaries, key=lambda summary: summary.name.casefold())


__all__ = ["ExistingSectionSummary", "RegenerationReport", "TpnRegenerator"]
