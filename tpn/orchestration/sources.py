from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Sequence, Tuple

from tpn.errors import AmbiguousSourceError, CandidateParseError, TpnError
from tpn.models.document import ExternalDocument
from tpn.orchestration.fetcher import CandidateResult
from tpn.parsing import parse_text

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SourceResolution:
    """Which candidate paths were tried for one source and which ones existed."""

    source: str
    branch: str
    tried_paths: List[str] = field(default_factory=list)
    found_paths: List[str] = field(default_factory=list)

    @property
    def resolved(self) -> bool:
        return len(self.found_paths) == 1

    def describe(self) -> str:
        if not self.found_paths:
            return "not found"
        return "found at " + ", ".join(self.found_paths)


@dataclass(slots=True)
class ResolvedSources:
    resolutions: List[SourceResolution]
    documents: List[ExternalDocument]


def resolve_sources(results: Sequence[CandidateResult]) -> ResolvedSources:
    """Require exactly one found candidate per source, then parse the found ones.

    Every miscounted source, and then every unparseable candidate, is collected
    before raising, so one run reports all of them.
    """

    resolutions = _group_by_source(results)

    problems = [
        f"Unable to find exactly one TPN for {resolution.source} "
        f"[{resolution.branch}]: {resolution.describe()}"
        for resolution in resolutions
        if not resolution.resolved
    ]
    if problems:
        for problem in problems:
            logger.error(problem)
        raise AmbiguousSourceError(problems)

    documents: List[ExternalDocument] = []
    failures: List[Tuple[str, TpnError]] = []
    for result in results:
        if not result.found:
            continue
        try:
            document = parse_text(result.text or "")
        except TpnError as exc:
            logger.error("Failed to parse response from %s: %s", result.url, exc)
            failures.append((result.url, exc))
            continue
        logger.info("Found TPN: %s [%s] %s", result.source, result.branch, result.path)
        documents.append(ExternalDocument(source=result.url, document=document))

    if failures:
        raise CandidateParseError(failures) from failures[0][1]

    return ResolvedSources(resolutions=resolutions, documents=documents)


def _group_by_source(results: Sequence[CandidateResult]) -> List[SourceResolution]:
    grouped: Dict[Tuple[str, str], SourceResolution] = {}
    for result in results:
        key = (result.source, result.branch)
        resolution = grouped.get(key)
        if resolution is None:
            resolution = grouped[key] = SourceResolution(source=result.source, branch=result.branch)
        resolution.tried_paths.append(result.path)
        if result.found:
            resolution.found_paths.append(result.path)
    return list(grouped.values())


__all__ = ["ResolvedSources", "SourceResolution", "resolve_sources"]
