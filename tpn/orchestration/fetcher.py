from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence
from urllib.error import HTTPError
from urllib.request import urlopen

from tpn.models.configs import TpnRepo

logger = logging.getLogger(__name__)

FetchFn = Callable[[str, float], Optional[str]]


@dataclass(frozen=True, slots=True)
class CandidateRequest:
    """One (repository, candidate path) combination to try."""

    source: str
    branch: str
    path: str
    url: str


@dataclass(frozen=True, slots=True)
class CandidateResult:
    source: str
    branch: str
    path: str
    url: str
    text: Optional[str]

    @property
    def found(self) -> bool:
        return self.text is not None


def build_candidates(
    repos: Iterable[TpnRepo],
    potential_paths: Sequence[str],
    base_url: str,
) -> List[CandidateRequest]:
    """Every candidate path is tried for every repository."""

    if not base_url.endswith("/"):
        base_url = f"{base_url}/"
    return [
        CandidateRequest(
            source=repo.name,
            branch=repo.branch,
            path=path,
            url=f"{base_url}{repo.name}/{repo.branch}/{path}",
        )
        for repo in repos
        for path in potential_paths
    ]


def fetch_text(url: str, timeout: float) -> Optional[str]:
    """Download ``url`` as text; ``None`` when the server answers 404."""

    try:
        with urlopen(url, timeout=timeout) as response:
            return response.read().decode("utf-8-sig")
    except HTTPError as exc:
        if exc.code == 404:
            return None
        raise


async def fetch_candidates(
    requests: Sequence[CandidateRequest],
    *,
    fetch: FetchFn = fetch_text,
    timeout: float = 30.0,
) -> List[CandidateResult]:
    """Fetch all candidates concurrently, returning results in request order."""

    async def _fetch_one(request: CandidateRequest) -> CandidateResult:
        logger.info("Getting %s", request.url)
        text = await asyncio.to_thread(fetch, request.url, timeout)
        if text is None:
            logger.info("Checked for content, but does not exist: %s", request.url)
        else:
            logger.info("Got content from URL: %s", request.url)
        return CandidateResult(
            source=request.source,
            branch=request.branch,
            path=request.path,
            url=request.url,
            text=text,
        )

    return list(await asyncio.gather(*(_fetch_one(request) for request in requests)))


def gather_candidates(
    requests: Sequence[CandidateRequest],
    *,
    fetch: FetchFn = fetch_text,
    timeout: float = 30.0,
) -> List[CandidateResult]:
    return asyncio.run(fetch_candidates(requests, fetch=fetch, timeout=timeout))


__all__ = [
    "CandidateRequest",
    "CandidateResult",
    "FetchFn",
    "build_candidates",
    "fetch_candidates",
    "fetch_text",
    "gather_candidates",
]
