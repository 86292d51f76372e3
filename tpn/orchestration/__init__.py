"""Collaborators around the merge engine: config, fetching, source resolution, regeneration."""

from .config_loader import load_regeneration_config
from .fetcher import CandidateRequest, CandidateResult, build_candidates, fetch_candidates, gather_candidates
from .regenerate import ExistingSectionSummary, RegenerationReport, TpnRegenerator
from .sources import ResolvedSources, SourceResolution, resolve_sources

__all__ = [
    "CandidateRequest",
    "CandidateResult",
    "ExistingSectionSummary",
    "RegenerationReport",
    "ResolvedSources",
    "SourceResolution",
    "TpnRegenerator",
    "build_candidates",
    "fetch_candidates",
    "gather_candidates",
    "load_regeneration_config",
    "resolve_sources",
]
