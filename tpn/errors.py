from __future__ import annotations

from typing import Iterable, List, Tuple


class TpnError(Exception):
    """Base class for failures while reading or regenerating a notices file."""


class NoSectionsFoundError(TpnError):
    """Raised when a document contains no recognizable section header."""

    def __init__(self, message: str = "No sections found.") -> None:
        super().__init__(message)


class MalformedHeaderError(TpnError):
    """Raised when header syntax is ambiguous, e.g. a separator inside a section name."""


class AmbiguousSourceError(TpnError):
    """Raised when one or more sources did not resolve to exactly one notices file."""

    def __init__(self, problems: Iterable[str]) -> None:
        self.problems: List[str] = list(problems)
        super().__init__("; ".join(self.problems) or "Unable to resolve sources")


class CandidateParseError(TpnError):
    """Raised when one or more fetched candidate files cannot be parsed."""

    def __init__(self, failures: Iterable[Tuple[str, TpnError]]) -> None:
        self.failures: List[Tuple[str, TpnError]] = list(failures)
        super().__init__(
            "; ".join(f"Failed to parse response from {url}: {reason}" for url, reason in self.failures)
        )

    @property
    def urls(self) -> List[str]:
        return [url for url, _ in self.failures]


__all__ = [
    "AmbiguousSourceError",
    "CandidateParseError",
    "MalformedHeaderError",
    "NoSectionsFoundError",
    "TpnError",
]
