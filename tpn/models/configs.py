from __future__ import annotations

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator


DEFAULT_RAW_BASE_URL = "https://raw.githubusercontent.com/"


class TpnRepo(BaseModel):
    """A repository expected to publish exactly one notices file."""

    name: str = Field(description="{organization}/{name} of the repository")
    branch: str

    @field_validator("name")
    @classmethod
    def _require_org_and_name(cls, value: str) -> str:
        value = value.strip().strip("/")
        if value.count("/") != 1 or not all(value.split("/")):
            raise ValueError(f"Repository '{value}' must look like 'organization/name'")
        return value

    @classmethod
    def from_spec(cls, spec: str) -> "TpnRepo":
        """Build from ``organization/name@branch``."""

        name, sep, branch = spec.rpartition("@")
        if not sep:
            raise ValueError(f"{spec} specifies no branch (expected organization/name@branch)")
        return cls(name=name, branch=branch)


class RegenerationConfig(BaseModel):
    tpn_file: Path
    potential_paths: List[str] = Field(default_factory=list)
    repos: List[TpnRepo] = Field(default_factory=list)
    base_url: str | None = None
    dry_run: bool = False

    @field_validator("potential_paths", mode="before")
    @classmethod
    def _split_paths(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [path.strip() for path in value.split(",") if path.strip()]
        return list(value)

    def resolve_paths(self, base_path: Path) -> "RegenerationConfig":
        values = self.model_dump()
        raw = Path(values["tpn_file"])
        values["tpn_file"] = (base_path / raw).resolve() if not raw.is_absolute() else raw
        return RegenerationConfig.model_validate(values)


__all__ = ["DEFAULT_RAW_BASE_URL", "RegenerationConfig", "TpnRepo"]
