from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict

import yaml

from tpn.models.configs import RegenerationConfig


def _load_structured_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    ext = path.suffix.lower()
    text = path.read_text(encoding="utf-8")

    if ext in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    elif ext == ".toml":
        data = tomllib.loads(text)
    elif ext == ".json":
        data = json.loads(text)
    else:
        raise ValueError(f"Unsupported config format '{ext}' for {path}")

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping at the top level")
    return data


def load_regeneration_config(path: Path) -> RegenerationConfig:
    raw = _load_structured_file(path)
    # TOML configs usually nest everything under a [tpn] table.
    if set(raw) == {"tpn"} and isinstance(raw["tpn"], dict):
        raw = raw["tpn"]
    config = RegenerationConfig.model_validate(raw)
    return config.resolve_paths(path.parent)


__all__ = ["load_regeneration_config"]
