from __future__ import annotations
from pathlib import Path
from typing import Any, Dict
import yaml


def read_yaml(path: str | Path) -> Dict[str, Any]:
    """
    Read and parse a YAML mapping. An empty file yields an empty dict.
    """
    path_obj = Path(path)
    if path_obj.suffix.lower() not in {".yml", ".yaml"}:
        raise ValueError(f"Only YAML files are supported, got '{path_obj.name}'.")

    loaded = yaml.safe_load(path_obj.read_text(encoding="utf-8")) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Top level of '{path_obj.name}' must be a mapping.")

    return loaded
