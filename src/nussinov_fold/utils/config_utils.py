from __future__ import annotations
import logging
from dataclasses import fields
from importlib.resources import files as importlib_files
from pathlib import Path
from typing import Any, Dict, Optional

from nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingConfig
from nussinov_fold.utils.yaml_io import read_yaml

logger = logging.getLogger(__name__)

# Section of the YAML document that holds the folding settings.
CONFIG_SECTION = "folding"


def default_config_path() -> Path:
    """Path of the YAML config bundled with the package."""
    return Path(str(importlib_files("nussinov_fold") / "data" / "nussinov_default.yaml"))


def _validate_value(key: str, value: Any, expected: type) -> None:
    # bool is a subclass of int, so check it explicitly.
    if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
        raise ValueError(f"Config key '{key}' must be an integer, got {value!r}")
    if expected is bool and not isinstance(value, bool):
        raise ValueError(f"Config key '{key}' must be true or false, got {value!r}")


def config_from_mapping(raw: Dict[str, Any]) -> NussinovFoldingConfig:
    """
    Builds a `NussinovFoldingConfig` from a plain mapping.

    Parameters
    ----------
    raw : Dict[str, Any]
        Keys are `NussinovFoldingConfig` field names. Missing keys keep their
        defaults.

    Returns
    -------
    NussinovFoldingConfig
        The validated configuration.

    Raises
    ------
    ValueError
        On unknown keys, values of the wrong type, or a negative
        `min_hairpin_unpaired`.
    """
    field_types = {
        "min_hairpin_unpaired": int,
        "allow_wobble": bool,
        "verbose": bool,
    }
    known = {f.name for f in fields(NussinovFoldingConfig)}

    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown folding config keys: {', '.join(unknown)}")

    for key, value in raw.items():
        _validate_value(key, value, field_types[key])

    if raw.get("min_hairpin_unpaired", 0) < 0:
        raise ValueError("Config key 'min_hairpin_unpaired' must be non-negative")

    return NussinovFoldingConfig(**raw)


def load_folding_config(yaml_path: Optional[str | Path] = None, **overrides: Any) -> NussinovFoldingConfig:
    """
    Loads folding settings from YAML and applies keyword overrides.

    Parameters
    ----------
    yaml_path : Optional[str | Path]
        YAML file whose `folding:` section holds the settings. Defaults to the
        bundled `nussinov_default.yaml`.
    **overrides : Any
        Field values that take precedence over the file, e.g. from the CLI.
        `None` values are ignored.

    Returns
    -------
    NussinovFoldingConfig
        The resulting configuration.
    """
    if yaml_path is None:
        yaml_path = default_config_path()

    logger.info(f"Loading folding config from: {yaml_path}")
    document = read_yaml(yaml_path)

    section = document.get(CONFIG_SECTION, {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'{CONFIG_SECTION}' section of {yaml_path} must be a mapping")

    config = config_from_mapping(section)

    applied = {key: value for key, value in overrides.items() if value is not None}
    if applied:
        config = config_from_mapping({**{f.name: getattr(config, f.name) for f in fields(config)}, **applied})
        logger.debug(f"Applied config overrides: {applied}")

    return config
