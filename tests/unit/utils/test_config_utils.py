"""
Unit tests for loading `NussinovFoldingConfig` from YAML.
"""
from pathlib import Path

import pytest

from nussinov_fold.folding.nussinov.nussinov_recurrences import NussinovFoldingConfig
from nussinov_fold.utils.config_utils import (
    config_from_mapping,
    default_config_path,
    load_folding_config,
)
from nussinov_fold.utils.yaml_io import read_yaml


@pytest.fixture
def write_yaml(tmp_path):
    """Writes `text` to a YAML file under tmp_path and returns its path."""
    def _write(text, name="folding.yaml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write


def test_bundled_default_config_exists_and_loads():
    """
    The packaged YAML reproduces the built-in defaults.
    """
    assert default_config_path().is_file()

    config = load_folding_config()
    assert config == NussinovFoldingConfig()


def test_load_folding_config_from_file(write_yaml):
    path = write_yaml("folding:\n  min_hairpin_unpaired: 3\n  allow_wobble: true\n")
    config = load_folding_config(path)

    assert config.min_hairpin_unpaired == 3
    assert config.allow_wobble is True
    assert config.verbose is False


def test_load_folding_config_missing_section_uses_defaults(write_yaml):
    path = write_yaml("# nothing here\n")
    assert load_folding_config(path) == NussinovFoldingConfig()


def test_overrides_take_precedence_and_none_is_ignored(write_yaml):
    path = write_yaml("folding:\n  min_hairpin_unpaired: 3\n")
    config = load_folding_config(path, allow_wobble=True, min_hairpin_unpaired=None)

    assert config.min_hairpin_unpaired == 3
    assert config.allow_wobble is True


def test_overrides_are_validated(write_yaml):
    path = write_yaml("folding: {}\n")
    with pytest.raises(ValueError):
        load_folding_config(path, min_hairpin_unpaired=-1)


@pytest.mark.parametrize(
    "raw",
    [
        {"min_loop": 4},                   # unknown key
        {"min_hairpin_unpaired": "4"},     # wrong type
        {"min_hairpin_unpaired": True},    # bool is not an int here
        {"min_hairpin_unpaired": -2},      # negative
        {"allow_wobble": "yes"},           # wrong type
    ],
)
def test_config_from_mapping_rejects_bad_values(raw):
    with pytest.raises(ValueError):
        config_from_mapping(raw)


def test_section_must_be_mapping(write_yaml):
    path = write_yaml("folding:\n  - 1\n  - 2\n")
    with pytest.raises(ValueError):
        load_folding_config(path)


def test_read_yaml_rejects_other_suffixes(tmp_path):
    path = tmp_path / "folding.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError):
        read_yaml(path)


def test_read_yaml_requires_top_level_mapping(write_yaml):
    path = write_yaml("- a\n- b\n")
    with pytest.raises(ValueError):
        read_yaml(path)


def test_read_yaml_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        read_yaml(Path(tmp_path) / "missing.yaml")
