"""
Unit tests for smelly.config.

Structure:
    1. Resolving a single detector's settings
    2. Resolving a whole table
    3. Loading from a JSON file
    4. Compiling exclude patterns
"""
import json
import re
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from smelly.config import (
    ConfigError,
    DetectorConfig,
    load_config,
    resolve_configuration,
    resolve_detector_config,
)

# ---------------------------------------------------------------------------
# 1. resolve_detector_config
# ---------------------------------------------------------------------------

class TestResolveDetectorConfig:

    def test_none_gives_defaults(self):
        config = resolve_detector_config(None)
        assert config.enabled is True
        assert config.exclude == ()
        assert dict(config.options) == {}

    def test_empty_mapping_gives_defaults(self):
        assert resolve_detector_config({}) == resolve_detector_config(None)

    def test_disabled(self):
        assert resolve_detector_config({"enabled": False}).enabled is False

    def test_exclude_becomes_tuple(self):
        config = resolve_detector_config({"exclude": ["Report#render", "/^Legacy/"]})
        assert config.exclude == ("Report#render", "/^Legacy/")

    def test_unknown_keys_become_options(self):
        config = resolve_detector_config({"max_params": 3})
        assert config.value("max_params") == 3
        assert config.value("missing", "fallback") == "fallback"

    def test_detector_defaults_apply_under_raw(self):
        config = resolve_detector_config({"max_params": 5}, defaults={"max_params": 3, "enabled": False})
        assert config.value("max_params") == 5
        assert config.enabled is False

    def test_detector_config_passes_through(self):
        config = DetectorConfig(enabled=False)
        assert resolve_detector_config(config) is config

    def test_wrong_enabled_type_rejected(self):
        with pytest.raises(ConfigError):
            resolve_detector_config({"enabled": "no"})

    def test_integer_is_not_a_bool(self):
        with pytest.raises(ConfigError):
            resolve_detector_config({"enabled": 0})

    def test_exclude_must_be_strings(self):
        with pytest.raises(ConfigError):
            resolve_detector_config({"exclude": [1, 2]})

    def test_non_mapping_rejected(self):
        with pytest.raises(ConfigError):
            resolve_detector_config(["enabled"])

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


# ---------------------------------------------------------------------------
# 2. resolve_configuration
# ---------------------------------------------------------------------------

class TestResolveConfiguration:

    def test_mixed_values(self):
        table = resolve_configuration({
            "BooleanParameter": {"enabled": False},
            "Other": DetectorConfig(exclude=("x",)),
        })
        assert table["BooleanParameter"].enabled is False
        assert table["Other"].exclude == ("x",)

    def test_empty(self):
        assert resolve_configuration({}) == {}


# ---------------------------------------------------------------------------
# 3. load_config
# ---------------------------------------------------------------------------

def _write(tmpdir: str, payload) -> Path:
    path = Path(tmpdir) / "smelly.json"
    if isinstance(payload, str):
        path.write_text(payload)
    else:
        path.write_text(json.dumps(payload))
    return path


class TestLoadConfig:

    def test_missing_file_is_empty(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_config(Path(tmpdir) / "absent.json") == {}

    def test_loads_detector_section(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, {"detectors": {"BooleanParameter": {"enabled": False}}})
            table = load_config(path)
            assert set(table) == {"BooleanParameter"}
            assert table["BooleanParameter"].enabled is False

    def test_no_detector_section(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            assert load_config(_write(tmpdir, {})) == {}

    def test_accepts_str_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, {"detectors": {}})
            assert load_config(str(path)) == {}

    def test_unknown_detector_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, {"detectors": {"NoSuchSmell": {"enabled": False}}})
            with pytest.raises(ConfigError, match="NoSuchSmell"):
                load_config(path)

    def test_invalid_json_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError):
                load_config(_write(tmpdir, "{not json"))

    def test_top_level_must_be_object(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError):
                load_config(_write(tmpdir, [1, 2]))

    def test_detector_section_must_be_object(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with pytest.raises(ConfigError):
                load_config(_write(tmpdir, {"detectors": ["BooleanParameter"]}))

    def test_bad_value_type_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, {"detectors": {"BooleanParameter": {"enabled": "false"}}})
            with pytest.raises(ConfigError):
                load_config(path)


# ---------------------------------------------------------------------------
# 4. Exclude patterns
# ---------------------------------------------------------------------------

class TestExcludePatterns:

    def test_regex_entries_compiled_once(self):
        config = resolve_detector_config({"exclude": ["/^Legacy/", "render"]})
        regex, plain = config.exclude_patterns
        assert isinstance(regex, re.Pattern)
        assert regex.pattern == "^Legacy"
        assert plain == "render"

    def test_invalid_regex_rejected_at_resolution(self):
        with pytest.raises(ConfigError, match="Invalid exclude pattern"):
            resolve_detector_config({"exclude": ["/[unclosed/"]})

    def test_invalid_regex_rejected_on_direct_construction(self):
        with pytest.raises(ConfigError):
            DetectorConfig(exclude=("/[unclosed/",))

    def test_brackets_without_slashes_are_plain_text(self):
        config = resolve_detector_config({"exclude": ["[unclosed"]})
        assert config.exclude_patterns == ("[unclosed",)

    def test_invalid_regex_in_file_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = _write(tmpdir, {"detectors": {"BooleanParameter": {"exclude": ["/(open/"]}}})
            with pytest.raises(ConfigError):
                load_config(path)

    def test_patterns_do_not_affect_equality(self):
        assert DetectorConfig(exclude=("/^A/",)) == DetectorConfig(exclude=("/^A/",))
