"""Tests for configuration models and loading."""

import json

import pydantic
import pytest

from autocrop.config import (
    Config,
    apply_overrides,
    expand_env,
    OutputConfig,
    ScanConfig,
    get_default_config,
    load_config,
    load_config_from_dict,
    save_config,
    validate_config_file,
)
from autocrop.core import DEFAULT_SETTINGS, ExhaustedEdge, HashProfile
from autocrop.exceptions import ConfigurationError


class TestModels:
    """Defaults and validation of the pydantic models."""

    def test_defaults(self):
        config = get_default_config()
        assert config.scan.method == "hash"
        assert config.scan.profile == "extended"
        assert config.scan.dark_limit == 128
        assert config.output.suffix == "_cropped"
        assert config.output.image_format is None
        assert config.logging.level == "INFO"

    def test_default_scan_config_matches_default_settings(self):
        assert ScanConfig().to_settings() == DEFAULT_SETTINGS

    def test_to_settings_converts_enums(self):
        settings = ScanConfig(profile="simple", exhausted_edge="keep", dark_limit=100).to_settings()
        assert settings.profile is HashProfile.SIMPLE
        assert settings.exhausted_edge is ExhaustedEdge.KEEP
        assert settings.dark_limit == 100

    def test_saturation_limits_must_be_ordered(self):
        with pytest.raises(pydantic.ValidationError, match="near_black"):
            ScanConfig(near_black=240, near_white=230)

    def test_dark_limit_range(self):
        with pytest.raises(pydantic.ValidationError):
            ScanConfig(dark_limit=300)

    def test_unknown_method(self):
        with pytest.raises(pydantic.ValidationError):
            ScanConfig(method="flood")

    def test_assignment_is_validated(self):
        config = get_default_config()
        config.scan.method = "naive"
        assert config.scan.method == "naive"
        with pytest.raises(pydantic.ValidationError):
            config.scan.profile = "huge"

    @pytest.mark.parametrize("value,expected", [(".PNG", "png"), ("Jpg", "jpg"), ("tiff", "tiff")])
    def test_image_format_is_normalised(self, value, expected):
        assert OutputConfig(image_format=value).image_format == expected

    def test_unsupported_image_format(self):
        with pytest.raises(pydantic.ValidationError, match="Unsupported output format"):
            OutputConfig(image_format="gif")


class TestLoadFromDict:
    """Building configurations from plain dictionaries."""

    def test_partial_sections(self):
        config = load_config_from_dict({"scan": {"method": "naive"}, "output": {"suffix": "_x"}})
        assert config.scan.method == "naive"
        assert config.scan.profile == "extended"
        assert config.output.suffix == "_x"

    def test_unknown_top_level_key(self):
        with pytest.raises(ConfigurationError, match="validation failed"):
            load_config_from_dict({"crop": {}})

    @pytest.mark.parametrize("section,key", [("scan", "profle"), ("output", "sufix"), ("logging", "lvl")])
    def test_unknown_section_key(self, section, key):
        with pytest.raises(ConfigurationError, match=f"{section} -> {key}"):
            load_config_from_dict({section: {key: "x"}})

    def test_error_names_the_field(self):
        with pytest.raises(ConfigurationError, match="scan -> dark_limit"):
            load_config_from_dict({"scan": {"dark_limit": -1}})


class TestFiles:
    """Loading and saving configuration files."""

    def test_load_yaml(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("scan:\n  method: naive\n  dark_limit: 100\nlogging:\n  use_rich: false\n")
        config = load_config(path)
        assert config.scan.method == "naive"
        assert config.scan.dark_limit == 100
        assert config.logging.use_rich is False

    def test_load_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text(json.dumps({"scan": {"profile": "simple"}}))
        assert load_config(path).scan.profile == "simple"

    def test_load_toml(self, temp_dir):
        path = temp_dir / "config.toml"
        path.write_text('[scan]\nexhausted_edge = "keep"\n\n[output]\nimage_format = "png"\n')
        config = load_config(path)
        assert config.scan.exhausted_edge == "keep"
        assert config.output.image_format == "png"

    def test_auto_detects_json(self, temp_dir):
        path = temp_dir / "settings.cfg"
        path.write_text('{"scan": {"near_white": 240}}')
        assert load_config(path).scan.near_white == 240

    def test_auto_detects_yaml(self, temp_dir):
        path = temp_dir / "settings.cfg"
        path.write_text("output:\n  jpeg_quality: 80\n")
        assert load_config(path).output.jpeg_quality == 80

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigurationError, match="not found"):
            load_config(temp_dir / "absent.yaml")

    def test_invalid_json(self, temp_dir):
        path = temp_dir / "config.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError, match="Invalid JSON"):
            load_config(path)

    def test_misspelled_key_in_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("scan:\n  profle: simple\n")
        with pytest.raises(ConfigurationError, match="profle"):
            load_config(path)

    def test_invalid_values_in_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("scan:\n  near_black: 250\n")
        with pytest.raises(ConfigurationError):
            load_config(path)
        with pytest.raises(ConfigurationError):
            validate_config_file(path)

    def test_validate_config_file(self, temp_dir):
        path = temp_dir / "config.yaml"
        path.write_text("scan:\n  method: hash\n")
        assert validate_config_file(path) is True

    def test_environment_substitution(self, temp_dir, monkeypatch):
        path = temp_dir / "config.yaml"
        path.write_text('scan:\n  dark_limit: "${DARK_LIMIT:100}"\noutput:\n  suffix: "${SUFFIX}"\n')
        monkeypatch.setenv("AUTOCROP_DARK_LIMIT", "90")
        monkeypatch.setenv("SUFFIX", "_trim")
        config = load_config(path)
        assert config.scan.dark_limit == 90
        assert config.output.suffix == "_trim"

    def test_environment_default(self, temp_dir, monkeypatch):
        path = temp_dir / "config.yaml"
        path.write_text('scan:\n  dark_limit: "${DARK_LIMIT:100}"\n')
        monkeypatch.delenv("AUTOCROP_DARK_LIMIT", raising=False)
        monkeypatch.delenv("DARK_LIMIT", raising=False)
        assert load_config(path).scan.dark_limit == 100

    @pytest.mark.parametrize("name", ["saved.json", "saved.yaml"])
    def test_save_and_reload(self, temp_dir, name):
        config = load_config_from_dict({
            "scan": {"method": "naive", "profile": "simple"},
            "output": {"image_format": "jpg", "jpeg_quality": 70},
            "description": "scanner archive",
        })
        path = temp_dir / "nested" / name
        save_config(config, path)
        reloaded = load_config(path)
        assert reloaded.model_dump(mode="json") == config.model_dump(mode="json")

    def test_save_unsupported_format(self, temp_dir):
        with pytest.raises(ConfigurationError, match="Unsupported format"):
            save_config(Config(), temp_dir / "config.toml")


class TestOverrides:
    """Dotted-name overrides used by the command line."""

    def test_sets_nested_fields(self):
        config = apply_overrides(get_default_config(), {"scan.method": "naive", "output.jpeg_quality": 60})
        assert config.scan.method == "naive"
        assert config.output.jpeg_quality == 60

    def test_none_values_are_skipped(self):
        config = apply_overrides(get_default_config(), {"scan.profile": None})
        assert config.scan.profile == "extended"

    def test_top_level_field(self):
        assert apply_overrides(get_default_config(), {"description": "batch"}).description == "batch"

    @pytest.mark.parametrize("name", ["scan.bogus", "bogus.method", "version.major"])
    def test_unknown_field(self, name):
        with pytest.raises(ConfigurationError, match="Unknown configuration"):
            apply_overrides(get_default_config(), {name: 1})

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError, match="scan.dark_limit"):
            apply_overrides(get_default_config(), {"scan.dark_limit": 999})


class TestExpandEnv:
    """Environment references outside of files."""

    def test_nested_structures(self, monkeypatch):
        monkeypatch.setenv("AUTOCROP_OUT", "/tmp/out")
        data = {"a": ["${OUT}", {"b": "x-${MISSING_AUTOCROP_TEST:y}"}], "c": 3}
        assert expand_env(data) == {"a": ["/tmp/out", {"b": "x-y"}], "c": 3}

    def test_unresolved_reference_is_kept(self, monkeypatch):
        monkeypatch.delenv("AUTOCROP_NOPE", raising=False)
        monkeypatch.delenv("NOPE", raising=False)
        assert expand_env("${NOPE}") == "${NOPE}"
