"""
Reading, validating and writing autocrop configuration files.

Files may be JSON, YAML or TOML. The format comes from the file extension;
files with any other extension are sniffed. String values may reference
environment variables as ``${NAME}`` or ``${NAME:fallback}``; ``NAME`` is
looked up with the ``AUTOCROP_`` prefix first and then as given.
"""

import json
import os
import re
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from .models import Config
from ..exceptions import ConfigurationError

PathLike = Union[str, Path]

ENV_PREFIX = "AUTOCROP_"
ENV_REFERENCE = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")

FORMAT_BY_SUFFIX = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
}


def _parse_json(text: str) -> Any:
    return json.loads(text)


def _parse_yaml(text: str) -> Any:
    return yaml.safe_load(text) or {}


def _parse_toml(text: str) -> Any:
    return tomllib.loads(text)


def _dump_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def _dump_yaml(data: Dict[str, Any]) -> str:
    return yaml.safe_dump(data, default_flow_style=False, allow_unicode=True, sort_keys=False)


PARSERS: Dict[str, Callable[[str], Any]] = {
    "json": _parse_json,
    "yaml": _parse_yaml,
    "toml": _parse_toml,
}

# TOML cannot represent the None defaults, so it is read-only
DUMPERS: Dict[str, Callable[[Dict[str, Any]], str]] = {
    "json": _dump_json,
    "yaml": _dump_yaml,
}

PARSE_ERRORS = (json.JSONDecodeError, yaml.YAMLError, tomllib.TOMLDecodeError)


def load_config(config_path: PathLike) -> Config:
    """
    Load and validate a configuration file.

    Args:
        config_path: Path to a JSON, YAML or TOML file

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid
    """
    path = Path(config_path)
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}")

    fmt = FORMAT_BY_SUFFIX.get(path.suffix.lower())
    data = _parse(text, fmt, path) if fmt else _sniff(text, path)

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration in {path} must be a mapping, got {type(data).__name__}")

    return load_config_from_dict(expand_env(data))


def load_config_from_dict(config_data: Mapping[str, Any]) -> Config:
    """
    Validate a configuration mapping.

    Raises:
        ConfigurationError: Listing every invalid field as ``section -> field: reason``
    """
    try:
        return Config.model_validate(dict(config_data))
    except ValidationError as e:
        problems = [
            f"{' -> '.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigurationError("Configuration validation failed:\n" + "\n".join(problems))


def apply_overrides(config: Config, overrides: Mapping[str, Any]) -> Config:
    """
    Set fields addressed by dotted names, e.g. ``{"scan.method": "naive"}``.

    ``None`` values are skipped so unset command line options can be passed
    straight through. Each assignment is validated.

    Raises:
        ConfigurationError: For unknown fields or invalid values
    """
    for dotted, value in overrides.items():
        if value is None:
            continue
        *sections, field = dotted.split(".")
        target = config
        try:
            for section in sections:
                target = getattr(target, section)
            if field not in type(target).model_fields:
                raise ConfigurationError(f"Unknown configuration field: {dotted}")
            setattr(target, field, value)
        except AttributeError:
            raise ConfigurationError(f"Unknown configuration section: {dotted}")
        except ValidationError as e:
            raise ConfigurationError(f"Invalid value for {dotted}: {e.errors()[0]['msg']}")
    return config


def save_config(config: Config, output_path: PathLike, format_type: Optional[str] = None) -> None:
    """
    Write a configuration as JSON or YAML.

    Args:
        config: Configuration to write
        output_path: Destination file; parent directories are created
        format_type: 'json' or 'yaml'; taken from the extension when None

    Raises:
        ConfigurationError: For other formats or when the file cannot be written
    """
    path = Path(output_path)
    fmt = format_type or FORMAT_BY_SUFFIX.get(path.suffix.lower(), path.suffix.lstrip("."))
    fmt = "yaml" if fmt == "yml" else fmt

    dumper = DUMPERS.get(fmt)
    if dumper is None:
        raise ConfigurationError(f"Unsupported format: {fmt}")

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dumper(config.model_dump(mode="json")), encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Error saving configuration to {path}: {e}")


def get_default_config() -> Config:
    """Configuration with every default value."""
    return Config()


def validate_config_file(config_path: PathLike) -> bool:
    """
    Check a configuration file.

    Returns:
        True if the file loads and validates

    Raises:
        ConfigurationError: If it does not
    """
    load_config(config_path)
    return True


def expand_env(data: Any, prefix: str = ENV_PREFIX) -> Any:
    """Replace ``${NAME}`` / ``${NAME:fallback}`` references in every string of ``data``."""
    if isinstance(data, dict):
        return {key: expand_env(value, prefix) for key, value in data.items()}
    if isinstance(data, list):
        return [expand_env(item, prefix) for item in data]
    if not isinstance(data, str):
        return data

    def lookup(match: "re.Match[str]") -> str:
        name, fallback = match.group(1), match.group(2)
        for candidate in (prefix + name, name):
            if candidate in os.environ:
                return os.environ[candidate]
        # unresolved references stay verbatim
        return match.group(0) if fallback is None else fallback

    return ENV_REFERENCE.sub(lookup, data)


def _parse(text: str, fmt: str, path: Path) -> Any:
    try:
        return PARSERS[fmt](text)
    except PARSE_ERRORS as e:
        raise ConfigurationError(f"Invalid {fmt.upper()} in {path}: {e}")


def _sniff(text: str, path: Path) -> Dict[str, Any]:
    """Try each format in turn; JSON first since it is also valid YAML."""
    for fmt in ("json", "yaml", "toml"):
        try:
            data = PARSERS[fmt](text)
        except PARSE_ERRORS:
            continue
        if isinstance(data, dict):
            return data
    raise ConfigurationError(f"Unable to detect format for {path}")
