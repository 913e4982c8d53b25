"""
Configuration system with Pydantic models and validation.

Provides configuration management with type safety, validation and
support for JSON, YAML and TOML files.
"""

from .models import (
    Config,
    ScanConfig,
    ScanMethod,
    OutputConfig,
    LoggingConfig,
    LogLevel,
)
from .loader import (
    apply_overrides,
    expand_env,
    load_config,
    load_config_from_dict,
    save_config,
    get_default_config,
    validate_config_file,
)

__all__ = [
    # Configuration models
    "Config",
    "ScanConfig",
    "ScanMethod",
    "OutputConfig",
    "LoggingConfig",
    "LogLevel",
    # Configuration loading
    "apply_overrides",
    "expand_env",
    "load_config",
    "load_config_from_dict",
    "save_config",
    "get_default_config",
    "validate_config_file",
]
