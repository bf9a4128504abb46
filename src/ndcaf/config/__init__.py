"""Configuration loading system.

Provides:
- Hierarchical file includes with cycle detection
- Override and removal directives with dot-notation
- Command-line `key.path=value` overrides

Main Entry Point
----------------
load_config : Load a configuration file
"""

from .errors import (ConfigCycleError, ConfigError, ConfigIncludeError,
                     ConfigPathError, ConfigTypeError, ConfigValidationError)
from .load import load_config

__all__ = [
    "load_config",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
    "ConfigValidationError",
]
