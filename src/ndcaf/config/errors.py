"""Typed exceptions for configuration loading."""

from typing import List

__all__ = [
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
    "ConfigValidationError",
]


class ConfigError(Exception):
    """Base exception for all configuration errors."""


class ConfigIncludeError(ConfigError):
    """Raised when an included file cannot be found or loaded."""


class ConfigCycleError(ConfigError):
    """Raised when a circular include dependency is detected."""

    def __init__(self, cycle_path: List[str]):
        """Initialize with the cycle path.

        Parameters
        ----------
        cycle_path : List[str]
            List of file paths showing the include cycle
        """
        self.cycle_path = cycle_path
        super().__init__(f"Circular include detected: {' -> '.join(cycle_path)}")


class ConfigPathError(ConfigError):
    """Raised when a configuration key path does not exist."""


class ConfigTypeError(ConfigError):
    """Raised when a key path traverses a value which is not a dictionary."""


class ConfigValidationError(ConfigError):
    """Raised when a configuration is missing required blocks or values."""
