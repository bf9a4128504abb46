"""Dictionary operations used to assemble a configuration.

Configuration keys are addressed with dotted paths, e.g. `io.reader.n_entry`
designates `cfg["io"]["reader"]["n_entry"]`.
"""

from copy import deepcopy
from typing import Any, Dict, List, Tuple

import yaml

from .errors import ConfigPathError, ConfigTypeError, ConfigValidationError

__all__ = [
    "deep_merge",
    "parse_value",
    "set_nested_value",
    "parse_overrides",
    "extract_directives",
]

# Top-level keys interpreted by the loader rather than stored
DIRECTIVES = ("include", "override", "remove")


def deep_merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """Merges two configuration dictionaries, block by block.

    Blocks present in both are merged recursively, any other value of
    `update` replaces the one of `base`. Neither input is modified.

    Parameters
    ----------
    base : Dict[str, Any]
        Configuration to start from
    update : Dict[str, Any]
        Configuration which takes precedence

    Returns
    -------
    Dict[str, Any]
        Merged configuration
    """
    merged = deepcopy(base)
    for key, value in update.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)

    return merged


def parse_value(value: Any) -> Any:
    """Interprets a command-line string as a YAML scalar or collection.

    `'3'` becomes an integer, `'true'` a boolean, `'[1, 2]'` a list. Strings
    which are not valid YAML, and values which are not strings, are returned
    as is.
    """
    if not isinstance(value, str) or not value.strip():
        return value

    try:
        return yaml.safe_load(value)
    except yaml.YAMLError:
        return value


def set_nested_value(
    config: Dict[str, Any], key_path: str, value: Any, delete: bool = False
) -> Dict[str, Any]:
    """Sets (or deletes) the value found at a dotted path, in place.

    When setting, missing blocks along the path are created.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration to modify
    key_path : str
        Dotted path to the value
    value : Any
        New value (unused when deleting)
    delete : bool, default False
        Delete the key instead of setting it

    Returns
    -------
    Dict[str, Any]
        The modified configuration

    Raises
    ------
    ConfigPathError
        If the key to delete (or one of its parent blocks) does not exist
    ConfigTypeError
        If one of the parent keys holds a value which is not a block
    """
    *parents, leaf = key_path.split(".")

    block = config
    for depth, key in enumerate(parents):
        if key not in block:
            if delete:
                missing = ".".join(parents[: depth + 1])
                raise ConfigPathError(
                    f"Cannot remove '{key_path}': block '{missing}' does not exist."
                )
            block[key] = {}
        if not isinstance(block[key], dict):
            raise ConfigTypeError(
                f"Cannot reach '{key_path}': '{key}' does not hold a block."
            )
        block = block[key]

    if not delete:
        block[leaf] = value
    elif leaf in block:
        del block[leaf]
    else:
        raise ConfigPathError(f"Cannot remove '{key_path}': key does not exist.")

    return config


def parse_overrides(overrides: List[str]) -> Dict[str, Any]:
    """Parses `key.path=value` strings into a path to value mapping.

    Parameters
    ----------
    overrides : List[str]
        Command-line overrides

    Returns
    -------
    Dict[str, Any]
        Parsed value of each dotted path
    """
    parsed = {}
    for override in overrides or []:
        key_path, sep, value = override.partition("=")
        if not sep:
            raise ConfigValidationError(
                f"Override '{override}' must be of the form 'key.path=value'."
            )
        parsed[key_path.strip()] = parse_value(value.strip())

    return parsed


def _as_list(key: str, value: Any) -> List[str]:
    """Normalizes a directive which accepts one or several paths."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return list(value)

    raise ConfigTypeError(
        f"'{key}' must be a string or a list of strings, got {type(value)}."
    )


def extract_directives(
    config: Any,
) -> Tuple[List[str], Dict[str, Any], List[str], Dict[str, Any]]:
    """Separates the loader directives from the configuration content.

    Parameters
    ----------
    config : Any
        Content of one YAML file

    Returns
    -------
    List[str]
        Files to include
    Dict[str, Any]
        Dotted path overrides
    List[str]
        Dotted paths to remove
    Dict[str, Any]
        Configuration content without the directives
    """
    if not isinstance(config, dict):
        raise ConfigValidationError(
            f"A configuration file must hold a dictionary, got {type(config)}."
        )

    includes = _as_list("include", config.get("include", []))
    removals = _as_list("remove", config.get("remove", []))
    overrides = config.get("override", {})
    if not isinstance(overrides, dict):
        raise ConfigTypeError(
            f"'override' must be a dictionary, got {type(overrides)}."
        )

    content = {k: v for k, v in config.items() if k not in DIRECTIVES}

    return includes, overrides, removals, content
