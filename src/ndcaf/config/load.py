"""Loads record filling configurations from YAML files.

A configuration file is a YAML dictionary which may use three top-level
directives on top of the regular configuration blocks:

.. code-block:: yaml

    include:
      - base.yaml              # merged first, in order
    override:
      io.reader.n_entry: 10    # applied after all includes are merged
    remove: io.writer          # deleted after the overrides

Included files are resolved relative to the including file, then in the
directories listed in the `NDCAF_CONFIG_PATH` environment variable.
Keys defined in the including file take precedence over included ones.
"""

import os
from typing import Any, Dict, List, Optional, Tuple

import yaml

from .errors import ConfigCycleError, ConfigIncludeError
from .operations import (deep_merge, extract_directives, parse_overrides,
                         parse_value, set_nested_value)

__all__ = ["resolve_config_path", "load_config"]


def resolve_config_path(
    filename: str, current_dir: str, search_paths: Optional[List[str]] = None
) -> str:
    """Resolve a configuration file path with `NDCAF_CONFIG_PATH` support.

    Parameters
    ----------
    filename : str
        Config filename or path to resolve
    current_dir : str
        Directory of the config file doing the including
    search_paths : List[str], optional
        List of search paths (defaults to the NDCAF_CONFIG_PATH env var)

    Returns
    -------
    str
        Resolved absolute path

    Raises
    ------
    ConfigIncludeError
        If the file cannot be found in any location
    """
    if os.path.isabs(filename):
        if os.path.exists(filename):
            return filename
        raise ConfigIncludeError(f"Absolute path not found: {filename}")

    # Get search paths from environment variable if not provided
    if search_paths is None:
        env_paths = os.environ.get("NDCAF_CONFIG_PATH", "")
        search_paths = [p.strip() for p in env_paths.split(":") if p.strip()]

    # Try the current directory first, then the search paths, with and
    # without a YAML extension
    for search_dir in [current_dir, *search_paths]:
        path = os.path.join(search_dir, filename)
        for candidate in (path, path + ".yaml", path + ".yml"):
            if os.path.isfile(candidate):
                return os.path.abspath(candidate)

    raise ConfigIncludeError(
        f"Config file '{filename}' not found. Searched in: "
        f"{[current_dir, *search_paths]}"
    )


def _load_config_recursive(
    cfg_path: str, include_stack: Optional[List[str]] = None
) -> Tuple[Dict[str, Any], Dict[str, Any], List[str]]:
    """Recursively load config with cycle detection.

    Parameters
    ----------
    cfg_path : str
        Path to configuration file
    include_stack : List[str], optional
        Stack of currently-loading files (for cycle detection)

    Returns
    -------
    Tuple[Dict[str, Any], Dict[str, Any], List[str]]
        (config content, override directives, removal directives)
    """
    cfg_path = os.path.abspath(cfg_path)

    # Cycle detection
    include_stack = include_stack or []
    if cfg_path in include_stack:
        raise ConfigCycleError(include_stack + [cfg_path])
    include_stack = include_stack + [cfg_path]

    # Load YAML
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            main_config = yaml.safe_load(f)
    except FileNotFoundError as exc:
        raise ConfigIncludeError(f"Configuration file not found: {cfg_path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigIncludeError(f"Error loading {cfg_path}: {exc}") from exc

    if main_config is None:
        return {}, {}, []

    # Extract directives
    includes, overrides, removals, cleaned_config = extract_directives(main_config)

    # Process includes, in order, then merge the file content on top
    config = {}
    root_dir = os.path.dirname(cfg_path)
    for include_file in includes:
        include_path = resolve_config_path(include_file, root_dir)
        included_config, included_overrides, included_removals = (
            _load_config_recursive(include_path, include_stack)
        )
        config = deep_merge(config, included_config)
        overrides = {**included_overrides, **overrides}
        removals = included_removals + removals

    config = deep_merge(config, cleaned_config)

    return config, overrides, removals


def load_config(cfg_path: str, overrides: Optional[List[str]] = None) -> Dict[str, Any]:
    """Load a record filling configuration file.

    Parameters
    ----------
    cfg_path : str
        Path to configuration file
    overrides : List[str], optional
        Command-line overrides of the form `key.path=value`, applied last

    Returns
    -------
    Dict[str, Any]
        Loaded and merged configuration

    Raises
    ------
    ConfigCycleError
        If circular include detected
    ConfigIncludeError
        If included file not found or can't be loaded
    ConfigPathError
        If a removal targets a non-existent path
    """
    config, file_overrides, removals = _load_config_recursive(cfg_path)

    # Apply the in-file overrides, then the removals
    for key_path, value in file_overrides.items():
        set_nested_value(config, key_path, parse_value(value))

    for key_path in removals:
        set_nested_value(config, key_path, None, delete=True)

    # Apply the command-line overrides
    for key_path, value in parse_overrides(overrides).items():
        set_nested_value(config, key_path, value)

    return config
