#!/usr/bin/env python3
"""Command-line entry point of the record filling driver."""

import argparse
import os
import sys
from typing import List

from ndcaf.config import ConfigValidationError, load_config
from ndcaf.config.load import resolve_config_path
from ndcaf.config.operations import parse_overrides, set_nested_value


def main(
    config: str,
    source: List[str],
    genie: List[str],
    output: str,
    n: int,
    nskip: int,
    config_overrides: List[str],
):
    """Fills the records of the requested entries.

    Steps:
    - Apply the command-line arguments to the configuration
    - Run the driver

    Parameters
    ----------
    config : str
        Path to the configuration file
    source : List[str]
        List of paths to the reconstruction files
    genie : List[str]
        List of paths to the generator record files
    output : str
        Path to the output file
    n : int
        Number of entries to process
    nskip : int
        Number of entries to skip
    config_overrides : List[str]
        List of config overrides in the form "key.path=value"

    Returns
    -------
    int
        Number of records which were filled successfully
    """
    # Load the configuration file, apply the generic overrides last
    cfg_file = resolve_config_path(config, current_dir=os.getcwd())
    cfg = load_config(cfg_file)

    # The configuration must minimally contain an IO block with a reader
    if cfg.get("io") is None or cfg["io"].get("reader") is None:
        raise ConfigValidationError(
            "Configuration file must contain an `io.reader` block."
        )

    # Command-line inputs take precedence over the configured ones
    io_mapping = {"file_keys": source, "n_entry": n, "n_skip": nskip}
    for io_key, io_value in io_mapping.items():
        if io_value is not None:
            cfg["io"]["reader"][io_key] = io_value

    if genie is not None:
        if cfg["io"].get("genie") is None:
            cfg["io"]["genie"] = {}
        cfg["io"]["genie"]["file_keys"] = genie

    # Output path
    if output is not None:
        if cfg["io"].get("writer") is None:
            cfg["io"]["writer"] = {"name": "csv"}
        cfg["io"]["writer"]["file_name"] = output

    # Dotted-path overrides from `--set`
    if config_overrides:
        for key_path, value in parse_overrides(config_overrides).items():
            set_nested_value(cfg, key_path, value)

    # Run the driver
    from ndcaf.driver import Driver

    return Driver(cfg).run()


def cli(argv=None):
    """Main CLI entry point.

    Parameters
    ----------
    argv : List[str], optional
        Command-line arguments (defaults to `sys.argv[1:]`)
    """
    parser = argparse.ArgumentParser(
        description="Fills ND common analysis records from GENIE truth and "
        "ML reconstruction output",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ndcaf -c config.yaml                                Fill records as configured
  ndcaf -c config.yaml -s reco.h5 -g ghep.h5 -o caf.csv
  ndcaf -c config.yaml --set reco.legacy_shower_indexing=true
""",
    )

    # Add a version command
    parser.add_argument(
        "--version", "-v", action="version", version=f"ndcaf {get_version()}"
    )

    # Add config file argument
    parser.add_argument(
        "-c", "--config", required=True, help="Path to the configuration file"
    )

    # Add the input and output arguments
    parser.add_argument(
        "-s", "--source", nargs="+", type=str, help="List of paths to the reconstruction files"
    )
    parser.add_argument(
        "-g", "--genie", nargs="+", type=str, help="List of paths to the generator record files"
    )
    parser.add_argument("-o", "--output", help="Path to the output file")

    # Entry selection
    parser.add_argument("-n", "--iterations", type=int, help="Number of entries to process")
    parser.add_argument("--nskip", type=int, help="Number of entries to skip")

    # Generic overrides
    parser.add_argument(
        "--set",
        action="append",
        dest="config_overrides",
        metavar="KEY=VALUE",
        help="Override any config parameter using dot notation "
        "(e.g., --set base.on_error=skip). "
        "Can be used multiple times for multiple overrides.",
    )

    # Parse the arguments
    args = parser.parse_args(argv)

    main(
        config=args.config,
        source=args.source,
        genie=args.genie,
        output=args.output,
        n=args.iterations,
        nskip=args.nskip,
        config_overrides=args.config_overrides,
    )


def get_version():
    """Get the package version without importing heavy dependencies."""
    from ndcaf.version import __version__

    return __version__


if __name__ == "__main__":
    sys.exit(cli())
