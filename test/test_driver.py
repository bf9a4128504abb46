"""Test that the driver processes entries end-to-end."""

import logging
import os

import pytest

from conftest import DLP_TABLES, GENIE_TABLES, make_particle, write_tables
from ndcaf.bin.cli import cli
from ndcaf.config import ConfigIncludeError, ConfigValidationError
from ndcaf.driver import Driver
from ndcaf.errors import DanglingReferenceError, UpstreamRecordMissingError
from ndcaf.utils.globals import SHOWR_SHP
from ndcaf.utils.logger import logger


@pytest.fixture(name="csv_output")
def fixture_csv_output(tmp_path):
    """Create a dummy output path for a CSV file."""
    return os.path.join(tmp_path, "caf.csv")


@pytest.fixture(name="short_genie_file")
def fixture_short_genie_file(tmp_path, genie_events):
    """Generator stream which lacks the last event (ID 30)."""
    entries = [
        {"genie_events": [event], "genie_particles": event.particles}
        for event in genie_events[:2]
    ]

    return write_tables(os.path.join(tmp_path, "short.h5"), entries, GENIE_TABLES)


def read_rows(file_path):
    """Returns the rows of a CSV file as dictionaries."""
    with open(file_path, "r", encoding="utf-8") as in_file:
        lines = in_file.read().splitlines()

    header = lines[0].split(",")
    return [dict(zip(header, line.split(","))) for line in lines[1:]]


def driver_cfg(dlp_file, genie_file=None, csv_output=None, **base):
    """Builds a driver configuration dictionary."""
    io = {"reader": {"name": "dlp", "file_keys": dlp_file}}
    if genie_file is not None:
        io["genie"] = {"file_keys": genie_file}
    if csv_output is not None:
        io["writer"] = {"name": "csv", "file_name": csv_output}

    return {"base": base, "io": io}


class TestDriver:
    """Test the record filling driver."""

    def test_run(self, dlp_file, genie_file, csv_output):
        """Test that every entry is filled and written."""
        driver = Driver(driver_cfg(dlp_file, genie_file, csv_output))
        assert len(driver) == 2
        assert driver.run() == 2

        rows = read_rows(csv_output)
        assert len(rows) == 2
        assert [row["event"] for row in rows] == ["0", "1"]
        assert [row["nnu"] for row in rows] == ["2", "1"]
        assert [row["ndlp"] for row in rows] == ["2", "1"]
        assert [row["nprim"] for row in rows] == ["6", "3"]
        assert [row["nprefsi"] for row in rows] == ["2", "1"]
        assert rows[0]["run"] == "5"
        assert driver.cursor.position == 2

    def test_run_without_genie(self, dlp_file, csv_output):
        """Test that records can be filled from the reconstruction file alone."""
        driver = Driver(driver_cfg(dlp_file, csv_output=csv_output))
        assert driver.truth_matcher is None
        assert driver.run() == 2

        rows = read_rows(csv_output)
        assert [row["nprim"] for row in rows] == ["2", "1"]
        assert [row["nprefsi"] for row in rows] == ["0", "0"]

    def test_process(self, dlp_file, genie_file):
        """Test that the run information can be set in the configuration."""
        driver = Driver(driver_cfg(dlp_file, genie_file, run=9))
        record = driver.process(1)

        meta = record.meta.nd_lar
        assert (meta.run, meta.subrun, meta.event) == (9, -1, 1)
        assert record.mc.nu[0].id == 30

    def test_iterations(self, dlp_file, csv_output):
        """Test that the number of entries can be limited."""
        driver = Driver(driver_cfg(dlp_file, csv_output=csv_output, iterations=1))

        assert driver.run() == 1
        assert len(read_rows(csv_output)) == 1

    def test_skip_policy(self, dlp_file, short_genie_file, csv_output):
        """Test that events with a missing generator record can be skipped."""
        cfg = driver_cfg(dlp_file, short_genie_file, csv_output, on_error="skip")

        assert Driver(cfg).run() == 1
        assert len(read_rows(csv_output)) == 1

    def test_abort_policy(self, dlp_file, short_genie_file):
        """Test that events with a missing generator record abort by default."""
        driver = Driver(driver_cfg(dlp_file, short_genie_file))
        with pytest.raises(UpstreamRecordMissingError):
            driver.run()

    def test_fatal_errors(self, tmp_path, dlp_entries):
        """Test that dangling references abort even when skipping events."""
        dlp_entries[1]["particles"] = [make_particle(0, 5, SHOWR_SHP)]
        dlp_file = write_tables(os.path.join(tmp_path, "bad.h5"), dlp_entries, DLP_TABLES)

        driver = Driver(driver_cfg(dlp_file, on_error="skip"))
        with pytest.raises(DanglingReferenceError):
            driver.run()

    def test_legacy_shower_indexing(self, tmp_path, dlp_entries):
        """Test that legacy shower indexing can be enabled."""
        dlp_entries[1]["particles"] = [make_particle(0, 5, SHOWR_SHP)]
        dlp_file = write_tables(os.path.join(tmp_path, "bad.h5"), dlp_entries, DLP_TABLES)

        cfg = driver_cfg(dlp_file)
        cfg["reco"] = {"name": "dlp", "legacy_shower_indexing": True}
        record = Driver(cfg).process(1)

        assert record.nd.lar.ndlp == 6
        assert record.nd.lar.dlp[5].nshowers == 1

    def test_bad_config(self, dlp_file):
        """Test that invalid configurations are rejected."""
        with pytest.raises(ConfigValidationError):
            Driver({"base": {}})
        with pytest.raises(ConfigValidationError):
            Driver(driver_cfg(dlp_file, on_error="ignore"))

    @pytest.mark.parametrize(
        "verbosity, level",
        [("debug", logging.DEBUG), ("WARNING", logging.WARNING), (40, logging.ERROR)],
    )
    def test_verbosity(self, dlp_file, verbosity, level):
        """Test that the verbosity is accepted as a level name or number."""
        previous = logger.level
        try:
            Driver(driver_cfg(dlp_file, verbosity=verbosity))
            assert logger.level == level
        finally:
            logger.setLevel(previous)


class TestCLI:
    """Test the command-line entry point."""

    @pytest.fixture(name="config_file")
    def fixture_config_file(self, tmp_path):
        """Minimal configuration file."""
        config_file = tmp_path / "ndcaf.yaml"
        config_file.write_text("""
base:
  verbosity: warning
io:
  reader:
    name: dlp
""")
        return str(config_file)

    def test_cli(self, config_file, dlp_file, genie_file, csv_output):
        """Test that the command-line arguments fill the configuration."""
        cli(["-c", config_file, "-s", dlp_file, "-g", genie_file, "-o", csv_output])

        rows = read_rows(csv_output)
        assert [row["nnu"] for row in rows] == ["2", "1"]

    def test_cli_entries(self, config_file, dlp_file, csv_output):
        """Test that entries can be skipped from the command line."""
        cli(["-c", config_file, "-s", dlp_file, "-o", csv_output, "--nskip", "1"])

        rows = read_rows(csv_output)
        assert [row["event"] for row in rows] == ["1"]

    def test_cli_overrides(self, config_file, dlp_file, csv_output):
        """Test that generic overrides are applied."""
        cli(
            [
                "-c", config_file, "-s", dlp_file, "-o", csv_output,
                "--set", "base.iterations=1", "--set", "base.run=4",
            ]
        )

        rows = read_rows(csv_output)
        assert len(rows) == 1
        assert rows[0]["run"] == "4"

    def test_cli_missing_config(self, tmp_path):
        """Test that a missing configuration file is reported."""
        with pytest.raises(ConfigIncludeError):
            cli(["-c", os.path.join(tmp_path, "missing.yaml")])
