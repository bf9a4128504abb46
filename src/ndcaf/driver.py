"""Record filling driver class.

Assembles the analysis records of a run:
- Input file reading (reconstruction output and generator records)
- Truth matching against the generator stream
- Reconstruction branch filling
- Error policy
- Writing output to file
"""

import time
from datetime import datetime

import psutil
import yaml

from .config import ConfigValidationError
from .data import DLPRunInfo, StandardRecord
from .errors import CAFMakerError
from .io import reader_factory, writer_factory
from .reco import filler_factory
from .truth import StreamCursor, TruthMatcher
from .utils.logger import logger
from .version import __version__

__all__ = ["Driver"]


class Driver:
    """Central record filling driver.

    Processes global configuration and runs the appropriate modules:
      1. Load the reconstruction output of one entry
      2. Fill the truth, reconstruction and metadata branches of its record
      3. Write the record to file

    It takes a configuration dictionary of the form:

    .. code-block:: yaml

        base:
          <Base driver configuration>
        io:
          reader:
            <Reconstruction file reader>
          genie:
            <Generator stream reader (optional)>
          writer:
            <Record writer (optional)>
        reco:
          <Reconstruction branch filler>
    """

    _error_policies = ("abort", "skip")

    def __init__(self, cfg):
        """Initializes the class attributes.

        Parameters
        ----------
        cfg : dict
            Global configuration dictionary
        """
        # Validate the configuration and keep a copy
        base, io, reco = self.process_config(**cfg)

        # Run-level parameters
        self.initialize_base(**base)

        # Readers, truth matcher and writer
        self.initialize_io(**io)

        # Initialize the reconstruction branch filler
        self.filler = filler_factory(reco, self.reader, self.truth_matcher)

    def __len__(self):
        """Returns the number of entries to process.

        Returns
        -------
        int
            Number of entries
        """
        return len(self.reader)

    def process_config(self, io=None, base=None, reco=None):
        """Reads the configuration and dumps it to the logger.

        Parameters
        ----------
        io : dict
            I/O configuration dictionary
        base : dict, optional
            Base driver configuration dictionary
        reco : Union[str, dict], optional
            Reconstruction branch filler configuration

        Returns
        -------
        dict
            Processed configuration
        """
        # The configuration must minimally contain an IO block with a reader
        if io is None or io.get("reader") is None:
            raise ConfigValidationError(
                "The configuration must contain an `io` block with a `reader`."
            )

        # A missing base block means every default applies
        if base is None:
            base = {}

        # Use the DLP branch filler by default
        if reco is None:
            reco = {"name": "dlp"}

        # Logger verbosity
        verbosity = base.get("verbosity", "info")
        if isinstance(verbosity, str):
            verbosity = verbosity.upper()
        logger.setLevel(verbosity)

        # Store the configuration as it will be used
        self.cfg = {"base": base, "io": io, "reco": reco}

        # Log environment information and configuration
        logger.info("Release version: %s\n", __version__)
        logger.info(yaml.dump(self.cfg, default_flow_style=None, sort_keys=False))

        return base, io, reco

    def initialize_base(
        self,
        run=None,
        subrun=None,
        on_error="abort",
        iterations=None,
        log_step=1,
        verbosity="info",
    ):
        """Initialize the base driver parameters.

        Parameters
        ----------
        run : int, optional
            Run ID to store in the records. If neither `run` nor `subrun` is
            specified, they are read from the reconstruction file.
        subrun : int, optional
            Sub-run ID to store in the records
        on_error : str, default 'abort'
            What to do when an event cannot be filled, one of 'abort' or
            'skip'. Errors which are fatal to the run always abort.
        iterations : int, optional
            Number of entries to process (-1 or `None` means all entries)
        log_step : int, default 1
            Number of entries between two progress messages
        verbosity : Union[int, str], default 'info'
            Verbosity level to pass to the `logging` module, either a level
            number or one of 'debug', 'info', 'warning', 'error' or
            'critical' (case-insensitive)
        """
        if on_error not in self._error_policies:
            raise ConfigValidationError(
                f"`on_error` policy not recognized: {on_error}. Must be one "
                f"of {self._error_policies}."
            )

        self.on_error = on_error
        self.iterations = iterations
        self.log_step = log_step

        # Build the run information shared by all records, if specified
        self.run_info = None
        if run is not None or subrun is not None:
            self.run_info = DLPRunInfo(
                run=run if run is not None else -1,
                subrun=subrun if subrun is not None else -1,
            )

    def initialize_io(self, reader, genie=None, writer=None):
        """Initializes the input/output scripts.

        Parameters
        ----------
        reader : dict
            Reconstruction file reader configuration
        genie : dict, optional
            Generator stream reader configuration. If not provided, true
            interactions are built from the reconstruction file alone.
        writer : dict, optional
            Record writer configuration
        """
        # Initialize the reconstruction file reader
        self.reader = reader_factory(reader)

        # Initialize the generator stream and the truth matcher, if requested
        self.genie_reader = None
        self.cursor = None
        self.truth_matcher = None
        if genie is not None:
            genie = {"name": "genie", **genie}
            self.genie_reader = reader_factory(genie)
            self.cursor = StreamCursor()
            self.truth_matcher = TruthMatcher(self.genie_reader, self.cursor)

        # Initialize the writer, if requested
        self.writer = None
        if writer is not None:
            self.writer = writer_factory(writer)

    def process(self, entry):
        """Fills the record of one entry.

        Parameters
        ----------
        entry : int
            Entry number to process

        Returns
        -------
        StandardRecord
            Filled record
        """
        record = StandardRecord()
        self.filler.fill_reco_branches(entry, record, self.run_info)

        return record

    def run(self):
        """Loop over the requested number of entries, process them.

        Returns
        -------
        int
            Number of records which were filled successfully
        """
        # Get the number of entries to process
        num_entries = len(self)
        if self.iterations is not None and self.iterations > -1:
            num_entries = min(self.iterations, num_entries)

        # Loop and process each entry
        num_filled, num_skipped = 0, 0
        start = time.time()
        for entry in range(num_entries):
            tstamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            try:
                record = self.process(entry)

            except CAFMakerError as err:
                if self.on_error == "skip" and not err.fatal_to_run:
                    logger.warning("Skipping entry %d: %s", entry, err)
                    num_skipped += 1
                    continue
                raise

            # Write the record
            if self.writer is not None:
                self.writer(record)
            num_filled += 1

            # Log progress
            self.log(record, tstamp, entry)

        logger.info(
            "Filled %d record(s), skipped %d, in %.3f s.",
            num_filled,
            num_skipped,
            time.time() - start,
        )

        return num_filled

    def log(self, record, tstamp, entry):
        """Log the basics of a filled record to stdout.

        Parameters
        ----------
        record : StandardRecord
            Filled record
        tstamp : str
            Time when this entry was processed
        entry : int
            Entry number
        """
        if ((entry + 1) % self.log_step) != 0:
            return

        summary = record.summary()
        cpu_mem = psutil.virtual_memory().used / 1.0e9
        logger.info(
            "Entry %d (event %d) @ %s | true ixns: %d | reco ixns: %d "
            "| tracks: %d | showers: %d | CPU memory: %.2f GB",
            entry,
            summary["event"],
            tstamp,
            summary["nnu"],
            summary["ndlp"],
            summary["ntracks"],
            summary["nshowers"],
            cpu_mem,
        )
