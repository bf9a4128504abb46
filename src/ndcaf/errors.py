"""Typed exceptions raised while filling the analysis record.

The hierarchy separates the recoverable lookup failure (`NotFoundError`)
from the data-integrity violations. The latter are never handled inside the
fillers: they propagate to the driver, which decides whether to skip the
event or abort the run. Errors which indicate a systemic problem (as opposed
to a problem with one event) set `fatal_to_run`.
"""

__all__ = [
    "CAFMakerError",
    "NotFoundError",
    "UpstreamRecordMissingError",
    "UnknownScatteringModeError",
    "DanglingReferenceError",
    "MissingTableError",
]


class CAFMakerError(Exception):
    """Base exception for all record filling errors."""

    fatal_to_run = False


class NotFoundError(CAFMakerError, LookupError):
    """Raised when a lookup with creation disabled finds no matching record."""

    def __init__(self, message, interaction_id, particle_id=None):
        """Initialize with the keys of the failed lookup.

        Parameters
        ----------
        message : str
            Error message
        interaction_id : int
            Interaction ID that was requested
        particle_id : int, optional
            Particle ID that was requested, if the lookup was for a particle
        """
        self.interaction_id = interaction_id
        self.particle_id = particle_id
        super().__init__(message)


class UpstreamRecordMissingError(CAFMakerError):
    """Raised when no generator event carries the requested interaction ID."""

    def __init__(self, interaction_id, num_entries):
        self.interaction_id = interaction_id
        self.num_entries = num_entries
        super().__init__(
            f"Could not locate a GENIE event record with ID = {interaction_id} "
            f"after scanning all {num_entries} entries of the generator stream."
        )


class UnknownScatteringModeError(CAFMakerError):
    """Raised when GENIE produces a scattering type with no known mapping.

    This points at a version mismatch between this package and the generator
    enumeration, it is never specific to one event.
    """

    fatal_to_run = True

    def __init__(self, scattering_type):
        self.scattering_type = scattering_type
        super().__init__(f"Unrecognized GENIE scattering mode: {scattering_type}")


class DanglingReferenceError(CAFMakerError):
    """Raised when a reconstructed object references an unknown interaction."""

    fatal_to_run = True

    def __init__(self, interaction_id, known_ids=()):
        self.interaction_id = interaction_id
        self.known_ids = tuple(known_ids)
        super().__init__(
            f"Particle's interaction ID ({interaction_id}) does not match any "
            f"in the DLP set (known IDs: {list(self.known_ids)})."
        )


class MissingTableError(CAFMakerError, KeyError):
    """Raised when an input file does not provide a required table."""

    fatal_to_run = True

    def __init__(self, table, file_path):
        self.table = table
        self.file_path = file_path
        super().__init__(f"File {file_path} does not contain the `{table}` table.")

    def __str__(self):
        return self.args[0]
