"""Contains a reader class dedicated to GENIE event records stored in HDF5."""

from ndcaf.data import GenieEvent, GenieParticle
from ndcaf.utils.docstring import inherit_docstring

from .hdf5 import HDF5TableReader

__all__ = ["GenieReader"]


@inherit_docstring(HDF5TableReader)
class GenieReader(HDF5TableReader):
    """Class which provides random access to a stream of GENIE event records.

    Each entry of the `events` dataset references exactly one row of the
    event summary table and the rows of the GHEP particle stack of that event.
    Entries are addressed by their row number in the stream. Unlike the
    reconstruction reader, no entry selection is applied: truth matching must
    be able to reach every generator record.

    Attributes
    ----------
    event_table : str
        Name of the event summary table
    particle_table : str
        Name of the GHEP particle stack table
    """

    name = "genie"

    def __init__(
        self,
        file_keys,
        event_table="genie_events",
        particle_table="genie_particles",
        **kwargs,
    ):
        """Initalize the GENIE record reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths to the HDF5 files to be read
        event_table : str, default 'genie_events'
            Name of the event summary table
        particle_table : str, default 'genie_particles'
            Name of the GHEP particle stack table
        **kwargs : dict, optional
            Additional parameters passed to :class:`HDF5TableReader`
        """
        # Open the files, check that both tables are present
        self.event_table = event_table
        self.particle_table = particle_table
        super().__init__(file_keys, [event_table, particle_table], **kwargs)

        # Every row of the stream is reachable
        self.process_entry_list()

    def get(self, idx):
        """Rebuilds the GENIE event record stored at a given row.

        Parameters
        ----------
        idx : int
            Row index in the generator stream

        Returns
        -------
        GenieEvent
            Event record, with its particle stack attached
        """
        data = self.load_rows(
            idx, {self.event_table: GenieEvent, self.particle_table: GenieParticle}
        )

        events = data[self.event_table]
        assert len(events) == 1, (
            f"Entry {idx} of the generator stream references {len(events)} "
            "event summaries, expected exactly one."
        )

        event = events[0]
        event.particles = data[self.particle_table]

        return event
