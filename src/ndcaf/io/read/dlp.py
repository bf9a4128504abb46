"""Contains a reader class dedicated to the ML reconstruction output files."""

import ndcaf.data
from ndcaf.data import (DLPInteraction, DLPParticle, DLPRunInfo,
                        DLPTrueInteraction, DLPTrueParticle)
from ndcaf.utils.docstring import inherit_docstring

from .hdf5 import HDF5TableReader

__all__ = ["DLPReader"]


@inherit_docstring(HDF5TableReader)
class DLPReader(HDF5TableReader):
    """Class which reads the per-event tables produced by the DLP chain.

    Five row types are read from the file, each from its own table. The
    mapping between row types and table names can be customized:

    .. code-block:: yaml

        io:
          reader:
            name: dlp
            file_keys: reco.h5
            tables:
              DLPParticle: particles
              DLPInteraction: interactions

    Construction fails if any of the tables is missing from a file.

    Attributes
    ----------
    table_map : Dict[type, str]
        Maps each row type onto the name of the table it is read from
    """

    name = "dlp"

    default_tables = {
        DLPParticle: "particles",
        DLPInteraction: "interactions",
        DLPTrueParticle: "truth_particles",
        DLPTrueInteraction: "truth_interactions",
        DLPRunInfo: "run_info",
    }

    def __init__(
        self,
        file_keys,
        tables=None,
        n_entry=None,
        n_skip=None,
        entry_list=None,
        skip_entry_list=None,
        **kwargs,
    ):
        """Initalize the DLP file reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths to the HDF5 files to be read
        tables : Dict[Union[str, type], str], optional
            Overrides of the default row type to table name mapping. Row types
            can be provided as classes or class names.
        n_entry : int, optional
            Maximum number of entries to load
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : list, optional
            List of integer entry IDs to add to the index
        skip_entry_list : list, optional
            List of integer entry IDs to skip from the index
        **kwargs : dict, optional
            Additional parameters passed to :class:`HDF5TableReader`
        """
        # Build the row type to table name mapping
        self.table_map = dict(self.default_tables)
        for row_type, table in (tables or {}).items():
            if isinstance(row_type, str):
                row_type = getattr(ndcaf.data, row_type)
            if row_type not in self.table_map:
                raise ValueError(
                    f"Row type {row_type.__name__} is not read by this reader. "
                    f"Known row types: {[t.__name__ for t in self.table_map]}"
                )
            self.table_map[row_type] = table

        # Open the files, check that all the tables are present
        super().__init__(file_keys, self.table_map.values(), **kwargs)

        # Process the entry list
        self.process_entry_list(n_entry, n_skip, entry_list, skip_entry_list)

    def get(self, idx):
        """Returns all the rows of a specific entry, keyed by row type.

        Parameters
        ----------
        idx : int
            Integer entry ID to access

        Returns
        -------
        Dict[type, list]
            Rows of each table for this entry
        """
        tables = {table: row_type for row_type, table in self.table_map.items()}
        data = self.load_rows(idx, tables)

        return {row_type: data[table] for row_type, table in self.table_map.items()}

    def get_rows(self, row_type, idx):
        """Returns the rows of one type for a specific entry.

        Parameters
        ----------
        row_type : type
            Row type to fetch (e.g. :class:`DLPParticle`)
        idx : int
            Integer entry ID to access

        Returns
        -------
        list
            Ordered rows of this type for this entry
        """
        table = self.table_map[row_type]

        return self.load_rows(idx, {table: row_type})[table]
