"""Contains a reader class dedicated to loading tables from HDF5 files."""

from dataclasses import fields

import h5py
import numpy as np

from ndcaf.errors import MissingTableError
from ndcaf.utils.docstring import inherit_docstring
from ndcaf.utils.logger import logger

from .base import ReaderBase

__all__ = ["HDF5TableReader"]


@inherit_docstring(ReaderBase)
class HDF5TableReader(ReaderBase):
    """Class which reads per-event tables stored in HDF5 files.

    The files must be structured as follows:
      - An `events` dataset with one row per event. Each column is a region
        reference which points at the rows of one table for that event.
      - One structured dataset per table, with one column per attribute of
        the row type used to rebuild it.

    Attributes
    ----------
    tables : List[str]
        Names of the tables which must be present in every file
    skip_unknown_attrs : bool
        Whether to drop columns which are not attributes of the row type
    """

    name = "hdf5"

    def __init__(
        self,
        file_keys,
        tables,
        limit_num_files=None,
        max_print_files=10,
        skip_unknown_attrs=False,
    ):
        """Initalize the HDF5 table reader.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path or list of paths to the HDF5 files to be read
        tables : List[str]
            Names of the tables that must be provided by every file
        limit_num_files : int, optional
            Maximum number of files to read, in sorted order
        max_print_files : int, default 10
            Maximum number of loaded file names to be printed
        skip_unknown_attrs : bool, default False
            If `True`, allow a loaded row to have unrecognized attributes.
            This allows backward compatibility with old files, but use with
            extreme caution, as this might hide a fundamental issue.
        """
        # Process the list of files
        self.process_file_paths(file_keys, limit_num_files, max_print_files)
        self.tables = list(tables)
        self.skip_unknown_attrs = skip_unknown_attrs

        # Every file must hold the event list and each requested table
        counts = np.empty(len(self.file_paths), dtype=np.int64)
        for i, path in enumerate(self.file_paths):
            with h5py.File(path, "r") as in_file:
                for table in ["events", *self.tables]:
                    if table not in in_file:
                        raise MissingTableError(table, path)
                counts[i] = len(in_file["events"])

        # Global entries run over the files in order
        self.num_entries = int(counts.sum())
        self.file_offsets = np.concatenate(([0], np.cumsum(counts)[:-1]))
        self.file_index = np.repeat(np.arange(len(counts), dtype=np.int64), counts)

        logger.info("Total number of entries in the file(s): %d\n", self.num_entries)

    def load_rows(self, idx, tables):
        """Loads the rows of a set of tables for one entry.

        Parameters
        ----------
        idx : int
            Integer entry ID to access
        tables : Dict[str, type]
            Maps table names onto the class used to rebuild each row

        Returns
        -------
        Dict[str, list]
            Rebuilt rows of each requested table
        """
        # Get the appropriate entry index
        assert idx < len(self.entry_index), f"Entry {idx} out of range."
        file_idx, entry_idx = self.locate(idx)

        # Use the event tree to find out what needs to be loaded
        data = {}
        with h5py.File(self.file_paths[file_idx], "r") as in_file:
            event = in_file["events"][entry_idx]
            for table, row_class in tables.items():
                data[table] = self.load_table(in_file, event, table, row_class)

        return data

    def load_table(self, in_file, event, table, row_class):
        """Fetch the rows of a specific table for a specific event.

        Parameters
        ----------
        in_file : h5py.File
            HDF5 file instance
        event : np.void
            Row of the `events` dataset for this entry
        table : str
            Name of the dataset to read from
        row_class : type
            Data class used to rebuild each row

        Returns
        -------
        list
            List of `row_class` instances
        """
        # The event-level information is a region reference: fetch it
        region_ref = event[table]
        array = in_file[table][region_ref]

        # If needed, get the list of recognized attributes
        names = array.dtype.names
        if self.skip_unknown_attrs:
            known_attrs = {f.name for f in fields(row_class)}
            names = [n for n in names if n in known_attrs]

        # Rebuild one instance of the row class per row
        rows = []
        for el in array:
            rows.append(row_class(**{k: self.cast(el[k]) for k in names}))

        return rows

    @staticmethod
    def cast(value):
        """Casts numpy scalars read from file to python scalars.

        Arrays are returned as is.

        Parameters
        ----------
        value : object
            Value of one column of one row

        Returns
        -------
        object
            Python scalar or numpy array
        """
        if isinstance(value, np.generic):
            return value.item()

        return value
