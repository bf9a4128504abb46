"""Contains the row-indexed reader base class.

Readers map a global entry index, which runs over every selected entry of
every input file, onto a (file, entry in file) pair.
"""

import glob
import os

import numpy as np

from ndcaf.utils.logger import logger

__all__ = ["ReaderBase"]


class ReaderBase:
    """Parent class of all row-indexed readers.

    Daughter classes must open the files listed in `file_paths`, fill
    `num_entries`, `file_index` and `file_offsets`, then call
    :meth:`process_entry_list`. They must also define :meth:`get`.

    Attributes
    ----------
    name : str
        Name of the reader, as requested in the configuration
    num_entries : int
        Total number of entries in the files provided
    entry_index : np.ndarray
        Global indexes of the selected entries
    file_paths : List[str]
        Paths of the files to read data from
    file_offsets : np.ndarray
        Global index of the first entry of each file
    file_index : np.ndarray
        Index of the file each global entry lives in
    """

    name = ""
    num_entries = None
    entry_index = None
    file_paths = None
    file_offsets = None
    file_index = None

    def __len__(self):
        """Number of selected entries."""
        return len(self.entry_index)

    def __getitem__(self, idx):
        """Alias for :meth:`get`."""
        return self.get(idx)

    def get(self, idx):
        """Returns the content of one selected entry."""
        raise NotImplementedError

    def process_file_paths(self, file_keys, limit_num_files=None, max_print_files=10):
        """Expands the requested file keys into a list of existing paths.

        Parameters
        ----------
        file_keys : Union[str, List[str]]
            Path, glob pattern or list of them. A single `.txt` path is read
            as a list of file keys, one per line.
        limit_num_files : int, optional
            Maximum number of files to keep
        max_print_files : int, default 10
            Maximum number of file names to log

        Raises
        ------
        FileNotFoundError
            If the list file or any of the file keys does not exist
        """
        assert file_keys is not None, "No input `file_keys` provided."
        assert limit_num_files is None or limit_num_files > 0, (
            "If provided, `limit_num_files` must be strictly positive."
        )

        # A single text file holds the list of file keys
        if isinstance(file_keys, str) and file_keys.endswith(".txt"):
            if not os.path.isfile(file_keys):
                raise FileNotFoundError(f"File list not found: {file_keys}")
            with open(file_keys, "r", encoding="utf-8") as list_file:
                file_keys = [l.strip() for l in list_file if l.strip()]

        elif isinstance(file_keys, str):
            file_keys = [file_keys]

        # Every key must match at least one file
        paths = []
        for key in file_keys:
            matches = sorted(glob.glob(str(key)))
            if not matches:
                raise FileNotFoundError(f"File key {key} matches no file.")
            paths.extend(matches)

        if limit_num_files is not None:
            paths = paths[:limit_num_files]

        self.file_paths = paths

        # Log the list of files
        shown = "\n".join(f" - {p}" for p in paths[:max_print_files])
        if len(paths) > max_print_files:
            shown += "\n ..."
        logger.info("Will load %d file(s):\n%s\n", len(paths), shown)

    def process_entry_list(
        self, n_entry=None, n_skip=None, entry_list=None, skip_entry_list=None
    ):
        """Selects the entries which can be accessed through :meth:`get`.

        A contiguous range (`n_skip`, `n_entry`) or an explicit list
        (`entry_list` or `skip_entry_list`) can be requested, not both.

        Parameters
        ----------
        n_entry : int, optional
            Maximum number of entries to select
        n_skip : int, optional
            Number of entries to skip at the beginning
        entry_list : Union[list, str], optional
            Entries to select, or path to a file which lists them
        skip_entry_list : Union[list, str], optional
            Entries to leave out, or path to a file which lists them
        """
        use_range = n_entry is not None or n_skip is not None
        use_list = entry_list is not None or skip_entry_list is not None
        assert not (use_range and use_list), (
            "Cannot select entries with both a range (`n_entry`, `n_skip`) "
            "and a list (`entry_list`, `skip_entry_list`)."
        )
        assert entry_list is None or skip_entry_list is None, (
            "Cannot provide both `entry_list` and `skip_entry_list`."
        )

        entry_index = np.arange(self.num_entries, dtype=np.int64)
        if use_range:
            start = n_skip or 0
            stop = start + n_entry if n_entry else self.num_entries
            assert stop <= self.num_entries, (
                f"Cannot select entries [{start}, {stop}) out of "
                f"{self.num_entries} entries."
            )
            entry_index = entry_index[start:stop]

        elif use_list:
            selection = self.parse_entry_list(
                entry_list if entry_list is not None else skip_entry_list
            )
            assert np.all((selection >= 0) & (selection < self.num_entries)), (
                "Entry list values must be within the range of the file(s)."
            )
            if entry_list is not None:
                entry_index = entry_index[selection]
            else:
                entry_index = np.setdiff1d(entry_index, selection)

        logger.info("Total number of entries selected: %d\n", len(entry_index))

        self.entry_index = entry_index

    def locate(self, idx):
        """Finds where a selected entry lives.

        Parameters
        ----------
        idx : int
            Index of the entry among the selected ones

        Returns
        -------
        int
            Index of the file in `file_paths`
        int
            Index of the entry within that file
        """
        global_idx = self.entry_index[idx]
        file_idx = self.file_index[global_idx]

        return file_idx, global_idx - self.file_offsets[file_idx]

    @staticmethod
    def parse_entry_list(list_source):
        """Converts an entry list into an array of entry indexes.

        Parameters
        ----------
        list_source : Union[list, np.ndarray, str]
            List of entries, or path to a text file with space or comma
            separated entries

        Returns
        -------
        np.ndarray
            Entry indexes
        """
        if not isinstance(list_source, str):
            return np.asarray(list_source, dtype=np.int64).reshape(-1)

        if not os.path.isfile(list_source):
            raise FileNotFoundError(f"Entry list file not found: {list_source}")
        with open(list_source, "r", encoding="utf-8") as list_file:
            words = list_file.read().replace(",", " ").split()

        return np.array([int(w) for w in words], dtype=np.int64)
