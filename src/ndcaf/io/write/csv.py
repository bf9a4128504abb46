"""Module to write per-event record summaries to CSV."""

import os

from ndcaf.utils.logger import logger

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes one row of scalars per event to a CSV file.

    The columns are fixed by the first row written (or by the header of an
    existing file when appending). Only scalars can be stored: records are
    flattened with :meth:`StandardRecord.summary` before being written.

    Typical configuration should look like:

    .. code-block:: yaml

        io:
          ...
          writer:
            name: csv
            file_name: caf.csv
    """

    name = "csv"

    def __init__(
        self,
        file_name="caf.csv",
        overwrite=False,
        append=False,
        accept_missing=False,
    ):
        """Checks the state of the output file.

        Parameters
        ----------
        file_name : str, default 'caf.csv'
            Path to the output CSV file
        overwrite : bool, default False
            Replace an existing file of the same name
        append : bool, default False
            Add rows to an existing file, keeping its header
        accept_missing : bool, default False
            Write -1 in the columns a row does not provide instead of raising
        """
        exists = os.path.isfile(file_name)
        if append and not exists:
            raise FileNotFoundError(f"Cannot append to {file_name}: no such file.")
        if exists and not (append or overwrite):
            raise FileExistsError(
                f"Output file {file_name} exists, set `overwrite` or `append`."
            )

        self.file_name = file_name
        self.accept_missing = accept_missing
        self.num_rows = 0

        # Appended rows must follow the existing header
        self.keys = None
        if append:
            with open(file_name, "r", encoding="utf-8") as in_file:
                self.keys = in_file.readline().rstrip("\n").split(",")

    def __call__(self, record):
        """Flattens an analysis record and appends it to the file.

        Parameters
        ----------
        record : StandardRecord
            Filled analysis record of one event
        """
        self.append(record.summary())

    def create(self, row):
        """Writes the header of a new CSV file from the columns of its first row.

        Parameters
        ----------
        row : dict
            First row of the file
        """
        self.keys = list(row)
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            out_file.write(",".join(self.keys) + "\n")

        logger.debug("Created CSV file %s with %d columns.", self.file_name, len(self.keys))

    def append(self, row):
        """Writes one row, after checking it against the header.

        Columns absent from the header are refused. Header columns absent
        from the row are refused too, unless `accept_missing` is set, in
        which case they are written as -1.

        Parameters
        ----------
        row : dict
            Scalars keyed by column name
        """
        if self.keys is None:
            self.create(row)

        elif list(row) != self.keys:
            unknown = sorted(set(row) - set(self.keys))
            if unknown:
                raise KeyError(f"Row columns {unknown} are not in the header of {self.file_name}.")

            absent = sorted(set(self.keys) - set(row))
            if absent and not self.accept_missing:
                raise KeyError(f"Row lacks header columns {absent} of {self.file_name}.")

            row = {k: row.get(k, -1) for k in self.keys}

        with open(self.file_name, "a", encoding="utf-8") as out_file:
            out_file.write(",".join(str(row[k]) for k in self.keys) + "\n")

        self.num_rows += 1
