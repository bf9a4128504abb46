"""I/O tools for the record filling.

- `read`: row-indexed readers of the DLP and GENIE HDF5 files
- `write`: writers of the filled records
- `factories`: instantiate readers and writers from configuration blocks
"""

from .factories import *
from .read import *
from .write import *
