"""Readers which provide row-indexed access to the input files.

- `DLPReader`: per-event tables of the ML reconstruction chain
- `GenieReader`: stream of GENIE event records
"""

from .dlp import *
from .genie import *
