"""Data structures used to fill the analysis record.

- `base`: shared base class (numpy-aware equality, flattening)
- `truth`: true interactions and particles of the record
- `reco`: reconstructed interactions, tracks and showers of the record
- `record`: the per-event standard record and its branches
- `dlp`: rows of the ML reconstruction HDF5 tables
- `genie`: GENIE event records (header, summary, particle stack)
"""

from .dlp import *
from .genie import *
from .reco import *
from .record import *
from .truth import *
