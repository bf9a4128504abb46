"""Reconstruction branch fillers.

- `base`: base class shared by all branch fillers
- `dlp`: fills the ND-LAr branches from the ML reconstruction chain output
"""

from .base import *
from .dlp import *
from .factories import *
