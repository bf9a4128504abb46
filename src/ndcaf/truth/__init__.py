"""Truth-level filling of the record.

- `convert`: converts GENIE event records into true interactions
- `match`: finds or creates true interactions and particles in the record
"""

from .convert import *
from .match import *
