"""ND common analysis record filling.

Fills a unified per-event analysis record from two sources describing the
same events: GENIE generator records (truth) and the per-event tables of the
ML reconstruction chain (reconstruction).

- `data`: record, truth, reconstruction and input row data structures
- `io`: readers of the input files and writers of the records
- `truth`: truth conversion and truth matching
- `reco`: reconstruction branch fillers
- `config`: configuration loading
- `driver`: configuration-driven record filling driver
"""

from .version import __version__
