"""Module with the unified per-event analysis record.

The record is a tree of branches, following the layout of the standard
record:

.. code-block:: text

    StandardRecord
    ├── mc.nu[]                 true interactions (mc.nnu)
    ├── common.ixn.dlp[]        reconstructed interactions (common.ixn.ndlp)
    ├── nd.lar.dlp[]            tracks/showers per reconstructed interaction
    └── meta.nd_lar             run/subrun/event and enabled flag

The record only grows while an event is being filled.
"""

from dataclasses import dataclass, field
from typing import List

from .base import DataBase
from .reco import NDLArInteraction, RecoInteraction
from .truth import TrueInteraction

__all__ = [
    "TruthBranch",
    "InteractionBranch",
    "CommonBranch",
    "NDLArBranch",
    "NDBranch",
    "NDLArMeta",
    "MetaBranch",
    "StandardRecord",
]


@dataclass(eq=False)
class TruthBranch(DataBase):
    """Generator-level truth of one event.

    Attributes
    ----------
    nu : List[TrueInteraction]
        True interactions, unique by ID
    nnu : int
        Number of true interactions
    """

    nu: List[TrueInteraction] = field(default_factory=list)
    nnu: int = 0

    def find(self, ixn_id):
        """Returns the true interaction with a given ID, if it exists.

        Parameters
        ----------
        ixn_id : int
            Generator-assigned interaction ID

        Returns
        -------
        Union[TrueInteraction, None]
            Stored interaction object (not a copy), `None` if absent
        """
        for ixn in self.nu:
            if ixn.id == ixn_id:
                return ixn

        return None

    def add(self, ixn):
        """Appends a true interaction and updates the counter.

        Parameters
        ----------
        ixn : TrueInteraction
            Interaction to append. Its ID must not be in the branch yet.

        Returns
        -------
        TrueInteraction
            The appended interaction
        """
        if self.find(ixn.id) is not None:
            raise ValueError(
                f"A true interaction with ID {ixn.id} is already in the record."
            )

        self.nu.append(ixn)
        self.nnu += 1

        return ixn


@dataclass(eq=False)
class InteractionBranch(DataBase):
    """Reconstructed interactions from one reconstruction source.

    Attributes
    ----------
    dlp : List[RecoInteraction]
        Interactions reconstructed by the DLP chain, in source row order
    ndlp : int
        Number of DLP interactions
    """

    dlp: List[RecoInteraction] = field(default_factory=list)
    ndlp: int = 0

    def add(self, ixn):
        """Appends a reconstructed interaction and updates the counter."""
        self.dlp.append(ixn)
        self.ndlp += 1

        return ixn

    def position_map(self):
        """Maps each interaction ID onto its position in the branch.

        This is the only sanctioned way to go from an interaction ID to an
        interaction position: the two generally differ.

        Returns
        -------
        Dict[int, int]
            Dictionary which maps interaction IDs onto positions
        """
        mapping = {}
        for pos, ixn in enumerate(self.dlp):
            if ixn.id in mapping:
                raise ValueError(
                    f"Reconstructed interaction ID {ixn.id} appears more "
                    "than once in the record."
                )
            mapping[ixn.id] = pos

        return mapping


@dataclass(eq=False)
class CommonBranch(DataBase):
    """Reconstruction output shared between detectors.

    Attributes
    ----------
    ixn : InteractionBranch
        Reconstructed interactions
    """

    ixn: InteractionBranch = field(default_factory=InteractionBranch)


@dataclass(eq=False)
class NDLArBranch(DataBase):
    """ND-LAr specific reconstructed objects.

    Attributes
    ----------
    dlp : List[NDLArInteraction]
        Track/shower containers, parallel to `common.ixn.dlp`
    ndlp : int
        Number of containers
    """

    dlp: List[NDLArInteraction] = field(default_factory=list)
    ndlp: int = 0

    def resize(self, size):
        """Grows the container list to at least `size` entries.

        Parameters
        ----------
        size : int
            Minimum number of containers
        """
        while len(self.dlp) < size:
            self.dlp.append(NDLArInteraction())
        self.ndlp = len(self.dlp)


@dataclass(eq=False)
class NDBranch(DataBase):
    """Near detector specific reconstruction output.

    Attributes
    ----------
    lar : NDLArBranch
        ND-LAr reconstructed objects
    """

    lar: NDLArBranch = field(default_factory=NDLArBranch)


@dataclass(eq=False)
class NDLArMeta(DataBase):
    """Bookkeeping of the ND-LAr reconstruction source for one event.

    Attributes
    ----------
    enabled : bool
        Whether this reconstruction source filled the record
    run : int
        Run ID
    subrun : int
        Sub-run ID
    event : int
        Event ID (entry index in the reconstruction file)
    """

    enabled: bool = False
    run: int = -1
    subrun: int = -1
    event: int = -1

    # Boolean attributes
    _bool_attrs = ("enabled",)


@dataclass(eq=False)
class MetaBranch(DataBase):
    """Metadata of each reconstruction source.

    Attributes
    ----------
    nd_lar : NDLArMeta
        ND-LAr reconstruction metadata
    """

    nd_lar: NDLArMeta = field(default_factory=NDLArMeta)


@dataclass(eq=False)
class StandardRecord(DataBase):
    """Unified analysis record of one event.

    Attributes
    ----------
    mc : TruthBranch
        Generator-level truth
    common : CommonBranch
        Reconstructed interactions
    nd : NDBranch
        Near detector reconstructed objects
    meta : MetaBranch
        Reconstruction source metadata
    """

    mc: TruthBranch = field(default_factory=TruthBranch)
    common: CommonBranch = field(default_factory=CommonBranch)
    nd: NDBranch = field(default_factory=NDBranch)
    meta: MetaBranch = field(default_factory=MetaBranch)

    def summary(self):
        """Flattens the record into one row of scalars.

        Returns
        -------
        dict
            Event-level counts and metadata, suitable for a CSV row
        """
        summary = self.meta.nd_lar.scalar_dict()
        summary["nnu"] = self.mc.nnu
        summary["nprim"] = sum(nu.nprim for nu in self.mc.nu)
        summary["nprefsi"] = sum(nu.nprefsi for nu in self.mc.nu)
        summary["ndlp"] = self.common.ixn.ndlp
        summary["ntracks"] = sum(ixn.ntracks for ixn in self.nd.lar.dlp)
        summary["nshowers"] = sum(ixn.nshowers for ixn in self.nd.lar.dlp)

        return summary
