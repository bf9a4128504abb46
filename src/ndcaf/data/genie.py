"""Module with data classes which represent GENIE event records.

This copies the parts of :class:`genie::NtpMCEventRecord` which are needed to
fill the truth branches: the header ID, the interaction summary and the
GHEP particle stack.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ndcaf.utils.globals import GENIE_NULL_SC, GHEP_UNDEFINED_ST

from .base import DataBase

__all__ = ["GenieParticle", "GenieEvent"]


@dataclass(eq=False)
class GenieParticle(DataBase):
    """One entry of the GHEP particle stack.

    Attributes
    ----------
    pdg : int
        Particle PDG code
    status : int
        GHEP status code (genie::EGHepStatus)
    p4 : np.ndarray
        (4) Four-momentum (px, py, pz, E) in GeV
    x4 : np.ndarray
        (4) Four-position (x, y, z, t)
    """

    pdg: int = 0
    status: int = GHEP_UNDEFINED_ST
    p4: np.ndarray = None
    x4: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("p4", 4), ("x4", 4))

    # Attributes specifying coordinates
    _pos_attrs = ("x4",)

    # Attributes specifying vector components
    _vec_attrs = ("p4",)


@dataclass(eq=False)
class GenieEvent(DataBase):
    """GENIE event record.

    Attributes
    ----------
    ievent : int
        Event ID stored in the record header
    vertex : np.ndarray
        (4) Interaction vertex four-position (x, y, z, t)
    probe_pdg : int
        PDG code of the incoming neutrino
    probe_p4 : np.ndarray
        (4) Four-momentum of the incoming neutrino in the lab frame
    target_pdg : int
        PDG code of the target
    hit_nuc_pdg : int
        PDG code of the struck nucleon
    is_weak_cc : bool
        Whether the process is weak charged current
    is_deep_inelastic : bool
        Whether the process is deep inelastic
    scattering_type : int
        GENIE scattering type (genie::EScatteringType)
    kine_t : float
        Mandelstam t of the interaction kinematics
    resonance : int
        Resonance identifier of the exclusive tag
    is_charm : bool
        Whether the exclusive tag is a charm event
    hit_sea_quark : bool
        Whether the struck quark is a sea quark
    xsec : float
        Cross section of the event
    weight : float
        Event weight
    particles : List[GenieParticle]
        GHEP particle stack, in generator order
    """

    ievent: int = -1
    vertex: np.ndarray = None
    probe_pdg: int = 0
    probe_p4: np.ndarray = None
    target_pdg: int = 0
    hit_nuc_pdg: int = 0
    is_weak_cc: bool = False
    is_deep_inelastic: bool = False
    scattering_type: int = GENIE_NULL_SC
    kine_t: float = 0.0
    resonance: int = -1
    is_charm: bool = False
    hit_sea_quark: bool = False
    xsec: float = 0.0
    weight: float = 1.0
    particles: List[GenieParticle] = field(default_factory=list)

    # Fixed-length attributes
    _fixed_length_attrs = (("vertex", 4), ("probe_p4", 4))

    # Attributes specifying coordinates
    _pos_attrs = ("vertex",)

    # Attributes specifying vector components
    _vec_attrs = ("probe_p4",)

    # Boolean attributes
    _bool_attrs = ("is_weak_cc", "is_deep_inelastic", "is_charm", "hit_sea_quark")

    @property
    def probe_e(self):
        """Energy of the incoming neutrino in the lab frame."""
        return float(self.probe_p4[3])
