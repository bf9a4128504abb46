"""Module with data classes which represent generator-level truth.

These mirror the `SRTrueInteraction`/`SRTrueParticle` branches of the
standard record.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ndcaf.utils.globals import (MODE_LABELS, PDG_COUNTERS, ROLE_LABELS,
                                 UNKWN_MODE, UNKWN_ROLE)

from .base import DataBase

__all__ = ["TrueParticleID", "TrueParticle", "TrueInteraction"]


@dataclass(eq=False)
class TrueParticleID(DataBase):
    """Ancestry tag of a true particle.

    Attributes
    ----------
    ixn : int
        ID of the interaction the particle belongs to
    type : int
        Enumerated role of the particle in its interaction
    part : int
        ID of the particle within its interaction (G4 track ID for primaries)
    """

    ixn: int = -1
    type: int = UNKWN_ROLE
    part: int = -1

    # Enumerated attributes
    _enum_attrs = (("type", tuple((v, k) for k, v in ROLE_LABELS.items())),)


@dataclass(eq=False)
class TrueParticle(DataBase):
    """True particle information.

    Attributes
    ----------
    pdg : int
        Particle PDG code
    G4ID : int
        Geant4 track ID of the particle within its interaction
    interaction_id : int
        ID of the interaction the particle belongs to
    time : float
        Particle creation time
    p : np.ndarray
        (4) Four-momentum (px, py, pz, E) in GeV
    start_pos : np.ndarray
        (3) Creation point of the particle in cm
    end_pos : np.ndarray
        (3) Point where the particle stopped in cm
    ancestor_id : TrueParticleID
        Ancestry tag of the particle
    """

    pdg: int = 0
    G4ID: int = -1
    interaction_id: int = -1
    time: float = -np.inf
    p: np.ndarray = None
    start_pos: np.ndarray = None
    end_pos: np.ndarray = None
    ancestor_id: TrueParticleID = field(default_factory=TrueParticleID)

    # Fixed-length attributes
    _fixed_length_attrs = (("p", 4), ("start_pos", 3), ("end_pos", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("start_pos", "end_pos")

    # Attributes specifying vector components
    _vec_attrs = ("p",)

    def __str__(self):
        """Human-readable string representation of the particle object.

        Results
        -------
        str
            Basic information about the particle properties
        """
        role = ROLE_LABELS[self.ancestor_id.type]
        return (
            f"TrueParticle(Interaction: {self.interaction_id:<4} "
            f"| G4ID: {self.G4ID:<4} | PDG: {self.pdg:<6} | Role: {role})"
        )


@dataclass(eq=False)
class TrueInteraction(DataBase):
    """True neutrino interaction information.

    Attributes
    ----------
    id : int
        Generator-assigned interaction ID
    vtx : np.ndarray
        (3) Interaction vertex in cm
    time : float
        Interaction time
    pdg : int
        PDG code of the incoming neutrino
    pdgorig : int
        PDG code of the neutrino at production (no oscillations at the ND)
    iscc : bool
        Whether the interaction is charged current
    mode : int
        Enumerated scattering mode
    targetPDG : int
        PDG code of the target nucleus
    hitnuc : int
        PDG code of the struck nucleon
    E : float
        Incoming neutrino energy in GeV
    momentum : np.ndarray
        (3) Incoming neutrino 3-momentum in GeV/c
    Q2 : float
        Squared four-momentum transfer in (GeV/c)^2
    q0 : float
        Energy transfer in GeV
    modq : float
        Magnitude of the three-momentum transfer in GeV/c
    W : float
        Hadronic invariant mass in GeV/c^2
    bjorkenX : float
        Bjorken scaling variable
    inelasticity : float
        Inelasticity (y)
    t : float
        Mandelstam t (coherent and diffractive only)
    ischarm : bool
        Whether a charm hadron was produced
    isseaquark : bool
        Whether a sea quark was struck (DIS only)
    resnum : int
        Resonance identifier (resonant only)
    xsec : float
        Interaction cross section
    genweight : float
        Generator weight
    xsec_cvwgt : float
        Cross-section central value weight
    nproton, nneutron, npip, npim, npi0 : int
        Number of stable final state particles of each species
    prim : List[TrueParticle]
        Primary (stable final state) particles
    prefsi : List[TrueParticle]
        Particles before final state interactions
    sec : List[TrueParticle]
        Secondary particles
    nprim, nprefsi, nsec : int
        Number of particles in each collection
    """

    id: int = -1
    vtx: np.ndarray = None
    time: float = -np.inf
    pdg: int = 0
    pdgorig: int = 0
    iscc: bool = False
    mode: int = UNKWN_MODE
    targetPDG: int = 0
    hitnuc: int = 0
    E: float = -1.0
    momentum: np.ndarray = None
    Q2: float = -1.0
    q0: float = -1.0
    modq: float = -1.0
    W: float = -1.0
    bjorkenX: float = -1.0
    inelasticity: float = -1.0
    t: float = -np.inf
    ischarm: bool = False
    isseaquark: bool = False
    resnum: int = -1
    xsec: float = -1.0
    genweight: float = -1.0
    xsec_cvwgt: float = -1.0
    nproton: int = 0
    nneutron: int = 0
    npip: int = 0
    npim: int = 0
    npi0: int = 0
    prim: List[TrueParticle] = field(default_factory=list)
    nprim: int = 0
    prefsi: List[TrueParticle] = field(default_factory=list)
    nprefsi: int = 0
    sec: List[TrueParticle] = field(default_factory=list)
    nsec: int = 0

    # Fixed-length attributes
    _fixed_length_attrs = (("vtx", 3), ("momentum", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("vtx",)

    # Attributes specifying vector components
    _vec_attrs = ("momentum",)

    # Boolean attributes
    _bool_attrs = ("iscc", "ischarm", "isseaquark")

    # Enumerated attributes
    _enum_attrs = (("mode", tuple((v, k) for k, v in MODE_LABELS.items())),)

    def __str__(self):
        """Human-readable string representation of the interaction object.

        Results
        -------
        str
            Basic information about the interaction properties
        """
        current = "CC" if self.iscc else "NC"
        return (
            f"TrueInteraction(ID: {self.id:<6} | PDG: {self.pdg:<4} "
            f"| {current} {self.enum_label('mode'):<11} | E: {self.E:.3f} GeV "
            f"| Primaries: {self.nprim:<3})"
        )

    def count_species(self):
        """Counts the tracked final state species among the primaries.

        Returns
        -------
        Dict[str, int]
            Number of primaries of each tracked species, keyed by counter name
        """
        counts = {name: 0 for name in PDG_COUNTERS.values()}
        for part in self.prim:
            if part.pdg in PDG_COUNTERS:
                counts[PDG_COUNTERS[part.pdg]] += 1

        return counts
