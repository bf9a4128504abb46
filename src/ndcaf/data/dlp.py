"""Module with data classes which represent the rows of a DLP HDF5 file.

The ML reconstruction chain stores one table per object type. Each class
below describes one row of one of these tables; the readers rebuild them by
passing the row columns as keyword arguments.
"""

from dataclasses import dataclass

import numpy as np

from ndcaf.utils.globals import SHAPE_LABELS, UNKWN_SHP

from .base import DataBase

__all__ = [
    "DLPParticle",
    "DLPInteraction",
    "DLPTrueParticle",
    "DLPTrueInteraction",
    "DLPRunInfo",
]


@dataclass(eq=False)
class DLPParticle(DataBase):
    """Reconstructed particle row.

    Attributes
    ----------
    id : int
        Index of the particle in the event
    interaction_id : int
        ID of the reconstructed interaction the particle belongs to
    semantic_type : int
        Semantic type (shower (0), track (1), Michel (2), delta (3),
        low energy scatter (4))
    pid : int
        Enumerated particle species
    is_primary : bool
        Whether the particle is a primary of its interaction
    depositions_sum : float
        Sum of the energy depositions in MeV
    start_point : np.ndarray
        (3) Particle start point
    end_point : np.ndarray
        (3) Particle end point
    start_dir : np.ndarray
        (3) Particle direction at the start point
    end_dir : np.ndarray
        (3) Particle direction at the end point
    """

    id: int = -1
    interaction_id: int = -1
    semantic_type: int = UNKWN_SHP
    pid: int = -1
    is_primary: bool = False
    depositions_sum: float = -1.0
    start_point: np.ndarray = None
    end_point: np.ndarray = None
    start_dir: np.ndarray = None
    end_dir: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (
        ("start_point", 3),
        ("end_point", 3),
        ("start_dir", 3),
        ("end_dir", 3),
    )

    # Attributes specifying coordinates
    _pos_attrs = ("start_point", "end_point")

    # Attributes specifying vector components
    _vec_attrs = ("start_dir", "end_dir")

    # Boolean attributes
    _bool_attrs = ("is_primary",)

    # Enumerated attributes
    _enum_attrs = (
        ("semantic_type", tuple((v, k) for k, v in SHAPE_LABELS.items())),
    )


@dataclass(eq=False)
class DLPInteraction(DataBase):
    """Reconstructed interaction row.

    Attributes
    ----------
    id : int
        Interaction ID assigned by the reconstruction chain
    vertex : np.ndarray
        (3) Reconstructed vertex
    num_particles : int
        Number of particles in the interaction
    """

    id: int = -1
    vertex: np.ndarray = None
    num_particles: int = 0

    # Fixed-length attributes
    _fixed_length_attrs = (("vertex", 3),)

    # Attributes specifying coordinates
    _pos_attrs = ("vertex",)


@dataclass(eq=False)
class DLPTrueParticle(DataBase):
    """True particle row, as labeled by the reconstruction chain.

    Attributes
    ----------
    id : int
        Index of the particle in the event
    interaction_id : int
        Generator-assigned ID of the interaction the particle belongs to
    track_id : int
        Geant4 track ID of the particle within its interaction
    pdg_code : int
        Particle PDG code
    is_primary : bool
        Whether the particle is a primary of its interaction
    depositions_sum : float
        Sum of the energy depositions in MeV
    start_point : np.ndarray
        (3) Particle start point
    end_point : np.ndarray
        (3) Particle end point
    momentum : np.ndarray
        (3) Initial momentum
    """

    id: int = -1
    interaction_id: int = -1
    track_id: int = -1
    pdg_code: int = 0
    is_primary: bool = False
    depositions_sum: float = -1.0
    start_point: np.ndarray = None
    end_point: np.ndarray = None
    momentum: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("start_point", 3), ("end_point", 3), ("momentum", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("start_point", "end_point")

    # Attributes specifying vector components
    _vec_attrs = ("momentum",)

    # Boolean attributes
    _bool_attrs = ("is_primary",)


@dataclass(eq=False)
class DLPTrueInteraction(DataBase):
    """True interaction row, as labeled by the reconstruction chain.

    Attributes
    ----------
    id : int
        Generator-assigned interaction ID
    vertex : np.ndarray
        (3) True vertex
    nu_current_type : int
        Current type of the neutrino interaction (NC (0), CC (1))
    nu_energy_init : float
        Energy of the incoming neutrino in GeV
    num_primaries : int
        Number of primary particles
    """

    id: int = -1
    vertex: np.ndarray = None
    nu_current_type: int = -1
    nu_energy_init: float = -1.0
    num_primaries: int = 0

    # Fixed-length attributes
    _fixed_length_attrs = (("vertex", 3),)

    # Attributes specifying coordinates
    _pos_attrs = ("vertex",)


@dataclass(eq=False)
class DLPRunInfo(DataBase):
    """Run information row of one event.

    Attributes
    ----------
    run : int
        Run ID
    subrun : int
        Sub-run ID
    event : int
        Event ID
    """

    run: int = -1
    subrun: int = -1
    event: int = -1
