"""Module which contains enumerated variables shared across the project."""

from enum import IntEnum

from .globals import *

__all__ = [
    "enum_factory",
    "GenieScatteringType",
    "ScatteringMode",
    "ParticleRole",
    "ShapeEnum",
]


def enum_factory(enum, value):
    """Parses an enumerated object from string name(s) to value(s).

    Parameters
    ----------
    enum : str
        Name of the enumerated type
    value : Union[str, List[str]]
        Name or names of the enumerated objects (from config)

    Returns
    -------
    Union[int, List[int]]
        Value or values of the enumerated objects
    """
    # Get the enumerated type
    ENUM_DICT = {"shape": ShapeEnum, "mode": ScatteringMode, "role": ParticleRole}
    if enum not in ENUM_DICT:
        raise ValueError(
            f"Enumerated type not recognized: {enum}. Must be one of "
            f"{list(ENUM_DICT.keys())}."
        )
    enum = ENUM_DICT[enum]

    # Translate enumerated strings into values
    values = [value] if isinstance(value, str) else value
    parsed = []
    for v in values:
        if not hasattr(enum, v.upper()):
            raise ValueError(
                f"Enumerated object not recognized: {v}. Must be one "
                f"of {[e.name for e in enum]}."
            )
        parsed.append(getattr(enum, v.upper()).value)

    return parsed[0] if isinstance(value, str) else parsed


class GenieScatteringType(IntEnum):
    """Enumerates the GENIE scattering types (genie::EScatteringType)."""

    UNKNOWN = GENIE_UNKNOWN_SC
    NULL = GENIE_NULL_SC
    QUASI_ELASTIC = GENIE_QE_SC
    SINGLE_KAON = GENIE_SKAON_SC
    DEEP_INELASTIC = GENIE_DIS_SC
    RESONANT = GENIE_RES_SC
    COHERENT_PRODUCTION = GENIE_COH_SC
    COHERENT_ELASTIC = GENIE_COHEL_SC
    DIFFRACTIVE = GENIE_DIFF_SC
    NU_ELECTRON_ELASTIC = GENIE_NUEEL_SC
    INVERSE_MU_DECAY = GENIE_IMD_SC
    AM_NU_GAMMA = GENIE_AMNUG_SC
    MEC = GENIE_MEC_SC
    INVERSE_BETA_DECAY = GENIE_IBD_SC
    GLASHOW_RESONANCE = GENIE_GLRES_SC
    IMD_ANNIHILATION = GENIE_IMDANN_SC
    PHOTON_COHERENT = GENIE_PHCOH_SC
    PHOTON_RESONANCE = GENIE_PHRES_SC
    SINGLE_PION = GENIE_SPION_SC
    DARK_MATTER_ELASTIC = GENIE_DMEL_SC
    DARK_MATTER_DEEP_INELASTIC = GENIE_DMDIS_SC
    DARK_MATTER_ELECTRON = GENIE_DME_SC
    NORM = GENIE_NORM_SC


class ScatteringMode(IntEnum):
    """Enumerates the scattering modes of the analysis record."""

    UNKNOWN = UNKWN_MODE
    QE = QE_MODE
    SINGLE_KAON = SKAON_MODE
    DIS = DIS_MODE
    RES = RES_MODE
    COH = COH_MODE
    DIFFRACTIVE = DIFF_MODE
    NU_ELECTRON_ELASTIC = NUEEL_MODE
    INV_MUON_DECAY = IMD_MODE
    AM_NU_GAMMA = AMNUG_MODE
    MEC = MEC_MODE
    COH_ELASTIC = COHEL_MODE
    INVERSE_BETA_DECAY = IBD_MODE
    GLASHOW_RESONANCE = GLRES_MODE
    IMD_ANNIHILATION = IMDANN_MODE
    PHOTON_COH = PHCOH_MODE
    PHOTON_RES = PHRES_MODE
    DARK_MATTER_ELASTIC = DMEL_MODE
    DARK_MATTER_DIS = DMDIS_MODE
    DARK_MATTER_ELECTRON = DME_MODE


class ParticleRole(IntEnum):
    """Enumerates the role of a true particle within its interaction."""

    UNKNOWN = UNKWN_ROLE
    PRIMARY = PRIM_ROLE
    PRIMARY_BEFORE_FSI = PREFSI_ROLE
    SECONDARY = SEC_ROLE


class ShapeEnum(IntEnum):
    """Enumerates all possible semantic types of a reconstructed particle."""

    SHOWER = SHOWR_SHP
    TRACK = TRACK_SHP
    MICHEL = MICHL_SHP
    DELTA = DELTA_SHP
    LOWE = LOWES_SHP
    GHOST = GHOST_SHP
    UNKNOWN = UNKWN_SHP
