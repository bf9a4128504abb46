"""Module which contains all global variables shared across the project."""

# Average nucleon mass used in the free-nucleon kinematics approximation
NUCLEON_MASS = 0.939 # [GeV/c^2]

# PDG codes of the final state species counted on each true interaction
PROT_PDG = 2212
NEUT_PDG = 2112
PIP_PDG  = 211
PIM_PDG  = -211
PI0_PDG  = 111

# Maps the counted PDG codes onto the interaction counter they increment
PDG_COUNTERS = {
    PROT_PDG: 'nproton',
    NEUT_PDG: 'nneutron',
    PIP_PDG:  'npip',
    PIM_PDG:  'npim',
    PI0_PDG:  'npi0',
}

# GENIE GHEP particle status codes (genie::EGHepStatus)
GHEP_UNDEFINED_ST  = -1 # kIStUndefined
GHEP_INITIAL_ST    = 0  # kIStInitialState
GHEP_STABLE_ST     = 1  # kIStStableFinalState
GHEP_INTERMED_ST   = 2  # kIStIntermediateState
GHEP_DECAYED_ST    = 3  # kIStDecayedState
GHEP_NUCLTGT_ST    = 11 # kIStNucleonTarget
GHEP_DISPREFRAG_ST = 12 # kIStDISPreFragmHadronicState
GHEP_PREDECAY_ST   = 13 # kIStPreDecayResonantState
GHEP_HADRNUC_ST    = 14 # kIStHadronInTheNucleus

# GENIE scattering types (genie::EScatteringType)
GENIE_UNKNOWN_SC  = -100
GENIE_NULL_SC     = 0
GENIE_QE_SC       = 1
GENIE_SKAON_SC    = 2
GENIE_DIS_SC      = 3
GENIE_RES_SC      = 4
GENIE_COH_SC      = 5
GENIE_COHEL_SC    = 6
GENIE_DIFF_SC     = 7
GENIE_NUEEL_SC    = 8
GENIE_IMD_SC      = 9
GENIE_AMNUG_SC    = 10
GENIE_MEC_SC      = 11
GENIE_IBD_SC      = 12
GENIE_GLRES_SC    = 13
GENIE_IMDANN_SC   = 14
GENIE_PHCOH_SC    = 15
GENIE_PHRES_SC    = 16
GENIE_SPION_SC    = 17
GENIE_DMEL_SC     = 101
GENIE_DMDIS_SC    = 102
GENIE_DME_SC      = 103
GENIE_NORM_SC     = 104

# Analysis record scattering modes
UNKWN_MODE   = -1
QE_MODE      = 1
SKAON_MODE   = 2
DIS_MODE     = 3
RES_MODE     = 4
COH_MODE     = 5
DIFF_MODE    = 6
NUEEL_MODE   = 7
IMD_MODE     = 8
AMNUG_MODE   = 9
MEC_MODE     = 10
COHEL_MODE   = 11
IBD_MODE     = 12
GLRES_MODE   = 13
IMDANN_MODE  = 14
PHCOH_MODE   = 15
PHRES_MODE   = 16
DMEL_MODE    = 101
DMDIS_MODE   = 102
DME_MODE     = 103

# Scattering mode labels
MODE_LABELS = {
    UNKWN_MODE:  'Unknown',
    QE_MODE:     'QE',
    SKAON_MODE:  'SingleKaon',
    DIS_MODE:    'DIS',
    RES_MODE:    'Res',
    COH_MODE:    'Coh',
    DIFF_MODE:   'Diffractive',
    NUEEL_MODE:  'NuElectronElastic',
    IMD_MODE:    'InvMuonDecay',
    AMNUG_MODE:  'AMNuGamma',
    MEC_MODE:    'MEC',
    COHEL_MODE:  'CohElastic',
    IBD_MODE:    'InverseBetaDecay',
    GLRES_MODE:  'GlashowResonance',
    IMDANN_MODE: 'IMDAnnihilation',
    PHCOH_MODE:  'PhotonCoh',
    PHRES_MODE:  'PhotonRes',
    DMEL_MODE:   'DarkMatterElastic',
    DMDIS_MODE:  'DarkMatterDIS',
    DME_MODE:    'DarkMatterElectron',
}

# Role of a true particle within its interaction
UNKWN_ROLE  = -1
PRIM_ROLE   = 0
PREFSI_ROLE = 1
SEC_ROLE    = 2

# Particle role labels
ROLE_LABELS = {
    UNKWN_ROLE:  'Unknown',
    PRIM_ROLE:   'Primary',
    PREFSI_ROLE: 'PrimaryBeforeFSI',
    SEC_ROLE:    'Secondary',
}

# Semantic type of each reconstructed particle (larcv shape convention)
SHOWR_SHP = 0 # larcv.kShapeShower
TRACK_SHP = 1 # larcv.kShapeTrack
MICHL_SHP = 2 # larcv.kShapeMichel
DELTA_SHP = 3 # larcv.kShapeDelta
LOWES_SHP = 4 # larcv.kShapeLEScatter
GHOST_SHP = 5 # larcv.kShapeGhost
UNKWN_SHP = 6 # larcv.kShapeUnknown

# Shape labels
SHAPE_LABELS = {
   -1: 'Unknown',
   SHOWR_SHP: 'Shower',
   TRACK_SHP: 'Track',
   MICHL_SHP: 'Michel',
   DELTA_SHP: 'Delta',
   LOWES_SHP: 'LE',
   GHOST_SHP: 'Ghost',
   UNKWN_SHP: 'Unknown',
}

# Neutrino current types as stored in the ML truth tables
NC_CURR = 0
CC_CURR = 1
