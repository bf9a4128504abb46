"""Converts GENIE event records into true interactions of the record.

The conversion is a pure function of one generator event: converting the
same event twice yields two field-for-field identical interactions.
"""

import numpy as np

from ndcaf.data import TrueInteraction, TrueParticle, TrueParticleID
from ndcaf.errors import UnknownScatteringModeError
from ndcaf.utils.globals import (
    AMNUG_MODE, COH_MODE, COHEL_MODE, DIFF_MODE, DIS_MODE, DMDIS_MODE,
    DME_MODE, DMEL_MODE, GENIE_AMNUG_SC, GENIE_COH_SC, GENIE_COHEL_SC,
    GENIE_DIFF_SC, GENIE_DIS_SC, GENIE_DMDIS_SC, GENIE_DME_SC, GENIE_DMEL_SC,
    GENIE_GLRES_SC, GENIE_IBD_SC, GENIE_IMD_SC, GENIE_IMDANN_SC, GENIE_MEC_SC,
    GENIE_NUEEL_SC, GENIE_NULL_SC, GENIE_PHCOH_SC, GENIE_PHRES_SC, GENIE_QE_SC,
    GENIE_RES_SC, GENIE_SKAON_SC, GENIE_UNKNOWN_SC, GHEP_HADRNUC_ST,
    GHEP_STABLE_ST, GLRES_MODE, IBD_MODE, IMD_MODE, IMDANN_MODE, MEC_MODE,
    NUCLEON_MASS, NUEEL_MODE, PDG_COUNTERS, PHCOH_MODE, PHRES_MODE,
    PREFSI_ROLE, PRIM_ROLE, QE_MODE, RES_MODE, SKAON_MODE, UNKWN_MODE)
from ndcaf.utils.kinematics import four_vector, mag2, vect_mag
from ndcaf.utils.logger import logger

__all__ = ["GENIE_TO_CAF", "genie_to_caf", "TruthConverter"]


# Maps GENIE scattering types (genie::EScatteringType) onto record modes.
# Types absent from this table have no record counterpart.
GENIE_TO_CAF = {
    GENIE_UNKNOWN_SC: UNKWN_MODE,
    GENIE_NULL_SC: UNKWN_MODE,
    GENIE_QE_SC: QE_MODE,
    GENIE_SKAON_SC: SKAON_MODE,
    GENIE_DIS_SC: DIS_MODE,
    GENIE_RES_SC: RES_MODE,
    GENIE_COH_SC: COH_MODE,
    GENIE_COHEL_SC: COHEL_MODE,
    GENIE_DIFF_SC: DIFF_MODE,
    GENIE_NUEEL_SC: NUEEL_MODE,
    GENIE_IMD_SC: IMD_MODE,
    GENIE_AMNUG_SC: AMNUG_MODE,
    GENIE_MEC_SC: MEC_MODE,
    GENIE_IBD_SC: IBD_MODE,
    GENIE_GLRES_SC: GLRES_MODE,
    GENIE_IMDANN_SC: IMDANN_MODE,
    GENIE_PHCOH_SC: PHCOH_MODE,
    GENIE_PHRES_SC: PHRES_MODE,
    GENIE_DMEL_SC: DMEL_MODE,
    GENIE_DMDIS_SC: DMDIS_MODE,
    GENIE_DME_SC: DME_MODE,
}


def genie_to_caf(scattering_type):
    """Converts a GENIE scattering type into a record interaction mode.

    Parameters
    ----------
    scattering_type : int
        GENIE scattering type

    Returns
    -------
    int
        Record interaction mode

    Raises
    ------
    UnknownScatteringModeError
        If the scattering type has no record counterpart
    """
    try:
        return GENIE_TO_CAF[int(scattering_type)]
    except KeyError as err:
        raise UnknownScatteringModeError(scattering_type) from err


class TruthConverter:
    """Builds a :class:`TrueInteraction` from a :class:`GenieEvent`.

    The conversion proceeds as follows:
    1. Copy the ID, vertex and time from the event header and vertex
    2. Map the scattering type onto the record interaction mode
    3. Derive the kinematic variables from the four-momentum transfer
    4. Store the mode-specific quantities (`t`, `resnum`)
    5. Sort the particle stack into primaries and pre-FSI hadrons

    The four-momentum transfer is computed with an outgoing lepton
    four-momentum set to zero, i.e. `q` is the neutrino four-momentum itself.
    Derived quantities whose denominator vanishes (or whose square root
    argument is negative) keep their default value.

    Attributes
    ----------
    nucleon_mass : float
        Average nucleon mass used in the free-nucleon approximation in GeV
    """

    def __init__(self, nucleon_mass=NUCLEON_MASS):
        """Initialize the converter.

        Parameters
        ----------
        nucleon_mass : float, default 0.939
            Average nucleon mass in GeV
        """
        self.nucleon_mass = nucleon_mass

    def __call__(self, event):
        """Alias for :meth:`convert`."""
        return self.convert(event)

    def convert(self, event):
        """Converts one generator event into a true interaction.

        Parameters
        ----------
        event : GenieEvent
            Generator event record

        Returns
        -------
        TrueInteraction
            True interaction, with its primary and pre-FSI particles
        """
        # Header and summary information
        ixn = TrueInteraction(
            id=int(event.ievent),
            vtx=np.array(event.vertex[:3], dtype=np.float64),
            time=float(event.vertex[3]),
            pdg=int(event.probe_pdg),
            pdgorig=int(event.probe_pdg),
            iscc=bool(event.is_weak_cc),
            mode=genie_to_caf(event.scattering_type),
            targetPDG=int(event.target_pdg),
            hitnuc=int(event.hit_nuc_pdg),
            E=event.probe_e,
            momentum=np.array(event.probe_p4[:3], dtype=np.float64),
            ischarm=bool(event.is_charm),
            isseaquark=bool(event.is_deep_inelastic and event.hit_sea_quark),
            xsec=float(event.xsec),
            genweight=float(event.weight),
            xsec_cvwgt=1.0,
        )

        # Kinematics
        self.fill_kinematics(ixn, event)

        # Mode-specific quantities
        if ixn.mode in (COH_MODE, DIFF_MODE):
            ixn.t = float(event.kine_t)
        if ixn.mode == RES_MODE:
            ixn.resnum = int(event.resonance)

        # Particle stack
        self.fill_particles(ixn, event)

        logger.debug("Converted GENIE event: %s", ixn)

        return ixn

    def fill_kinematics(self, ixn, event):
        """Derives the interaction kinematics from the four-momentum transfer.

        Parameters
        ----------
        ixn : TrueInteraction
            Interaction to fill
        event : GenieEvent
            Generator event record
        """
        # Four-momentum transfer. The outgoing lepton is not available.
        nu_p4 = np.asarray(event.probe_p4, dtype=np.float64)
        lep_p4 = four_vector()
        q = nu_p4 - lep_p4

        mass = self.nucleon_mass
        ixn.Q2 = -mag2(q)
        ixn.q0 = float(q[3])
        ixn.modq = vect_mag(q)

        w2 = mass**2 + 2.0 * ixn.q0 * mass + mag2(q)
        if w2 >= 0.0:
            ixn.W = float(np.sqrt(w2))
        if ixn.q0 != 0.0:
            ixn.bjorkenX = ixn.Q2 / (2.0 * mass * ixn.q0)
        if ixn.E != 0.0:
            ixn.inelasticity = ixn.q0 / ixn.E

    def fill_particles(self, ixn, event):
        """Sorts the GHEP particle stack into the interaction collections.

        Stable final state particles are primaries: they receive sequential
        IDs from 0 in stack order and update the species counters. Hadrons
        in the nucleus are stored as pre-FSI particles, without an ID. All
        other entries of the stack are ignored.

        Parameters
        ----------
        ixn : TrueInteraction
            Interaction to fill
        event : GenieEvent
            Generator event record
        """
        for part in event.particles:
            if part.status not in (GHEP_STABLE_ST, GHEP_HADRNUC_ST):
                continue

            particle = TrueParticle(
                pdg=int(part.pdg),
                interaction_id=ixn.id,
                time=ixn.time,
                p=np.array(part.p4, dtype=np.float64),
                start_pos=np.array(part.x4[:3], dtype=np.float64),
            )

            if part.status == GHEP_STABLE_ST:
                particle.G4ID = ixn.nprim
                particle.ancestor_id = TrueParticleID(ixn.id, PRIM_ROLE, particle.G4ID)
                ixn.prim.append(particle)
                ixn.nprim += 1

                counter = PDG_COUNTERS.get(particle.pdg)
                if counter is not None:
                    setattr(ixn, counter, getattr(ixn, counter) + 1)

            else:
                particle.ancestor_id = TrueParticleID(ixn.id, PREFSI_ROLE, -1)
                ixn.prefsi.append(particle)
                ixn.nprefsi += 1
