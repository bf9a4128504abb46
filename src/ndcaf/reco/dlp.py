"""Fills the record from the output of the ML reconstruction chain (DLP)."""

import numpy as np

from ndcaf.data import (DLPInteraction, DLPParticle, DLPRunInfo,
                        DLPTrueInteraction, DLPTrueParticle, RecoInteraction,
                        Shower, Track, TrueInteraction, TrueParticle,
                        TrueParticleID)
from ndcaf.errors import DanglingReferenceError
from ndcaf.utils.enums import enum_factory
from ndcaf.utils.globals import CC_CURR, PRIM_ROLE
from ndcaf.utils.kinematics import euclidean_distance
from ndcaf.utils.logger import logger

from .base import RecoBranchFiller

__all__ = ["MLNDLArRecoBranchFiller"]


class MLNDLArRecoBranchFiller(RecoBranchFiller):
    """Fills the ND-LAr branches of the record from a DLP reconstruction file.

    For each entry, the record is filled in the following order:
    1. True interactions and their primaries, from the DLP truth tables
    2. Reconstructed interactions, in file row order
    3. Tracks, attached to their reconstructed interaction
    4. Showers, attached to their reconstructed interaction
    5. ND-LAr metadata

    Interactions must be filled before the objects which reference them.

    Typical configuration should look like:

    .. code-block:: yaml

        reco:
          name: dlp
          legacy_shower_indexing: false

    Attributes
    ----------
    reader : DLPReader
        Reader of the DLP reconstruction file
    legacy_shower_indexing : bool
        If `True`, showers use their interaction ID as a position in the
        interaction list, growing it as needed
    track_shape : int
        Semantic type of the particles stored as tracks
    shower_shape : int
        Semantic type of the particles stored as showers
    """

    name = "dlp"

    def __init__(
        self,
        reader,
        truth_matcher=None,
        legacy_shower_indexing=False,
        track_shape="track",
        shower_shape="shower",
    ):
        """Initialize the DLP branch filler.

        Parameters
        ----------
        reader : DLPReader
            Reader of the DLP reconstruction file
        truth_matcher : TruthMatcher, optional
            Resolves true interactions against the generator stream. If not
            provided, true interactions are built from the DLP truth tables
            alone.
        legacy_shower_indexing : bool, default False
            If `True`, use the shower interaction ID as a position in the
            interaction list instead of resolving it
        track_shape : str, default 'track'
            Name of the semantic type of the particles stored as tracks
        shower_shape : str, default 'shower'
            Name of the semantic type of the particles stored as showers
        """
        super().__init__(truth_matcher)

        self.reader = reader
        self.legacy_shower_indexing = legacy_shower_indexing
        self.track_shape = enum_factory("shape", track_shape)
        self.shower_shape = enum_factory("shape", shower_shape)

        # If we got this far, the reader found all of its tables
        self.configured = True

    def __len__(self):
        """Number of entries in the reconstruction file."""
        return len(self.reader)

    def _fill_reco_branches(self, entry, record, run_info):
        """Fills all the branches of the record for one entry.

        Parameters
        ----------
        entry : int
            Entry index in the reconstruction file
        record : StandardRecord
            Record to fill
        run_info : DLPRunInfo
            Run and sub-run to store in the metadata. If `None`, they are
            taken from the run information table of the file.
        """
        data = self.reader.get(entry)

        self.fill_truth(record, data[DLPTrueParticle], data[DLPTrueInteraction])
        self.fill_interactions(record, data[DLPInteraction])
        self.fill_tracks(record, data[DLPParticle])
        self.fill_showers(record, data[DLPParticle])

        if run_info is None:
            run_infos = data[DLPRunInfo]
            run_info = run_infos[0] if len(run_infos) else DLPRunInfo()
        self.fill_meta(record, int(self.reader.entry_index[entry]), run_info)

    def fill_truth(self, record, true_particles, true_interactions):
        """Fills the true interactions and their primary particles.

        If a truth matcher is attached, each true interaction is resolved
        against the generator stream (and created from its GENIE record the
        first time it is seen). Otherwise, it is built from its DLP row.

        Parameters
        ----------
        record : StandardRecord
            Record to fill
        true_particles : List[DLPTrueParticle]
            True particles of the entry
        true_interactions : List[DLPTrueInteraction]
            True interactions of the entry
        """
        for true_ixn in true_interactions:
            # Resolve the true interaction
            if self.truth_matcher is not None:
                ixn = self.truth_matcher.get_interaction(record, true_ixn.id, create=True)
            else:
                ixn = record.mc.find(true_ixn.id)
                if ixn is None:
                    ixn = record.mc.add(
                        TrueInteraction(
                            id=true_ixn.id,
                            vtx=np.array(true_ixn.vertex, dtype=np.float64),
                            iscc=true_ixn.nu_current_type == CC_CURR,
                            E=true_ixn.nu_energy_init,
                        )
                    )

            # Fill the primaries of this interaction only
            for true_part in true_particles:
                if not true_part.is_primary or true_part.interaction_id != true_ixn.id:
                    continue

                if self.truth_matcher is not None:
                    part = self.truth_matcher.get_particle(
                        record, true_ixn.id, true_part.track_id, True, create=True
                    )
                else:
                    part = self.get_primary(ixn, true_part.track_id)

                self.fill_true_particle(part, true_part)

        logger.debug("Filled %d true interaction(s).", record.mc.nnu)

    @staticmethod
    def get_primary(ixn, track_id):
        """Returns the primary with a given ID, appending it if needed.

        Parameters
        ----------
        ixn : TrueInteraction
            True interaction which owns the primary
        track_id : int
            G4 track ID of the primary

        Returns
        -------
        TrueParticle
            Primary stored in the interaction
        """
        for part in ixn.prim:
            if part.G4ID == track_id:
                return part

        part = TrueParticle(
            G4ID=track_id,
            interaction_id=ixn.id,
            ancestor_id=TrueParticleID(ixn.id, PRIM_ROLE, track_id),
        )
        ixn.prim.append(part)
        ixn.nprim += 1

        return part

    @staticmethod
    def fill_true_particle(part, true_part):
        """Copies the DLP truth information into a true particle.

        The momentum components are always copied. The deposited energy is
        only used as the energy component if the particle has none yet.

        Parameters
        ----------
        part : TrueParticle
            True particle stored in the record
        true_part : DLPTrueParticle
            DLP true particle row
        """
        part.pdg = int(true_part.pdg_code)
        part.start_pos = np.array(true_part.start_point, dtype=np.float64)
        part.end_pos = np.array(true_part.end_point, dtype=np.float64)
        part.p[:3] = true_part.momentum
        if not np.isfinite(part.p[3]):
            part.p[3] = true_part.depositions_sum

    def fill_interactions(self, record, interactions):
        """Appends one reconstructed interaction per row, in row order.

        Parameters
        ----------
        record : StandardRecord
            Record to fill
        interactions : List[DLPInteraction]
            Reconstructed interactions of the entry
        """
        for inter in interactions:
            logger.debug("Considering interaction ID: %d", inter.id)
            record.common.ixn.add(
                RecoInteraction(
                    id=inter.id, vtx=np.array(inter.vertex, dtype=np.float64)
                )
            )

        # Keep one track/shower container per interaction
        record.nd.lar.resize(record.common.ixn.ndlp)

    def fill_tracks(self, record, particles):
        """Attaches the track-like particles to their interaction.

        The interaction ID of a particle is generally not the position of its
        interaction in the record (some interactions are filtered upstream).
        The position is resolved from the ID. The direction summary of each
        interaction is the start direction of its longest track.

        Parameters
        ----------
        record : StandardRecord
            Record to fill
        particles : List[DLPParticle]
            Reconstructed particles of the entry

        Raises
        ------
        DanglingReferenceError
            If a track references an interaction which is not in the record
        """
        positions = record.common.ixn.position_map()
        record.nd.lar.resize(record.common.ixn.ndlp)

        longest = {}
        for part in particles:
            if part.semantic_type != self.track_shape:
                continue

            track = Track(
                Evis=float(part.depositions_sum),
                start=np.array(part.start_point, dtype=np.float64),
                end=np.array(part.end_point, dtype=np.float64),
                dir=np.array(part.start_dir, dtype=np.float64),
                enddir=np.array(part.end_dir, dtype=np.float64),
                len_cm=euclidean_distance(part.start_point, part.end_point),
            )

            pos = self.resolve(positions, part.interaction_id)
            record.nd.lar.dlp[pos].add_track(track)

            if track.len_cm > longest.get(pos, -1.0):
                longest[pos] = track.len_cm
                record.common.ixn.dlp[pos].dir = track.dir.copy()

    def fill_showers(self, record, particles):
        """Attaches the shower-like particles to their interaction.

        Parameters
        ----------
        record : StandardRecord
            Record to fill
        particles : List[DLPParticle]
            Reconstructed particles of the entry

        Raises
        ------
        DanglingReferenceError
            If a shower references an interaction which is not in the record
            (or, with legacy indexing, a negative interaction ID)
        """
        positions = record.common.ixn.position_map()
        for part in particles:
            if part.semantic_type != self.shower_shape:
                continue

            shower = Shower(
                Evis=float(part.depositions_sum),
                start=np.array(part.start_point, dtype=np.float64),
                direction=np.array(part.start_dir, dtype=np.float64),
            )

            if self.legacy_shower_indexing:
                pos = int(part.interaction_id)
                if pos < 0:
                    raise DanglingReferenceError(pos, positions.keys())
                if pos >= len(record.nd.lar.dlp):
                    logger.warning(
                        "Shower interaction ID %d is beyond the %d "
                        "interaction(s) of the record, growing it.",
                        pos,
                        len(record.nd.lar.dlp),
                    )
                    record.nd.lar.resize(pos + 1)
            else:
                pos = self.resolve(positions, part.interaction_id)

            record.nd.lar.dlp[pos].add_shower(shower)

    @staticmethod
    def resolve(positions, ixn_id):
        """Returns the position of an interaction in the record.

        Parameters
        ----------
        positions : Dict[int, int]
            Maps interaction IDs onto positions
        ixn_id : int
            Interaction ID referenced by an object

        Returns
        -------
        int
            Position of the interaction in the record
        """
        if ixn_id not in positions:
            raise DanglingReferenceError(ixn_id, positions.keys())

        return positions[ixn_id]

    @staticmethod
    def fill_meta(record, event, run_info):
        """Fills the ND-LAr metadata branch.

        Parameters
        ----------
        record : StandardRecord
            Record to fill
        event : int
            Entry index in the reconstruction file
        run_info : DLPRunInfo
            Run and sub-run information
        """
        meta = record.meta.nd_lar
        meta.enabled = True
        meta.run = int(run_info.run)
        meta.subrun = int(run_info.subrun)
        meta.event = event
