"""Test that the DLP branch filler fills the record as intended."""

import numpy as np
import pytest

from conftest import ListStream, make_particle
from ndcaf.data import DLPInteraction, DLPRunInfo, StandardRecord
from ndcaf.errors import DanglingReferenceError
from ndcaf.io import DLPReader
from ndcaf.reco import MLNDLArRecoBranchFiller, filler_factory
from ndcaf.truth import StreamCursor, TruthMatcher
from ndcaf.utils.globals import (DELTA_SHP, LOWES_SHP, MICHL_SHP, SHOWR_SHP,
                                 TRACK_SHP)


@pytest.fixture(name="interactions")
def fixture_interactions():
    """Two reconstructed interactions whose IDs differ from their positions."""
    return [
        DLPInteraction(id=3, vertex=np.array([1.0, 1.0, 1.0])),
        DLPInteraction(id=7, vertex=np.array([2.0, 2.0, 2.0])),
    ]


def filled_record(interactions, legacy=False):
    """Returns a filler and a record with its interactions filled."""
    filler = MLNDLArRecoBranchFiller(None, legacy_shower_indexing=legacy)
    record = StandardRecord()
    filler.fill_interactions(record, interactions)

    return filler, record


class TestFillInteractions:
    """Test the reconstructed interaction filling."""

    def test_order_and_count(self, interactions):
        """Test that one interaction is appended per row, in row order."""
        _, record = filled_record(interactions)

        assert record.common.ixn.ndlp == len(record.common.ixn.dlp) == 2
        assert [ixn.id for ixn in record.common.ixn.dlp] == [3, 7]
        np.testing.assert_array_equal(record.common.ixn.dlp[1].vtx, [2.0, 2.0, 2.0])
        assert record.nd.lar.ndlp == 2

    def test_unique_ids(self, interactions):
        """Test that interaction IDs are unique after filling."""
        _, record = filled_record(interactions)
        ids = [ixn.id for ixn in record.common.ixn.dlp]

        assert len(set(ids)) == len(ids)
        assert record.common.ixn.position_map() == {3: 0, 7: 1}

    def test_no_interactions(self):
        """Test that an entry without interactions yields empty branches."""
        _, record = filled_record([])

        assert record.common.ixn.ndlp == 0
        assert record.nd.lar.ndlp == 0


class TestFillTracks:
    """Test the track filling."""

    def test_id_is_not_position(self, interactions):
        """Test that tracks are attached through the interaction ID."""
        filler, record = filled_record(interactions)
        filler.fill_tracks(record, [make_particle(0, 7, TRACK_SHP)])

        assert record.nd.lar.dlp[0].ntracks == 0
        assert record.nd.lar.dlp[1].ntracks == 1
        assert len(record.nd.lar.dlp[1].tracks) == 1

    def test_track_attributes(self, interactions):
        """Test that the track attributes are copied and the length computed."""
        filler, record = filled_record(interactions)
        part = make_particle(0, 3, TRACK_SHP, start=(1, 1, 1), end=(4, 5, 1), energy=42.0)
        filler.fill_tracks(record, [part])
        track = record.nd.lar.dlp[0].tracks[0]

        assert track.len_cm == pytest.approx(5.0)
        assert track.Evis == 42.0
        np.testing.assert_array_equal(track.start, [1.0, 1.0, 1.0])
        np.testing.assert_array_equal(track.end, [4.0, 5.0, 1.0])
        np.testing.assert_array_equal(track.dir, [0.0, 0.0, 1.0])
        np.testing.assert_array_equal(track.enddir, [0.0, 1.0, 0.0])

    def test_direction_summary(self, interactions):
        """Test that the interaction direction is that of its longest track."""
        filler, record = filled_record(interactions)
        short = make_particle(0, 3, TRACK_SHP, end=(1, 0, 0))
        long = make_particle(1, 3, TRACK_SHP, end=(10, 0, 0))
        long.start_dir = np.array([1.0, 0.0, 0.0])
        filler.fill_tracks(record, [short, long])

        np.testing.assert_array_equal(record.common.ixn.dlp[0].dir, [1.0, 0.0, 0.0])
        assert np.all(np.isinf(record.common.ixn.dlp[1].dir))

    def test_dangling_reference(self, interactions):
        """Test that a track with an unknown interaction ID is fatal."""
        filler, record = filled_record(interactions)
        with pytest.raises(DanglingReferenceError) as exc_info:
            filler.fill_tracks(record, [make_particle(0, 1, TRACK_SHP)])

        assert exc_info.value.interaction_id == 1
        assert exc_info.value.known_ids == (3, 7)
        assert exc_info.value.fatal_to_run

    def test_other_types_ignored(self, interactions):
        """Test that only track-like particles are stored as tracks."""
        filler, record = filled_record(interactions)
        particles = [
            make_particle(i, 99, shape)
            for i, shape in enumerate([SHOWR_SHP, MICHL_SHP, DELTA_SHP, LOWES_SHP])
        ]
        filler.fill_tracks(record, particles)

        assert sum(ixn.ntracks for ixn in record.nd.lar.dlp) == 0


class TestFillShowers:
    """Test the shower filling, in both indexing modes."""

    def test_resolved_through_id(self, interactions):
        """Test that showers are attached through the interaction ID."""
        filler, record = filled_record(interactions)
        filler.fill_showers(record, [make_particle(0, 7, SHOWR_SHP, energy=3.0)])
        shower = record.nd.lar.dlp[1].showers[0]

        assert record.nd.lar.dlp[1].nshowers == 1
        assert record.nd.lar.ndlp == 2
        assert shower.Evis == 3.0
        np.testing.assert_array_equal(shower.direction, [0.0, 0.0, 1.0])

    def test_dangling_reference(self, interactions):
        """Test that a shower with an unknown interaction ID is fatal."""
        filler, record = filled_record(interactions)
        with pytest.raises(DanglingReferenceError):
            filler.fill_showers(record, [make_particle(0, 9, SHOWR_SHP)])

    def test_legacy_indexing_asymmetry(self, interactions):
        """Test that legacy showers use the ID as a position, unlike tracks."""
        filler, record = filled_record(interactions, legacy=True)
        filler.fill_tracks(record, [make_particle(0, 7, TRACK_SHP)])
        filler.fill_showers(record, [make_particle(1, 7, SHOWR_SHP)])

        # The track lands at the position of interaction 7
        assert record.nd.lar.dlp[1].ntracks == 1

        # The shower lands at position 7, which grows the collection
        assert record.nd.lar.ndlp == len(record.nd.lar.dlp) == 8
        assert record.nd.lar.dlp[7].nshowers == 1
        assert record.nd.lar.dlp[1].nshowers == 0
        assert record.common.ixn.ndlp == 2

    def test_legacy_negative_id(self, interactions):
        """Test that a negative ID is never used as a position."""
        filler, record = filled_record(interactions, legacy=True)
        with pytest.raises(DanglingReferenceError):
            filler.fill_showers(record, [make_particle(0, -1, SHOWR_SHP)])

    def test_other_types_ignored(self, interactions):
        """Test that only shower-like particles are stored as showers."""
        filler, record = filled_record(interactions)
        filler.fill_showers(record, [make_particle(0, 99, TRACK_SHP)])

        assert sum(ixn.nshowers for ixn in record.nd.lar.dlp) == 0


class TestFillTruth:
    """Test the truth filling from the DLP truth tables."""

    def test_without_matcher(self, dlp_entries):
        """Test that true interactions are built from the DLP rows."""
        filler = MLNDLArRecoBranchFiller(None)
        record = StandardRecord()
        entry = dlp_entries[0]
        filler.fill_truth(record, entry["truth_particles"], entry["truth_interactions"])

        assert record.mc.nnu == 2
        first, second = record.mc.nu
        assert (first.id, first.iscc, first.E) == (10, True, 2.0)
        assert (second.id, second.iscc, second.E) == (20, False, 3.0)
        np.testing.assert_array_equal(second.vtx, [4.0, 5.0, 6.0])

        assert first.nprim == len(first.prim) == 1
        part = first.prim[0]
        assert (part.G4ID, part.pdg, part.interaction_id) == (1, 2212, 10)
        np.testing.assert_array_equal(part.p, [0.0, 0.2, 0.3, 50.0])
        np.testing.assert_array_equal(part.end_pos, [1.0, 2.0, 8.0])

        # Non-primary particles are not stored
        assert second.nprim == 1
        assert second.nsec == 0

    def test_with_matcher(self, dlp_entries, genie_events):
        """Test that true interactions are resolved against the stream."""
        matcher = TruthMatcher(ListStream(genie_events))
        filler = MLNDLArRecoBranchFiller(None, truth_matcher=matcher)
        record = StandardRecord()
        entry = dlp_entries[0]
        filler.fill_truth(record, entry["truth_particles"], entry["truth_interactions"])

        assert record.mc.nnu == 2
        first = record.mc.find(10)
        assert first.nprim == 3
        assert first.xsec_cvwgt == 1.0

        # The DLP primary matches the converted primary with the same G4 ID
        proton = first.prim[1]
        assert proton.pdg == 2212
        np.testing.assert_array_equal(proton.start_pos, [1.0, 2.0, 3.0])
        assert proton.p[3] == 1.0

        muon = record.mc.find(20).prim[0]
        np.testing.assert_array_equal(muon.p, [0.1, 0.0, 1.5, 1.51])

    def test_repeated_interactions(self, dlp_entries):
        """Test that an interaction seen twice is only stored once."""
        filler = MLNDLArRecoBranchFiller(None)
        record = StandardRecord()
        entry = dlp_entries[0]
        for _ in range(2):
            filler.fill_truth(record, entry["truth_particles"], entry["truth_interactions"])

        assert record.mc.nnu == 2
        assert record.mc.find(10).nprim == 1


class TestFillRecoBranches:
    """Test the full filling of an entry read from file."""

    def test_full_entry(self, dlp_file):
        """Test that all branches of a record are filled."""
        filler = MLNDLArRecoBranchFiller(DLPReader(dlp_file))
        record = StandardRecord()
        filler.fill_reco_branches(0, record)

        assert len(filler) == 2
        assert record.mc.nnu == 2
        assert record.common.ixn.ndlp == 2
        assert [ixn.ntracks for ixn in record.nd.lar.dlp] == [1, 1]
        assert [ixn.nshowers for ixn in record.nd.lar.dlp] == [1, 1]
        assert record.nd.lar.dlp[1].tracks[0].len_cm == pytest.approx(5.0)

        meta = record.meta.nd_lar
        assert meta.enabled
        assert (meta.run, meta.subrun, meta.event) == (5, 6, 0)

    def test_run_info_override(self, dlp_file):
        """Test that the provided run information takes precedence."""
        filler = MLNDLArRecoBranchFiller(DLPReader(dlp_file))
        record = StandardRecord()
        filler.fill_reco_branches(1, record, DLPRunInfo(run=1, subrun=0))

        meta = record.meta.nd_lar
        assert (meta.run, meta.subrun, meta.event) == (1, 0, 1)

    def test_with_truth_matcher(self, dlp_file, genie_events):
        """Test that the entries share the generator stream cursor."""
        cursor = StreamCursor()
        matcher = TruthMatcher(ListStream(genie_events), cursor)
        filler = filler_factory({"name": "dlp"}, DLPReader(dlp_file), matcher)
        for entry in range(2):
            record = StandardRecord()
            filler.fill_reco_branches(entry, record)

        assert [ixn.id for ixn in record.mc.nu] == [30]
        assert cursor.position == 2

    def test_not_configured(self, dlp_file):
        """Test that a filler which is not configured refuses to run."""
        filler = MLNDLArRecoBranchFiller(DLPReader(dlp_file))
        filler.configured = False
        with pytest.raises(RuntimeError):
            filler.fill_reco_branches(0, StandardRecord())
