"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory. The fixtures write small DLP and GENIE HDF5 files to a
temporary directory, using the same layout as the production files: an
`events` dataset of region references into one dataset per table.
"""

import os

import h5py
import numpy as np
import pytest

from ndcaf.data import (DLPInteraction, DLPParticle, DLPRunInfo,
                        DLPTrueInteraction, DLPTrueParticle, GenieEvent,
                        GenieParticle)
from ndcaf.utils.globals import (GENIE_QE_SC, GHEP_HADRNUC_ST, GHEP_INITIAL_ST,
                                 GHEP_STABLE_ST, MICHL_SHP, SHOWR_SHP,
                                 TRACK_SHP)

DLP_TABLES = {
    "particles": DLPParticle,
    "interactions": DLPInteraction,
    "truth_particles": DLPTrueParticle,
    "truth_interactions": DLPTrueInteraction,
    "run_info": DLPRunInfo,
}

GENIE_TABLES = {"genie_events": GenieEvent, "genie_particles": GenieParticle}


def row_dtype(row_class):
    """Builds the structured dtype used to store rows of a data class.

    Parameters
    ----------
    row_class : type
        Data class of the rows

    Returns
    -------
    list
        List of (key, dtype) or (key, dtype, size) tuples
    """
    obj = row_class()
    dtype = []
    for key, val in obj.as_dict().items():
        if key in obj.fixed_length_attrs:
            dtype.append((key, val.dtype, len(val)))
        elif isinstance(val, bool):
            dtype.append((key, np.uint8))
        elif np.isscalar(val):
            dtype.append((key, type(val)))

    return dtype


def write_tables(file_path, entries, tables):
    """Writes a list of entries to an HDF5 file.

    Parameters
    ----------
    file_path : str
        Path to the output file
    entries : List[Dict[str, list]]
        One dictionary per entry, which maps table names onto rows
    tables : Dict[str, type]
        Maps table names onto row classes

    Returns
    -------
    str
        Path to the output file
    """
    ref_dtype = h5py.special_dtype(ref=h5py.RegionReference)
    event_dtype = [(table, ref_dtype) for table in tables]
    with h5py.File(file_path, "w") as out_file:
        # Initialize one dataset per table
        for table, row_class in tables.items():
            out_file.create_dataset(
                table, (0,), maxshape=(None,), dtype=row_dtype(row_class)
            )
            out_file[table].attrs["class_name"] = row_class.__name__

        out_file.create_dataset("events", (0,), maxshape=(None,), dtype=event_dtype)

        # Append each entry
        for entry_id, entry in enumerate(entries):
            event = np.empty(1, event_dtype)
            for table in tables:
                rows = entry.get(table, [])
                dataset = out_file[table]
                current_id = len(dataset)
                array = np.empty(len(rows), dtype=dataset.dtype)
                for i, row in enumerate(rows):
                    for key in dataset.dtype.names:
                        array[key][i] = getattr(row, key)

                dataset.resize(current_id + len(array), axis=0)
                if len(array):
                    dataset[current_id : current_id + len(array)] = array
                event[table] = dataset.regionref[current_id : current_id + len(array)]

            out_file["events"].resize(entry_id + 1, axis=0)
            out_file["events"][entry_id] = event

    return file_path


def make_genie_event(
    ievent, scattering_type=GENIE_QE_SC, probe_p4=(0.0, 0.0, 2.0, 2.0), particles=None
):
    """Builds a synthetic GENIE event record.

    By default, the stack holds one initial state neutrino, one stable muon,
    one stable proton, one stable neutral pion and one hadron in the nucleus.

    Parameters
    ----------
    ievent : int
        Event ID in the record header
    scattering_type : int, default GENIE_QE_SC
        GENIE scattering type
    probe_p4 : tuple, default (0, 0, 2, 2)
        Four-momentum of the incoming neutrino
    particles : List[GenieParticle], optional
        Particle stack

    Returns
    -------
    GenieEvent
        Event record
    """
    if particles is None:
        particles = [
            GenieParticle(14, GHEP_INITIAL_ST, np.array(probe_p4), np.zeros(4)),
            GenieParticle(13, GHEP_STABLE_ST, np.array([0.1, 0.0, 1.5, 1.51]), np.zeros(4)),
            GenieParticle(2212, GHEP_STABLE_ST, np.array([0.0, 0.2, 0.3, 1.0]), np.zeros(4)),
            GenieParticle(111, GHEP_STABLE_ST, np.array([0.0, 0.1, 0.1, 0.2]), np.zeros(4)),
            GenieParticle(2112, GHEP_HADRNUC_ST, np.array([0.0, 0.0, 0.1, 0.95]), np.zeros(4)),
        ]

    return GenieEvent(
        ievent=ievent,
        vertex=np.array([1.0, 2.0, 3.0, 4.0]),
        probe_pdg=14,
        probe_p4=np.array(probe_p4, dtype=np.float64),
        target_pdg=1000180400,
        hit_nuc_pdg=2112,
        is_weak_cc=True,
        scattering_type=scattering_type,
        kine_t=0.05,
        resonance=2,
        xsec=1.5e-38,
        weight=0.5,
        particles=particles,
    )


def make_particle(
    part_id, interaction_id, semantic_type, start=(0, 0, 0), end=(3, 4, 0), energy=10.0
):
    """Builds a synthetic reconstructed DLP particle row."""
    return DLPParticle(
        id=part_id,
        interaction_id=interaction_id,
        semantic_type=semantic_type,
        is_primary=True,
        depositions_sum=energy,
        start_point=np.array(start, dtype=np.float64),
        end_point=np.array(end, dtype=np.float64),
        start_dir=np.array([0.0, 0.0, 1.0]),
        end_dir=np.array([0.0, 1.0, 0.0]),
    )


@pytest.fixture(name="genie_events")
def fixture_genie_events():
    """Generator stream with three events, IDs 10, 20 and 30."""
    return [make_genie_event(10), make_genie_event(20), make_genie_event(30)]


@pytest.fixture(name="genie_file")
def fixture_genie_file(tmp_path, genie_events):
    """Writes the generator stream to an HDF5 file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    genie_events : List[GenieEvent]
       Generator stream
    """
    entries = [
        {"genie_events": [event], "genie_particles": event.particles}
        for event in genie_events
    ]

    return write_tables(os.path.join(tmp_path, "ghep.h5"), entries, GENIE_TABLES)


@pytest.fixture(name="dlp_entries")
def fixture_dlp_entries():
    """Two entries of DLP reconstruction output.

    The first entry has two interactions whose IDs (3 and 7) differ from
    their positions. The second references the third generator event.
    """
    entry_0 = {
        "interactions": [
            DLPInteraction(id=3, vertex=np.array([1.0, 1.0, 1.0]), num_particles=3),
            DLPInteraction(id=7, vertex=np.array([2.0, 2.0, 2.0]), num_particles=2),
        ],
        "particles": [
            make_particle(0, 7, TRACK_SHP, end=(3, 4, 0)),
            make_particle(1, 3, TRACK_SHP, end=(0, 0, 2)),
            make_particle(2, 3, SHOWR_SHP),
            make_particle(3, 3, MICHL_SHP),
            make_particle(4, 7, SHOWR_SHP),
        ],
        "truth_interactions": [
            DLPTrueInteraction(
                id=10, vertex=np.array([1.0, 2.0, 3.0]), nu_current_type=1,
                nu_energy_init=2.0, num_primaries=1,
            ),
            DLPTrueInteraction(
                id=20, vertex=np.array([4.0, 5.0, 6.0]), nu_current_type=0,
                nu_energy_init=3.0, num_primaries=1,
            ),
        ],
        "truth_particles": [
            DLPTrueParticle(
                id=0, interaction_id=10, track_id=1, pdg_code=2212, is_primary=True,
                depositions_sum=50.0, start_point=np.array([1.0, 2.0, 3.0]),
                end_point=np.array([1.0, 2.0, 8.0]), momentum=np.array([0.0, 0.2, 0.3]),
            ),
            DLPTrueParticle(
                id=1, interaction_id=20, track_id=0, pdg_code=13, is_primary=True,
                depositions_sum=100.0, start_point=np.array([4.0, 5.0, 6.0]),
                end_point=np.array([4.0, 5.0, 60.0]), momentum=np.array([0.1, 0.0, 1.5]),
            ),
            DLPTrueParticle(
                id=2, interaction_id=20, track_id=5, pdg_code=11, is_primary=False,
                depositions_sum=5.0, start_point=np.array([4.0, 5.0, 60.0]),
                end_point=np.array([4.0, 5.0, 61.0]), momentum=np.array([0.0, 0.0, 0.01]),
            ),
        ],
        "run_info": [DLPRunInfo(run=5, subrun=6, event=0)],
    }

    entry_1 = {
        "interactions": [
            DLPInteraction(id=0, vertex=np.array([0.0, 0.0, 0.0]), num_particles=1)
        ],
        "particles": [make_particle(0, 0, SHOWR_SHP)],
        "truth_interactions": [
            DLPTrueInteraction(
                id=30, vertex=np.array([0.0, 0.0, 0.0]), nu_current_type=1,
                nu_energy_init=1.0, num_primaries=1,
            )
        ],
        "truth_particles": [
            DLPTrueParticle(
                id=0, interaction_id=30, track_id=0, pdg_code=13, is_primary=True,
                depositions_sum=20.0, start_point=np.array([0.0, 0.0, 0.0]),
                end_point=np.array([0.0, 0.0, 5.0]), momentum=np.array([0.0, 0.0, 0.5]),
            )
        ],
        "run_info": [DLPRunInfo(run=5, subrun=6, event=1)],
    }

    return [entry_0, entry_1]


@pytest.fixture(name="dlp_file")
def fixture_dlp_file(tmp_path, dlp_entries):
    """Writes the DLP reconstruction output to an HDF5 file.

    Parameters
    ----------
    tmp_path : str
       Generic pytest fixture used to handle temporary test files
    dlp_entries : List[dict]
       DLP reconstruction output
    """
    return write_tables(os.path.join(tmp_path, "reco.h5"), dlp_entries, DLP_TABLES)


class ListStream:
    """Generator stream held in memory, which records the rows it reads."""

    def __init__(self, events):
        self.events = events
        self.reads = []

    @property
    def num_entries(self):
        return len(self.events)

    def get(self, idx):
        self.reads.append(idx)
        return self.events[idx]
