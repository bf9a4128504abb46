"""Module with data classes which represent reconstructed objects.

These mirror the `SRInteraction`, `SRTrack` and `SRShower` branches of the
standard record.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .base import DataBase

__all__ = ["RecoInteraction", "Track", "Shower", "NDLArInteraction"]


@dataclass(eq=False)
class RecoInteraction(DataBase):
    """Reconstructed interaction information.

    Attributes
    ----------
    id : int
        Interaction ID assigned by the reconstruction chain. This is not the
        position of the interaction in the record (some interactions are
        filtered upstream, e.g. those which are not beam triggered).
    vtx : np.ndarray
        (3) Reconstructed vertex in cm
    dir : np.ndarray
        (3) Direction summary: start direction of the longest track
    """

    id: int = -1
    vtx: np.ndarray = None
    dir: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("vtx", 3), ("dir", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("vtx",)

    # Attributes specifying vector components
    _vec_attrs = ("dir",)


@dataclass(eq=False)
class Track(DataBase):
    """Reconstructed track information.

    Attributes
    ----------
    Evis : float
        Visible energy in MeV
    start : np.ndarray
        (3) Track start point in cm
    end : np.ndarray
        (3) Track end point in cm
    dir : np.ndarray
        (3) Direction at the start point
    enddir : np.ndarray
        (3) Direction at the end point
    len_cm : float
        Straight distance between the start and end points in cm
    """

    Evis: float = -1.0
    start: np.ndarray = None
    end: np.ndarray = None
    dir: np.ndarray = None
    enddir: np.ndarray = None
    len_cm: float = -1.0

    # Fixed-length attributes
    _fixed_length_attrs = (("start", 3), ("end", 3), ("dir", 3), ("enddir", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("start", "end")

    # Attributes specifying vector components
    _vec_attrs = ("dir", "enddir")


@dataclass(eq=False)
class Shower(DataBase):
    """Reconstructed shower information.

    Attributes
    ----------
    Evis : float
        Visible energy in MeV
    start : np.ndarray
        (3) Shower start point in cm
    direction : np.ndarray
        (3) Shower direction
    """

    Evis: float = -1.0
    start: np.ndarray = None
    direction: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("start", 3), ("direction", 3))

    # Attributes specifying coordinates
    _pos_attrs = ("start",)

    # Attributes specifying vector components
    _vec_attrs = ("direction",)


@dataclass(eq=False)
class NDLArInteraction(DataBase):
    """Reconstructed objects attached to one interaction in ND-LAr.

    Entries of this type live in a list which runs parallel to the list of
    :class:`RecoInteraction` objects: both share the same positions.

    Attributes
    ----------
    tracks : List[Track]
        Tracks which belong to the interaction
    ntracks : int
        Number of tracks
    showers : List[Shower]
        Showers which belong to the interaction
    nshowers : int
        Number of showers
    """

    tracks: List[Track] = field(default_factory=list)
    ntracks: int = 0
    showers: List[Shower] = field(default_factory=list)
    nshowers: int = 0

    def add_track(self, track):
        """Appends a track and updates the track counter."""
        self.tracks.append(track)
        self.ntracks += 1

    def add_shower(self, shower):
        """Appends a shower and updates the shower counter."""
        self.showers.append(shower)
        self.nshowers += 1
