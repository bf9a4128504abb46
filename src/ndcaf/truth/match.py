"""Resolves truth references against the record and the generator stream.

Reconstructed objects reference true interactions by their generator ID. The
matcher returns the true interaction already stored in the record, or finds
the matching GENIE event in the generator stream, converts it and stores it.
"""

from dataclasses import dataclass

from ndcaf.data import TrueParticle, TrueParticleID
from ndcaf.errors import NotFoundError, UpstreamRecordMissingError
from ndcaf.utils.globals import PRIM_ROLE, SEC_ROLE
from ndcaf.utils.logger import logger

from .convert import TruthConverter

__all__ = ["StreamCursor", "TruthMatcher"]


@dataclass
class StreamCursor:
    """Read position in the generator stream.

    The cursor is shared across events for the duration of a run. It starts
    before the first row and is only moved by :meth:`TruthMatcher.scan`.

    Attributes
    ----------
    position : int
        Index of the last row read, -1 if no row was read yet
    """

    position: int = -1


class TruthMatcher:
    """Finds or creates the true interactions and particles of a record.

    Objects returned by the matcher are the objects stored in the record,
    never copies: modifying them modifies the record, and requesting the same
    ID twice returns the same object.

    Attributes
    ----------
    stream : GenieReader
        Random access reader of the generator event stream
    cursor : StreamCursor
        Read position in the generator stream
    converter : TruthConverter
        Converts generator events into true interactions
    """

    def __init__(self, stream, cursor=None, converter=None):
        """Initialize the matcher.

        Parameters
        ----------
        stream : GenieReader
            Random access reader of the generator event stream
        cursor : StreamCursor, optional
            Read position in the stream. A new cursor is created if not
            provided.
        converter : TruthConverter, optional
            Generator event converter. A default one is created if not
            provided.
        """
        self.stream = stream
        self.cursor = cursor if cursor is not None else StreamCursor()
        self.converter = converter if converter is not None else TruthConverter()

    def get_interaction(self, record, ixn_id, create=False):
        """Returns the true interaction with a given ID.

        Parameters
        ----------
        record : StandardRecord
            Record being filled
        ixn_id : int
            Generator-assigned interaction ID
        create : bool, default False
            If `True`, create the interaction from the generator stream when
            it is not in the record yet

        Returns
        -------
        TrueInteraction
            Interaction stored in the record

        Raises
        ------
        NotFoundError
            If the interaction is not in the record and `create` is `False`
        UpstreamRecordMissingError
            If no event of the generator stream has this ID
        """
        # Return the existing interaction, if there is one
        ixn = record.mc.find(ixn_id)
        if ixn is not None:
            return ixn

        if not create:
            raise NotFoundError(
                f"True interaction with interaction ID {ixn_id} was not found "
                "in this record.",
                ixn_id,
            )

        # Find the matching generator event, convert it, store it
        event = self.scan(ixn_id)

        return record.mc.add(self.converter.convert(event))

    def get_particle(self, record, ixn_id, part_id, is_primary, create=False):
        """Returns the true particle with a given ID in a given interaction.

        Parameters
        ----------
        record : StandardRecord
            Record being filled
        ixn_id : int
            Generator-assigned ID of the interaction the particle belongs to
        part_id : int
            G4 track ID of the particle within its interaction
        is_primary : bool
            If `True`, look in the primaries, otherwise in the secondaries
        create : bool, default False
            If `True`, create the interaction and/or the particle when they
            are not in the record yet

        Returns
        -------
        TrueParticle
            Particle stored in the record

        Raises
        ------
        NotFoundError
            If the interaction or the particle is missing and `create` is
            `False`
        """
        ixn = self.get_interaction(record, ixn_id, create)

        # Look for the particle in the appropriate collection
        collection = ixn.prim if is_primary else ixn.sec
        for part in collection:
            if part.G4ID == part_id:
                return part

        if not create:
            kind = "primary" if is_primary else "secondary"
            raise NotFoundError(
                f"True particle with interaction ID {ixn_id} and G4ID {part_id} "
                f"was not found in the {kind} true particle collection.",
                ixn_id,
                part_id,
            )

        # Append a stub particle, only its identifiers are set
        role = PRIM_ROLE if is_primary else SEC_ROLE
        part = TrueParticle(
            G4ID=part_id,
            interaction_id=ixn_id,
            ancestor_id=TrueParticleID(ixn_id, role, part_id),
        )
        collection.append(part)
        if is_primary:
            ixn.nprim += 1
        else:
            ixn.nsec += 1

        return part

    def scan(self, ixn_id):
        """Finds the generator event with a given ID.

        The scan starts one row past the cursor and wraps around the end of
        the stream, so that the last row read is checked last. Generator
        events are expected in roughly increasing ID order, which makes the
        next row the likeliest match. The worst case is a full pass over the
        stream.

        Parameters
        ----------
        ixn_id : int
            Generator-assigned interaction ID

        Returns
        -------
        GenieEvent
            Matching generator event

        Raises
        ------
        UpstreamRecordMissingError
            If no event of the stream has this ID
        """
        num_entries = self.stream.num_entries
        start = self.cursor.position
        for step in range(num_entries):
            row = (start + 1 + step) % num_entries
            event = self.stream.get(row)
            self.cursor.position = row
            if event.ievent == ixn_id:
                logger.debug(
                    "Found GENIE event %d at row %d after %d read(s).",
                    ixn_id,
                    row,
                    step + 1,
                )
                return event

        raise UpstreamRecordMissingError(ixn_id, num_entries)
