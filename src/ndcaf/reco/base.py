"""Contains the base class of all reconstruction branch fillers."""

from abc import ABC, abstractmethod

from ndcaf.utils.logger import logger

__all__ = ["RecoBranchFiller"]


class RecoBranchFiller(ABC):
    """Base class of all reconstruction branch fillers.

    A branch filler reads the output of one reconstruction chain and fills
    the corresponding branches of the record, one event at a time.

    This base class performs the following functions:
      - Refuses to fill a record if the filler was not properly configured
      - Holds the truth matcher used to resolve references to true objects

    Attributes
    ----------
    name : str
        Name of the branch filler as defined in the configuration file
    configured : bool
        Whether the filler is ready to fill records
    truth_matcher : TruthMatcher
        Resolves true interactions and particles, if provided
    """

    name = ""

    def __init__(self, truth_matcher=None):
        """Initialize default branch filler properties.

        Parameters
        ----------
        truth_matcher : TruthMatcher, optional
            Resolves true interactions and particles against the generator
            stream
        """
        self.configured = False
        self.truth_matcher = truth_matcher

    def __len__(self):
        """Number of entries the filler can process."""
        raise NotImplementedError

    def fill_reco_branches(self, entry, record, run_info=None):
        """Fills the branches of the record for one entry.

        Parameters
        ----------
        entry : int
            Entry index in the reconstruction input
        record : StandardRecord
            Record to fill
        run_info : DLPRunInfo, optional
            Run and sub-run to store in the metadata. If not provided, the
            filler is free to take them from its input.
        """
        if not self.configured:
            raise RuntimeError(
                f"Branch filler `{self.name}` must be configured before "
                "it can fill records."
            )

        logger.debug("Filling reconstruction branches of entry %d with `%s`.", entry, self.name)

        self._fill_reco_branches(entry, record, run_info)

    @abstractmethod
    def _fill_reco_branches(self, entry, record, run_info):
        """Place-holder method to be defined in each branch filler.

        Parameters
        ----------
        entry : int
            Entry index in the reconstruction input
        record : StandardRecord
            Record to fill
        run_info : DLPRunInfo
            Run and sub-run to store in the metadata
        """
        raise NotImplementedError
