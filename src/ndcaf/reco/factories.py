"""Functions that instantiate branch fillers from configuration blocks."""

from ndcaf.utils.factory import instantiate, module_dict

from . import dlp

FILLER_DICT = module_dict(dlp)

__all__ = ["filler_factory"]


def filler_factory(filler_cfg, reader, truth_matcher=None):
    """Instantiates a reconstruction branch filler based on the type
    specified in configuration under `reco.name`.

    Parameters
    ----------
    filler_cfg : Union[str, dict]
        Branch filler configuration dictionary
    reader : ReaderBase
        Reader of the reconstruction file
    truth_matcher : TruthMatcher, optional
        Resolves true interactions and particles

    Returns
    -------
    RecoBranchFiller
        Branch filler object
    """
    return instantiate(
        FILLER_DICT, filler_cfg, reader=reader, truth_matcher=truth_matcher
    )
