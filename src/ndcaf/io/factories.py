"""Functions that instantiate IO tools from configuration blocks."""

from ndcaf.utils.factory import instantiate, module_dict

from . import read, write

READER_DICT = module_dict(read)
WRITER_DICT = module_dict(write)

__all__ = ["reader_factory", "writer_factory"]


def reader_factory(reader_cfg, **kwargs):
    """Instantiates reader based on type specified in configuration under
    `io.reader.name`. The name must match the name of a class under
    `ndcaf.io.read`.

    Parameters
    ----------
    reader_cfg : Union[str, dict]
        Reader configuration dictionary
    **kwargs : dict, optional
        Additional parameters to pass to the reader constructor

    Returns
    -------
    object
        Reader object
    """
    return instantiate(READER_DICT, reader_cfg, **kwargs)


def writer_factory(writer_cfg):
    """Instantiates writer based on type specified in configuration under
    `io.writer.name`. The name must match the name of a class under
    `ndcaf.io.write`.

    Parameters
    ----------
    writer_cfg : Union[str, dict]
        Writer configuration dictionary

    Returns
    -------
    object
        Writer object

    Note
    ----
    Currently the choice is limited to `CSVWriter` only.
    """
    return instantiate(WRITER_DICT, writer_cfg)
