"""Functions needed to instantiate a class from a configuration block.

A YAML block of the form

.. code-block:: yaml

    reco:
      name: dlp
      legacy_shower_indexing: false

is converted into an instance of the class registered under `dlp`, with all
the remaining keys passed as keyword arguments.
"""

from copy import deepcopy

from .logger import logger

__all__ = ["module_dict", "instantiate"]


def module_dict(module, pattern=None):
    """Converts a module into a dictionary which maps names onto classes.

    Each class is registered under its own class name and, if it defines a
    non-empty `name` class attribute, under that short name as well.

    Parameters
    ----------
    module : module
        Module from which to fetch the classes
    pattern : str, optional
        If specified, only keep classes which contain this pattern

    Returns
    -------
    dict
        Dictionary which maps acceptable class names to classes themselves
    """
    mapping = {}
    for cls_name in getattr(module, "__all__", dir(module)):
        # Skip private objects
        if cls_name.startswith("_"):
            continue

        # If a pattern is specified, check for it in the class name
        cls = getattr(module, cls_name)
        if not isinstance(cls, type):
            continue
        if pattern is not None and pattern not in cls.__name__:
            continue

        # Only consider classes which belong to the module of interest
        if module.__name__ in cls.__module__:
            mapping[cls_name] = cls
            if getattr(cls, "name", ""):
                mapping[cls.name] = cls

    return mapping


def instantiate(module_dict, cfg, **kwargs):
    """Instantiates a class based on a configuration dictionary.

    Parameters
    ----------
    module_dict : dict
        Dictionary which maps a class name onto an object class
    cfg : Union[str, dict]
        Configuration dictionary, or simply the name of the class
    **kwargs : dict, optional
        Additional parameters to pass to the class constructor

    Returns
    -------
    object
        Instantiated object
    """
    # If the configuration is a string, it is a class name without parameters
    if isinstance(cfg, str):
        cfg = {"name": cfg}

    # Get the name of the class, check that it exists
    config = deepcopy(cfg)
    if "name" not in config:
        raise KeyError("Could not find the name of the class under `name`.")

    class_name = config.pop("name")
    if class_name not in module_dict:
        raise ValueError(
            f"Could not find '{class_name}' in the dictionary which maps "
            f"names to classes. Available names: {list(module_dict.keys())}"
        )

    # Caller keyword arguments must not repeat configured ones
    for key in kwargs:
        assert key not in config, (
            f"The keyword argument {key} is provided in the configuration "
            "and by the caller. Ambiguous."
        )
    config.update(kwargs)

    # Intialize
    cls = module_dict[class_name]
    try:
        return cls(**config)

    except Exception:
        logger.error(
            "Failed to instantiate %s with these arguments:\n  - kwargs: %s",
            cls.__name__,
            config,
        )
        raise
