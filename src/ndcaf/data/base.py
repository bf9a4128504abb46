"""Module with the parent class of all record and input row types."""

from dataclasses import asdict, dataclass

import numpy as np

__all__ = ["DataBase"]


@dataclass(eq=False)
class DataBase:
    """Parent class of all record and input row types.

    Subclasses declare which of their attributes need special treatment
    through the class-level tuples below.
    """

    # Enumerated attributes as (key, ((label, value), ...)) pairs
    _enum_attrs = ()

    # Fixed-length vectors as (key, size) or (key, (size, dtype)) pairs
    _fixed_length_attrs = ()

    # Vectors which represent points in space (or space-time)
    _pos_attrs = ()

    # Vectors which represent directions or momenta
    _vec_attrs = ()

    # Booleans, stored as uint8 in HDF5 files
    _bool_attrs = ()

    # Labels of the vector components
    _axes = ("x", "y", "z", "t")

    def __post_init__(self):
        """Normalizes attributes after construction.

        - Vectors left to `None` are replaced by a fresh array of `-inf`.
          Vectors provided as sequences are cast to arrays.
        - Booleans read back from HDF5 come as integers and are cast back.
        """
        for attr, size in self._fixed_length_attrs:
            value = getattr(self, attr)
            if value is None:
                size, dtype = size if isinstance(size, tuple) else (size, np.float64)
                value = np.full(size, -np.inf, dtype=dtype)
            setattr(self, attr, np.asarray(value))

        for attr in self._bool_attrs:
            value = getattr(self, attr)
            if isinstance(value, (int, np.integer, np.bool_)):
                setattr(self, attr, bool(value))

    def __eq__(self, other):
        """Compares two objects attribute by attribute.

        Vectors are compared element-wise and nested objects (or lists of
        them) recursively, through their own `__eq__`.

        Parameters
        ----------
        other : object
            Object to compare to

        Returns
        -------
        bool
            `True` if both objects are of the same class with equal attributes
        """
        if self.__class__ != other.__class__:
            return False

        for key, value in self.__dict__.items():
            other_value = getattr(other, key)
            if isinstance(value, np.ndarray):
                if value.shape != other_value.shape or np.any(value != other_value):
                    return False
            elif value != other_value:
                return False

        return True

    def as_dict(self):
        """Returns the attributes as a dictionary, nested objects included."""
        return asdict(self)

    def scalar_dict(self, attrs=None):
        """Flattens the object into a dictionary of scalars (one CSV row).

        Vectors are expanded into one key per component, suffixed with the
        axis label (positions and directions) or the component index (other
        vectors). Nested objects and lists are left out, unless explicitly
        requested, in which case they raise.

        Parameters
        ----------
        attrs : List[str], optional
            Attributes to include. All flattenable attributes if not provided.

        Returns
        -------
        dict
            Flattened attribute names and their values
        """
        keys = list(self.__dict__) if attrs is None else list(attrs)
        missing = [k for k in keys if k not in self.__dict__]
        if missing:
            raise AttributeError(
                f"Attribute(s) {missing} do(es) not appear in "
                f"{self.__class__.__name__}."
            )

        row = {}
        vector_sizes = self.fixed_length_attrs
        for key in keys:
            value = getattr(self, key)
            if np.isscalar(value):
                row[key] = value
            elif key in self._pos_attrs or key in self._vec_attrs:
                row.update({f"{key}_{self._axes[i]}": v for i, v in enumerate(value)})
            elif key in vector_sizes:
                row.update({f"{key}_{i}": v for i, v in enumerate(value)})
            elif attrs is not None:
                raise ValueError(
                    f"Cannot flatten the `{key}` attribute of "
                    f"`{self.__class__.__name__}` to scalars."
                )

        return row

    def enum_label(self, attr):
        """Returns the label of the current value of an enumerated attribute.

        Parameters
        ----------
        attr : str
            Name of the enumerated attribute

        Returns
        -------
        str
            Label of the value, 'Unknown' if it has none
        """
        labels = {value: label for label, value in dict(self._enum_attrs)[attr]}

        return labels.get(getattr(self, attr), "Unknown")

    @property
    def fixed_length_attrs(self):
        """Dict[str, int]: Maps each fixed-length vector onto its length."""
        return {
            k: v[0] if isinstance(v, tuple) else v for k, v in self._fixed_length_attrs
        }
