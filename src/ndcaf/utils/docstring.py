"""Docstring inheritance utilities."""

import re

# Matches a numpy-style attribute block header, whatever its indentation
HEADER_RE = re.compile(r"Attributes\n( *)----------\n")


def inherit_docstring(*parents):
    """Appends the `Attributes` block of parent classes to a class docstring.

    Only handles numpy-style docstrings.

    Parameters
    ----------
    *parents : List[object]
        Parent class(es) to inherit attributes from

    Returns
    -------
    callable
        Decorator which updates the docstring of the class it wraps
    """

    def inherit(obj):
        # If the child has no attribute block yet, add one
        doc = obj.__doc__ or ""
        match = HEADER_RE.search(doc)
        if match is None:
            tab = "    "
            doc += f"\n\n{tab}Attributes\n{tab}----------\n"
            match = HEADER_RE.search(doc)

        # Collect the attribute entries of the parents
        inherited = ""
        for parent in parents:
            parent_doc = parent.__doc__ or ""
            parent_match = HEADER_RE.search(parent_doc)
            if parent_match is None:
                continue
            block = parent_doc[parent_match.end() :]
            inherited += block.split("\n\n")[0].rstrip() + "\n"

        # Insert them at the top of the child attribute block
        obj.__doc__ = doc[: match.end()] + inherited + doc[match.end() :]

        return obj

    return inherit
