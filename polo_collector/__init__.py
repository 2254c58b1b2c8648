"""POLO collector package bootstrap (minimal).

Python needs ``__init__.py`` to treat this directory as a package. Logic stays
out of here. For metadata and longer notes, see :mod:`polo_collector._initbase`.
"""

from ._initbase import __version__  # re-export version string

__all__ = ["__version__"]
