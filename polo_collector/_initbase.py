"""POLO collector package metadata and developer notes.

Package-level metadata lives here, *separate* from ``__init__.py``, so that
importing a subpackage never drags in side effects.

Layout:
- ``config``         -> collection config resolution + runtime settings/paths
- ``serp_client``    -> SerpAPI Google search wrapper
- ``trends_client``  -> SerpAPI Google Trends wrapper
- ``output``         -> CSV writers for raw + processed data
- ``pipeline``       -> one run: resolve, collect, write
"""

from importlib import metadata as _metadata

try:  # When installed via pip / build backend
    __version__ = _metadata.version("polo-collector")
except _metadata.PackageNotFoundError:  # Local checkout fallback
    __version__ = "0.0.0-dev"
