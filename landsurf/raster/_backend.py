# -*- coding: utf-8 -*-
"""
Raster Backend Detection - Probe for the optional rasterio dependency.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.

Created
-------
2026-10-17

Modified
--------
2026-10-17
"""

# landsurf internal
from landsurf.exceptions import DependencyError

_HAS_RASTERIO = False

try:
    import rasterio  # noqa: F401
    _HAS_RASTERIO = True
except ImportError:
    pass


def require_raster_backend() -> None:
    """Verify that rasterio is installed for GeoTIFF reading and writing.

    Raises
    ------
    DependencyError
        If rasterio is not installed. The message includes installation
        instructions.
    """
    if not _HAS_RASTERIO:
        raise DependencyError(
            "GeoTIFF I/O requires rasterio. "
            "Install with: pip install landsurf[geotiff]"
        )
