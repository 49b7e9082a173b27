# -*- coding: utf-8 -*-
"""
Raster - Grid container, raster I/O and network skeletonization.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.
"""

from landsurf.raster.grid import DEFAULT_NODATA, Grid, is_empty
from landsurf.raster.io import read_grid, write_grid
from landsurf.raster.skeleton import thin_to_single_thread_network

__all__ = [
    'DEFAULT_NODATA',
    'Grid',
    'is_empty',
    'read_grid',
    'write_grid',
    'thin_to_single_thread_network',
]
