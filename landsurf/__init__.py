# -*- coding: utf-8 -*-
"""
landsurf - Drainage-basin and spectral analysis of digital elevation models.

Delineates basins over a flow-routed grid and aggregates terrain
statistics per basin, and runs the 2D spectral pipeline (detrend, window,
FFT, filter, radial power spectrum) on elevation grids.

Dependencies
------------
numpy
scipy
scikit-image
pyyaml
rasterio (optional)

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

__version__ = "0.1.0"

from landsurf.exceptions import (
    LandsurfError,
    ValidationError,
    ProcessorError,
    DependencyError,
    InvalidJunctionError,
    DimensionMismatchError,
    SingularFitError,
    InvalidDirectionError,
    InvalidFilterTypeError,
    MissingPrerequisiteError,
)
from landsurf.vocabulary import (
    BasinStatistic,
    FilterType,
    OutputFormat,
    ProcessorCategory,
)
from landsurf.raster import Grid, is_empty, read_grid, write_grid
from landsurf.flow import D8FlowTopology, FlowTopology
from landsurf.basin import Basin
from landsurf.spectral import SpectralSurface, SpectralFilter, SpectralAnalysis

__all__ = [
    'LandsurfError',
    'ValidationError',
    'ProcessorError',
    'DependencyError',
    'InvalidJunctionError',
    'DimensionMismatchError',
    'SingularFitError',
    'InvalidDirectionError',
    'InvalidFilterTypeError',
    'MissingPrerequisiteError',
    'BasinStatistic',
    'FilterType',
    'OutputFormat',
    'ProcessorCategory',
    'Grid',
    'is_empty',
    'read_grid',
    'write_grid',
    'D8FlowTopology',
    'FlowTopology',
    'Basin',
    'SpectralSurface',
    'SpectralFilter',
    'SpectralAnalysis',
]
