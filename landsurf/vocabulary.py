# -*- coding: utf-8 -*-
"""
Vocabulary - Canonical enums for the landsurf framework.

Single source of truth for controlled vocabularies: processor categories,
spectral filter types, basin aggregation statistics and output formats.

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

from enum import Enum


class ProcessorCategory(Enum):
    """Processing categories for processor tagging."""

    FILTERS = "filters"
    FFT = "fft"
    ANALYZE = "analyze"


class FilterType(Enum):
    """Frequency-domain filter shapes applied by ``SpectralSurface``.

    ``WIENER`` derives its own weights from the surface's spectrum and
    ignores the frequency bounds.
    """

    BANDPASS = "bandpass"
    LOWPASS = "lowpass"
    HIGHPASS = "highpass"
    WIENER = "wiener"


class BasinStatistic(Enum):
    """Reductions available to ``Basin.aggregate``."""

    MEAN = "mean"
    MAX = "max"
    MIN = "min"
    MEDIAN = "median"
    STDDEV = "stddev"
    STDERR = "stderr"
    RANGE = "range"
    COUNT = "count"


class OutputFormat(Enum):
    """Supported raster output formats for ``write_grid``."""

    GEOTIFF = "geotiff"
    NUMPY = "numpy"
