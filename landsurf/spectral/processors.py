# -*- coding: utf-8 -*-
"""
Spectral Processors - Tunable processor wrappers around ``SpectralSurface``.

``SpectralFilter`` is a ``GridTransform`` that filters a grid in the
frequency domain; ``SpectralAnalysis`` produces a ``SpectralReport``.
Parameters are declared as ``Annotated`` fields and may be overridden per
call::

    lowpass = SpectralFilter(filter_type='lowpass', f_low=0.01, f_high=0.02)
    smooth = lowpass.apply(dem)
    smoother = lowpass.apply(dem, f_low=0.005)

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

# Standard library
import logging
from typing import Annotated, Any

# landsurf internal
from landsurf.processing.base import GridProcessor, GridTransform
from landsurf.processing.params import Desc, Range
from landsurf.processing.versioning import processor_tags, processor_version
from landsurf.raster.grid import Grid
from landsurf.spectral.report import SpectralReport
from landsurf.spectral.surface import SpectralSurface, parse_filter_type
from landsurf.spectral.transforms import (
    WIENER_FIT_HIGH,
    WIENER_FIT_LOW,
    WIENER_NOISE_THRESHOLD,
)
from landsurf.vocabulary import FilterType, ProcessorCategory

logger = logging.getLogger(__name__)


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.FFT,
                description='Frequency-domain bandpass/lowpass/highpass/Wiener filter')
class SpectralFilter(GridTransform):
    """Frequency-domain filter of an elevation grid.

    Parameters
    ----------
    filter_type : str
        ``'bandpass'``, ``'lowpass'``, ``'highpass'`` or ``'wiener'``.
    f_low, f_high : float
        Frequency bounds in cycles per map unit, ``f_low <= f_high``.
    fit_low, fit_high : float
        Wiener power-law fit band.
    noise_threshold : float
        Frequency above which the Wiener filter treats power as noise.

    Raises
    ------
    InvalidFilterTypeError
        If *filter_type* is not recognised.
    """

    filter_type: Annotated[str, Desc('Filter shape')] = FilterType.LOWPASS.value
    f_low: Annotated[float, Range(min=0.0), Desc('Lower frequency bound')] = 0.0
    f_high: Annotated[float, Range(min=0.0), Desc('Upper frequency bound')] = 0.0
    fit_low: Annotated[float, Range(min=0.0),
                       Desc('Wiener fit band lower frequency')] = WIENER_FIT_LOW
    fit_high: Annotated[float, Range(min=0.0),
                        Desc('Wiener fit band upper frequency')] = WIENER_FIT_HIGH
    noise_threshold: Annotated[float, Range(min=0.0),
                               Desc('Wiener noise frequency')] = WIENER_NOISE_THRESHOLD

    def __post_init__(self) -> None:
        parse_filter_type(self.filter_type)

    def apply(self, source: Grid, **kwargs: Any) -> Grid:
        params = self._resolve_params(kwargs)
        filter_type = parse_filter_type(params['filter_type'])
        surface = SpectralSurface(source)
        self._report_progress(kwargs, 0.0)
        if filter_type is FilterType.WIENER:
            result = surface.wiener(params['fit_low'], params['fit_high'],
                                    params['noise_threshold'])
        else:
            result = surface.filter(filter_type, params['f_low'],
                                    params['f_high'])
        self._report_progress(kwargs, 1.0)
        return result


@processor_version('1.0.0')
@processor_tags(category=ProcessorCategory.ANALYZE,
                description='Windowed 2D and radially averaged power spectrum')
class SpectralAnalysis(GridProcessor):
    """Power-spectrum report of an elevation grid."""

    log_bin_width: Annotated[float, Range(min=0.001, max=2.0),
                             Desc('Radial PSD bin width in log10 frequency')] = 0.1

    def analyze(self, source: Grid, **kwargs: Any) -> SpectralReport:
        params = self._resolve_params(kwargs)
        self._report_progress(kwargs, 0.0)
        report = SpectralSurface(source).analyze(params['log_bin_width'])
        self._report_progress(kwargs, 1.0)
        return report
