# -*- coding: utf-8 -*-
"""
Spectral Surface - Fourier analysis and frequency-domain filtering of a grid.

``SpectralSurface`` runs the stage functions of
``landsurf.spectral.transforms`` over one grid. Each call threads its
intermediate arrays through a ``SpectralState`` that lives only for that
call; the 2D and radial PSD of the most recent analysis stay on the
surface until the next call replaces them.

Filtering never windows: detrend, pad, transform, shift, weight, unshift,
inverse transform, rescale by ``1 / (Ly Lx)`` and add the trend back.
Nodata cells of the input stay nodata in the output.

Dependencies
------------
numpy

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
from dataclasses import dataclass
from typing import Optional, Union

# Third-party
import numpy as np

# landsurf internal
from landsurf.exceptions import InvalidFilterTypeError
from landsurf.raster.grid import Grid
from landsurf.spectral import transforms as tx
from landsurf.spectral.report import SpectralReport, binned_table, radial_table
from landsurf.stats.binning import log_bin
from landsurf.vocabulary import FilterType

logger = logging.getLogger(__name__)


@dataclass
class SpectralState:
    """Intermediate products of one pass through the spectral pipeline."""

    detrended: np.ndarray
    trend: np.ndarray
    ly: int
    lx: int
    wss: float
    window: Optional[np.ndarray] = None
    real: Optional[np.ndarray] = None
    imaginary: Optional[np.ndarray] = None
    real_shift: Optional[np.ndarray] = None
    imag_shift: Optional[np.ndarray] = None
    psd: Optional[np.ndarray] = None


def parse_filter_type(filter_type: Union[FilterType, str]) -> FilterType:
    """Resolve *filter_type* to a ``FilterType``.

    Raises
    ------
    InvalidFilterTypeError
        If *filter_type* names no known filter.
    """
    if isinstance(filter_type, FilterType):
        return filter_type
    try:
        return FilterType(str(filter_type).lower())
    except ValueError:
        raise InvalidFilterTypeError(
            f"Unknown filter type {filter_type!r}; expected one of "
            f"{[f.value for f in FilterType]}"
        ) from None


class SpectralSurface:
    """
    Spectral analysis of one elevation grid.

    Parameters
    ----------
    grid : Grid
        Surface to analyse. Needs at least three non-collinear valid cells.

    Attributes
    ----------
    psd_2d : np.ndarray or None
        Shifted 2D PSD of the latest analysis.
    radial : RadialSpectrum or None
        Radially averaged PSD of the latest analysis.

    Examples
    --------
    >>> surface = SpectralSurface(dem)
    >>> smooth = surface.filter('lowpass', 0.01, 0.02)
    >>> report = surface.analyze(log_bin_width=0.1)
    """

    def __init__(self, grid: Grid) -> None:
        self.grid = grid
        self.psd_2d: Optional[np.ndarray] = None
        self.radial: Optional[tx.RadialSpectrum] = None

    @property
    def padded_shape(self):
        """``(Ly, Lx)`` for the current grid."""
        return tx.padded_shape(*self.grid.shape)

    @property
    def radial_frequency(self) -> Optional[np.ndarray]:
        return None if self.radial is None else self.radial.frequency

    @property
    def radial_psd(self) -> Optional[np.ndarray]:
        return None if self.radial is None else self.radial.power

    @property
    def radial_counts(self) -> Optional[np.ndarray]:
        """Number of 2D PSD cells averaged into each radial value."""
        return None if self.radial is None else self.radial.counts

    def _transform(self, window: bool) -> SpectralState:
        detrended, trend = tx.detrend(self.grid.data, self.grid.nodata)
        ly, lx = self.padded_shape
        state = SpectralState(detrended=detrended, trend=trend,
                              ly=ly, lx=lx, wss=1.0)
        surface = detrended
        if window:
            surface, state.window, state.wss = tx.hann_window(detrended)
            logger.debug("Windowed surface, WSS=%.6g", state.wss)
        padded = tx.pad(surface, ly, lx)
        state.real, state.imaginary = tx.fft_forward(padded)
        state.real_shift, state.imag_shift = tx.shift_spectrum(
            state.real, state.imaginary)
        logger.debug("Transformed %s grid padded to (%d, %d)",
                     self.grid.shape, ly, lx)
        return state

    def _spectrum(self, state: SpectralState) -> None:
        state.psd = tx.psd_2d(state.real_shift, state.imag_shift, state.wss)
        self.psd_2d = state.psd
        self.radial = tx.radial_psd(state.psd, self.grid.cell_size)

    def _restore(self, state: SpectralState, weights: np.ndarray) -> Grid:
        real, imag = tx.unshift_spectrum(state.real_shift * weights,
                                         state.imag_shift * weights)
        inverse, _ = tx.fft_inverse(real, imag)
        rows, cols = self.grid.shape
        surface = inverse[:rows, :cols] / (state.ly * state.lx) + state.trend
        out = np.where(self.grid.valid_mask, surface, self.grid.nodata)
        return self.grid.like(out)

    def filter(self, filter_type: Union[FilterType, str],
               f_low: float = 0.0, f_high: float = 0.0) -> Grid:
        """Filter the surface in the frequency domain.

        Parameters
        ----------
        filter_type : FilterType or str
            ``bandpass``, ``lowpass``, ``highpass`` or ``wiener``.
        f_low, f_high : float
            Frequency bounds with ``f_low <= f_high``. Ignored by Wiener.

        Returns
        -------
        Grid
            Filtered surface with the input's georeferencing.

        Raises
        ------
        InvalidFilterTypeError
            If *filter_type* is not recognised.
        ValidationError
            If the frequency bounds are invalid.
        SingularFitError
            If the surface cannot be detrended.
        """
        filter_type = parse_filter_type(filter_type)
        if filter_type is FilterType.WIENER:
            return self.wiener()

        weight_fn = {
            FilterType.BANDPASS: tx.bandpass_weights,
            FilterType.LOWPASS: tx.lowpass_weights,
            FilterType.HIGHPASS: tx.highpass_weights,
        }[filter_type]
        # Validate the band before the transform work.
        weight_fn(np.zeros(1), f_low, f_high)

        state = self._transform(window=False)
        freq = tx.radial_frequency_grid(state.ly, state.lx, self.grid.cell_size)
        weights = weight_fn(freq, f_low, f_high)
        logger.info("Applied %s filter (%.4g, %.4g) to %s grid",
                    filter_type.value, f_low, f_high, self.grid.shape)
        return self._restore(state, weights)

    def wiener(self, fit_low: float = tx.WIENER_FIT_LOW,
               fit_high: float = tx.WIENER_FIT_HIGH,
               noise_threshold: float = tx.WIENER_NOISE_THRESHOLD) -> Grid:
        """Wiener-filter the surface.

        The signal model is a power law fit to the unwindowed radial PSD
        over ``[fit_low, fit_high]``; noise is the mean radial PSD above
        *noise_threshold*. The PSD computed here replaces the stored one.
        """
        state = self._transform(window=False)
        self._spectrum(state)
        freq = tx.radial_frequency_grid(state.ly, state.lx, self.grid.cell_size)
        weights = tx.wiener_weights(freq, self.radial, fit_low, fit_high,
                                    noise_threshold)
        logger.info("Applied Wiener filter to %s grid", self.grid.shape)
        return self._restore(state, weights)

    def analyze(self, log_bin_width: float = 0.1) -> SpectralReport:
        """Windowed power spectrum and its radial, log-binned summaries.

        Parameters
        ----------
        log_bin_width : float
            Width of the radial PSD bins in log10 frequency.

        Returns
        -------
        SpectralReport
        """
        state = self._transform(window=True)
        self._spectrum(state)
        bins = log_bin(self.radial.frequency, self.radial.power, log_bin_width)
        psd_grid = Grid(state.psd, nodata=self.grid.nodata,
                        cell_size=self.grid.cell_size,
                        x_min=-state.lx / 2.0, y_min=-state.ly / 2.0)
        logger.info("Spectral analysis of %s grid: %d radial frequencies, "
                    "%d bins", self.grid.shape, len(self.radial.frequency),
                    int(np.count_nonzero(bins.counts)))
        return SpectralReport(psd_grid, radial_table(self.radial),
                              binned_table(bins))
