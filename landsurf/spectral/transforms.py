# -*- coding: utf-8 -*-
"""
Spectral Transforms - Stage functions of the 2D spectral pipeline.

Pure functions for each stage: planar detrend, elliptical Hann window,
power-of-two zero padding, unnormalized forward/inverse DFT, quadrant
shift, 2D power spectral density and its radial average. Frequency-domain
filter weights live here too. Every function returns new arrays and never
writes into its inputs.

Spectra are carried as separate real and imaginary float arrays. In the
shifted layout the zero frequency sits at ``(Ly / 2, Lx / 2)``.

Dependencies
------------
numpy
scipy

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
from typing import NamedTuple, Tuple

# Third-party
import numpy as np
from scipy.linalg import lu_factor, lu_solve

# landsurf internal
from landsurf.exceptions import (
    InvalidDirectionError,
    ProcessorError,
    SingularFitError,
    ValidationError,
)
from landsurf.stats.descriptive import simple_linear_regression

logger = logging.getLogger(__name__)

FORWARD = -1
INVERSE = 1

# Wiener power-law fit band (wavelengths 1000 m to 100 m) and the
# frequency above which the spectrum is treated as white noise.
WIENER_FIT_LOW = 0.001
WIENER_FIT_HIGH = 0.01
WIENER_NOISE_THRESHOLD = 10 ** -0.7


class RadialSpectrum(NamedTuple):
    """Radially averaged PSD, ascending by frequency."""

    frequency: np.ndarray
    power: np.ndarray
    counts: np.ndarray


# =====================================================================
# Spatial-domain stages
# =====================================================================

def detrend(data: np.ndarray, nodata: float) -> Tuple[np.ndarray, np.ndarray]:
    """Remove the least-squares plane ``z = a x + b y + c``.

    ``x`` is the column index and ``y`` the row index. The plane is fit
    over valid cells only, through the 3x3 normal equations solved by LU
    decomposition.

    Parameters
    ----------
    data : np.ndarray
        2D surface.
    nodata : float
        Sentinel marking cells to exclude.

    Returns
    -------
    detrended : np.ndarray
        ``z - plane`` on valid cells and 0 on nodata cells.
    trend : np.ndarray
        The fitted plane evaluated on every cell.

    Raises
    ------
    SingularFitError
        If fewer than three valid cells exist or they are collinear. Also
        raised when a valid cell holds an infinite value.
    """
    valid = data != nodata
    rows, cols = np.indices(data.shape, dtype=np.float64)
    x, y, z = cols[valid], rows[valid], data[valid]
    if z.size < 3:
        raise SingularFitError(
            f"Planar detrend needs at least 3 valid cells, got {z.size}"
        )
    if not np.isfinite(z).all():
        raise SingularFitError(
            "Planar detrend found non-finite values in valid cells"
        )

    A = np.array([
        [np.sum(x * x), np.sum(x * y), np.sum(x)],
        [np.sum(x * y), np.sum(y * y), np.sum(y)],
        [np.sum(x), np.sum(y), float(z.size)],
    ])
    b = np.array([np.sum(z * x), np.sum(z * y), np.sum(z)])
    if np.linalg.matrix_rank(A) < 3:
        raise SingularFitError(
            "Planar detrend normal equations are singular; valid cells "
            "are collinear"
        )
    coeffs = lu_solve(lu_factor(A), b)

    trend = coeffs[0] * cols + coeffs[1] * rows + coeffs[2]
    detrended = np.where(valid, data - trend, 0.0)
    logger.debug("Detrended plane: a=%.6g b=%.6g c=%.6g", *coeffs)
    return detrended, trend


def hann_window(data: np.ndarray) -> Tuple[np.ndarray, np.ndarray, float]:
    """Apply an elliptical Hann taper.

    The ellipse has half-axes ``a = (cols - 1) / 2`` and
    ``b = (rows - 1) / 2`` about the array centre. A cell at distance
    ``r`` from the centre, whose direction meets the ellipse at ``r'``,
    gets weight ``0.5 * (1 + cos(pi * r / r'))`` when ``r < r'`` and 0
    otherwise.

    Returns
    -------
    windowed : np.ndarray
        ``data * weights``.
    weights : np.ndarray
        Window coefficients.
    wss : float
        Sum of squared weights.
    """
    ny, nx = data.shape
    a = (nx - 1) / 2.0
    b = (ny - 1) / 2.0
    rows, cols = np.indices(data.shape, dtype=np.float64)
    dx = cols - a
    dy = rows - b
    theta = np.where(cols == a, np.pi / 2, np.arctan2(dy, dx))
    r = np.hypot(dx, dy)
    denom = b ** 2 * np.cos(theta) ** 2 + a ** 2 * np.sin(theta) ** 2
    with np.errstate(divide='ignore', invalid='ignore'):
        r_edge = np.sqrt(a ** 2 * b ** 2 / denom)
        weights = np.where(r < r_edge,
                           0.5 * (1.0 + np.cos(np.pi * r / r_edge)), 0.0)
    weights = np.nan_to_num(weights, nan=0.0)
    wss = float(np.sum(weights ** 2))
    return data * weights, weights, wss


def padded_shape(rows: int, cols: int) -> Tuple[int, int]:
    """Next powers of two at or above *rows* and *cols* (minimum 2)."""
    def _pow2(n: int) -> int:
        return max(2, 1 << (int(n) - 1).bit_length())
    return _pow2(rows), _pow2(cols)


def pad(data: np.ndarray, ly: int, lx: int) -> np.ndarray:
    """Zero-pad *data* to ``(ly, lx)`` with the data in the top-left."""
    rows, cols = data.shape
    if ly < rows or lx < cols:
        raise ValidationError(
            f"Padded shape ({ly}, {lx}) is smaller than data {data.shape}"
        )
    out = np.zeros((ly, lx), dtype=np.float64)
    out[:rows, :cols] = data
    return out


# =====================================================================
# Frequency-domain stages
# =====================================================================

def fft_forward(data: np.ndarray,
                direction: int = FORWARD) -> Tuple[np.ndarray, np.ndarray]:
    """Unnormalized forward 2D DFT of a real array.

    Returns
    -------
    real, imaginary : np.ndarray

    Raises
    ------
    InvalidDirectionError
        If *direction* is not ``FORWARD`` (-1).
    """
    if direction != FORWARD:
        raise InvalidDirectionError(
            f"Forward transform requires direction {FORWARD}, got {direction}"
        )
    spectrum = np.fft.fft2(data)
    return spectrum.real.copy(), spectrum.imag.copy()


def fft_inverse(real: np.ndarray, imaginary: np.ndarray,
                direction: int = INVERSE) -> Tuple[np.ndarray, np.ndarray]:
    """Unnormalized inverse 2D DFT.

    The caller divides the result by ``Ly * Lx`` to recover the input of
    ``fft_forward``.

    Raises
    ------
    InvalidDirectionError
        If *direction* is not ``INVERSE`` (1).
    """
    if direction != INVERSE:
        raise InvalidDirectionError(
            f"Inverse transform requires direction {INVERSE}, got {direction}"
        )
    if real.shape != imaginary.shape:
        raise ValidationError(
            f"Real {real.shape} and imaginary {imaginary.shape} parts differ"
        )
    out = np.fft.ifft2(real + 1j * imaginary, norm='forward')
    return out.real.copy(), out.imag.copy()


def _swap_quadrants(a: np.ndarray) -> np.ndarray:
    ly, lx = a.shape
    if ly % 2 or lx % 2:
        raise ValidationError(
            f"Quadrant shift needs even dimensions, got {a.shape}"
        )
    h, w = ly // 2, lx // 2
    return np.block([[a[h:, w:], a[h:, :w]],
                     [a[:h, w:], a[:h, :w]]])


def shift_spectrum(real: np.ndarray,
                   imaginary: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Move the zero frequency from the corner to the centre.

    Swaps top-left with bottom-right and top-right with bottom-left.
    """
    return _swap_quadrants(real), _swap_quadrants(imaginary)


def unshift_spectrum(real: np.ndarray,
                     imaginary: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Inverse of ``shift_spectrum``."""
    # A diagonal quadrant swap on even dimensions is its own inverse.
    return _swap_quadrants(real), _swap_quadrants(imaginary)


def psd_2d(real_shift: np.ndarray, imag_shift: np.ndarray,
           wss: float) -> np.ndarray:
    """2D power spectral density ``(re^2 + im^2) / (Ly * Lx * wss)``.

    Parameters
    ----------
    real_shift, imag_shift : np.ndarray
        Shifted spectrum.
    wss : float
        Sum of squared window weights; 1.0 for an unwindowed surface.
    """
    if not wss > 0:
        raise ValidationError(f"Window sum of squares must be positive, got {wss}")
    ly, lx = real_shift.shape
    return (real_shift ** 2 + imag_shift ** 2) / (ly * lx * wss)


def radial_frequency_grid(ly: int, lx: int, cell_size: float) -> np.ndarray:
    """Radial frequency of every cell of a shifted ``(ly, lx)`` spectrum."""
    dfy = 1.0 / (cell_size * ly)
    dfx = 1.0 / (cell_size * lx)
    rows, cols = np.indices((ly, lx), dtype=np.float64)
    return np.hypot((rows - ly // 2) * dfy, (cols - lx // 2) * dfx)


def radial_psd(psd: np.ndarray, cell_size: float) -> RadialSpectrum:
    """Collapse a shifted 2D PSD to a radially averaged 1D spectrum.

    Only the half spectrum ``cols <= Lx / 2`` is scanned, so power is
    doubled to account for the conjugate half. Cells beyond the Nyquist
    frequency ``1 / (2 cell_size)`` are dropped. Cells are sorted by
    frequency and exactly equal frequencies are averaged.

    Returns
    -------
    RadialSpectrum
        Unique frequencies, mean power at each, and the number of cells
        averaged.
    """
    ly, lx = psd.shape
    freq = radial_frequency_grid(ly, lx, cell_size)[:, :lx // 2 + 1]
    power = 2.0 * psd[:, :lx // 2 + 1]
    keep = freq <= 1.0 / (2.0 * cell_size)
    freq, power = freq[keep], power[keep]

    order = np.argsort(freq, kind='stable')
    unique, inverse, counts = np.unique(freq[order], return_inverse=True,
                                        return_counts=True)
    mean_power = np.bincount(inverse, weights=power[order]) / counts
    logger.debug("Radial PSD: %d cells in %d frequency groups",
                 freq.size, unique.size)
    return RadialSpectrum(unique, mean_power, counts)


# =====================================================================
# Filter weights
# =====================================================================

def _check_band(f_low: float, f_high: float) -> None:
    if f_low < 0 or f_high < 0:
        raise ValidationError(
            f"Filter frequencies must be non-negative, got ({f_low}, {f_high})"
        )
    if f_low > f_high:
        raise ValidationError(
            f"Lower filter frequency {f_low} exceeds upper {f_high}"
        )


def bandpass_weights(freq: np.ndarray, f_low: float, f_high: float) -> np.ndarray:
    """Gaussian centred on ``(f_low + f_high) / 2``, sigma ``(f_high - f_low) / 6``."""
    _check_band(f_low, f_high)
    if f_low == f_high:
        raise ValidationError("Bandpass filter needs f_low < f_high")
    sigma = (f_high - f_low) / 6.0
    centre = 0.5 * (f_low + f_high)
    return np.exp(-(freq - centre) ** 2 / (2.0 * sigma ** 2))


def lowpass_weights(freq: np.ndarray, f_low: float, f_high: float) -> np.ndarray:
    """1 up to *f_low*, Gaussian taper above it (hard cut when equal)."""
    _check_band(f_low, f_high)
    if f_high > f_low:
        sigma = (f_high - f_low) / 3.0
        taper = np.exp(-(freq - f_low) ** 2 / (2.0 * sigma ** 2))
    else:
        taper = np.zeros_like(freq)
    return np.where(freq <= f_low, 1.0, taper)


def highpass_weights(freq: np.ndarray, f_low: float, f_high: float) -> np.ndarray:
    """1 from *f_high* up, Gaussian taper below it (hard cut when equal)."""
    _check_band(f_low, f_high)
    if f_high > f_low:
        sigma = (f_high - f_low) / 3.0
        taper = np.exp(-(freq - f_high) ** 2 / (2.0 * sigma ** 2))
    else:
        taper = np.zeros_like(freq)
    return np.where(freq >= f_high, 1.0, taper)


def wiener_weights(freq: np.ndarray, radial: RadialSpectrum,
                   fit_low: float = WIENER_FIT_LOW,
                   fit_high: float = WIENER_FIT_HIGH,
                   noise_threshold: float = WIENER_NOISE_THRESHOLD) -> np.ndarray:
    """Signal / (signal + noise) weights from a power-law spectrum model.

    A line is fit to ``log10(power)`` against ``log10(frequency)`` over
    ``fit_low <= f <= fit_high``, giving ``model = c f^m``. Noise is the
    mean radial power at ``f >= noise_threshold``. Weight is 1 at zero
    frequency.

    Raises
    ------
    ProcessorError
        If fewer than two radial frequencies fall in the fit band or none
        reach the noise threshold.
    """
    band = ((radial.frequency >= fit_low) & (radial.frequency <= fit_high)
            & (radial.power > 0))
    if np.count_nonzero(band) < 2:
        raise ProcessorError(
            f"Wiener fit band [{fit_low}, {fit_high}] holds "
            f"{np.count_nonzero(band)} radial frequencies; need at least 2"
        )
    noisy = radial.frequency >= noise_threshold
    if not np.any(noisy):
        raise ProcessorError(
            f"No radial frequencies at or above the noise threshold "
            f"{noise_threshold:.4g}; grid resolution is too coarse"
        )

    fit = simple_linear_regression(np.log10(radial.frequency[band]),
                                   np.log10(radial.power[band]))
    noise = float(np.mean(radial.power[noisy]))
    logger.debug("Wiener model: PSD = %.4g f^%.4f, noise %.4g",
                 10 ** fit.intercept, fit.slope, noise)

    with np.errstate(divide='ignore'):
        model = 10 ** fit.intercept * np.where(freq > 0, freq, 1.0) ** fit.slope
    weights = model / (model + noise)
    weights[freq == 0] = 1.0
    return weights
