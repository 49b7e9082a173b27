# -*- coding: utf-8 -*-
"""
Log Binning - Aggregate (x, y) samples into logarithmically spaced x bins.

Used for slope-area plots in basin hillslope-length estimation and for
binning radially averaged power spectra. Bins are ``bin_width`` wide in
log10(x) and start at ``floor(log10(min x) / bin_width) * bin_width``.

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
from dataclasses import dataclass
from typing import Optional, Tuple

# Third-party
import numpy as np
from scipy.interpolate import CubicSpline

# landsurf internal
from landsurf.exceptions import ValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogBinResult:
    """Per-bin statistics from ``log_bin``.

    All arrays have one entry per bin in ascending x order. Empty bins have
    ``counts == 0`` and NaN statistics.

    Attributes
    ----------
    mean_x, mean_y : np.ndarray
        Bin means.
    midpoints : np.ndarray
        Bin centres in linear x units, ``10 ** (lower + (k + 0.5) * width)``.
    std_x, std_y : np.ndarray
        Unbiased sample standard deviations (0 for single-sample bins).
    stderr_x, stderr_y : np.ndarray
        Standard errors, ``std / sqrt(count)``.
    counts : np.ndarray
        Number of samples in each bin.
    lower_limit : float
        log10 of the lower edge of the first bin.
    bin_width : float
        Bin width in log10 units.
    """

    mean_x: np.ndarray
    mean_y: np.ndarray
    midpoints: np.ndarray
    std_x: np.ndarray
    std_y: np.ndarray
    stderr_x: np.ndarray
    stderr_y: np.ndarray
    counts: np.ndarray
    lower_limit: float
    bin_width: float

    def __len__(self) -> int:
        return len(self.counts)

    def select(self, keep: np.ndarray) -> 'LogBinResult':
        """Return a result holding only the bins where *keep* is True."""
        return LogBinResult(
            self.mean_x[keep], self.mean_y[keep], self.midpoints[keep],
            self.std_x[keep], self.std_y[keep], self.stderr_x[keep],
            self.stderr_y[keep], self.counts[keep],
            self.lower_limit, self.bin_width,
        )


def log_bin(x, y, bin_width: float,
            nodata: Optional[float] = None) -> LogBinResult:
    """Bin *y* by log10(*x*).

    Samples with ``x <= 0`` are skipped, as are samples where either value
    equals *nodata*.

    Parameters
    ----------
    x, y : array_like
        Samples of equal size (any shape; flattened).
    bin_width : float
        Bin width in log10 units. Must be positive.
    nodata : float, optional
        Sentinel to exclude.

    Returns
    -------
    LogBinResult

    Raises
    ------
    ValidationError
        If the sizes differ, *bin_width* is not positive or no sample
        survives filtering.

    Examples
    --------
    >>> res = log_bin([1, 2, 4, 8, 16, 32], [1] * 6, 0.3)
    >>> res.mean_y.tolist()
    [1.0, 1.0, 1.0, 1.0, 1.0, 1.0]
    """
    x = np.asarray(x, dtype=np.float64).ravel()
    y = np.asarray(y, dtype=np.float64).ravel()
    if x.size != y.size:
        raise ValidationError(
            f"x and y must have the same size, got {x.size} and {y.size}"
        )
    if not bin_width > 0:
        raise ValidationError(f"bin_width must be positive, got {bin_width}")

    keep = x > 0
    if nodata is not None:
        keep &= (x != nodata) & (y != nodata)
    x = x[keep]
    y = y[keep]
    if x.size == 0:
        raise ValidationError("No positive, valid samples to bin")

    log_x = np.log10(x)
    lower = np.floor(log_x.min() / bin_width) * bin_width
    index = np.floor((log_x - lower) / bin_width).astype(np.int64)
    index = np.clip(index, 0, None)
    n_bins = int(index.max()) + 1

    counts = np.bincount(index, minlength=n_bins)
    with np.errstate(invalid='ignore', divide='ignore'):
        mean_x = np.bincount(index, weights=x, minlength=n_bins) / counts
        mean_y = np.bincount(index, weights=y, minlength=n_bins) / counts
        std_x = _binned_std(index, x, mean_x, counts)
        std_y = _binned_std(index, y, mean_y, counts)
        stderr_x = std_x / np.sqrt(counts)
        stderr_y = std_y / np.sqrt(counts)
    midpoints = 10.0 ** (lower + (np.arange(n_bins) + 0.5) * bin_width)

    logger.debug("Log-binned %d samples into %d bins (width %.3f)",
                 x.size, n_bins, bin_width)
    return LogBinResult(mean_x, mean_y, midpoints, std_x, std_y,
                        stderr_x, stderr_y, counts, float(lower),
                        float(bin_width))


def _binned_std(index: np.ndarray, values: np.ndarray, means: np.ndarray,
                counts: np.ndarray) -> np.ndarray:
    sq = np.bincount(index, weights=(values - means[index]) ** 2,
                     minlength=len(counts))
    std = np.sqrt(sq / (counts - 1))
    std[counts == 1] = 0.0
    std[counts == 0] = np.nan
    return std


def remove_small_bins(result: LogBinResult, threshold: float) -> LogBinResult:
    """Drop empty bins and bins holding less than *threshold* of all samples.

    Parameters
    ----------
    result : LogBinResult
        Output of ``log_bin``.
    threshold : float
        Minimum fraction (0 to 1) of the total sample count a bin must hold.
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValidationError(
            f"Bin threshold must be a fraction in [0, 1], got {threshold}"
        )
    total = result.counts.sum()
    keep = (result.counts > 0) & (result.counts >= threshold * total)
    logger.debug("Keeping %d of %d bins", int(keep.sum()), len(result))
    return result.select(keep)


def cubic_spline_curve(x, y, resolution: int) -> Tuple[np.ndarray, np.ndarray]:
    """Sample a natural cubic spline through (*x*, *y*).

    Parameters
    ----------
    x, y : array_like
        Knots with strictly increasing *x*. At least two are needed.
    resolution : int
        Number of evaluation points between consecutive knots.

    Returns
    -------
    spline_x, spline_y : np.ndarray
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.size < 2:
        raise ValidationError("A spline needs at least two knots")
    if resolution < 1:
        raise ValidationError(f"Spline resolution must be >= 1, got {resolution}")
    spline = CubicSpline(x, y, bc_type='natural')
    spline_x = np.linspace(x[0], x[-1], (x.size - 1) * resolution + 1)
    return spline_x, spline(spline_x)
