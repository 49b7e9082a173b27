# -*- coding: utf-8 -*-
"""
Descriptive Statistics - Sample statistics and least-squares line fits.

All functions take a 1D sequence of already-filtered samples (nodata
removed by the caller). Sample standard deviation uses the unbiased
``n - 1`` denominator and is 0.0 for a single sample.

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
from typing import NamedTuple

# Third-party
import numpy as np

# landsurf internal
from landsurf.exceptions import ValidationError


class LinearFit(NamedTuple):
    """Result of ``simple_linear_regression``."""

    slope: float
    intercept: float
    r_squared: float
    durbin_watson: float
    residuals: np.ndarray


def _samples(values) -> np.ndarray:
    arr = np.asarray(values, dtype=np.float64).ravel()
    if arr.size == 0:
        raise ValidationError("Statistic requested on an empty sample")
    return arr


def mean(values) -> float:
    return float(np.mean(_samples(values)))


def median(values) -> float:
    """Median; even-length samples average the two middle values."""
    return float(np.median(_samples(values)))


def stddev(values) -> float:
    arr = _samples(values)
    if arr.size < 2:
        return 0.0
    return float(np.std(arr, ddof=1))


def stderr(values) -> float:
    arr = _samples(values)
    return stddev(arr) / np.sqrt(arr.size)


def percentile(values, q: float) -> float:
    """Value below which *q* percent of the sample falls (linear interpolation)."""
    if not 0.0 <= q <= 100.0:
        raise ValidationError(f"Percentile must be in [0, 100], got {q}")
    return float(np.percentile(_samples(values), q))


def simple_linear_regression(x, y) -> LinearFit:
    """Ordinary least-squares fit of ``y = slope * x + intercept``.

    Parameters
    ----------
    x, y : array_like
        Equal-length 1D samples with at least two distinct x values.

    Returns
    -------
    LinearFit
        Slope, intercept, coefficient of determination, the Durbin-Watson
        statistic of the residuals and the residuals themselves.

    Raises
    ------
    ValidationError
        If the inputs differ in length or x has no spread.
    """
    x = _samples(x)
    y = _samples(y)
    if x.size != y.size:
        raise ValidationError(
            f"x and y must have equal length, got {x.size} and {y.size}"
        )
    x_mean = x.mean()
    y_mean = y.mean()
    sxx = np.sum((x - x_mean) ** 2)
    if sxx == 0:
        raise ValidationError("Cannot regress on x values with zero spread")
    slope = np.sum((x - x_mean) * (y - y_mean)) / sxx
    intercept = y_mean - slope * x_mean
    residuals = y - (slope * x + intercept)

    sst = np.sum((y - y_mean) ** 2)
    sse = np.sum(residuals ** 2)
    r_squared = 1.0 - sse / sst if sst > 0 else 1.0
    durbin_watson = np.sum(np.diff(residuals) ** 2) / sse if sse > 0 else 0.0
    return LinearFit(float(slope), float(intercept), float(r_squared),
                     float(durbin_watson), residuals)
