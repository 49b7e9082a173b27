# -*- coding: utf-8 -*-
"""
Statistics - Descriptive statistics, regression and log binning.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.
"""

from landsurf.stats.binning import (
    LogBinResult,
    cubic_spline_curve,
    log_bin,
    remove_small_bins,
)
from landsurf.stats.descriptive import (
    LinearFit,
    mean,
    median,
    percentile,
    simple_linear_regression,
    stddev,
    stderr,
)

__all__ = [
    'LogBinResult',
    'cubic_spline_curve',
    'log_bin',
    'remove_small_bins',
    'LinearFit',
    'mean',
    'median',
    'percentile',
    'simple_linear_regression',
    'stddev',
    'stderr',
]
