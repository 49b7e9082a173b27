# -*- coding: utf-8 -*-
"""
Fractal Surfaces - Synthetic terrain by Fourier synthesis.

White noise is transformed, its spectrum scaled by ``f ** -beta`` (zero at
the zero frequency) and transformed back, giving a surface whose radial
power spectrum falls off as a power law. Useful as a test signal for the
spectral filters.

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
from typing import Optional, Tuple

# Third-party
import numpy as np

# landsurf internal
from landsurf.exceptions import ValidationError
from landsurf.raster.grid import DEFAULT_NODATA, Grid
from landsurf.spectral import transforms as tx

logger = logging.getLogger(__name__)


def generate_fractal_surface(shape: Tuple[int, int], cell_size: float = 1.0,
                             beta: float = 1.5, seed: Optional[int] = None,
                             nodata: float = DEFAULT_NODATA) -> Grid:
    """Synthesize a fractal surface.

    Parameters
    ----------
    shape : Tuple[int, int]
        Output ``(rows, cols)``.
    cell_size : float
        Cell size of the output grid.
    beta : float
        Spectral amplitude exponent; larger is smoother.
    seed : int, optional
        Seed for the white-noise generator.
    nodata : float
        Sentinel recorded on the output grid (no cell takes it).

    Returns
    -------
    Grid
        Zero-mean surface of the requested shape.
    """
    rows, cols = shape
    if rows < 1 or cols < 1:
        raise ValidationError(f"Surface shape must be positive, got {shape}")
    ly, lx = tx.padded_shape(rows, cols)
    noise = np.random.default_rng(seed).standard_normal((ly, lx))

    real, imag = tx.shift_spectrum(*tx.fft_forward(noise))
    freq = tx.radial_frequency_grid(ly, lx, cell_size)
    with np.errstate(divide='ignore'):
        scale = np.where(freq > 0, freq ** -beta, 0.0)
    real, imag = tx.unshift_spectrum(real * scale, imag * scale)
    surface, _ = tx.fft_inverse(real, imag)
    surface = surface[:rows, :cols] / (ly * lx)
    surface -= surface.mean()
    logger.debug("Generated %s fractal surface, beta=%.3f", shape, beta)
    return Grid(surface, nodata=nodata, cell_size=cell_size)
