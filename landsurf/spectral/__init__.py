# -*- coding: utf-8 -*-
"""
Spectral - Fourier analysis and frequency-domain filtering of grids.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.
"""

from landsurf.spectral.fractal import generate_fractal_surface
from landsurf.spectral.processors import SpectralAnalysis, SpectralFilter
from landsurf.spectral.report import SpectralReport
from landsurf.spectral.surface import SpectralState, SpectralSurface
from landsurf.spectral.transforms import RadialSpectrum

__all__ = [
    'generate_fractal_surface',
    'SpectralAnalysis',
    'SpectralFilter',
    'SpectralReport',
    'SpectralState',
    'SpectralSurface',
    'RadialSpectrum',
]
