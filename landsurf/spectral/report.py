# -*- coding: utf-8 -*-
"""
Spectral Report - Tabular and raster outputs of a spectral analysis.

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
from pathlib import Path
from typing import Dict, Union

# Third-party
import numpy as np

# landsurf internal
from landsurf.raster.grid import Grid
from landsurf.raster.io import write_grid
from landsurf.spectral.transforms import RadialSpectrum
from landsurf.stats.binning import LogBinResult

logger = logging.getLogger(__name__)

RADIAL_DTYPE = np.dtype([('frequency', 'f8'), ('wavelength', 'f8'),
                         ('power', 'f8')])
BINNED_DTYPE = np.dtype([('frequency', 'f8'), ('wavelength', 'f8'),
                         ('power', 'f8'), ('sigma', 'f8')])


def radial_table(radial: RadialSpectrum) -> np.ndarray:
    """Rows of (frequency, wavelength, power); the DC row is omitted."""
    keep = radial.frequency > 0
    table = np.empty(int(keep.sum()), dtype=RADIAL_DTYPE)
    table['frequency'] = radial.frequency[keep]
    table['wavelength'] = 1.0 / radial.frequency[keep]
    table['power'] = radial.power[keep]
    return table


def binned_table(bins: LogBinResult) -> np.ndarray:
    """Rows of (mean frequency, wavelength, mean power, power stddev)."""
    keep = bins.counts > 0
    table = np.empty(int(keep.sum()), dtype=BINNED_DTYPE)
    table['frequency'] = bins.mean_x[keep]
    table['wavelength'] = 1.0 / bins.mean_x[keep]
    table['power'] = bins.mean_y[keep]
    table['sigma'] = bins.std_y[keep]
    return table


@dataclass(frozen=True)
class SpectralReport:
    """Outputs of ``SpectralSurface.analyze``.

    Attributes
    ----------
    psd_grid : Grid
        Shifted 2D PSD, ``(Ly, Lx)``, zero frequency at the centre.
    radial : np.ndarray
        Structured rows with fields ``frequency``, ``wavelength``, ``power``.
    binned : np.ndarray
        Log-binned radial PSD with an extra ``sigma`` field.
    """

    psd_grid: Grid
    radial: np.ndarray
    binned: np.ndarray

    def write(self, prefix: Union[str, Path]) -> Dict[str, Path]:
        """Write the PSD grid and both tables next to *prefix*.

        Files are ``<prefix>_P_DFT.npy`` (with JSON sidecar),
        ``<prefix>_radialPSD.txt`` and ``<prefix>_radialPSD_binned.txt``.

        Returns
        -------
        Dict[str, Path]
            Written paths keyed ``'psd'``, ``'radial'`` and ``'binned'``.
        """
        prefix = str(prefix)
        paths = {
            'psd': Path(prefix + '_P_DFT.npy'),
            'radial': Path(prefix + '_radialPSD.txt'),
            'binned': Path(prefix + '_radialPSD_binned.txt'),
        }
        write_grid(self.psd_grid, paths['psd'], extra={'content': '2D PSD'})
        np.savetxt(paths['radial'], self.radial, fmt='%.10g',
                   header='Freq Wavelength PSD', comments='')
        np.savetxt(paths['binned'], self.binned, fmt='%.10g',
                   header='Freq Wavelength PSD Sigma', comments='')
        logger.info("Wrote spectral report to %s_*", prefix)
        return paths
