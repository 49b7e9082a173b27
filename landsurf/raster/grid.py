# -*- coding: utf-8 -*-
"""
Grid - Immutable georeferenced 2D raster with a nodata sentinel.

A ``Grid`` holds a ``(rows, cols)`` float64 array, the nodata sentinel,
the square cell size and the lower-left corner of the raster. Row 0 is the
northern edge. A cell is valid exactly when its value differs from the
sentinel; no other test is used. NaN cells and a NaN sentinel are
normalised to ``DEFAULT_NODATA`` on construction.

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
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

# Third-party
import numpy as np

# landsurf internal
from landsurf.exceptions import DimensionMismatchError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_NODATA = -9999.0


@dataclass(frozen=True, eq=False)
class Grid:
    """Georeferenced raster grid.

    Parameters
    ----------
    data : array_like
        2D array of values. Copied into a read-only float64 array.
    nodata : float
        Sentinel marking cells without data. A NaN sentinel is replaced by
        ``DEFAULT_NODATA``, and NaN cells in *data* are set to the sentinel.
    cell_size : float
        Edge length of a square cell in map units.
    x_min, y_min : float
        Map coordinates of the lower-left corner of the raster.
    crs : str, optional
        Coordinate reference system as WKT or an authority string. Carried
        through I/O only.

    Raises
    ------
    ValidationError
        If *data* is not 2D or *cell_size* is not positive.

    Examples
    --------
    >>> g = Grid(np.zeros((3, 4)), nodata=-9999.0, cell_size=10.0)
    >>> g.shape
    (3, 4)
    """

    data: np.ndarray
    nodata: float = DEFAULT_NODATA
    cell_size: float = 1.0
    x_min: float = 0.0
    y_min: float = 0.0
    crs: Optional[str] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        data = np.array(self.data, dtype=np.float64)
        if data.ndim != 2:
            raise ValidationError(
                f"Grid data must be 2D, got shape {data.shape}"
            )
        if not self.cell_size > 0:
            raise ValidationError(
                f"cell_size must be positive, got {self.cell_size}"
            )
        nodata = float(self.nodata)
        if np.isnan(nodata):
            nodata = DEFAULT_NODATA
        # Validity is tested by equality, so NaN cells become the sentinel.
        missing = np.isnan(data)
        if missing.any():
            logger.debug("Replacing %d NaN cells with nodata %s",
                         int(missing.sum()), nodata)
            data[missing] = nodata
        data.setflags(write=False)
        object.__setattr__(self, 'data', data)
        object.__setattr__(self, 'nodata', nodata)
        object.__setattr__(self, 'cell_size', float(self.cell_size))

    @property
    def shape(self) -> Tuple[int, int]:
        return self.data.shape

    @property
    def rows(self) -> int:
        return self.data.shape[0]

    @property
    def cols(self) -> int:
        return self.data.shape[1]

    @property
    def valid_mask(self) -> np.ndarray:
        """Boolean array, True where the cell holds data."""
        return self.data != self.nodata

    def is_valid(self, row: int, col: int) -> bool:
        return bool(self.data[row, col] != self.nodata)

    def like(self, data: np.ndarray, nodata: Optional[float] = None) -> 'Grid':
        """Return a new grid with *data* and this grid's georeferencing."""
        data = np.asarray(data)
        if data.shape != self.shape:
            raise DimensionMismatchError(
                f"Array shape {data.shape} does not match grid {self.shape}"
            )
        return Grid(data, nodata=self.nodata if nodata is None else nodata,
                    cell_size=self.cell_size, x_min=self.x_min,
                    y_min=self.y_min, crs=self.crs)

    def filled(self, value: Optional[float] = None) -> 'Grid':
        """Return a same-shaped grid filled with *value* (default nodata)."""
        value = self.nodata if value is None else value
        return self.like(np.full(self.shape, value, dtype=np.float64))

    def require_shape(self, other: 'Grid', name: str = 'field') -> None:
        """Raise ``DimensionMismatchError`` unless *other* matches in shape."""
        if other.shape != self.shape:
            raise DimensionMismatchError(
                f"{name} grid has shape {other.shape}, expected {self.shape}"
            )

    def trimmed(self) -> 'Grid':
        """Crop to the smallest rectangle that contains every valid cell.

        Returns
        -------
        Grid
            Cropped grid with the lower-left corner moved accordingly.

        Raises
        ------
        ValidationError
            If the grid has no valid cells.
        """
        rows, cols = np.nonzero(self.valid_mask)
        if rows.size == 0:
            raise ValidationError("Cannot trim a grid with no valid cells")
        r0, r1 = int(rows.min()), int(rows.max())
        c0, c1 = int(cols.min()), int(cols.max())
        logger.debug("Trimming %s grid to rows %d-%d, cols %d-%d",
                     self.shape, r0, r1, c0, c1)
        return Grid(
            self.data[r0:r1 + 1, c0:c1 + 1],
            nodata=self.nodata,
            cell_size=self.cell_size,
            x_min=self.x_min + c0 * self.cell_size,
            y_min=self.y_min + (self.rows - 1 - r1) * self.cell_size,
            crs=self.crs,
        )

    def resampled(self, resolution: float) -> 'Grid':
        """Downsample by taking the source cell nearest each new cell centre.

        Parameters
        ----------
        resolution : float
            Output cell size. Must not be finer than the current one.

        Raises
        ------
        ValidationError
            If *resolution* is smaller than ``cell_size``.
        """
        if resolution < self.cell_size:
            raise ValidationError(
                f"Resample resolution {resolution} is finer than the "
                f"data resolution {self.cell_size}"
            )
        ratio = resolution / self.cell_size
        new_rows = int(self.rows * self.cell_size / resolution)
        new_cols = int(self.cols * self.cell_size / resolution)
        ci = (np.arange(new_rows) * ratio + ratio / 2).astype(int)
        cj = (np.arange(new_cols) * ratio + ratio / 2).astype(int)
        ci = np.minimum(ci, self.rows - 1)
        cj = np.minimum(cj, self.cols - 1)
        return Grid(self.data[np.ix_(ci, cj)], nodata=self.nodata,
                    cell_size=resolution, x_min=self.x_min,
                    y_min=self.y_min, crs=self.crs)

    def geolocation(self) -> Dict[str, Any]:
        """Georeferencing as a plain dict for writers and sidecars.

        ``transform`` is the GDAL-ordered affine
        ``(x_origin, cell_size, 0, y_origin, 0, -cell_size)`` anchored at
        the upper-left corner.
        """
        y_top = self.y_min + self.rows * self.cell_size
        return {
            'transform': (self.x_min, self.cell_size, 0.0,
                          y_top, 0.0, -self.cell_size),
            'x_min': self.x_min,
            'y_min': self.y_min,
            'cell_size': self.cell_size,
            'nodata': self.nodata,
            'crs': self.crs,
        }


def is_empty(value: float, nodata: float) -> bool:
    """True when an aggregation returned the nodata sentinel."""
    return value == nodata
