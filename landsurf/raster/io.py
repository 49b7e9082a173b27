# -*- coding: utf-8 -*-
"""
Raster I/O - Read and write ``Grid`` objects.

GeoTIFF goes through rasterio (optional dependency). NumPy ``.npy`` arrays
are written with a JSON sidecar (``<file>.npy.json``) that records shape,
dtype and georeferencing so the grid can be read back intact.

Dependencies
------------
numpy
rasterio (optional, GeoTIFF only)

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
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np

# landsurf internal
from landsurf.exceptions import ValidationError
from landsurf.raster._backend import _HAS_RASTERIO, require_raster_backend
from landsurf.raster.grid import DEFAULT_NODATA, Grid
from landsurf.vocabulary import OutputFormat

if _HAS_RASTERIO:
    import rasterio
    from rasterio.transform import from_origin

logger = logging.getLogger(__name__)

_EXTENSION_MAP: Dict[str, OutputFormat] = {
    '.tif': OutputFormat.GEOTIFF,
    '.tiff': OutputFormat.GEOTIFF,
    '.geotiff': OutputFormat.GEOTIFF,
    '.npy': OutputFormat.NUMPY,
}


def _format_for(path: Path, format: Optional[Union[str, OutputFormat]]) -> OutputFormat:
    if format is not None:
        try:
            return OutputFormat(format) if isinstance(format, str) else format
        except ValueError:
            raise ValidationError(
                f"Unknown raster format {format!r}. "
                f"Supported: {[f.value for f in OutputFormat]}"
            ) from None
    ext = path.suffix.lower()
    if ext not in _EXTENSION_MAP:
        raise ValidationError(
            f"Cannot determine raster format from extension '{ext}'. "
            f"Supported extensions: {sorted(_EXTENSION_MAP)}. "
            f"Provide an explicit format= argument."
        )
    return _EXTENSION_MAP[ext]


def sidecar_path(path: Union[str, Path]) -> Path:
    """Path of the JSON sidecar that accompanies a ``.npy`` grid."""
    return Path(str(path) + '.json')


def read_grid(path: Union[str, Path],
              format: Optional[Union[str, OutputFormat]] = None) -> Grid:
    """Read a single-band raster into a ``Grid``.

    Parameters
    ----------
    path : str or Path
        GeoTIFF or ``.npy`` file.
    format : str or OutputFormat, optional
        Overrides extension-based detection.

    Returns
    -------
    Grid

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    DependencyError
        If a GeoTIFF is requested without rasterio installed.
    ValidationError
        If the format cannot be determined or the array is not 2D.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Raster not found: {path}")
    fmt = _format_for(path, format)

    if fmt is OutputFormat.GEOTIFF:
        require_raster_backend()
        with rasterio.open(str(path)) as ds:
            data = ds.read(1).astype(np.float64)
            res_x, res_y = ds.res
            if not np.isclose(res_x, res_y):
                raise ValidationError(
                    f"{path.name}: non-square cells ({res_x}, {res_y}) "
                    f"are not supported"
                )
            nodata = DEFAULT_NODATA if ds.nodata is None else float(ds.nodata)
            grid = Grid(data, nodata=nodata, cell_size=float(res_x),
                        x_min=float(ds.bounds.left),
                        y_min=float(ds.bounds.bottom),
                        crs=ds.crs.to_string() if ds.crs else None)
    else:
        data = np.load(str(path))
        meta: Dict[str, Any] = {}
        side = sidecar_path(path)
        if side.exists():
            with open(side) as f:
                meta = json.load(f).get('geolocation', {})
        grid = Grid(data,
                    nodata=meta.get('nodata', DEFAULT_NODATA),
                    cell_size=meta.get('cell_size', 1.0),
                    x_min=meta.get('x_min', 0.0),
                    y_min=meta.get('y_min', 0.0),
                    crs=meta.get('crs'))

    logger.debug("Read %s grid %s from %s", fmt.value, grid.shape, path)
    return grid


def write_grid(grid: Grid, path: Union[str, Path],
               format: Optional[Union[str, OutputFormat]] = None,
               extra: Optional[Dict[str, Any]] = None) -> Path:
    """Write *grid* to *path*.

    Parameters
    ----------
    grid : Grid
        Grid to write.
    path : str or Path
        Output path; the extension selects the format unless *format*
        is given.
    format : str or OutputFormat, optional
        Explicit output format.
    extra : dict, optional
        Additional JSON-serializable entries for the ``.npy`` sidecar.

    Returns
    -------
    Path
        The written file.
    """
    path = Path(path)
    fmt = _format_for(path, format)

    if fmt is OutputFormat.GEOTIFF:
        require_raster_backend()
        geo = grid.geolocation()
        transform = from_origin(grid.x_min, geo['transform'][3],
                                grid.cell_size, grid.cell_size)
        with rasterio.open(
            str(path), 'w', driver='GTiff',
            height=grid.rows, width=grid.cols, count=1,
            dtype='float64', crs=grid.crs, transform=transform,
            nodata=grid.nodata,
        ) as ds:
            ds.write(grid.data, 1)
    else:
        with open(path, 'wb') as f:
            np.save(f, grid.data)
        sidecar = {
            'shape': list(grid.shape),
            'dtype': str(grid.data.dtype),
            'geolocation': {k: v for k, v in grid.geolocation().items()
                            if k != 'transform'},
        }
        if extra:
            sidecar.update(extra)
        with open(sidecar_path(path), 'w') as f:
            json.dump(sidecar, f, indent=2, default=str)

    logger.debug("Wrote %s grid %s to %s", fmt.value, grid.shape, path)
    return path
