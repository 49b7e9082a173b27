# -*- coding: utf-8 -*-
"""
GeoTIFF I/O Tests - rasterio-backed grid reads and writes.

Dependencies
------------
rasterio

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

import pytest
import numpy as np

try:
    import rasterio
    from rasterio.transform import from_origin
    _HAS_RASTERIO = True
except ImportError:
    _HAS_RASTERIO = False

from landsurf.exceptions import ValidationError
from landsurf.raster.grid import Grid
from landsurf.raster.io import read_grid, write_grid

pytestmark = pytest.mark.skipif(
    not _HAS_RASTERIO, reason="rasterio not installed"
)

NODATA = -9999.0


@pytest.fixture
def grid():
    data = np.arange(20, dtype=float).reshape(4, 5)
    data[3, 4] = NODATA
    return Grid(data, nodata=NODATA, cell_size=30.0, x_min=500000.0,
                y_min=4100000.0, crs='EPSG:32611')


class TestGeoTIFF:
    """Test GeoTIFF round trips and georeferencing."""

    def test_round_trip(self, grid, tmp_path):
        """Test data, nodata and origin survive a write/read cycle."""
        path = write_grid(grid, tmp_path / 'dem.tif')
        back = read_grid(path)
        np.testing.assert_array_equal(back.data, grid.data)
        assert back.nodata == NODATA
        assert back.cell_size == pytest.approx(30.0)
        assert back.x_min == pytest.approx(500000.0)
        assert back.y_min == pytest.approx(4100000.0)
        assert back.crs is not None

    def test_written_transform(self, grid, tmp_path):
        """Test the file's transform is anchored at the top-left corner."""
        path = write_grid(grid, tmp_path / 'dem.tiff')
        with rasterio.open(str(path)) as ds:
            assert ds.transform.c == pytest.approx(500000.0)
            assert ds.transform.f == pytest.approx(4100000.0 + 4 * 30.0)
            assert ds.count == 1

    def test_non_square_cells_rejected(self, tmp_path):
        """Test rasters with rectangular cells are rejected on read."""
        path = tmp_path / 'rect.tif'
        with rasterio.open(
            str(path), 'w', driver='GTiff', height=2, width=2, count=1,
            dtype='float64', transform=from_origin(0.0, 10.0, 1.0, 2.0),
        ) as ds:
            ds.write(np.zeros((2, 2)), 1)
        with pytest.raises(ValidationError, match="non-square"):
            read_grid(path)

    def test_nan_nodata_read_as_sentinel(self, tmp_path):
        """Test a float GeoTIFF with NaN nodata reads with NaN cells invalid."""
        data = np.ones((3, 3))
        data[1, 1] = np.nan
        path = tmp_path / 'nan.tif'
        with rasterio.open(
            str(path), 'w', driver='GTiff', height=3, width=3, count=1,
            dtype='float64', transform=from_origin(0.0, 3.0, 1.0, 1.0),
            nodata=float('nan'),
        ) as ds:
            ds.write(data, 1)
        g = read_grid(path)
        assert g.nodata == NODATA
        assert g.data[1, 1] == NODATA
        assert g.valid_mask.sum() == 8
