# -*- coding: utf-8 -*-
"""
Skeleton Tests - Thinning channel networks to single-cell threads.

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

import numpy as np

from landsurf.raster import Grid, thin_to_single_thread_network

NODATA = -9999.0


class TestThinning:
    """Test network thinning."""

    def test_thick_line_becomes_thin(self):
        """Test a three-cell-wide channel thins to one cell wide."""
        data = np.zeros((9, 12))
        data[3:6, 1:11] = 1
        out = thin_to_single_thread_network(Grid(data, nodata=NODATA))
        assert set(np.unique(out.data)) <= {0.0, 1.0}
        assert out.data.sum() < data.sum()
        assert out.data[:, 5].sum() == 1
        assert np.all(out.data[data == 0] == 0)

    def test_single_thread_unchanged(self):
        """Test a one-cell-wide line is already a skeleton."""
        data = np.zeros((5, 7))
        data[2, 1:6] = 1
        out = thin_to_single_thread_network(Grid(data, nodata=NODATA))
        np.testing.assert_array_equal(out.data, data)

    def test_nodata_preserved(self):
        """Test nodata cells keep the sentinel and are not features."""
        data = np.zeros((5, 5))
        data[2, :] = 1
        data[0, 0] = NODATA
        out = thin_to_single_thread_network(Grid(data, nodata=NODATA))
        assert out.data[0, 0] == NODATA
        assert out.valid_mask.sum() == 24

    def test_non_unit_values_are_background(self):
        """Test values other than 1 are not network cells."""
        data = np.full((4, 4), 2.0)
        out = thin_to_single_thread_network(Grid(data, nodata=NODATA))
        np.testing.assert_array_equal(out.data, 0.0)
