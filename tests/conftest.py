# -*- coding: utf-8 -*-
"""
Shared test fixtures - Synthetic grids and flow topologies.

Author
------
landsurf contributors

License
-------
MIT License
Copyright (c) 2026 landsurf contributors
See LICENSE file for full text.
"""

import pytest
import numpy as np

from landsurf.flow.topology import D8FlowTopology
from landsurf.raster.grid import Grid

NODATA = -9999.0


@pytest.fixture
def tilted_dem():
    """4x4 plane, 10 m cells, lowest at the south-west corner (3, 0)."""
    rows, cols = np.indices((4, 4))
    return Grid((3 - rows) + cols, nodata=NODATA, cell_size=10.0)


@pytest.fixture
def tilted_topology(tilted_dem):
    """D8 topology on ``tilted_dem`` with junction 1 at the corner outlet."""
    return D8FlowTopology.from_elevation(tilted_dem, junctions={1: (3, 0, 1)})


def _bowl_receivers():
    receivers = np.arange(49).reshape(7, 7)
    receivers[2:5, 2:5] = 3 * 7 + 3
    return receivers


@pytest.fixture
def bowl_template():
    """7x7 grid of 10 m cells, no nodata."""
    return Grid(np.zeros((7, 7)), nodata=NODATA, cell_size=10.0)


@pytest.fixture
def bowl_topology(bowl_template):
    """Central 3x3 block drains to (3, 3); every other cell is base level.

    Junction 5 sits at (3, 3) with stream order 2.
    """
    return D8FlowTopology(_bowl_receivers(), bowl_template,
                          junctions={5: (3, 3, 2)})


@pytest.fixture
def make_bowl_topology():
    """Factory for the bowl topology over a custom template."""
    def _make(template, junctions=None):
        return D8FlowTopology(_bowl_receivers(), template,
                              junctions=junctions or {5: (3, 3, 2)})
    return _make


@pytest.fixture
def index_field():
    """7x7 field whose value is the cell's linear index."""
    return Grid(np.arange(49, dtype=float).reshape(7, 7), nodata=NODATA,
                cell_size=10.0)


@pytest.fixture
def noisy_plane():
    """40x50 plane with small deterministic noise, 1 m cells."""
    rng = np.random.default_rng(7)
    rows, cols = np.indices((40, 50))
    z = 0.5 * cols - 0.25 * rows + 100.0 + rng.normal(0, 0.1, (40, 50))
    return Grid(z, nodata=NODATA, cell_size=1.0)
