# -*- coding: utf-8 -*-
"""
Flow Topology Tests - D8 routing, donors, upstream traversal, junctions.

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

import logging

import pytest
import numpy as np

from landsurf.exceptions import InvalidJunctionError, ValidationError
from landsurf.flow import NO_RECEIVER, D8FlowTopology
from landsurf.raster.grid import Grid

NODATA = -9999.0


class TestNodeIndexing:
    """Test row/col to node conversions."""

    def test_round_trip(self, bowl_topology):
        """Test node_of and row_col are inverses."""
        assert bowl_topology.node_of(3, 4) == 25
        assert bowl_topology.row_col(25) == (3, 4)
        assert bowl_topology.n_nodes == 49
        assert bowl_topology.shape == (7, 7)
        assert bowl_topology.cell_size == 10.0
        assert (bowl_topology.x_min, bowl_topology.y_min) == (0.0, 0.0)
        assert bowl_topology.nodata == NODATA

    def test_is_valid_follows_template(self, bowl_template):
        """Test nodata cells are invalid nodes."""
        data = bowl_template.data.copy()
        data[0, 1] = NODATA
        topo = D8FlowTopology(np.arange(49).reshape(7, 7),
                              bowl_template.like(data))
        assert not topo.is_valid(1)
        assert topo.is_valid(2)
        assert topo.receiver_of(1) == NO_RECEIVER


class TestReceiverArray:
    """Test building from a receiver array."""

    def test_donors(self, bowl_topology):
        """Test donors are the cells pointing at a node."""
        donors = sorted(bowl_topology.donors_of(24).tolist())
        assert donors == [16, 17, 18, 23, 25, 30, 31, 32]
        assert bowl_topology.donors_of(0).size == 0

    def test_base_level_receives_itself(self, bowl_topology):
        """Test base-level nodes are their own receiver."""
        assert bowl_topology.receiver_of(24) == 24
        assert bowl_topology.receiver_of(0) == 0
        assert bowl_topology.receiver_of(16) == 24

    def test_shape_mismatch(self, bowl_template):
        """Test a receiver array of the wrong shape is rejected."""
        with pytest.raises(ValidationError, match="shape"):
            D8FlowTopology(np.zeros((3, 3), dtype=int), bowl_template)

    def test_out_of_range_receiver(self, bowl_template):
        """Test receiver indices beyond the grid are rejected."""
        receivers = np.arange(49).reshape(7, 7)
        receivers[0, 0] = 49
        with pytest.raises(ValidationError, match="outside"):
            D8FlowTopology(receivers, bowl_template)


class TestUpstream:
    """Test upstream traversal."""

    def test_upstream_sorted_with_outlet(self, bowl_topology):
        """Test upstream nodes are sorted and include the outlet."""
        nodes = bowl_topology.upstream_nodes(24)
        np.testing.assert_array_equal(
            nodes, [16, 17, 18, 23, 24, 25, 30, 31, 32])

    def test_isolated_cell(self, bowl_topology):
        """Test a base-level cell with no donors is its own basin."""
        np.testing.assert_array_equal(bowl_topology.upstream_nodes(0), [0])

    def test_chain(self):
        """Test traversal follows a chain of receivers."""
        template = Grid(np.zeros((1, 4)))
        # 3 -> 2 -> 1 -> 0
        topo = D8FlowTopology(np.array([[0, 0, 1, 2]]), template)
        np.testing.assert_array_equal(topo.upstream_nodes(0), [0, 1, 2, 3])
        np.testing.assert_array_equal(topo.upstream_nodes(2), [2, 3])


class TestStepLength:
    """Test distances to receivers."""

    def test_cardinal_diagonal_and_base(self, bowl_topology):
        """Test step lengths of cardinal, diagonal and base-level cells."""
        assert bowl_topology.step_length(17) == pytest.approx(10.0)
        assert bowl_topology.step_length(16) == pytest.approx(10.0 * np.sqrt(2.0))
        assert bowl_topology.step_length(24) == 0.0


class TestFromElevation:
    """Test D8 steepest-descent routing."""

    def test_tilted_plane_routes_to_corner(self, tilted_topology):
        """Test every cell drains to the lowest corner."""
        outlet = tilted_topology.node_of(3, 0)
        assert tilted_topology.receiver_of(outlet) == outlet
        assert tilted_topology.upstream_nodes(outlet).size == 16

    def test_diagonal_preferred_when_steeper(self, tilted_topology):
        """Test interior cells step south-west along the diagonal."""
        node = tilted_topology.node_of(1, 1)
        assert tilted_topology.receiver_of(node) == tilted_topology.node_of(2, 0)

    def test_flat_cells_are_base_level(self):
        """Test a flat grid has no flow links."""
        topo = D8FlowTopology.from_elevation(Grid(np.ones((3, 3))))
        np.testing.assert_array_equal(topo.receivers.ravel(), np.arange(9))

    def test_nodata_not_a_receiver(self):
        """Test flow never routes into nodata."""
        z = np.array([[5.0, 4.0, 3.0],
                      [5.0, 4.0, NODATA],
                      [5.0, 4.0, 3.0]])
        topo = D8FlowTopology.from_elevation(Grid(z, nodata=NODATA))
        assert topo.receiver_of(topo.node_of(1, 2)) == NO_RECEIVER
        assert topo.receiver_of(topo.node_of(1, 1)) in (
            topo.node_of(0, 2), topo.node_of(2, 2))
        assert topo.donors_of(topo.node_of(1, 2)).size == 0


class TestJunctions:
    """Test the junction table."""

    def test_junction_lookup(self, bowl_topology):
        """Test junction ids map to outlet nodes and orders."""
        assert bowl_topology.junctions() == [5]
        assert bowl_topology.junction_node(5) == 24
        assert bowl_topology.stream_order(5) == 2

    def test_missing_junction(self, bowl_topology):
        """Test an unknown id raises InvalidJunctionError."""
        with pytest.raises(InvalidJunctionError):
            bowl_topology.junction_node(7)
        with pytest.raises(InvalidJunctionError):
            bowl_topology.stream_order(7)

    def test_out_of_grid_junction_dropped(self, bowl_template, caplog):
        """Test junctions outside the grid are dropped with a warning."""
        with caplog.at_level(logging.WARNING, logger='landsurf.flow.topology'):
            topo = D8FlowTopology(np.arange(49).reshape(7, 7), bowl_template,
                                  junctions={1: (3, 3, 1), 2: (10, 0, 1)})
        assert topo.junctions() == [1]
        assert "Dropping junction 2" in caplog.text
        with pytest.raises(InvalidJunctionError):
            topo.junction_node(2)
