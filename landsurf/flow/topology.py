# -*- coding: utf-8 -*-
"""
Flow Topology - Receiver/donor navigation over a flow-routed grid.

``FlowTopology`` is the interface basins are built from: every grid cell
has a linear node index ``row * cols + col``, valid cells have exactly one
receiver (themselves at base level) and any number of donors, and named
junctions map to outlet nodes with a stream order.

``D8FlowTopology`` is the concrete single-flow-direction implementation.
It can be built from a precomputed receiver array or directly from an
elevation grid by D8 steepest descent.

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
from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional, Tuple

# Third-party
import numpy as np

# landsurf internal
from landsurf.exceptions import InvalidJunctionError, ValidationError
from landsurf.raster.grid import Grid

logger = logging.getLogger(__name__)

NO_RECEIVER = -1

# D8 neighbour offsets: E, SE, S, SW, W, NW, N, NE
_D8_ROW = np.array([0, 1, 1, 1, 0, -1, -1, -1])
_D8_COL = np.array([1, 1, 0, -1, -1, -1, 0, 1])

JunctionTable = Mapping[int, Tuple[int, int, int]]


class FlowTopology(ABC):
    """
    Abstract flow-routing graph over a grid.

    Subclasses provide ``receiver_of`` and ``donors_of``; node indexing,
    georeferencing and the junction table are shared.

    Parameters
    ----------
    template : Grid
        Grid the topology was routed over. Its nodata cells are not part
        of any flow path.
    junctions : Mapping[int, Tuple[int, int, int]], optional
        ``{junction_id: (row, col, stream_order)}``. Junctions outside the
        grid are dropped with a warning.
    """

    def __init__(self, template: Grid,
                 junctions: Optional[JunctionTable] = None) -> None:
        self.template = template
        self._valid = template.valid_mask
        self._junctions: Dict[int, Tuple[int, int, int]] = {}
        for jid, (row, col, order) in (junctions or {}).items():
            if not (0 <= row < template.rows and 0 <= col < template.cols):
                logger.warning("Dropping junction %s at (%d, %d): outside the "
                               "%s grid", jid, row, col, template.shape)
                continue
            self._junctions[int(jid)] = (int(row), int(col), int(order))

    # -- Georeferencing ---------------------------------------------------

    @property
    def shape(self) -> Tuple[int, int]:
        return self.template.shape

    @property
    def cell_size(self) -> float:
        return self.template.cell_size

    @property
    def nodata(self) -> float:
        return self.template.nodata

    @property
    def x_min(self) -> float:
        return self.template.x_min

    @property
    def y_min(self) -> float:
        return self.template.y_min

    @property
    def n_nodes(self) -> int:
        return self.template.rows * self.template.cols

    # -- Node indexing ----------------------------------------------------

    def node_of(self, row: int, col: int) -> int:
        return int(row) * self.template.cols + int(col)

    def row_col(self, node: int) -> Tuple[int, int]:
        row, col = divmod(int(node), self.template.cols)
        return row, col

    def is_valid(self, node: int) -> bool:
        row, col = self.row_col(node)
        return bool(self._valid[row, col])

    # -- Flow links -------------------------------------------------------

    @abstractmethod
    def receiver_of(self, node: int) -> int:
        """Downstream neighbour of *node*; *node* itself at base level."""
        ...

    @abstractmethod
    def donors_of(self, node: int) -> np.ndarray:
        """Nodes whose receiver is *node*."""
        ...

    def upstream_nodes(self, outlet: int) -> np.ndarray:
        """Every node whose receiver chain reaches *outlet*, sorted.

        The outlet itself is included.
        """
        seen = {int(outlet)}
        stack = [int(outlet)]
        while stack:
            node = stack.pop()
            for donor in self.donors_of(node):
                donor = int(donor)
                if donor not in seen:
                    seen.add(donor)
                    stack.append(donor)
        return np.array(sorted(seen), dtype=np.int64)

    def step_length(self, node: int) -> float:
        """Distance from *node* to its receiver (0 at base level)."""
        receiver = self.receiver_of(node)
        if receiver == node or receiver == NO_RECEIVER:
            return 0.0
        r0, c0 = self.row_col(node)
        r1, c1 = self.row_col(receiver)
        if r0 != r1 and c0 != c1:
            return self.cell_size * np.sqrt(2.0)
        return self.cell_size

    # -- Junctions --------------------------------------------------------

    def junctions(self) -> List[int]:
        return sorted(self._junctions)

    def junction_node(self, junction: int) -> int:
        """Outlet node of *junction*.

        Raises
        ------
        InvalidJunctionError
            If *junction* is not in the junction table or sits on a
            nodata cell.
        """
        try:
            row, col, _ = self._junctions[junction]
        except KeyError:
            raise InvalidJunctionError(
                f"Junction {junction} does not exist in the flow topology"
            ) from None
        if not self._valid[row, col]:
            raise InvalidJunctionError(
                f"Junction {junction} sits on a nodata cell ({row}, {col})"
            )
        return self.node_of(row, col)

    def stream_order(self, junction: int) -> int:
        self.junction_node(junction)
        return self._junctions[junction][2]


class D8FlowTopology(FlowTopology):
    """
    Single-direction (D8) flow topology backed by a receiver array.

    Parameters
    ----------
    receivers : np.ndarray
        ``(rows, cols)`` integer array of receiver node indices. Base-level
        cells point at themselves; nodata cells hold ``-1``.
    template : Grid
        Grid the receivers were derived from.
    junctions : Mapping[int, Tuple[int, int, int]], optional
        ``{junction_id: (row, col, stream_order)}``.

    Raises
    ------
    ValidationError
        If *receivers* does not match the template shape, or holds an index
        outside the grid.
    """

    def __init__(self, receivers: np.ndarray, template: Grid,
                 junctions: Optional[JunctionTable] = None) -> None:
        super().__init__(template, junctions)
        receivers = np.asarray(receivers, dtype=np.int64)
        if receivers.shape != template.shape:
            raise ValidationError(
                f"Receiver array shape {receivers.shape} does not match "
                f"grid {template.shape}"
            )
        flat = receivers.ravel().copy()
        if flat.min() < NO_RECEIVER or flat.max() >= flat.size:
            raise ValidationError("Receiver indices fall outside the grid")
        flat[~self._valid.ravel()] = NO_RECEIVER
        self._receivers = flat

        nodes = np.arange(flat.size)
        linked = (flat != NO_RECEIVER) & (flat != nodes)
        targets = flat[linked]
        order = np.argsort(targets, kind='stable')
        self._donors = nodes[linked][order]
        self._donor_start = np.searchsorted(targets[order],
                                            np.arange(flat.size + 1))

    @classmethod
    def from_elevation(cls, elevation: Grid,
                       junctions: Optional[JunctionTable] = None
                       ) -> 'D8FlowTopology':
        """Route flow to the steepest-descent D8 neighbour of each cell.

        Diagonal drops are divided by ``sqrt(2) * cell_size``. Cells with
        no strictly lower valid neighbour are base level.

        Parameters
        ----------
        elevation : Grid
            Elevation surface. Pits are not filled.
        junctions : Mapping[int, Tuple[int, int, int]], optional
            Junction table passed to the topology.
        """
        z = elevation.data
        rows, cols = z.shape
        valid = elevation.valid_mask
        padded = np.full((rows + 2, cols + 2), np.nan)
        padded[1:-1, 1:-1] = np.where(valid, z, np.nan)

        slopes = np.full((8, rows, cols), -np.inf)
        for k, (dr, dc) in enumerate(zip(_D8_ROW, _D8_COL)):
            neighbour = padded[1 + dr:1 + dr + rows, 1 + dc:1 + dc + cols]
            dist = elevation.cell_size * (np.sqrt(2.0) if dr and dc else 1.0)
            with np.errstate(invalid='ignore'):
                drop = (z - neighbour) / dist
            slopes[k] = np.where(np.isnan(drop), -np.inf, drop)

        best = np.argmax(slopes, axis=0)
        steepest = np.take_along_axis(slopes, best[None], axis=0)[0]
        row_idx, col_idx = np.indices((rows, cols))
        nodes = row_idx * cols + col_idx
        targets = (row_idx + _D8_ROW[best]) * cols + (col_idx + _D8_COL[best])
        receivers = np.where(steepest > 0, targets, nodes)
        receivers[~valid] = NO_RECEIVER
        logger.debug("Routed D8 flow over %s grid: %d base-level cells",
                     elevation.shape,
                     int(np.sum(valid & (receivers == nodes))))
        return cls(receivers, elevation, junctions)

    def receiver_of(self, node: int) -> int:
        return int(self._receivers[node])

    def donors_of(self, node: int) -> np.ndarray:
        return self._donors[self._donor_start[node]:self._donor_start[node + 1]]

    @property
    def receivers(self) -> np.ndarray:
        """Receiver array in grid shape."""
        return self._receivers.reshape(self.shape)
