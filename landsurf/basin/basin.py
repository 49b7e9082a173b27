# -*- coding: utf-8 -*-
"""
Basin - Drainage basin delineation and per-basin terrain statistics.

A ``Basin`` is every cell of a flow topology whose receiver chain reaches
the outlet node of one junction. Shape descriptors (area, centroid,
perimeter, beheaded flag) are fixed at construction. Terrain statistics
start unset (``None``) and are filled by the ``set_*`` methods, each of
which takes a field grid of the topology's shape.

Aggregations that find no valid samples return the field's nodata value
(``count`` returns 0) instead of raising; ``landsurf.raster.is_empty``
tests for that outcome. Setters that hit an empty field leave their
attribute as ``None``.

Dependencies
------------
numpy
scipy

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
from typing import Any, Dict, Optional, Union

# Third-party
import numpy as np

# landsurf internal
from landsurf.exceptions import MissingPrerequisiteError, ValidationError
from landsurf.flow.topology import FlowTopology
from landsurf.raster.grid import Grid
from landsurf.stats import descriptive
from landsurf.stats.binning import cubic_spline_curve, log_bin, remove_small_bins
from landsurf.vocabulary import BasinStatistic

logger = logging.getLogger(__name__)

DEFAULT_CRITICAL_SLOPE = 0.4

# Scalar attributes reported by ``Basin.to_dict``.
_REPORTED = (
    'junction', 'n_cells', 'area', 'order', 'beheaded',
    'outlet_row', 'outlet_col', 'centroid_row', 'centroid_col',
    'slope_mean', 'elevation_mean', 'aspect_mean', 'relief_mean',
    'plan_curvature_mean', 'profile_curvature_mean', 'total_curvature_mean',
    'plan_curvature_max', 'profile_curvature_max', 'total_curvature_max',
    'hillslope_length_hfr', 'hillslope_length_binned',
    'hillslope_length_spline', 'hillslope_length_density',
    'flow_length', 'drainage_density',
    'cosmo_erosion_rate', 'other_erosion_rate',
    'cht_mean', 'estar', 'rstar',
)

_REDUCERS = {
    BasinStatistic.MEAN: descriptive.mean,
    BasinStatistic.MAX: lambda v: float(np.max(v)),
    BasinStatistic.MIN: lambda v: float(np.min(v)),
    BasinStatistic.MEDIAN: descriptive.median,
    BasinStatistic.STDDEV: descriptive.stddev,
    BasinStatistic.STDERR: descriptive.stderr,
    BasinStatistic.RANGE: lambda v: float(np.max(v) - np.min(v)),
}


class Basin:
    """
    Drainage basin above one junction of a flow topology.

    Build basins with ``Basin.from_junction``; the constructor takes an
    already-delineated membership.

    Parameters
    ----------
    junction : int
        Outlet junction identifier.
    nodes : np.ndarray
        Linear node indices of the member cells. Stored sorted.
    topology : FlowTopology
        Topology the basin was delineated from.

    Attributes
    ----------
    nodes : np.ndarray
        Sorted member node indices; the only record of membership.
    n_cells : int
        Number of member cells.
    area : float
        ``n_cells * cell_size ** 2``.
    order : int
        Stream order at the outlet junction.
    outlet_row, outlet_col : int
        Grid position of the outlet.
    centroid_row, centroid_col : int
        Mean member row and column, rounded half up.
    beheaded : bool
        True when the basin touches the grid edge or a nodata cell, i.e.
        the grid extent may have cut part of it off.
    perimeter_rows, perimeter_cols : np.ndarray
        Member cells with a 4-neighbour outside the basin, in row-major
        order.

    Examples
    --------
    >>> topo = D8FlowTopology.from_elevation(dem, junctions={1: (9, 0, 2)})
    >>> basin = Basin.from_junction(1, topo)
    >>> basin.aggregate(slope, BasinStatistic.MEAN)
    """

    def __init__(self, junction: int, nodes: np.ndarray,
                 topology: FlowTopology) -> None:
        nodes = np.unique(np.asarray(nodes, dtype=np.int64))
        if nodes.size == 0:
            raise ValidationError(f"Basin {junction} has no member cells")
        if nodes[0] < 0 or nodes[-1] >= topology.n_nodes:
            raise ValidationError(
                f"Basin {junction} has nodes outside the {topology.shape} grid"
            )
        self.junction = junction
        self.nodes = nodes
        self.topology = topology

        rows, cols = topology.shape
        self._rows, self._cols = np.divmod(nodes, cols)
        self._mask = np.zeros(topology.shape, dtype=bool)
        self._mask[self._rows, self._cols] = True

        outlet = topology.junction_node(junction)
        self.outlet_row, self.outlet_col = topology.row_col(outlet)
        self.order = topology.stream_order(junction)
        self.n_cells = int(nodes.size)
        self.area = self.n_cells * topology.cell_size ** 2
        self.centroid_row = int(np.floor(self._rows.mean() + 0.5))
        self.centroid_col = int(np.floor(self._cols.mean() + 0.5))
        self.beheaded = self._touches_edge_or_nodata()
        self.perimeter_rows, self.perimeter_cols = self._perimeter()

        self.slope_mean: Optional[float] = None
        self.elevation_mean: Optional[float] = None
        self.aspect_mean: Optional[float] = None
        self.relief_mean: Optional[float] = None
        self.plan_curvature_mean: Optional[float] = None
        self.profile_curvature_mean: Optional[float] = None
        self.total_curvature_mean: Optional[float] = None
        self.plan_curvature_max: Optional[float] = None
        self.profile_curvature_max: Optional[float] = None
        self.total_curvature_max: Optional[float] = None
        self.hillslope_length_hfr: Optional[float] = None
        self.hillslope_length_binned: Optional[float] = None
        self.hillslope_length_spline: Optional[float] = None
        self.hillslope_length_density: Optional[float] = None
        self.flow_length: Optional[float] = None
        self.drainage_density: Optional[float] = None
        self.cosmo_erosion_rate: Optional[float] = None
        self.other_erosion_rate: Optional[float] = None
        self.cht_mean: Optional[float] = None
        self.estar: Optional[float] = None
        self.rstar: Optional[float] = None

        logger.debug("Basin %s: %d cells, order %d, beheaded=%s",
                     junction, self.n_cells, self.order, self.beheaded)

    @classmethod
    def from_junction(cls, junction: int, topology: FlowTopology) -> 'Basin':
        """Delineate the basin draining to *junction*.

        Raises
        ------
        InvalidJunctionError
            If *junction* is not in the topology.
        """
        outlet = topology.junction_node(junction)
        return cls(junction, topology.upstream_nodes(outlet), topology)

    def __repr__(self) -> str:
        return (f"Basin(junction={self.junction!r}, n_cells={self.n_cells}, "
                f"order={self.order})")

    # -- Shape descriptors ------------------------------------------------

    def _touches_edge_or_nodata(self) -> bool:
        rows, cols = self.topology.shape
        r, c = self._rows, self._cols
        if np.any((r == 0) | (c == 0) | (r == rows - 1) | (c == cols - 1)):
            return True
        valid = self.topology.template.valid_mask
        for dr in (-1, 0, 1):
            for dc in (-1, 0, 1):
                if (dr or dc) and not np.all(valid[r + dr, c + dc]):
                    return True
        return False

    def _perimeter(self):
        rows, cols = self.topology.shape
        padded = np.zeros((rows + 2, cols + 2), dtype=bool)
        padded[1:-1, 1:-1] = self._mask
        r, c = self._rows + 1, self._cols + 1
        interior = (padded[r - 1, c] & padded[r + 1, c]
                    & padded[r, c - 1] & padded[r, c + 1])
        return self._rows[~interior].copy(), self._cols[~interior].copy()

    def is_node_in_basin(self, node: int) -> bool:
        idx = np.searchsorted(self.nodes, node)
        return bool(idx < self.nodes.size and self.nodes[idx] == node)

    # -- Aggregation ------------------------------------------------------

    def _values(self, field: Grid, name: str = 'field') -> np.ndarray:
        self.topology.template.require_shape(field, name)
        values = field.data[self._rows, self._cols]
        return values[values != field.nodata]

    def aggregate(self, field: Grid,
                  op: Union[BasinStatistic, str] = BasinStatistic.MEAN
                  ) -> Union[float, int]:
        """Reduce *field* over the basin's valid cells.

        Parameters
        ----------
        field : Grid
            Per-cell values with the topology's shape.
        op : BasinStatistic or str
            Reduction to apply.

        Returns
        -------
        float or int
            The statistic; ``field.nodata`` when no member cell holds data
            (``0`` for ``count``).

        Raises
        ------
        DimensionMismatchError
            If *field* does not match the topology's grid shape.
        """
        op = BasinStatistic(op)
        values = self._values(field)
        if op is BasinStatistic.COUNT:
            return int(values.size)
        if values.size == 0:
            logger.warning("Basin %s: no valid samples for %s",
                           self.junction, op.value)
            return field.nodata
        return _REDUCERS[op](values)

    def _aggregate_or_none(self, field: Grid,
                           op: BasinStatistic) -> Optional[float]:
        value = self.aggregate(field, op)
        return None if value == field.nodata else value

    # -- Attribute setters ------------------------------------------------

    def set_slope_mean(self, slope: Grid) -> None:
        self.slope_mean = self._aggregate_or_none(slope, BasinStatistic.MEAN)

    def set_elevation_mean(self, elevation: Grid) -> None:
        self.elevation_mean = self._aggregate_or_none(elevation, BasinStatistic.MEAN)

    def set_relief_mean(self, relief: Grid) -> None:
        self.relief_mean = self._aggregate_or_none(relief, BasinStatistic.MEAN)

    def set_cht_mean(self, curvature: Grid) -> None:
        """Mean hilltop curvature; *curvature* is nodata off the hilltops."""
        self.cht_mean = self._aggregate_or_none(curvature, BasinStatistic.MEAN)

    def set_hillslope_length_hfr(self, hillslope_length: Grid) -> None:
        """Mean of hilltop-flow-routed hillslope lengths."""
        self.hillslope_length_hfr = self._aggregate_or_none(
            hillslope_length, BasinStatistic.MEAN)

    def set_curvatures(self, plan: Optional[Grid] = None,
                       profile: Optional[Grid] = None,
                       total: Optional[Grid] = None) -> None:
        """Set mean and maximum of whichever curvature grids are given."""
        if plan is not None:
            self.plan_curvature_mean = self._aggregate_or_none(plan, BasinStatistic.MEAN)
            self.plan_curvature_max = self._aggregate_or_none(plan, BasinStatistic.MAX)
        if profile is not None:
            self.profile_curvature_mean = self._aggregate_or_none(profile, BasinStatistic.MEAN)
            self.profile_curvature_max = self._aggregate_or_none(profile, BasinStatistic.MAX)
        if total is not None:
            self.total_curvature_mean = self._aggregate_or_none(total, BasinStatistic.MEAN)
            self.total_curvature_max = self._aggregate_or_none(total, BasinStatistic.MAX)

    def set_aspect_mean(self, aspect: Grid) -> None:
        """Circular mean of *aspect* (degrees), in ``[0, 360)``."""
        values = self._values(aspect, 'aspect')
        if values.size == 0:
            self.aspect_mean = None
            return
        radians = np.deg2rad(values)
        angle = np.degrees(np.arctan2(np.mean(np.sin(radians)),
                                      np.mean(np.cos(radians))))
        self.aspect_mean = float(angle % 360.0)

    def set_erosion_rates(self, cosmo: Optional[float] = None,
                          other: Optional[float] = None) -> None:
        if cosmo is not None:
            self.cosmo_erosion_rate = float(cosmo)
        if other is not None:
            self.other_erosion_rate = float(other)

    def set_flow_length(self, stream_network: Grid) -> None:
        """Total channel length inside the basin.

        Sums, over member cells that are on *stream_network* (valid and
        non-zero), the distance from the cell to its receiver.
        """
        self.topology.template.require_shape(stream_network, 'stream network')
        values = stream_network.data[self._rows, self._cols]
        on_network = (values != stream_network.nodata) & (values != 0)
        self.flow_length = float(sum(
            self.topology.step_length(node) for node in self.nodes[on_network]
        ))

    def set_drainage_density(self) -> None:
        """Drainage density, ``flow_length / area``."""
        if self.flow_length is None:
            raise MissingPrerequisiteError(
                f"Basin {self.junction}: flow length must be set before "
                f"drainage density"
            )
        self.drainage_density = self.flow_length / self.area

    def set_hillslope_length_density(self) -> None:
        """Hillslope length from drainage density, ``1 / (2 * DD)``."""
        if self.drainage_density is None:
            raise MissingPrerequisiteError(
                f"Basin {self.junction}: drainage density must be set before "
                f"the drainage-density hillslope length"
            )
        if self.drainage_density == 0:
            logger.warning("Basin %s has no channel cells; hillslope length "
                           "from drainage density is undefined", self.junction)
            self.hillslope_length_density = None
            return
        self.hillslope_length_density = 1.0 / (2.0 * self.drainage_density)

    def set_hillslope_lengths_boomerang(self, slope: Grid, dinf_area: Grid,
                                        log_bin_width: float = 0.1,
                                        spline_resolution: int = 10000,
                                        bin_threshold: float = 0.05) -> None:
        """Hillslope length from the peak of the slope-area "boomerang".

        Slope is log-binned against specific contributing length
        (``dinf_area / cell_size``) over the basin. Sparse bins are
        dropped; the binned length is the mean length of the bin with the
        highest mean slope, and the spline length is the position of the
        maximum of a cubic spline through the bin means.

        Parameters
        ----------
        slope : Grid
            Local gradient.
        dinf_area : Grid
            D-infinity contributing area.
        log_bin_width : float
            Bin width in log10 units.
        spline_resolution : int
            Spline evaluation points between consecutive bins.
        bin_threshold : float
            Minimum fraction of the samples a bin must hold to be kept.
        """
        self.topology.template.require_shape(slope, 'slope')
        self.topology.template.require_shape(dinf_area, 'D-inf area')
        s = slope.data[self._rows, self._cols]
        a = dinf_area.data[self._rows, self._cols]
        ok = (s != slope.nodata) & (a != dinf_area.nodata)
        if not np.any(ok & (a > 0)):
            logger.warning("Basin %s: no slope-area samples", self.junction)
            self.hillslope_length_binned = None
            self.hillslope_length_spline = None
            return

        bins = remove_small_bins(
            log_bin(a[ok] / self.topology.cell_size, s[ok], log_bin_width),
            bin_threshold,
        )
        if len(bins) == 0:
            logger.warning("Basin %s: every slope-area bin fell below the "
                           "%.3f threshold", self.junction, bin_threshold)
            self.hillslope_length_binned = None
            self.hillslope_length_spline = None
            return

        peak = int(np.argmax(bins.mean_y))
        self.hillslope_length_binned = float(bins.mean_x[peak])
        if len(bins) < 2:
            self.hillslope_length_spline = self.hillslope_length_binned
            return
        spline_x, spline_y = cubic_spline_curve(bins.mean_x, bins.mean_y,
                                                spline_resolution)
        self.hillslope_length_spline = float(spline_x[np.argmax(spline_y)])

    def set_estar_rstar(self, critical_slope: float = DEFAULT_CRITICAL_SLOPE) -> None:
        """Dimensionless erosion rate and relief.

        ``EStar = 2 |CHT| LH / Sc`` and ``RStar = R / (LH Sc)`` with CHT the
        mean hilltop curvature, LH the hilltop-flow-routed hillslope length,
        R the mean relief and Sc the critical slope.

        Raises
        ------
        MissingPrerequisiteError
            If CHT, LH or relief has not been set.
        ValidationError
            If *critical_slope* is not positive.
        """
        missing = [name for name in ('cht_mean', 'hillslope_length_hfr',
                                     'relief_mean')
                   if getattr(self, name) is None]
        if missing:
            raise MissingPrerequisiteError(
                f"Basin {self.junction}: E*/R* need {', '.join(missing)}"
            )
        if not critical_slope > 0:
            raise ValidationError(
                f"Critical slope must be positive, got {critical_slope}"
            )
        lh = self.hillslope_length_hfr
        self.estar = 2.0 * abs(self.cht_mean) * lh / critical_slope
        self.rstar = self.relief_mean / (lh * critical_slope)

    def set_all_parameters(self, *, slope: Optional[Grid] = None,
                           elevation: Optional[Grid] = None,
                           aspect: Optional[Grid] = None,
                           relief: Optional[Grid] = None,
                           plan_curvature: Optional[Grid] = None,
                           profile_curvature: Optional[Grid] = None,
                           total_curvature: Optional[Grid] = None,
                           cht: Optional[Grid] = None,
                           hillslope_length: Optional[Grid] = None,
                           dinf_area: Optional[Grid] = None,
                           stream_network: Optional[Grid] = None,
                           log_bin_width: float = 0.1,
                           spline_resolution: int = 10000,
                           bin_threshold: float = 0.05,
                           critical_slope: float = DEFAULT_CRITICAL_SLOPE) -> None:
        """Populate every attribute whose input grids are supplied.

        Derived attributes (drainage density, hillslope lengths, E*/R*)
        are computed only when their prerequisites end up set.
        """
        if slope is not None:
            self.set_slope_mean(slope)
        if elevation is not None:
            self.set_elevation_mean(elevation)
        if aspect is not None:
            self.set_aspect_mean(aspect)
        if relief is not None:
            self.set_relief_mean(relief)
        self.set_curvatures(plan_curvature, profile_curvature, total_curvature)
        if cht is not None:
            self.set_cht_mean(cht)
        if hillslope_length is not None:
            self.set_hillslope_length_hfr(hillslope_length)
        if stream_network is not None:
            self.set_flow_length(stream_network)
            self.set_drainage_density()
            self.set_hillslope_length_density()
        if slope is not None and dinf_area is not None:
            self.set_hillslope_lengths_boomerang(
                slope, dinf_area, log_bin_width, spline_resolution,
                bin_threshold)
        if None not in (self.cht_mean, self.hillslope_length_hfr,
                        self.relief_mean):
            self.set_estar_rstar(critical_slope)

    # -- Rasterization ----------------------------------------------------

    def paint_scalar(self, value: float, template: Optional[Grid] = None) -> Grid:
        """Grid holding *value* on basin cells and nodata elsewhere."""
        template = self.topology.template if template is None else template
        self.topology.template.require_shape(template, 'template')
        out = np.full(template.shape, template.nodata, dtype=np.float64)
        out[self._rows, self._cols] = value
        return template.like(out)

    def paint_field(self, field: Grid) -> Grid:
        """Copy of *field* cut to the basin; nodata outside it."""
        self.topology.template.require_shape(field)
        out = np.full(field.shape, field.nodata, dtype=np.float64)
        out[self._rows, self._cols] = field.data[self._rows, self._cols]
        return field.like(out)

    def to_dict(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _REPORTED}
