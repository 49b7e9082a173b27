# -*- coding: utf-8 -*-
"""
Network Skeletonization - Thin binary channel networks to single threads.

Channel masks extracted from curvature or tangential-curvature thresholds
are several cells wide. ``thin_to_single_thread_network`` strips boundary
cells in repeated parallel passes until every feature is one cell wide and
8-connected, keeping the end points of each branch.

Dependencies
------------
scikit-image

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

# Third-party
import numpy as np
from skimage.morphology import thin

# landsurf internal
from landsurf.raster.grid import Grid

logger = logging.getLogger(__name__)


def thin_to_single_thread_network(network: Grid) -> Grid:
    """Reduce a binary network grid to a one-cell-wide skeleton.

    Parameters
    ----------
    network : Grid
        Cells equal to 1 are network, any other valid value is background.

    Returns
    -------
    Grid
        0/1 skeleton with the nodata cells of *network* preserved.
    """
    valid = network.valid_mask
    features = valid & (network.data == 1)
    skeleton = thin(features)
    logger.debug("Thinned network from %d to %d cells",
                 int(features.sum()), int(skeleton.sum()))
    out = np.where(skeleton, 1.0, 0.0)
    out[~valid] = network.nodata
    return network.like(out)
