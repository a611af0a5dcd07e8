from __future__ import annotations

from typing import Dict, List

import numpy as np
import structlog

from .datastructures import Triangulation
from .delaunay import as_points
from .geometry import sort_by_angle

logger = structlog.get_logger()


def build_cells(triangulation: Triangulation, points=None) -> Dict[int, np.ndarray]:
    """
    Voronoi cell polygon per site, keyed by point index in input order.

    Each triangle's circumcenter is added to the cell of its three vertices,
    then every cell is sorted by angle around its site. Hull sites that end up
    with fewer than 3 vertices are dropped.
    """
    sites = triangulation.points if points is None else as_points(points)

    collected: Dict[int, List] = {p.index: [] for p in sites}
    for tri in triangulation.triangles:
        for p in tri.points:
            cell = collected.get(p.index)
            if cell is not None:
                cell.append(tri.circumcenter)

    cells: Dict[int, np.ndarray] = {}
    dropped = 0
    for p in sites:
        verts = collected[p.index]
        if len(verts) < 3:
            dropped += 1
            continue
        cells[p.index] = sort_by_angle(np.asarray(verts, dtype=np.float64), (p.x, p.y))

    logger.debug("Voronoi cells built", cells=len(cells), degenerate=dropped)
    return cells
