"""
Incremental Delaunay triangulation (Bowyer-Watson) over a super-triangle.

Every insertion is a pure transition: the previous snapshot minus the triangles
whose circumcircle holds the new point, plus the fan that closes the hole.
The bad-triangle search scans every live triangle, so a run is O(n^2); that is
fine for a few thousand sites.
"""
from __future__ import annotations

from typing import List, Sequence

import numpy as np
import structlog

from .datastructures import Edge, Point, Triangle, Triangulation
from .errors import InvalidConfigurationError
from .geometry import EPSILON

logger = structlog.get_logger()


def super_triangle(width: float, height: float):
    """Triangle enclosing [0,width]x[0,height] with a margin of 2*max(width, height)."""
    margin = max(width, height) * 2
    return (
        Point(-margin, -margin, -1),
        Point(width + margin, -margin, -2),
        Point(width / 2, height + margin, -3),
    )


def as_points(points) -> tuple:
    """
    Normalise input sites to a tuple of Point.

    Accepts Point objects (indices must be unique and >= 0) or an (N,2) array-like,
    in which case the row number becomes the point index.
    """
    if isinstance(points, (list, tuple)) and points and all(isinstance(p, Point) for p in points):
        indices = [p.index for p in points]
        if min(indices) < 0 or len(set(indices)) != len(indices):
            raise InvalidConfigurationError("Point indices must be unique and non-negative")
        return tuple(points)

    P = np.asarray(points, dtype=np.float64)
    if P.size == 0:
        raise InvalidConfigurationError("Point set must not be empty")
    if P.ndim != 2 or P.shape[1] != 2:
        raise InvalidConfigurationError("points must be (N,2)")
    if not np.all(np.isfinite(P)):
        raise InvalidConfigurationError("points must be finite")

    return tuple(Point(float(x), float(y), i) for i, (x, y) in enumerate(P))


def _hole_boundary(bad: Sequence[Triangle]) -> List[Edge]:
    boundary = []
    for tri in bad:
        for edge in tri.edges:
            shared = any(
                edge.same_as(other_edge)
                for other in bad
                if other is not tri
                for other_edge in other.edges
            )
            if not shared:
                boundary.append(edge)
    return boundary


def insert_point(triangulation: Triangulation, point: Point) -> Triangulation:
    """Return the snapshot obtained by inserting point into triangulation."""
    tris = triangulation.triangles
    if not tris:
        return triangulation

    d = triangulation.centers - np.array([point.x, point.y], dtype=np.float64)
    dist_sq = d[:, 0] * d[:, 0] + d[:, 1] * d[:, 1]
    bad_mask = dist_sq <= triangulation.radii_sq * (1 + EPSILON)

    bad = [t for t, is_bad in zip(tris, bad_mask) if is_bad]
    if not bad:
        return triangulation

    boundary = _hole_boundary(bad)
    survivors = [t for t, is_bad in zip(tris, bad_mask) if not is_bad]
    fan = [Triangle((edge.a, edge.b, point)) for edge in boundary]

    return Triangulation.from_triangles(
        survivors + fan,
        triangulation.points,
        triangulation.super_points,
        triangulation.width,
        triangulation.height,
    )


def triangulate(points, width: float, height: float) -> Triangulation:
    """
    Delaunay triangulation of points inside [0,width]x[0,height].

    Points are inserted in input order. Triangles touching a super-triangle
    vertex are dropped at the end. Points must be distinct under the EPSILON
    rule; duplicates give undefined results. DegenerateGeometryError from a
    collinear fan aborts the run.
    """
    width = float(width)
    height = float(height)
    if not (width > 0 and height > 0):
        raise InvalidConfigurationError(f"width and height must be > 0, got {width}x{height}")

    pts = as_points(points)
    for p in pts:
        if not (0 <= p.x <= width and 0 <= p.y <= height):
            raise InvalidConfigurationError(
                f"Point {p.index} ({p.x}, {p.y}) lies outside [0,{width}]x[0,{height}]"
            )

    supers = super_triangle(width, height)
    logger.debug("Starting triangulation", points=len(pts), width=width, height=height)

    mesh = Triangulation.from_triangles([Triangle(supers)], pts, supers, width, height)
    for p in pts:
        mesh = insert_point(mesh, p)

    real = [t for t in mesh.triangles if not any(t.has_vertex(s) for s in supers)]
    result = Triangulation.from_triangles(real, pts, supers, width, height)

    logger.debug(
        "Triangulation complete",
        points=len(pts),
        triangles=result.triangle_count(),
        dropped=mesh.triangle_count() - result.triangle_count(),
    )
    return result
