import math

import numpy as np

from .errors import DegenerateGeometryError

# Point coincidence and relaxed in-circle tolerance
EPSILON = 1e-6


def circumcenter(p1, p2, p3):
    """
    Circumcenter and squared circumradius of the triangle (p1, p2, p3).

    Points only need ``.x`` and ``.y``. Returns ``((ux, uy), radius_sq)``.
    Raises DegenerateGeometryError for collinear/coincident input instead of
    letting NaN or inf leak into the mesh.
    """
    d = 2 * (p1.x * (p2.y - p3.y) + p2.x * (p3.y - p1.y) + p3.x * (p1.y - p2.y))
    if d == 0:
        raise DegenerateGeometryError(
            f"Collinear points have no circumcircle: "
            f"({p1.x}, {p1.y}), ({p2.x}, {p2.y}), ({p3.x}, {p3.y})"
        )

    s1 = p1.x * p1.x + p1.y * p1.y
    s2 = p2.x * p2.x + p2.y * p2.y
    s3 = p3.x * p3.x + p3.y * p3.y

    ux = (s1 * (p2.y - p3.y) + s2 * (p3.y - p1.y) + s3 * (p1.y - p2.y)) / d
    uy = (s1 * (p3.x - p2.x) + s2 * (p1.x - p3.x) + s3 * (p2.x - p1.x)) / d
    radius_sq = (p1.x - ux) * (p1.x - ux) + (p1.y - uy) * (p1.y - uy)

    if not (math.isfinite(ux) and math.isfinite(uy) and math.isfinite(radius_sq)):
        raise DegenerateGeometryError("Circumcircle is not finite (nearly collinear points)")

    return (ux, uy), radius_sq


def contains_point(triangle, point, eps: float = EPSILON) -> bool:
    """Relaxed in-circle test: dist^2 <= radius^2 * (1 + eps)."""
    cx, cy = triangle.circumcenter
    dx = point.x - cx
    dy = point.y - cy
    return dx * dx + dy * dy <= triangle.radius_sq * (1 + eps)


def bbox_midpoint(polygon: np.ndarray, width: int, height: int):
    """
    Midpoint of the polygon's axis-aligned bounding box, clamped to
    [0, width-1] x [0, height-1]. Deliberately not the area centroid.
    """
    P = np.asarray(polygon, dtype=np.float64)
    mn = P.min(axis=0)
    mx = P.max(axis=0)
    x = (float(mn[0]) + float(mx[0])) / 2
    y = (float(mn[1]) + float(mx[1])) / 2
    x = max(0.0, min(float(width - 1), x))
    y = max(0.0, min(float(height - 1), y))
    return x, y


def sort_by_angle(vertices: np.ndarray, center) -> np.ndarray:
    """
    Order vertices by ascending atan2 around center (stable for ties).

    Ascending angle is counter-clockwise with the y axis pointing up, which is
    clockwise on screen where y points down.
    """
    V = np.asarray(vertices, dtype=np.float64)
    if len(V) == 0:
        return V.reshape(0, 2)
    cx, cy = center
    angles = np.arctan2(V[:, 1] - cy, V[:, 0] - cx)
    return V[np.argsort(angles, kind="stable")]


def polygon_signed_area(polygon: np.ndarray) -> float:
    """Shoelace area; positive for counter-clockwise order in y-up coordinates."""
    P = np.asarray(polygon, dtype=np.float64)
    if len(P) < 3:
        return 0.0
    x = P[:, 0]
    y = P[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))
