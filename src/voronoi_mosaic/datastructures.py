from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

import numpy as np

from .geometry import EPSILON, circumcenter, contains_point


@dataclass(frozen=True)
class Point:
    """
    Input site or super-triangle vertex.
    index is the identity (input order); super-triangle vertices are negative.
    """
    x: float
    y: float
    index: int = -1

    def coincides(self, other: "Point") -> bool:
        return abs(self.x - other.x) < EPSILON and abs(self.y - other.y) < EPSILON


@dataclass(frozen=True)
class Edge:
    a: Point
    b: Point

    def same_as(self, other: "Edge") -> bool:
        # order-independent, approximate
        return (
            (self.a.coincides(other.a) and self.b.coincides(other.b))
            or (self.a.coincides(other.b) and self.b.coincides(other.a))
        )


@dataclass(frozen=True, eq=False)
class Triangle:
    """
    Three points with their circumcircle, computed once on construction.
    Compared by identity: the mesh never holds two equal triangles.
    """
    points: Tuple[Point, Point, Point]
    circumcenter: Tuple[float, float] = field(init=False)
    radius_sq: float = field(init=False)

    def __post_init__(self):
        center, radius_sq = circumcenter(*self.points)
        object.__setattr__(self, "circumcenter", center)
        object.__setattr__(self, "radius_sq", radius_sq)

    @property
    def edges(self) -> Tuple[Edge, Edge, Edge]:
        p1, p2, p3 = self.points
        return Edge(p1, p2), Edge(p2, p3), Edge(p3, p1)

    def contains_point(self, point: Point) -> bool:
        return contains_point(self, point)

    def has_vertex(self, point: Point) -> bool:
        return any(p is point for p in self.points)


@dataclass(frozen=True, eq=False)
class Triangulation:
    """
    Immutable mesh snapshot. Insertion produces a new snapshot.
    centers (T,2) and radii_sq (T,) mirror triangles for vectorised scans.
    """
    triangles: Tuple[Triangle, ...]
    points: Tuple[Point, ...]
    super_points: Tuple[Point, Point, Point]
    width: float
    height: float
    centers: np.ndarray
    radii_sq: np.ndarray

    @classmethod
    def from_triangles(cls, triangles, points, super_points, width, height) -> "Triangulation":
        triangles = tuple(triangles)
        if triangles:
            centers = np.array([t.circumcenter for t in triangles], dtype=np.float64)
            radii_sq = np.array([t.radius_sq for t in triangles], dtype=np.float64)
        else:
            centers = np.zeros((0, 2), dtype=np.float64)
            radii_sq = np.zeros((0,), dtype=np.float64)
        return cls(
            triangles=triangles,
            points=tuple(points),
            super_points=tuple(super_points),
            width=width,
            height=height,
            centers=centers,
            radii_sq=radii_sq,
        )

    def triangle_count(self) -> int:
        return len(self.triangles)

    def vertex_indices(self) -> np.ndarray:
        """(T,3) point indices per triangle."""
        if not self.triangles:
            return np.zeros((0, 3), dtype=np.int64)
        return np.array([[p.index for p in t.points] for t in self.triangles], dtype=np.int64)


@dataclass(frozen=True)
class ProcessedCell:
    """Export record for one colored cell. Never mutated after creation."""
    polygon: Tuple[Tuple[float, float], ...]
    color: Tuple[int, int, int]
    stroke_width: float
    site_index: int = -1

    def vertex_count(self) -> int:
        return len(self.polygon)


@dataclass(frozen=True)
class MosaicResult:
    width: int
    height: int
    records: Tuple[ProcessedCell, ...]
    point_count: int
    triangle_count: int

    def cell_count(self) -> int:
        return len(self.records)
