import numpy as np
from shapely.geometry import Polygon

from src.voronoi_mosaic.delaunay import triangulate
from src.voronoi_mosaic.geometry import polygon_signed_area
from src.voronoi_mosaic.sampling import generate_points
from src.voronoi_mosaic.voronoi import build_cells


def test_square_with_center_keeps_only_center_cell():
    pts = np.array([[0, 0], [100, 0], [0, 100], [100, 100], [50, 50]], dtype=np.float64)
    mesh = triangulate(pts, 100, 100)
    cells = build_cells(mesh)

    # corners are hull sites with only two circumcenters each
    assert list(cells) == [4]
    center = cells[4]
    assert center.shape == (4, 2)
    assert np.allclose(center, [[50, 0], [100, 50], [50, 100], [0, 50]])

    # the square minus its four corner wedges
    assert Polygon(center).area == 100 * 100 - 4 * (50 * 50 / 2)


def test_cells_follow_point_order_and_are_simple():
    rng = np.random.default_rng(5)
    pts = generate_points(120, 200, 150, rng=rng)
    mesh = triangulate(pts, 200, 150)
    cells = build_cells(mesh)

    keys = list(cells)
    assert keys == sorted(keys)
    assert len(cells) > 80

    for idx, poly in cells.items():
        assert len(poly) >= 3
        if idx < 8:
            # border sites have open cells
            continue
        assert Polygon(poly).is_valid
        assert polygon_signed_area(poly) > 0


def test_cells_sorted_by_angle_around_owner():
    rng = np.random.default_rng(1)
    pts = generate_points(40, 100, 100, rng=rng)
    mesh = triangulate(pts, 100, 100)

    for idx, poly in build_cells(mesh).items():
        sx, sy = pts[idx]
        angles = np.arctan2(poly[:, 1] - sy, poly[:, 0] - sx)
        assert np.all(np.diff(angles) >= 0)


def test_cell_vertices_are_circumcenters_of_touching_triangles():
    rng = np.random.default_rng(9)
    pts = rng.random((30, 2)) * 100
    mesh = triangulate(pts, 100, 100)
    cells = build_cells(mesh)

    for idx, poly in cells.items():
        expected = sorted(t.circumcenter for t in mesh.triangles if any(p.index == idx for p in t.points))
        got = sorted(map(tuple, poly.tolist()))
        assert np.allclose(got, expected)


def test_explicit_points_argument_restricts_cells():
    pts = np.array([[0, 0], [100, 0], [0, 100], [100, 100], [50, 50]], dtype=np.float64)
    mesh = triangulate(pts, 100, 100)
    assert build_cells(mesh, pts[:4]) == {}
