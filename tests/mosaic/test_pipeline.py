import threading

import numpy as np
import pytest
from PIL import Image

import src.voronoi_mosaic.pipeline as pipeline
from src.voronoi_mosaic.colorize import PixelSource
from src.voronoi_mosaic.config import MosaicSettings
from src.voronoi_mosaic.errors import DegenerateGeometryError, InvalidConfigurationError, RunCancelled
from src.voronoi_mosaic.export import read_svg, to_svg
from src.voronoi_mosaic.pipeline import generate_mosaic


def _gradient(width=64, height=48):
    px = np.zeros((height, width, 3), dtype=np.uint8)
    px[..., 0] = np.linspace(0, 255, width, dtype=np.uint8)[None, :]
    px[..., 2] = np.linspace(255, 0, height, dtype=np.uint8)[:, None]
    px[..., 1] = 90
    return PixelSource(px)


def test_runs_are_reproducible():
    settings = MosaicSettings(n_points=80, smoothness=3, stroke_width=1.0, seed=42)
    a = generate_mosaic(_gradient(), settings)
    b = generate_mosaic(_gradient(), settings)

    assert a.records == b.records
    assert a.cell_count() > 40
    assert (a.width, a.height, a.point_count) == (64, 48, 80)
    assert a.triangle_count > 0


def test_records_are_valid_cells():
    result = generate_mosaic(_gradient(), MosaicSettings(n_points=60, smoothness=5, stroke_width=2.0, seed=1))
    for rec in result.records:
        assert rec.vertex_count() >= 3
        assert all(0 <= c <= 255 for c in rec.color)
        assert rec.stroke_width == 2.0

    _, _, cells = read_svg(to_svg(result.records, result.width, result.height))
    assert [c[1] for c in cells] == [r.color for r in result.records]


def test_accepts_pil_image_and_explicit_points():
    img = Image.new("RGB", (100, 100), (40, 80, 120))
    pts = np.array([[0, 0], [100, 0], [0, 100], [100, 100], [50, 50]], dtype=np.float64)
    result = generate_mosaic(img, MosaicSettings(smoothness=3, stroke_width=0), points=pts)

    assert result.point_count == 5
    assert result.cell_count() == 1
    rec = result.records[0]
    assert rec.site_index == 4
    assert rec.color == (40, 80, 120)
    assert np.allclose(rec.polygon, [[50, 0], [100, 50], [50, 100], [0, 50]])


def test_progress_reaches_one():
    seen = []
    generate_mosaic(_gradient(), MosaicSettings(n_points=150, seed=3), progress=seen.append)
    assert seen[-1] == 1.0
    assert seen == sorted(seen)


def test_configuration_checked_before_geometry(monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("triangulation should not run")

    monkeypatch.setattr(pipeline, "triangulate", boom)
    with pytest.raises(InvalidConfigurationError):
        generate_mosaic(_gradient(), MosaicSettings(smoothness=0))
    with pytest.raises(InvalidConfigurationError):
        generate_mosaic(_gradient(), MosaicSettings(n_points=-1))
    with pytest.raises(InvalidConfigurationError):
        generate_mosaic(_gradient(), points=np.zeros((0, 2)))


def test_geometry_errors_abort_the_run(monkeypatch):
    def degenerate(*args, **kwargs):
        raise DegenerateGeometryError("collinear")

    monkeypatch.setattr(pipeline, "triangulate", degenerate)
    with pytest.raises(DegenerateGeometryError):
        generate_mosaic(_gradient(), MosaicSettings(n_points=20, seed=0))


def test_cancelled_run_raises():
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(RunCancelled):
        generate_mosaic(_gradient(), MosaicSettings(n_points=30, seed=0), cancel=cancel)
