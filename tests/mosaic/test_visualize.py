import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from src.voronoi_mosaic.config import MosaicSettings
from src.voronoi_mosaic.delaunay import triangulate
from src.voronoi_mosaic.export import export_cell
from src.voronoi_mosaic.pipeline import generate_mosaic
from src.voronoi_mosaic.colorize import PixelSource
from src.voronoi_mosaic.visualize import plot_cells, plot_triangulation


def test_plot_cells_adds_one_patch_per_record():
    records = [
        export_cell([[0, 0], [10, 0], [5, 8]], (255, 0, 0), 1.0),
        export_cell([[10, 0], [20, 0], [15, 8]], (0, 0, 255), 0.0),
    ]
    ax = plot_cells(records)
    assert len(ax.patches) == 2
    assert ax.yaxis_inverted()
    plt.close(ax.figure)


def test_plot_mosaic_and_mesh():
    src = PixelSource(np.full((30, 40, 3), 128, dtype=np.uint8))
    result = generate_mosaic(src, MosaicSettings(n_points=30, seed=2))
    ax = plot_cells(result.records)
    assert len(ax.patches) == result.cell_count()
    plt.close(ax.figure)

    mesh = triangulate(np.random.default_rng(0).random((20, 2)) * 10, 10, 10)
    ax = plot_triangulation(mesh)
    assert len(ax.lines) == mesh.triangle_count()
    plt.close(ax.figure)
