from __future__ import annotations

from typing import Optional

import numpy as np
import structlog
from PIL import Image

from .colorize import PixelSource
from .config import MosaicSettings
from .datastructures import MosaicResult
from .delaunay import as_points, triangulate
from .sampling import generate_points
from .scheduler import ColorizeJob, ProgressSink
from .voronoi import build_cells

logger = structlog.get_logger()


def generate_mosaic(
    source,
    settings: Optional[MosaicSettings] = None,
    *,
    points=None,
    progress: Optional[ProgressSink] = None,
    cancel=None,
) -> MosaicResult:
    """
    Turn an image into colored Voronoi cells.

    source is a PixelSource or a PIL image. Sites come from points when given,
    otherwise settings.n_points are generated (seeded by settings.seed). The run
    holds no state beyond its return value: same sites and pixels, same records.

    Configuration errors are raised before any geometry work. A
    DegenerateGeometryError aborts the run; degenerate cells are just skipped.
    """
    settings = (settings or MosaicSettings()).validate()
    if isinstance(source, Image.Image):
        source = PixelSource.from_image(source)

    width, height = source.width, source.height
    if points is None:
        rng = np.random.default_rng(settings.seed)
        points = generate_points(settings.n_points, width, height, rng=rng)
    sites = as_points(points)

    log = logger.bind(width=width, height=height, points=len(sites))
    log.info("Generating mosaic", smoothness=settings.smoothness, stroke_width=settings.stroke_width)

    mesh = triangulate(sites, width, height)
    cells = build_cells(mesh)
    log.info("Geometry built", triangles=mesh.triangle_count(), cells=len(cells))

    job = ColorizeJob(
        cells,
        source,
        smoothness=settings.smoothness,
        stroke_width=settings.stroke_width,
    )
    records = job.run(progress=progress, cancel=cancel)
    log.info("Mosaic complete", records=len(records))

    return MosaicResult(
        width=width,
        height=height,
        records=records,
        point_count=len(sites),
        triangle_count=mesh.triangle_count(),
    )
