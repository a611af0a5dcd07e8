from .errors import MosaicError, DegenerateGeometryError, InvalidConfigurationError, RunCancelled
from .datastructures import Point, Triangle, Triangulation, ProcessedCell, MosaicResult
from .colorize import PixelSource
from .config import MosaicSettings
from .delaunay import triangulate
from .voronoi import build_cells
from .scheduler import ColorizeJob
from .export import export_cell, to_svg, read_svg, render_image
from .pipeline import generate_mosaic
