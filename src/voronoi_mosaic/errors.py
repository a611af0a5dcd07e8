class MosaicError(Exception):
    """Base class for all voronoi_mosaic errors."""


class DegenerateGeometryError(MosaicError, ValueError):
    """
    Raised when three points have no circumcircle (collinear or coincident).
    Fatal for the triangulation run that hit it.
    """


class InvalidConfigurationError(MosaicError, ValueError):
    """Raised for bad run parameters, before any geometry work starts."""


class RunCancelled(MosaicError):
    """Raised between colorization chunks when the caller cancels a run."""
