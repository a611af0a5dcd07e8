import numpy as np

from .errors import InvalidConfigurationError


def border_points(width: float, height: float) -> np.ndarray:
    """Corners then edge midpoints, so boundary cells come out clean."""
    w = float(width)
    h = float(height)
    return np.array([
        [0.0, 0.0],
        [w, 0.0],
        [0.0, h],
        [w, h],
        [w / 2, 0.0],
        [w / 2, h],
        [0.0, h / 2],
        [w, h / 2],
    ], dtype=np.float64)


def generate_points(
    count: int,
    width: float,
    height: float,
    *,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Border points followed by count - 8 uniform points in [0,width)x[0,height).
    Never fewer than the 8 border points. Deterministic given rng seed.
    """
    if int(count) <= 0:
        raise InvalidConfigurationError(f"count must be > 0, got {count}")
    if not (width > 0 and height > 0):
        raise InvalidConfigurationError(f"width and height must be > 0, got {width}x{height}")

    border = border_points(width, height)
    n_random = max(0, int(count) - len(border))

    pts = np.empty((n_random, 2), dtype=np.float64)
    pts[:, 0] = rng.random(n_random) * float(width)
    pts[:, 1] = rng.random(n_random) * float(height)
    return np.vstack([border, pts])
