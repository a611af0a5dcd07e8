from __future__ import annotations

import math
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image

from .errors import InvalidConfigurationError
from .geometry import bbox_midpoint


class PixelSource:
    """
    Read-only RGB sampler over an (H, W, 3) uint8 array.
    """

    def __init__(self, pixels: np.ndarray):
        arr = np.asarray(pixels)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise InvalidConfigurationError(f"pixels must be (H,W,3), got {arr.shape}")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidConfigurationError("pixel source must not be empty")
        arr = arr.astype(np.uint8, copy=True)
        arr.setflags(write=False)
        self._pixels = arr

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelSource":
        return cls(np.asarray(image.convert("RGB")))

    @classmethod
    def open(cls, path) -> "PixelSource":
        with Image.open(Path(path)) as img:
            return cls.from_image(img)

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    def region(self, x0: int, y0: int, x1: int, y1: int) -> np.ndarray:
        """Pixels in [x0,x1) x [y0,y1), clamped to the image. May be empty."""
        x0 = max(0, int(x0))
        y0 = max(0, int(y0))
        x1 = min(self.width, int(x1))
        y1 = min(self.height, int(y1))
        if x1 <= x0 or y1 <= y0:
            return np.zeros((0, 0, 3), dtype=np.uint8)
        return self._pixels[y0:y1, x0:x1]


def sample_window(cx: float, cy: float, smoothness: int, width: int, height: int):
    """
    Square window around (cx, cy) as (x0, y0, x1, y1), clamped to the image.
    Side is 2 * (smoothness // 2) + 1, so even sizes round up by one.
    """
    half = int(smoothness) // 2
    x = math.floor(cx)
    y = math.floor(cy)
    return (
        max(0, x - half),
        max(0, y - half),
        min(width, x + half + 1),
        min(height, y + half + 1),
    )


def _round_half_up(v: np.ndarray) -> np.ndarray:
    return np.floor(v + 0.5)


def colorize(polygon: np.ndarray, source: PixelSource, smoothness: int) -> Tuple[int, int, int]:
    """
    Representative color of a cell: the mean RGB of a smoothness-sized window
    centered on the polygon's bounding-box midpoint. Black if the window is empty.
    """
    cx, cy = bbox_midpoint(polygon, source.width, source.height)
    x0, y0, x1, y1 = sample_window(cx, cy, smoothness, source.width, source.height)
    window = source.region(x0, y0, x1, y1)
    if window.size == 0:
        return 0, 0, 0

    mean = window.reshape(-1, 3).astype(np.float64).mean(axis=0)
    r, g, b = _round_half_up(mean).astype(int).tolist()
    return int(r), int(g), int(b)
