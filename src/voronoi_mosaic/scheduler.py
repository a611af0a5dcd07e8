"""
Chunked, cooperative colorization.

ColorizeJob is a small state machine (cursor, total, chunk size). Each step()
colorizes one contiguous chunk in the original cell order and reports the
fraction done. Hosts either call step() themselves, iterate the job (one
yield per chunk), or call run() with a progress sink and a cancellation
token that is checked between chunks only.
"""
from __future__ import annotations

from typing import Callable, Iterator, List, Mapping, Optional, Tuple

import numpy as np
import structlog

from .colorize import PixelSource, colorize
from .datastructures import ProcessedCell
from .errors import InvalidConfigurationError, RunCancelled
from .export import export_cell

logger = structlog.get_logger()

ProgressSink = Callable[[float], None]


def chunk_size_for(total: int) -> int:
    return max(1, int(total) // 100)


class ColorizeJob:
    def __init__(
        self,
        cells: Mapping[int, np.ndarray],
        source: PixelSource,
        *,
        smoothness: int,
        stroke_width: float,
    ):
        if int(smoothness) <= 0:
            raise InvalidConfigurationError(f"smoothness must be > 0, got {smoothness}")
        if float(stroke_width) < 0:
            raise InvalidConfigurationError(f"stroke_width must be >= 0, got {stroke_width}")

        self._items: List[Tuple[int, np.ndarray]] = list(cells.items())
        self.source = source
        self.smoothness = int(smoothness)
        self.stroke_width = float(stroke_width)

        self.total = len(self._items)
        self.chunk_size = chunk_size_for(self.total)
        self.cursor = 0
        self.skipped = 0
        self._finished = False
        self._records: List[ProcessedCell] = []

    @property
    def done(self) -> bool:
        return self._finished

    @property
    def progress(self) -> float:
        if self.total == 0:
            return 1.0 if self._finished else 0.0
        return self.cursor / self.total

    @property
    def records(self) -> Tuple[ProcessedCell, ...]:
        return tuple(self._records)

    def step(self) -> float:
        """Colorize the next chunk and return the fraction of cells processed."""
        if self._finished:
            raise RuntimeError("ColorizeJob already complete")

        start = self.cursor
        end = min(start + self.chunk_size, self.total)
        for index, polygon in self._items[start:end]:
            if len(polygon) < 3:
                self.skipped += 1
                continue
            color = colorize(polygon, self.source, self.smoothness)
            self._records.append(export_cell(polygon, color, self.stroke_width, index))

        self.cursor = end
        if self.cursor >= self.total:
            self._finished = True
        return self.progress

    def __iter__(self) -> Iterator[float]:
        while not self._finished:
            yield self.step()

    def run(self, progress: Optional[ProgressSink] = None, cancel=None) -> Tuple[ProcessedCell, ...]:
        """
        Drive the job to completion. progress is called after every chunk;
        cancel (anything with is_set(), e.g. threading.Event) is polled before
        every chunk and raises RunCancelled.
        """
        while not self._finished:
            if cancel is not None and cancel.is_set():
                logger.info("Colorization cancelled", processed=self.cursor, total=self.total)
                raise RunCancelled(f"Cancelled after {self.cursor} of {self.total} cells")
            fraction = self.step()
            if progress is not None:
                progress(fraction)

        logger.debug("Colorization complete", records=len(self._records), skipped=self.skipped)
        return self.records
