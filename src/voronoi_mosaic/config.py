from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

from .errors import InvalidConfigurationError


@dataclass(frozen=True)
class MosaicSettings:
    """
    Parameters of one mosaic run.
    smoothness is the side of the color sampling window in pixels.
    """
    n_points: int = 2000
    smoothness: int = 7
    stroke_width: float = 3.0
    seed: Optional[int] = None

    def validate(self) -> "MosaicSettings":
        if int(self.n_points) <= 0:
            raise InvalidConfigurationError(f"n_points must be > 0, got {self.n_points}")
        if int(self.smoothness) <= 0:
            raise InvalidConfigurationError(f"smoothness must be > 0, got {self.smoothness}")
        if float(self.stroke_width) < 0:
            raise InvalidConfigurationError(f"stroke_width must be >= 0, got {self.stroke_width}")
        return self

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "MosaicSettings":
        """
        Build settings from loosely typed input (form fields, env, JSON).
        Missing, empty, zero or unparsable values fall back to the defaults;
        an explicit 0 stroke width is kept.
        """
        defaults = cls()
        kwargs = {}
        for f in fields(cls):
            raw = values.get(f.name)
            default = getattr(defaults, f.name)
            if f.name == "seed":
                try:
                    kwargs[f.name] = int(raw)
                except (TypeError, ValueError):
                    kwargs[f.name] = None
                continue
            cast = float if f.name == "stroke_width" else int
            try:
                value = cast(raw)
            except (TypeError, ValueError):
                value = default
            if value == 0 and f.name != "stroke_width":
                value = default
            kwargs[f.name] = value
        return cls(**kwargs)
