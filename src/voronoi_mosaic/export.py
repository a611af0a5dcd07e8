"""
Export records and their wire mapping.

Each record becomes one ``<polygon>`` with ``fill="rgb(r,g,b)"``; when the
stroke width is positive it also gets ``stroke="rgba(0,0,0,0.3)"`` and
``stroke-width``. The root ``<svg>`` carries the run size as both pixel size
and viewBox.
"""
from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import numpy as np
import svgwrite
from PIL import Image, ImageDraw

from .datastructures import ProcessedCell

STROKE_COLOR = "rgba(0,0,0,0.3)"
STROKE_RGBA = (0, 0, 0, round(0.3 * 255))

_RGB_RE = re.compile(r"rgb\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*\)")


def export_cell(polygon, color, stroke_width: float, site_index: int = -1) -> ProcessedCell:
    """Freeze a polygon and its color into a record. Vertex order is kept as is."""
    P = np.asarray(polygon, dtype=np.float64).reshape(-1, 2)
    r, g, b = (int(c) for c in color)
    return ProcessedCell(
        polygon=tuple((float(x), float(y)) for x, y in P),
        color=(r, g, b),
        stroke_width=float(stroke_width),
        site_index=int(site_index),
    )


def _svg_number(v: float):
    return int(v) if float(v).is_integer() else v


def build_drawing(records: Iterable[ProcessedCell], width, height, filename: str = "noname.svg") -> svgwrite.Drawing:
    w = _svg_number(width)
    h = _svg_number(height)
    # validation off: svgwrite's color checker rejects rgba()
    dwg = svgwrite.Drawing(filename, size=(w, h), debug=False)
    dwg["viewBox"] = f"0 0 {w} {h}"

    for rec in records:
        r, g, b = rec.color
        attrs = {"fill": svgwrite.rgb(r, g, b)}
        if rec.stroke_width > 0:
            attrs["stroke"] = STROKE_COLOR
            attrs["stroke_width"] = _svg_number(rec.stroke_width)
        dwg.add(dwg.polygon(list(rec.polygon), **attrs))

    return dwg


def to_svg(records: Iterable[ProcessedCell], width, height) -> str:
    return build_drawing(records, width, height).tostring()


def save_svg(records: Iterable[ProcessedCell], width, height, path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_svg(records, width, height), encoding="utf-8")
    return path


def _local(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def read_svg(text: str):
    """
    Parse markup written by to_svg back into (width, height, cells), where each
    cell is (points, (r, g, b), stroke_width).
    """
    root = ET.fromstring(text)
    if _local(root.tag) != "svg":
        raise ValueError(f"Expected <svg> root, got <{_local(root.tag)}>")

    width = float(root.get("width"))
    height = float(root.get("height"))

    cells: List[Tuple[List[Tuple[float, float]], Tuple[int, int, int], float]] = []
    for el in root.iter():
        if _local(el.tag) != "polygon":
            continue
        pts = []
        for pair in el.get("points", "").split():
            x, y = pair.split(",")
            pts.append((float(x), float(y)))

        m = _RGB_RE.fullmatch(el.get("fill", "").strip())
        if m is None:
            raise ValueError(f"Unsupported fill: {el.get('fill')!r}")
        color = tuple(int(c) for c in m.groups())

        stroke_width = float(el.get("stroke-width", 0))
        cells.append((pts, color, stroke_width))

    return width, height, cells


def render_image(
    records: Sequence[ProcessedCell],
    width: int,
    height: int,
    *,
    background: Tuple[int, int, int] = (255, 255, 255),
) -> Image.Image:
    """
    Rasterise records in order: each polygon is filled with its color, then
    outlined in 30%-opacity black when its stroke width is positive.
    """
    img = Image.new("RGB", (int(width), int(height)), tuple(background))
    # RGBA draw mode on an RGB image alpha-blends each primitive
    draw = ImageDraw.Draw(img, "RGBA")

    for rec in records:
        pts = [(x, y) for x, y in rec.polygon]
        draw.polygon(pts, fill=tuple(rec.color) + (255,))
        if rec.stroke_width > 0:
            draw.line(
                pts + [pts[0]],
                fill=STROKE_RGBA,
                width=max(1, int(round(rec.stroke_width))),
                joint="curve",
            )

    return img


def save_png(records: Sequence[ProcessedCell], width: int, height: int, path, **kwargs) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_image(records, width, height, **kwargs).save(path, format="PNG")
    return path
