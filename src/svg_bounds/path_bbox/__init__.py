"""Parse SVG path data and calculate the bounding box."""

from __future__ import annotations

from .bbox import get_bbox, parse_path_data, segments_bbox, to_path_data
from .segments import ClosePath, CubicCurveTo, LineTo, MoveTo, PathSegment

__all__ = [
    "ClosePath",
    "CubicCurveTo",
    "LineTo",
    "MoveTo",
    "PathSegment",
    "get_bbox",
    "parse_path_data",
    "segments_bbox",
    "to_path_data",
]
