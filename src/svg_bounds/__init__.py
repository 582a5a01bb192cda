"""Bounding boxes and quadratic curves for SVG scene trees."""

from __future__ import annotations

from svg_bounds.bounds import BoundsCalculator, document_visible_bbox, raw_content_bbox
from svg_bounds.canonical import canonicalize_path_text
from svg_bounds.convert import crop, cubic_path_to_quad, path_to_text, remove_whitespace
from svg_bounds.geometry import IDENTITY, Point, Rect, Transform
from svg_bounds.nodes import (
    ClipPath,
    Fill,
    Group,
    Image,
    LineCap,
    LineJoin,
    Mask,
    Path,
    Root,
    SceneTree,
    Stroke,
)
from svg_bounds.path_bbox import (
    ClosePath,
    CubicCurveTo,
    LineTo,
    MoveTo,
    parse_path_data,
    to_path_data,
)
from svg_bounds.reduce import cubic_to_quadratics, reduce_cubics_to_quadratics
from svg_bounds.stroke import stroke_bounds

__all__ = [
    "IDENTITY",
    "BoundsCalculator",
    "ClipPath",
    "ClosePath",
    "CubicCurveTo",
    "Fill",
    "Group",
    "Image",
    "LineCap",
    "LineJoin",
    "LineTo",
    "Mask",
    "MoveTo",
    "Path",
    "Point",
    "Rect",
    "Root",
    "SceneTree",
    "Stroke",
    "Transform",
    "canonicalize_path_text",
    "crop",
    "cubic_path_to_quad",
    "cubic_to_quadratics",
    "document_visible_bbox",
    "parse_path_data",
    "path_to_text",
    "raw_content_bbox",
    "reduce_cubics_to_quadratics",
    "remove_whitespace",
    "stroke_bounds",
    "to_path_data",
]
