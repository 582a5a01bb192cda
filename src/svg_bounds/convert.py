"""Whole-tree operations: cropping, degree reduction and path output."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from svg_bounds.bounds import document_visible_bbox
from svg_bounds.canonical import canonicalize_path_text
from svg_bounds.path_bbox import to_path_data
from svg_bounds.path_bbox.constants import DEFAULT_PRECISION
from svg_bounds.reduce import reduce_cubics_to_quadratics

if TYPE_CHECKING:
    from svg_bounds.geometry import Rect
    from svg_bounds.nodes import Path, SceneTree

logger = logging.getLogger(__name__)


def cubic_path_to_quad(tree: SceneTree, tolerance: float) -> SceneTree:
    """Replace the cubic curves of every path by quadratic curves.

    Modifies the tree in place.

    Args:
        tree: The tree to modify.
        tolerance: The maximum distance between a cubic and its quadratics,
            in the units of the path coordinates.
    """
    for path in tree.paths():
        path.segments = reduce_cubics_to_quadratics(path.segments, tolerance)
    return tree


def crop(tree: SceneTree, bbox: Rect) -> SceneTree:
    """Set the view box and size of the document to ``bbox``.

    The content is not moved. Non-finite rectangles are ignored.
    """
    if not (math.isfinite(bbox.width) and math.isfinite(bbox.height)):
        logger.debug("Not cropping to non-finite %s", bbox)
        return tree

    tree.view_box = bbox
    tree.width = bbox.width
    tree.height = bbox.height
    return tree


def remove_whitespace(tree: SceneTree, padding: float = 0) -> SceneTree:
    """Crop the document to its visible content plus ``padding``."""
    return crop(tree, document_visible_bbox(tree).outset(padding))


def path_to_text(path: Path, precision: int = DEFAULT_PRECISION) -> str:
    """Write the path data of a node with quadratics as ``Q`` commands."""
    return canonicalize_path_text(to_path_data(path.segments, precision))
