"""Bounding boxes of a scene tree."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from svg_bounds.geometry import IDENTITY, Rect, Transform
from svg_bounds.nodes import ROOT, ClipPath, Group, Image, Mask, Path, Root
from svg_bounds.path_bbox import segments_bbox
from svg_bounds.stroke import stroke_bounds

if TYPE_CHECKING:
    from svg_bounds.nodes import Handle, Node, SceneTree

logger = logging.getLogger(__name__)

Chain = frozenset[int]
"""Handles of the clip paths and masks currently being resolved."""


def _union(a: Rect | None, b: Rect | None) -> Rect | None:
    if a is None:
        return b
    if b is None:
        return a
    return a.union(b)


class BoundsCalculator:
    """Computes the bounds of the nodes of one tree.

    Every node is measured in root coordinates, by passing the accumulated
    transform of its ancestors down the recursion. ``None`` means that a
    node paints nothing.
    """

    def __init__(self, tree: SceneTree, clip_first_child_only: bool = True) -> None:
        """Initialize the calculator.

        Args:
            tree: The tree to measure.
            clip_first_child_only: Use only the first child of a clip path or
                mask as its shape. Otherwise all children are united.
        """
        self.tree = tree
        self.clip_first_child_only = clip_first_child_only

    def node_bbox(
        self,
        handle: Handle,
        transform: Transform = IDENTITY,
        chain: Chain = frozenset(),
    ) -> Rect | None:
        """Get the bounds of a node in root coordinates.

        Args:
            handle: The node to measure.
            transform: The effective transform of the parent.
            chain: The clip paths and masks currently being resolved.
        """
        node = self.tree.node(handle)
        effective = transform.prepend(node.transform)

        if isinstance(node, Path):
            return self._path_bbox(node, effective)

        if isinstance(node, Group):
            return self._group_bbox(node, effective, chain)

        if isinstance(node, Image):
            return self._image_bbox(node, effective)

        if isinstance(node, ClipPath | Mask):
            return self._shape_bbox(node, effective, chain)

        if isinstance(node, Root):
            return self._children_bbox(node, effective, chain)

        raise TypeError(f"Unknown node type {type(node).__name__}")

    def _path_bbox(self, node: Path, transform: Transform) -> Rect | None:
        if node.hidden:
            return None

        bbox = segments_bbox(node.segments, transform)

        if node.stroke is not None and node.stroke.visible:
            outline = stroke_bounds(node.segments, node.stroke)
            bbox = bbox.union(outline.transformed(transform))

        return None if bbox.is_empty() else bbox

    def _image_bbox(self, node: Image, transform: Transform) -> Rect | None:
        # all four corners, a rotation can move any of them outwards
        bbox = node.view_rect.transformed(transform)
        return None if bbox.is_empty() else bbox

    def _children_bbox(
        self, node: Node, transform: Transform, chain: Chain
    ) -> Rect | None:
        """Union of all children that paint something.

        Clip paths and masks only paint through references and the
        background of the document is ignored.
        """
        bbox: Rect | None = None

        for child in node.children:
            if child == self.tree.background:
                continue
            if isinstance(self.tree.node(child), ClipPath | Mask):
                continue
            bbox = _union(bbox, self.node_bbox(child, transform, chain))

        return bbox

    def _shape_bbox(
        self, node: ClipPath | Mask, transform: Transform, chain: Chain
    ) -> Rect | None:
        """The shape of a clip path or mask."""
        if not node.children:
            return None

        children = node.children[:1] if self.clip_first_child_only else node.children

        bbox: Rect | None = None
        for child in children:
            bbox = _union(bbox, self.node_bbox(child, transform, chain))

        return bbox

    def _resolve(
        self, ref: str | None, kind: type[ClipPath | Mask], chain: Chain
    ) -> Handle | None:
        """Find the target of a clip path or mask reference."""
        if ref is None:
            return None

        handle = self.tree.resolve_by_id(ref)

        if handle is None or not isinstance(self.tree.node(handle), kind):
            logger.debug("Ignoring unresolved %s reference %r", kind.__name__, ref)
            return None

        if handle in chain:
            logger.debug("Ignoring cyclic %s reference %r", kind.__name__, ref)
            return None

        return handle

    def _clip_region(
        self, node: Group, transform: Transform, chain: Chain
    ) -> tuple[bool, Rect | None]:
        """The region a group is restricted to.

        Returns:
            A flag if there is a clip region at all and the region itself,
            where ``None`` means that the clip shape paints nothing.
        """
        for ref, kind in ((node.clip_path, ClipPath), (node.mask, Mask)):
            handle = self._resolve(ref, kind, chain)
            if handle is not None:
                return True, self.node_bbox(handle, transform, chain | {handle})

        return False, None

    def _group_bbox(
        self, node: Group, transform: Transform, chain: Chain
    ) -> Rect | None:
        bbox = self._children_bbox(node, transform, chain)
        if bbox is None:
            return None

        is_clipped, clip = self._clip_region(node, transform, chain)
        if not is_clipped:
            return bbox

        if clip is None:
            return None

        bbox = bbox.intersect(clip)
        return None if bbox.is_empty() else bbox

    def content_bbox(self) -> Rect | None:
        """The bounds of everything painted by the tree."""
        return self.node_bbox(ROOT)


def raw_content_bbox(tree: SceneTree, clip_first_child_only: bool = True) -> Rect:
    """The geometric bounds of all visible content of a tree.

    The bounds are not restricted to the canvas.

    Returns:
        The bounds, a zero-sized rect at the origin if nothing is visible.
    """
    bbox = BoundsCalculator(tree, clip_first_child_only).content_bbox()
    return Rect(0, 0, 0, 0) if bbox is None else bbox


def document_visible_bbox(
    tree: SceneTree, clip_first_child_only: bool = True
) -> Rect:
    """The visible bounds of a tree, in whole units, for cropping.

    The content bounds are restricted to the view box and rounded outwards
    to integers. The result never leaves the view box.

    Returns:
        The bounds, a zero-sized rect at the origin if nothing is visible.
    """
    bbox = BoundsCalculator(tree, clip_first_child_only).content_bbox()
    if bbox is None:
        return Rect(0, 0, 0, 0)

    visible = bbox.intersect(tree.view_box)
    if visible.is_empty():
        return Rect(0, 0, 0, 0)

    return visible.rounded_out().intersect(tree.view_box).finite()
