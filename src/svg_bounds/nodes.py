"""The scene tree: nodes stored in an arena and addressed by handles."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING

from svg_bounds.geometry import IDENTITY, Rect, Transform

if TYPE_CHECKING:
    from collections.abc import Iterator

    from svg_bounds.path_bbox.segments import PathSegment

Handle = int
"""Index of a node in its tree."""

ROOT: Handle = 0


class LineCap(enum.Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class LineJoin(enum.Enum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


@dataclass(frozen=True)
class Fill:
    opacity: float = 1.0

    @property
    def visible(self) -> bool:
        return self.opacity > 0


@dataclass(frozen=True)
class Stroke:
    """Stroke paint of a path.

    The stroke is invisible if either its width or its opacity is zero.
    """

    width: float = 1.0
    line_cap: LineCap = LineCap.BUTT
    line_join: LineJoin = LineJoin.MITER
    miter_limit: float = 4.0
    opacity: float = 1.0

    @property
    def visible(self) -> bool:
        return self.opacity > 0 and self.width > 0


@dataclass(kw_only=True)
class Node:
    """Common fields of all nodes."""

    id: str | None = None
    transform: Transform = IDENTITY
    children: list[Handle] = field(default_factory=list)


@dataclass(kw_only=True)
class Root(Node):
    pass


@dataclass(kw_only=True)
class Group(Node):
    clip_path: str | None = None
    mask: str | None = None


@dataclass(kw_only=True)
class Path(Node):
    segments: list[PathSegment] = field(default_factory=list)
    fill: Fill | None = None
    stroke: Stroke | None = None

    @property
    def hidden(self) -> bool:
        """If neither fill nor stroke paints anything."""
        no_fill = self.fill is None or not self.fill.visible
        no_stroke = self.stroke is None or not self.stroke.visible
        return no_fill and no_stroke


@dataclass(kw_only=True)
class Image(Node):
    view_rect: Rect


@dataclass(kw_only=True)
class ClipPath(Node):
    pass


@dataclass(kw_only=True)
class Mask(Node):
    pass


class SceneTree:
    """A document tree owning all of its nodes.

    Nodes refer to their children by handle. The root always has the
    handle :data:`ROOT`.
    """

    def __init__(
        self,
        width: float,
        height: float,
        view_box: Rect | None = None,
        root: Root | None = None,
    ) -> None:
        """Initialize the tree.

        Args:
            width: The intrinsic width of the document.
            height: The intrinsic height of the document.
            view_box: The visible canvas. Defaults to ``0 0 width height``.
            root: The root node. A new one is created if not given.
        """
        self.width = width
        self.height = height
        self.view_box = view_box or Rect(0, 0, width, height)
        self.background: Handle | None = None
        self._nodes: list[Node] = [root or Root()]

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> Root:
        root = self._nodes[ROOT]
        assert isinstance(root, Root)
        return root

    def add(self, node: Node, parent: Handle = ROOT, background: bool = False) -> Handle:
        """Append a node to the children of ``parent``.

        Args:
            node: The node to add. Must not be part of a tree yet.
            parent: The handle of the parent node.
            background: Mark the node as the synthetic document background,
                which is ignored by bounding box queries.

        Returns:
            The handle of the new node.
        """
        parent_node = self.node(parent)
        handle = len(self._nodes)
        self._nodes.append(node)
        parent_node.children.append(handle)

        if background:
            self.background = handle

        # the structure changed
        self.__dict__.pop("id_index", None)

        return handle

    def node(self, handle: Handle) -> Node:
        """Get the node for a handle."""
        if not 0 <= handle < len(self._nodes):
            raise KeyError(f"No node with handle {handle}")
        return self._nodes[handle]

    def children(self, handle: Handle = ROOT) -> list[Handle]:
        """The handles of the children in document order."""
        return list(self.node(handle).children)

    def descendants(self, handle: Handle = ROOT) -> Iterator[Handle]:
        """Depth-first pre-order walk, including ``handle`` itself."""
        stack = [handle]
        while stack:
            current = stack.pop()
            yield current
            stack.extend(reversed(self.node(current).children))

    def paths(self) -> Iterator[Path]:
        """All path nodes in document order."""
        for handle in self.descendants():
            node = self._nodes[handle]
            if isinstance(node, Path):
                yield node

    @cached_property
    def id_index(self) -> dict[str, Handle]:
        """Map from node id to handle. The first node wins on duplicates."""
        index: dict[str, Handle] = {}
        for handle in self.descendants():
            node_id = self._nodes[handle].id
            if node_id:
                index.setdefault(node_id, handle)
        return index

    def resolve_by_id(self, node_id: str) -> Handle | None:
        """Find the node with the given id."""
        return self.id_index.get(node_id)
