"""Bounds of the area painted by a stroke.

The stroke is treated as the region between the two curves offset by half
the stroke width on both sides of every segment, plus joins and caps. Only
the extreme points of that region are computed, never the outline itself:

* the offsets are evaluated at the segment ends and at every parameter where
  a cubic's tangent is axis-aligned, which is where an offset curve has its
  x and y extremes (cusps of the inner offset are ignored),
* miter joins add the miter tip while the miter ratio is within the limit
  and fall back to bevel joins otherwise,
* round joins and caps add the axis extremes of their circular arc,
* square caps extend the ends by half the width along the tangent.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from svg_bounds.geometry import Rect
from svg_bounds.nodes import LineCap, LineJoin
from svg_bounds.path_bbox.math import cubic_critical_params, cubic_point, cubic_tangent
from svg_bounds.path_bbox.segments import ClosePath, CubicCurveTo, LineTo, MoveTo

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from svg_bounds.nodes import Stroke
    from svg_bounds.path_bbox.segments import PathSegment

CLOSE_DISTANCE_SQ = 1.0
"""Squared distance below which a closing line is dropped."""

EPSILON = 1e-9

AXES = (1 + 0j, -1 + 0j, 1j, -1j)

Piece = tuple[complex, ...]
"""A line (two points) or a cubic (four points)."""


@dataclass
class Contour:
    """A subpath as a chain of line and cubic pieces."""

    start: complex
    pieces: list[Piece] = field(default_factory=list)
    closed: bool = False

    @property
    def end(self) -> complex:
        return self.pieces[-1][-1] if self.pieces else self.start

    def is_empty(self) -> bool:
        return not self.pieces

    def push_endpoint(self, point: complex) -> None:
        self.pieces.append((self.end, point))

    def push_cubic(self, ctrl1: complex, ctrl2: complex, point: complex) -> None:
        self.pieces.append((self.end, ctrl1, ctrl2, point))

    def close(self) -> None:
        """Close the contour with a straight line if needed."""
        self.closed = True
        if self.pieces and self.end != self.start:
            self.push_endpoint(self.start)


def build_contours(segments: Sequence[PathSegment]) -> list[Contour]:
    """Split path segments into contours.

    A line right before a close command is dropped if it ends within
    :data:`CLOSE_DISTANCE_SQ` of the contour start, so no degenerate closing
    edge is left over.
    """
    contours: list[Contour] = []
    contour: Contour | None = None
    pen = 0j

    for ix, seg in enumerate(segments):
        if isinstance(seg, MoveTo):
            if contour is not None and not contour.is_empty():
                contours.append(contour)
            pen = complex(seg.x, seg.y)
            contour = Contour(pen)
            continue

        if isinstance(seg, ClosePath):
            if contour is not None:
                contour.close()
                if not contour.is_empty():
                    contours.append(contour)
                pen = contour.start
            contour = None
            continue

        if contour is None:
            # drawing after a close command continues from the subpath start
            contour = Contour(pen)

        if isinstance(seg, LineTo):
            point = complex(seg.x, seg.y)
            next_seg = segments[ix + 1] if ix + 1 < len(segments) else None
            if (
                isinstance(next_seg, ClosePath)
                and abs(contour.start - point) ** 2 < CLOSE_DISTANCE_SQ
            ):
                continue
            contour.push_endpoint(point)

        elif isinstance(seg, CubicCurveTo):
            _, ctrl1, ctrl2, end = seg.bezier(contour.end)
            contour.push_cubic(ctrl1, ctrl2, end)

    if contour is not None and not contour.is_empty():
        contours.append(contour)

    return contours


def _unit(vector: complex) -> complex | None:
    length = abs(vector)
    if length < EPSILON:
        return None
    return vector / length


def _is_degenerate(piece: Piece) -> bool:
    return all(abs(p - piece[0]) < EPSILON for p in piece[1:])


def _start_tangent(piece: Piece) -> complex:
    for p in piece[1:]:
        if (d := _unit(p - piece[0])) is not None:
            return d
    raise ValueError("Degenerate piece has no tangent")


def _end_tangent(piece: Piece) -> complex:
    for p in reversed(piece[:-1]):
        if (d := _unit(piece[-1] - p)) is not None:
            return d
    raise ValueError("Degenerate piece has no tangent")


def _offset_points(piece: Piece, half_width: float) -> Iterator[complex]:
    """Both offsets at the ends and at the axis-aligned tangents of a piece."""
    for point, tangent in (
        (piece[0], _start_tangent(piece)),
        (piece[-1], _end_tangent(piece)),
    ):
        normal = 1j * tangent
        yield point + half_width * normal
        yield point - half_width * normal

    if len(piece) == 2:
        return

    p0, p1, p2, p3 = piece
    for t in cubic_critical_params(p0, p1, p2, p3):
        if math.isnan(t):
            continue
        tangent = _unit(cubic_tangent(t, p0, p1, p2, p3))
        if tangent is None:
            continue
        point = cubic_point(t, p0, p1, p2, p3)
        normal = 1j * tangent
        yield point + half_width * normal
        yield point - half_width * normal


def _arc_points(
    center: complex, radius: float, mid: complex, edge: complex
) -> Iterator[complex]:
    """Axis extremes of the arc around ``mid`` reaching to direction ``edge``."""
    cos_half = (edge.conjugate() * mid).real
    for axis in AXES:
        if (axis.conjugate() * mid).real >= cos_half - EPSILON:
            yield center + radius * axis


def _join_points(
    vertex: complex,
    incoming: complex,
    outgoing: complex,
    half_width: float,
    stroke: Stroke,
) -> Iterator[complex]:
    turn = incoming.conjugate() * outgoing
    cos_angle, cross = turn.real, turn.imag

    if abs(cross) < EPSILON and cos_angle > 0:
        # straight continuation
        return

    # the outer side is opposite to the turning direction
    side = -1 if cross > 0 else 1
    outer_in = side * 1j * incoming
    outer_out = side * 1j * outgoing

    if stroke.line_join == LineJoin.MITER:
        if 1 + cos_angle < EPSILON:
            return
        ratio = math.sqrt(2 / (1 + cos_angle))
        if ratio <= stroke.miter_limit:
            yield vertex + half_width * (outer_in + outer_out) / (1 + cos_angle)

    elif stroke.line_join == LineJoin.ROUND:
        mid = _unit(outer_in + outer_out) or incoming
        yield from _arc_points(vertex, half_width, mid, outer_in)


def _cap_points(
    point: complex, outward: complex, half_width: float, line_cap: LineCap
) -> Iterator[complex]:
    normal = 1j * outward
    if line_cap == LineCap.SQUARE:
        yield point + half_width * (outward + normal)
        yield point + half_width * (outward - normal)
    elif line_cap == LineCap.ROUND:
        yield from _arc_points(point, half_width, outward, normal)


def contour_stroke_points(contour: Contour, stroke: Stroke) -> Iterator[complex]:
    """Extreme points of the stroke area of a single contour."""
    half_width = stroke.width / 2
    pieces = [p for p in contour.pieces if not _is_degenerate(p)]

    if not pieces:
        return

    for piece in pieces:
        yield from _offset_points(piece, half_width)

    pairs = list(zip(pieces, pieces[1:]))
    if contour.closed:
        pairs.append((pieces[-1], pieces[0]))

    for before, after in pairs:
        yield from _join_points(
            after[0], _end_tangent(before), _start_tangent(after), half_width, stroke
        )

    if not contour.closed:
        yield from _cap_points(
            pieces[0][0], -_start_tangent(pieces[0]), half_width, stroke.line_cap
        )
        yield from _cap_points(
            pieces[-1][-1], _end_tangent(pieces[-1]), half_width, stroke.line_cap
        )


def stroke_bounds(segments: Sequence[PathSegment], stroke: Stroke) -> Rect:
    """Bounds of the area painted by stroking the segments.

    The result is in the coordinate space of the segments. Zero-length
    contours contribute nothing, so the result may be empty.
    """
    return Rect.from_points(
        point
        for contour in build_contours(segments)
        for point in contour_stroke_points(contour, stroke)
    )
