"""Points, affine transforms and rectangles."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from typing_extensions import Self, override

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

BBox = tuple[float, float, float, float]
"""Bounding box as a tuple (x, y, width, height)."""


class Point(complex):
    """A point in 2D space. Wrapper for complex numbers."""

    @override
    def __repr__(self) -> str:
        return f"Point(x={self.x}, y={self.y})"

    @property
    def x(self) -> float:
        """Rounded x coordinate."""
        return round(self.real, 5)

    @property
    def y(self) -> float:
        """Rounded y coordinate."""
        return round(self.imag, 5)

    @property
    def text(self) -> str:
        """The point as space-separated text."""
        return f"{self.x} {self.y}"

    @override
    def __mul__(self, other: complex) -> Self:
        return self.__class__(super().__mul__(other))

    @override
    def __add__(self, other: complex) -> Self:
        return self.__class__(super().__add__(other))

    @override
    def __sub__(self, other: complex) -> Self:
        return self.__class__(super().__sub__(other))

    @override
    def __truediv__(self, other: complex) -> Self:
        return self.__class__(super().__truediv__(other))

    @override
    def __neg__(self) -> Self:
        return self.__class__(super().__neg__())


@dataclass(frozen=True)
class Transform:
    """An affine transform in SVG matrix order.

    Maps ``(x, y)`` to ``(a*x + c*y + e, b*x + d*y + f)``.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def translate(cls, tx: float, ty: float = 0.0) -> Transform:
        return cls(e=tx, f=ty)

    @classmethod
    def scale(cls, sx: float, sy: float | None = None) -> Transform:
        return cls(a=sx, d=sx if sy is None else sy)

    @classmethod
    def rotate(cls, degrees: float, cx: float = 0.0, cy: float = 0.0) -> Transform:
        """Rotation around ``(cx, cy)``, as the SVG ``rotate()`` function."""
        rad = math.radians(degrees)
        cos, sin = math.cos(rad), math.sin(rad)
        rotation = cls(a=cos, b=sin, c=-sin, d=cos)
        if cx == 0 and cy == 0:
            return rotation
        return (
            cls.translate(cx, cy).prepend(rotation).prepend(cls.translate(-cx, -cy))
        )

    @classmethod
    def skew_x(cls, degrees: float) -> Transform:
        return cls(c=math.tan(math.radians(degrees)))

    @classmethod
    def skew_y(cls, degrees: float) -> Transform:
        return cls(b=math.tan(math.radians(degrees)))

    @property
    def is_identity(self) -> bool:
        """If the transform maps every point onto itself."""
        return self == IDENTITY

    def prepend(self, other: Transform) -> Transform:
        """Compose with ``other`` so that ``other`` is applied first.

        ``parent.prepend(local)`` maps a point from the local space of a node
        into the space of its parent.
        """
        return Transform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    def apply(self, point: complex) -> Point:
        """Map a point."""
        x, y = point.real, point.imag
        return Point(
            self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f
        )

    def apply_vector(self, vector: complex) -> Point:
        """Map a direction, ignoring the translation."""
        x, y = vector.real, vector.imag
        return Point(self.a * x + self.c * y, self.b * x + self.d * y)


IDENTITY = Transform()


@dataclass(frozen=True)
class Rect:
    """An axis-aligned rectangle given by its corners.

    A rectangle with ``min_x > max_x`` is empty. The empty sentinel uses
    infinities so that it is neutral under :meth:`union`.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def empty(cls) -> Rect:
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @classmethod
    def from_xywh(cls, x: float, y: float, width: float, height: float) -> Rect:
        return cls(x, y, x + width, y + height)

    @classmethod
    def from_points(cls, points: Iterable[complex]) -> Rect:
        """The bounds of the given points. Empty if there are none."""
        rect = cls.empty()
        for p in points:
            rect = rect.include(p)
        return rect

    @property
    def x(self) -> float:
        return self.min_x

    @property
    def y(self) -> float:
        return self.min_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def upper_left(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def lower_right(self) -> Point:
        return Point(self.max_x, self.max_y)

    def __iter__(self) -> Iterator[Point]:
        """Iterate over the four corners."""
        yield Point(self.min_x, self.min_y)
        yield Point(self.max_x, self.min_y)
        yield Point(self.max_x, self.max_y)
        yield Point(self.min_x, self.max_y)

    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    def include(self, point: complex) -> Rect:
        """Grow the rectangle to contain a point."""
        return Rect(
            min(self.min_x, point.real),
            min(self.min_y, point.imag),
            max(self.max_x, point.real),
            max(self.max_y, point.imag),
        )

    def union(self, other: Rect) -> Rect:
        if other.is_empty():
            return self
        if self.is_empty():
            return other
        return Rect(
            min(self.min_x, other.min_x),
            min(self.min_y, other.min_y),
            max(self.max_x, other.max_x),
            max(self.max_y, other.max_y),
        )

    def intersect(self, other: Rect) -> Rect:
        """The overlapping area. Empty if the rectangles are disjoint."""
        rect = Rect(
            max(self.min_x, other.min_x),
            max(self.min_y, other.min_y),
            min(self.max_x, other.max_x),
            min(self.max_y, other.max_y),
        )
        return Rect.empty() if rect.is_empty() else rect

    def contains(self, other: complex | Rect) -> bool:
        """Checks if a single point or a rectangle is contained."""
        if isinstance(other, Rect):
            return other.is_empty() or (
                self.contains(other.upper_left) and self.contains(other.lower_right)
            )
        return (
            self.min_x <= other.real <= self.max_x
            and self.min_y <= other.imag <= self.max_y
        )

    def outset(self, pad: float) -> Rect:
        """Grow every side by ``pad``."""
        if self.is_empty():
            return self
        return Rect(
            self.min_x - pad, self.min_y - pad, self.max_x + pad, self.max_y + pad
        )

    def transformed(self, transform: Transform) -> Rect:
        """The bounds of the four mapped corners."""
        if self.is_empty() or transform.is_identity:
            return self
        return Rect.from_points(transform.apply(p) for p in self)

    def rounded_out(self) -> Rect:
        """Floor the min corner and ceil the max corner."""
        if self.is_empty():
            return self
        return Rect(
            math.floor(self.min_x),
            math.floor(self.min_y),
            math.ceil(self.max_x),
            math.ceil(self.max_y),
        )

    def finite(self) -> Rect:
        """Replace the empty sentinel by a zero-sized rect at the origin."""
        if self.is_empty():
            return Rect(0.0, 0.0, 0.0, 0.0)
        return self

    def as_bbox(self) -> BBox:
        """The rectangle as a tuple (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)
