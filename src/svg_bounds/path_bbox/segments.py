"""Normalized path segments."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias

from svg_bounds.geometry import Point


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float

    @property
    def end(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float

    @property
    def end(self) -> Point:
        return Point(self.x, self.y)


@dataclass(frozen=True)
class CubicCurveTo:
    """A cubic curve from the current point.

    Every instance is measured as a cubic. Quadratic path commands are
    degree-elevated on parsing. The quadratics written by the degree reducer
    duplicate their control point, which only marks them for
    :func:`~svg_bounds.canonical.canonicalize_path_text`.
    """

    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float

    @classmethod
    def from_points(cls, ctrl1: complex, ctrl2: complex, end: complex) -> CubicCurveTo:
        return cls(ctrl1.real, ctrl1.imag, ctrl2.real, ctrl2.imag, end.real, end.imag)

    @classmethod
    def from_quadratic(
        cls, start: complex, ctrl: complex, end: complex
    ) -> CubicCurveTo:
        """The exact cubic form of a quadratic curve."""
        return cls.from_points(
            start + 2 / 3 * (ctrl - start), end + 2 / 3 * (ctrl - end), end
        )

    @classmethod
    def quadratic_marker(cls, ctrl: complex, end: complex) -> CubicCurveTo:
        """Write a quadratic curve with a duplicated control point."""
        return cls.from_points(ctrl, ctrl, end)

    @property
    def ctrl1(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def ctrl2(self) -> Point:
        return Point(self.x2, self.y2)

    @property
    def end(self) -> Point:
        return Point(self.x, self.y)

    @property
    def has_duplicated_control(self) -> bool:
        """If both control points are the same, as in a quadratic marker."""
        return self.x1 == self.x2 and self.y1 == self.y2

    def bezier(self, start: complex) -> tuple[complex, complex, complex, complex]:
        """The control polygon of the curve starting at ``start``."""
        end = complex(self.x, self.y)
        return start, complex(self.x1, self.y1), complex(self.x2, self.y2), end


@dataclass(frozen=True)
class ClosePath:
    pass


PathSegment: TypeAlias = MoveTo | LineTo | CubicCurveTo | ClosePath
