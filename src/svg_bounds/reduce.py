"""Approximate cubic Bezier curves by quadratic ones."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from fontTools.cu2qu import curve_to_quadratic

from svg_bounds.path_bbox.segments import ClosePath, CubicCurveTo, LineTo, MoveTo

if TYPE_CHECKING:
    from collections.abc import Iterable

    from svg_bounds.path_bbox.segments import PathSegment

logger = logging.getLogger(__name__)


def _check_tolerance(tolerance: float) -> None:
    if not math.isfinite(tolerance) or tolerance <= 0:
        raise ValueError(f"Tolerance must be a positive number, got {tolerance}")


def _quadratic_spline(
    p0: complex, p1: complex, p2: complex, p3: complex, tolerance: float
) -> list[complex]:
    """The off-curve points of the quadratic spline approximating a cubic."""
    _check_tolerance(tolerance)
    curve = [(p.real, p.imag) for p in (p0, p1, p2, p3)]
    spline = curve_to_quadratic(curve, tolerance, all_quadratic=True)
    # the first and last spline points are the cubic's end points
    return [complex(x, y) for x, y in spline[1:-1]]


def quadratic_count(
    p0: complex, p1: complex, p2: complex, p3: complex, tolerance: float
) -> int:
    """The number of quadratics needed to stay within the tolerance.

    The cubic is split into the fewest equal parameter ranges whose
    quadratics fit, so a smaller tolerance never needs fewer pieces.
    """
    return len(_quadratic_spline(p0, p1, p2, p3, tolerance))


def cubic_to_quadratics(
    p0: complex, p1: complex, p2: complex, p3: complex, tolerance: float
) -> list[tuple[complex, complex]]:
    """Split a cubic into quadratic curves.

    Args:
        p0: The start point.
        p1: The first control point.
        p2: The second control point.
        p3: The end point.
        tolerance: The maximum distance between the cubic and the quadratics.

    Returns:
        The quadratics as ``(control, end)`` pairs. They share their end
        points with the next one and the last ends exactly at ``p3``.

    Raises:
        ValueError: If the tolerance is not a positive number.
        fontTools.cu2qu.errors.ApproxNotFoundError: If the tolerance is too
            small for the curve to be approximated at all.
    """
    controls = _quadratic_spline(p0, p1, p2, p3, tolerance)

    # on-curve points between two quadratics are the midpoints of their controls
    ends = [(a + b) / 2 for a, b in zip(controls, controls[1:])]
    ends.append(p3)

    return list(zip(controls, ends))


def reduce_cubics_to_quadratics(
    segments: Iterable[PathSegment], tolerance: float
) -> list[PathSegment]:
    """Replace every cubic curve by one or more quadratic curves.

    The quadratics are written as :class:`CubicCurveTo` with a duplicated
    control point. All other segments are passed through.

    Raises:
        ValueError: If the tolerance is not a positive number.
    """
    _check_tolerance(tolerance)

    new_segments: list[PathSegment] = []
    pen = 0j
    start = 0j
    n_cubics = 0

    for seg in segments:
        if isinstance(seg, MoveTo):
            pen = start = complex(seg.x, seg.y)
            new_segments.append(seg)

        elif isinstance(seg, LineTo):
            pen = complex(seg.x, seg.y)
            new_segments.append(seg)

        elif isinstance(seg, ClosePath):
            pen = start
            new_segments.append(seg)

        else:
            quads = cubic_to_quadratics(
                pen,
                complex(seg.x1, seg.y1),
                complex(seg.x2, seg.y2),
                complex(seg.x, seg.y),
                tolerance,
            )
            new_segments.extend(
                CubicCurveTo.quadratic_marker(ctrl, end) for ctrl, end in quads
            )
            pen = complex(seg.x, seg.y)
            n_cubics += 1

    if n_cubics:
        logger.debug(
            "Reduced %d cubic curves to %d segments", n_cubics, len(new_segments)
        )

    return new_segments
