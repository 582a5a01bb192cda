"""Tests the stroke outline bounds."""

from __future__ import annotations

import math

import numpy as np
import pytest

from svg_bounds.geometry import Rect
from svg_bounds.nodes import LineCap, LineJoin, Stroke
from svg_bounds.path_bbox import get_bbox, parse_path_data
from svg_bounds.stroke import build_contours, stroke_bounds


def _stroke_bbox(d: str, **kwargs: object) -> list[float]:
    rect = stroke_bounds(parse_path_data(d), Stroke(**kwargs))  # type: ignore[arg-type]
    return [rect.min_x, rect.min_y, rect.max_x, rect.max_y]


@pytest.mark.parametrize(
    ("line_cap", "expected"),
    [
        (LineCap.BUTT, [0, -1, 10, 1]),
        (LineCap.SQUARE, [-1, -1, 11, 1]),
        (LineCap.ROUND, [-1, -1, 11, 1]),
    ],
)
def test_line_caps(line_cap: LineCap, expected: list[float]) -> None:
    bbox = _stroke_bbox("M 0 0 L 10 0", width=2, line_cap=line_cap)
    np.testing.assert_almost_equal(bbox, expected)


def test_round_cap_on_diagonal_line() -> None:
    # the cap circle reaches one unit beyond the end point in x and y
    bbox = _stroke_bbox("M 0 0 L 10 10", width=2, line_cap=LineCap.ROUND)
    np.testing.assert_almost_equal(bbox, [-1, -1, 11, 11])


def test_square_cap_on_diagonal_line() -> None:
    bbox = _stroke_bbox("M 0 0 L 10 10", width=2, line_cap=LineCap.SQUARE)
    corner = math.sqrt(2)
    np.testing.assert_almost_equal(bbox, [-corner, -corner, 10 + corner, 10 + corner])


DIAMOND = "M 0 10 L 10 0 L 20 10 L 10 20 Z"


@pytest.mark.parametrize(
    ("line_join", "miter_limit", "min_x"),
    [
        (LineJoin.MITER, 4.0, -math.sqrt(2)),
        # the miter ratio of a right angle is sqrt(2)
        (LineJoin.MITER, 1.2, -1 / math.sqrt(2)),
        (LineJoin.ROUND, 4.0, -1),
        (LineJoin.BEVEL, 4.0, -1 / math.sqrt(2)),
    ],
)
def test_line_joins(line_join: LineJoin, miter_limit: float, min_x: float) -> None:
    bbox = _stroke_bbox(DIAMOND, width=2, line_join=line_join, miter_limit=miter_limit)
    np.testing.assert_almost_equal(bbox, [min_x, min_x, 20 - min_x, 20 - min_x])


def test_closed_square_has_no_caps() -> None:
    bbox = _stroke_bbox(
        "M 0 0 L 10 0 L 10 10 L 0 10 Z", width=2, line_cap=LineCap.SQUARE
    )
    np.testing.assert_almost_equal(bbox, [-1, -1, 11, 11])


def test_curve_extremes() -> None:
    # the top of the arch is at y=7.5 with a horizontal tangent
    bbox = _stroke_bbox("M 0 0 C 0 10 10 10 10 0", width=2)
    np.testing.assert_almost_equal(bbox, [-1, 0, 11, 8.5])


def test_stroke_contains_fill() -> None:
    d = "M 10 80 C 40 10, 65 10, 95 80 S 150 150, 180 80"
    fill = get_bbox(d)
    stroke = stroke_bounds(parse_path_data(d), Stroke(width=4))
    assert stroke.contains(fill)


def test_degenerate_contour_is_empty() -> None:
    assert stroke_bounds(parse_path_data("M 5 5 L 5 5"), Stroke(width=4)).is_empty()


def test_zero_length_subpath_is_ignored() -> None:
    rect = stroke_bounds(parse_path_data("M 0 0 L 10 0 M 50 50 L 50 50"), Stroke(width=2))
    assert rect == Rect(0, -1, 10, 1)


def test_closing_line_close_to_start_is_dropped() -> None:
    (dropped,) = build_contours(parse_path_data("M 0 0 L 10 0 L 10 10 L 0.5 0 Z"))
    (kept,) = build_contours(parse_path_data("M 0 0 L 10 0 L 10 10 L 5 0 Z"))

    # two lines and the closing edge
    assert len(dropped.pieces) == 3
    assert dropped.pieces[-1] == (10 + 10j, 0j)
    assert len(kept.pieces) == 4
    assert dropped.closed and kept.closed


def test_contours_split_on_move() -> None:
    contours = build_contours(parse_path_data("M 0 0 L 1 1 M 5 5 L 6 6 Z L 0 5"))
    assert [c.start for c in contours] == [0j, 5 + 5j, 5 + 5j]
    assert [c.closed for c in contours] == [False, True, False]


def test_coincident_control_points() -> None:
    # measured as a cubic with its peak at y=75
    bbox = _stroke_bbox("M 0 0 C 50 100 50 100 100 0", width=2)
    assert bbox[3] == pytest.approx(76)
