"""Tests the path bbox calculation."""

from __future__ import annotations

import numpy as np
import pytest
import svgpathtools

from svg_bounds.geometry import Transform
from svg_bounds.path_bbox import (
    ClosePath,
    CubicCurveTo,
    LineTo,
    MoveTo,
    get_bbox,
    parse_path_data,
    segments_bbox,
    to_path_data,
)


def _bbox(test_input: str, decimal: int = 5) -> None:
    """Compare the bbox with svgpathtools' bbox."""
    # calc is b box (xmin, ymin, width, height)
    calc = get_bbox(test_input).as_bbox()
    # expected is b box (xmin, xmax, ymin, ymax)

    expected = svgpathtools.parse_path(test_input).bbox()

    converted = (
        expected[0],
        expected[2],
        expected[1] - expected[0],
        expected[3] - expected[2],
    )

    np.testing.assert_almost_equal(np.array(calc), np.array(converted), decimal=decimal)


@pytest.mark.parametrize(
    "test_input",
    [
        "M 219.8 10.4 Q 219.8 9.1 220.4 8.3",
        "M 219.8 10.4 Q 219.8 9.1 220.4 8.3 Q 221.1 7.5 222.4 7.5",
    ],
)
def test_bbox(test_input: str) -> None:
    _bbox(test_input)


cubics = [
    "M 10 10 C 20 20, 40 20, 50 10",
    "M 70 10 C 70 20, 110 20, 110 10",
    "M 130 10 C 120 20, 180 20, 170 10",
    "M 10 60 C 20 80, 40 80, 50 60",
    "M 70 60 C 70 80, 110 80, 110 60",
    "M 130 60 C 120 80, 180 80, 170 60",
    "M 10 110 C 20 140, 40 140, 50 110",
    "M 70 110 C 70 140, 110 140, 110 110",
    "M 130 110 C 120 140, 180 140, 170 110",
    # coincident control points
    "M 0 0 C 50 100 50 100 100 0",
]

quads = ["M 10 80 Q 95 10 180 80", "M 10 80 Q 52.5 10, 95 80 T 180 80"]

relative = [
    "m 10 350 l 40 0 l 20 50",
    "m 70 350 l 40 0 l 20 50",
    "m 130 350 l 40 0 l 20 50",
    "m 10 450 q 30 -40, 60 0 t 120 0",
    "m 70 450 q 30 -40, 60 0 t 120 0",
    "m 130 450 q 30 -40, 60 0 t 120 0",
    "m 10 500 l 50 0 l 20 -50 l 20 50 l 50 0",
    "m 10 600 q 50 -50, 100 0 q 50 50, 100 0",
]


@pytest.mark.parametrize("test_input", relative)
def test_relative(test_input: str) -> None:
    _bbox(test_input)


@pytest.mark.parametrize("test_input", cubics)
def test_cubic(test_input: str) -> None:
    _bbox(test_input)


@pytest.mark.parametrize("test_input", quads)
def test_quad(test_input: str) -> None:
    _bbox(test_input)


def test_moveto() -> None:
    with pytest.raises(ValueError, match="Only move commands found in path data"):
        _bbox("M 10 10")


def test_unknown_command() -> None:
    with pytest.raises(NotImplementedError, match="Invalid subcommands"):
        parse_path_data("M 10 10 X 20 20")


def test_wrong_number_of_values() -> None:
    with pytest.raises(ValueError, match="expects a multiple of 6 values"):
        parse_path_data("M 10 10 C 20 20 30 30")


@pytest.mark.parametrize(
    "test_input",
    [
        "M 10 10 H 50",
        "M 10 10 h 40",
        "M 10 10 V 50",
        "M 10 10 v 40",
        "M 10 10 H 50 V 50 H 10 V 10",
        "M 10 10 h 40 v 40 h -40 v -40",
    ],
)
def test_vertical_horizontal(test_input: str) -> None:
    _bbox(test_input)


arcs = [
    "M 10 315 A 15 15 0 0 1 40 315",
    "M 70 315 A 15 15 0 1 1 100 315",
    "M 130 315 A 15 15 0 0 0 160 315",
    "M 10 365 A 15 15 0 1 0 40 365",
    "M 70 365 a 15 15 0 0 1 30 0",
    "M 130 365 a 15 15 0 1 1 30 0",
]


@pytest.mark.parametrize("test_input", arcs)
def test_arc(test_input: str) -> None:
    # arcs are approximated by cubic curves
    _bbox(test_input, decimal=2)


smooth_curves = [
    "M 10 80 Q 52.5 10 95 80 T 180 80",
    "M 10 180 C 40 100, 65 100, 95 180 S 150 260, 180 180",
    "M 10 280 Q 52.5 210 95 280 T 180 280 T 265 280",
    "M 10 380 C 40 300, 65 300, 95 380 S 150 460 180 380 S 265 300 295 380",
]


@pytest.mark.parametrize("test_input", smooth_curves)
def test_smooth_curves(test_input: str) -> None:
    _bbox(test_input)


def test_parse_normalizes_commands() -> None:
    segments = parse_path_data("M 10 10 20 20 h 5 V 0 q 5 5 10 0 z")
    assert segments == [
        MoveTo(10, 10),
        LineTo(20, 20),
        LineTo(25, 20),
        LineTo(25, 0),
        CubicCurveTo.from_quadratic(25 + 0j, 30 + 5j, 35 + 0j),
        ClosePath(),
    ]


def test_parse_after_close_uses_subpath_start() -> None:
    segments = parse_path_data("M 10 10 L 20 10 Z l 0 5")
    assert segments[-1] == LineTo(10, 15)


def test_parse_exponents_and_compact_numbers() -> None:
    segments = parse_path_data("M1e1,-5L-2.5-.5")
    assert segments == [MoveTo(10, -5), LineTo(-2.5, -0.5)]


def test_to_path_data() -> None:
    segments = [
        MoveTo(10, 10),
        LineTo(20.123456789, 20),
        CubicCurveTo(1, 2, 3, 4, 5, 6),
        ClosePath(),
    ]
    assert to_path_data(segments) == "M 10 10 L 20.12346 20 C 1 2 3 4 5 6 Z"


def test_segments_bbox_is_exact_under_rotation() -> None:
    segments = parse_path_data("M 0 0 L 10 0")
    bbox = segments_bbox(segments, Transform.rotate(90))
    np.testing.assert_almost_equal(np.array(bbox.as_bbox()), [0, 0, 0, 10])
