"""Tests the rewriting of path text."""

from __future__ import annotations

import numpy as np
import pytest

from svg_bounds.canonical import canonicalize_path_text
from svg_bounds.path_bbox import (
    ClosePath,
    CubicCurveTo,
    PathSegment,
    parse_path_data,
    to_path_data,
)
from svg_bounds.reduce import reduce_cubics_to_quadratics


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("M 0 0 C 5 5 5 5 10 0", "M 0 0 Q 5 5 10 0"),
        ("M 0 0 C 5 5 5 5.00001 10 0", "M 0 0 C 5 5 5 5.00001 10 0"),
        ("M 0 0 C 1 2 3 4 5 6", "M 0 0 C 1 2 3 4 5 6"),
        ("m 1 1 c 5 5 5 5 10 0", "m 1 1 q 5 5 10 0"),
        ("M 0 0 C -1.5 2e1 -1.5 2e1 10 0", "M 0 0 Q -1.5 2e1 10 0"),
        ("M 0 0 C 1,2 1,2 3,4", "M 0 0 Q 1 2 3 4"),
        ("M0 0C5 5 5 5 10 0", "M0 0Q 5 5 10 0"),
        (
            "M 0 0 C 1 1 1 1 2 2 L 3 3 C 4 4 4 4 5 5 Z",
            "M 0 0 Q 1 1 2 2 L 3 3 Q 4 4 5 5 Z",
        ),
    ],
)
def test_canonicalize(text: str, expected: str) -> None:
    assert canonicalize_path_text(text) == expected


@pytest.mark.parametrize(
    "text",
    [
        # implicit repeats would change meaning with fewer values
        "M 0 0 C 1 1 1 1 2 2 3 3 3 3 4 4",
        "M 0 0 C 1 1 1 1 2 2, 30 3 3 3 4 4",
        "M 0 0 C 1 1 1 1 2 2e1 3 3 3 3 4 4",
    ],
)
def test_implicit_repeats_are_kept(text: str) -> None:
    assert canonicalize_path_text(text) == text


def test_text_compares_by_default() -> None:
    text = "M 0 0 C 5 5 5.0 5 10 0"
    assert canonicalize_path_text(text) == text
    assert canonicalize_path_text(text, tolerance=0) == "M 0 0 Q 5 5 10 0"


def test_numeric_tolerance() -> None:
    text = "M 0 0 C 5 5 5 5.00001 10 0"
    assert canonicalize_path_text(text, tolerance=1e-3) == "M 0 0 Q 5 5 10 0"
    assert canonicalize_path_text(text, tolerance=1e-6) == text


def test_whole_document() -> None:
    svg = '<svg><path d="M0 0C5 5 5 5 10 0"/><path d="M 0 0 C 1 2 3 4 5 6"/></svg>'
    assert canonicalize_path_text(svg) == (
        '<svg><path d="M0 0Q 5 5 10 0"/><path d="M 0 0 C 1 2 3 4 5 6"/></svg>'
    )


@pytest.mark.parametrize(
    "text",
    [
        "M 0 0 C 5 5 5 5 10 0",
        "M 10 10 c 5 5 5 5 10 0 L 3 3 C 1 2 3 4 5 6 Z",
    ],
)
def test_never_longer(text: str) -> None:
    canonical = canonicalize_path_text(text)
    assert len(canonical.split()) <= len(text.split())


def _polygons(segments: list[PathSegment]) -> np.ndarray:
    """Control polygons of all curves, quadratic markers written as cubics."""
    polygons = []
    pen = 0j
    for seg in segments:
        if isinstance(seg, CubicCurveTo):
            if seg.has_duplicated_control:
                seg = CubicCurveTo.from_quadratic(pen, seg.ctrl1, seg.end)
            polygons.append([complex(p) for p in seg.bezier(pen)])
        if not isinstance(seg, ClosePath):
            pen = complex(seg.end)
    return np.array(polygons)


@pytest.mark.parametrize("tolerance", [1.0, 0.1, 0.01])
@pytest.mark.parametrize(
    "d",
    [
        "M 0 0 C 50 100 100 -100 150 0",
        "M 10 80 C 40 10, 65 10, 95 80 S 150 150, 180 80 Z",
    ],
)
def test_reduced_path_text(d: str, tolerance: float) -> None:
    reduced = reduce_cubics_to_quadratics(parse_path_data(d), tolerance)
    text = to_path_data(reduced)
    canonical = canonicalize_path_text(text)

    assert "C" not in canonical
    assert len(canonical.split()) < len(text.split())

    reparsed = parse_path_data(canonical)
    assert len(reparsed) == len(reduced)
    np.testing.assert_allclose(_polygons(reparsed), _polygons(reduced), atol=1e-4)
