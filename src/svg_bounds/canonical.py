"""Rewrite cubic commands with duplicated control points as quadratics."""

from __future__ import annotations

import re

from svg_bounds.path_bbox.constants import CUBIC_TEXT_PATTERN


def _same_control(
    x1: str, y1: str, x2: str, y2: str, tolerance: float | None
) -> bool:
    if tolerance is None:
        return x1 == x2 and y1 == y2
    return abs(float(x1) - float(x2)) <= tolerance and abs(
        float(y1) - float(y2)
    ) <= tolerance


def canonicalize_path_text(text: str, tolerance: float | None = None) -> str:
    """Turn cubic commands into quadratic ones where possible.

    A cubic command ``C x1 y1 x2 y2 x y`` whose two control points are
    written identically becomes ``Q x1 y1 x y``. Relative ``c`` commands
    become ``q``. Only commands with a single coordinate set are rewritten.

    Args:
        text: Path data or any text containing path data, e.g. a whole SVG.
        tolerance: Compare the control points as numbers within this
            tolerance instead of comparing their text.

    Examples:
        >>> canonicalize_path_text("M 0 0 C 5 5 5 5 10 0")
        'M 0 0 Q 5 5 10 0'
        >>> canonicalize_path_text("M 0 0 C 5 5 5 5.00001 10 0")
        'M 0 0 C 5 5 5 5.00001 10 0'
    """

    def replace(match: re.Match[str]) -> str:
        command, x1, y1, x2, y2, x, y = match.groups()
        if not _same_control(x1, y1, x2, y2, tolerance):
            return match.group(0)
        quadratic = "Q" if command == "C" else "q"
        return f"{quadratic} {x1} {y1} {x} {y}"

    return CUBIC_TEXT_PATTERN.sub(replace, text)
