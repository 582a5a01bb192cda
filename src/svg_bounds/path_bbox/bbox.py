"""Parse SVG path data and calculate the bounding box."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, TypeGuard

from svg_bounds.geometry import IDENTITY, Point, Rect

from .constants import (
    ARG_COUNTS,
    DEFAULT_PRECISION,
    NUMBER_PATTERN,
    SUBCOMMAND_PATTERN,
    VALID_COMMANDS,
    ValidCommand,
)
from .math import cubic_bezier_bbox
from .segments import ClosePath, CubicCurveTo, LineTo, MoveTo, PathSegment

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from svg_bounds.geometry import Transform


def _check_subcommands(
    data: list[tuple[str, bool, str]],
) -> TypeGuard[list[tuple[ValidCommand, bool, str]]]:
    """Check if the subcommands are valid."""
    subcommands = {x[0] for x in data}

    if subcommands == {"M"}:
        raise ValueError("Only move commands found in path data")

    if invalid := subcommands - VALID_COMMANDS:
        raise NotImplementedError(f"Invalid subcommands found in path data: {invalid}")

    return True


def _split_in_subcommands(d: str) -> list[tuple[ValidCommand, bool, str]]:
    """Split the path data into subcommands and their data.

    Raises:
        ValueError: If no subcommands are found in the path data.
        ValueError: If only move commands are found in the path data.
        NotImplementedError: If any of the subcommands are not implemented.
    """
    subcommands_with_data: list[tuple[str, str]] = SUBCOMMAND_PATTERN.findall(d)

    if not subcommands_with_data:
        raise ValueError("No subcommands found in path data")

    subcommands_with_info = [
        (x.upper(), x.islower(), y) for x, y in subcommands_with_data
    ]

    if not _check_subcommands(subcommands_with_info):
        raise ValueError("Invalid subcommands found in path data")

    return subcommands_with_info


def _split_in_groups(command: ValidCommand, data: str) -> list[list[float]]:
    """Split the data of a subcommand into one group of values per segment.

    Repeated coordinate sets are implicit repetitions of the command.
    """
    count = ARG_COUNTS[command]
    values = [float(x) for x in NUMBER_PATTERN.findall(data)]

    if count == 0:
        if values:
            raise ValueError(f"Command {command} takes no values, got {values}")
        return [[]]

    if not values or len(values) % count:
        raise ValueError(
            f"Command {command} expects a multiple of {count} values, got {values}"
        )

    return [values[i : i + count] for i in range(0, len(values), count)]


def _to_points(values: Sequence[float], is_rel: bool, curr_pos: complex) -> list[Point]:
    """Pair up values to points, resolving relative coordinates."""
    points = [Point(values[i], values[i + 1]) for i in range(0, len(values), 2)]

    if not is_rel:
        return points

    return [p + curr_pos for p in points]


def _parse_arc(
    values: Sequence[float], is_rel: bool, curr_pos: complex
) -> tuple[list[PathSegment], Point]:
    """Convert an elliptical arc into cubic curves.

    Follows the endpoint to center conversion of the SVG implementation notes.
    """
    rx, ry, angle, large_arc_value, sweep_value, x, y = values

    if {large_arc_value, sweep_value} - {0.0, 1.0}:
        raise ValueError("Invalid large arc or sweep value")

    large_arc = large_arc_value == 1
    sweep = sweep_value == 1

    end = Point(x, y)
    if is_rel:
        end += curr_pos

    rx, ry = abs(rx), abs(ry)
    if end == curr_pos:
        return [], end
    if rx == 0 or ry == 0:
        # degenerate arc is a straight line
        return [LineTo(end.real, end.imag)], end

    phi = math.radians(angle)
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)

    # Step 1: Compute (x1', y1')
    dx = (curr_pos.real - end.real) / 2
    dy = (curr_pos.imag - end.imag) / 2
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    # scale up radii that are too small to reach the end point
    scale = (x1p / rx) ** 2 + (y1p / ry) ** 2
    if scale > 1:
        rx *= math.sqrt(scale)
        ry *= math.sqrt(scale)

    # Step 2: Compute (cx', cy')
    rx_sq, ry_sq = rx**2, ry**2
    x1p_sq, y1p_sq = x1p**2, y1p**2

    radical = max(
        0,
        (rx_sq * ry_sq - rx_sq * y1p_sq - ry_sq * x1p_sq)
        / (rx_sq * y1p_sq + ry_sq * x1p_sq),
    )
    coefficient = math.sqrt(radical)
    if large_arc == sweep:
        coefficient = -coefficient
    cxp = coefficient * rx * y1p / ry
    cyp = -coefficient * ry * x1p / rx

    # Step 3: Compute (cx, cy) from (cx', cy')
    cx = cos_phi * cxp - sin_phi * cyp + (curr_pos.real + end.real) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (curr_pos.imag + end.imag) / 2

    # Step 4: Compute start angle and sweep
    start_angle = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    end_angle = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
    delta = end_angle - start_angle
    if sweep and delta < 0:
        delta += 2 * math.pi
    elif not sweep and delta > 0:
        delta -= 2 * math.pi

    def ellipse(eta: float) -> complex:
        return complex(
            cx + rx * math.cos(eta) * cos_phi - ry * math.sin(eta) * sin_phi,
            cy + rx * math.cos(eta) * sin_phi + ry * math.sin(eta) * cos_phi,
        )

    def derivative(eta: float) -> complex:
        return complex(
            -rx * math.sin(eta) * cos_phi - ry * math.cos(eta) * sin_phi,
            -rx * math.sin(eta) * sin_phi + ry * math.cos(eta) * cos_phi,
        )

    # at most a quarter turn per cubic
    n_curves = max(1, math.ceil(abs(delta) / (math.pi / 2) - 1e-9))
    step = delta / n_curves
    alpha = 4 / 3 * math.tan(step / 4)

    curves: list[PathSegment] = []
    eta = start_angle
    start = complex(curr_pos)
    for i in range(n_curves):
        next_eta = eta + step
        stop = complex(end) if i == n_curves - 1 else ellipse(next_eta)
        curves.append(
            CubicCurveTo.from_points(
                start + alpha * derivative(eta),
                stop - alpha * derivative(next_eta),
                stop,
            )
        )
        start, eta = stop, next_eta

    return curves, end


def parse_path_data(d: str) -> list[PathSegment]:
    """Parses SVG path data into normalized segments.

    Relative coordinates are resolved, horizontal and vertical lines become
    :class:`LineTo`, smooth curves get their reflected control point and
    arcs are converted to cubic curves. Quadratic curves are degree-elevated
    to the exact same cubic curve.

    Args:
        d: The path string

    Returns:
        The list of segments.

    Example:
        >>> parse_path_data("M 10 10 L 20 20 Z")
        [MoveTo(x=10.0, y=10.0), LineTo(x=20.0, y=20.0), ClosePath()]
    """
    segments: list[PathSegment] = []

    curr_pos = Point(0, 0)
    start_pos = Point(0, 0)
    prev_control: complex | None = None
    last_command: str | None = None

    for command, is_rel, data in _split_in_subcommands(d):
        for ix, values in enumerate(_split_in_groups(command, data)):
            # implicit repetitions of a move command are line commands
            current: ValidCommand = "L" if command == "M" and ix > 0 else command
            control: complex | None = None

            if current == "M":
                curr_pos = start_pos = _to_points(values, is_rel, curr_pos)[0]
                segments.append(MoveTo(curr_pos.real, curr_pos.imag))

            elif current == "Z":
                segments.append(ClosePath())
                curr_pos = start_pos

            elif current in {"L", "H", "V"}:
                if current == "H":
                    x = values[0] + curr_pos.real if is_rel else values[0]
                    curr_pos = Point(x, curr_pos.imag)
                elif current == "V":
                    y = values[0] + curr_pos.imag if is_rel else values[0]
                    curr_pos = Point(curr_pos.real, y)
                else:
                    curr_pos = _to_points(values, is_rel, curr_pos)[0]
                segments.append(LineTo(curr_pos.real, curr_pos.imag))

            elif current == "A":
                curves, curr_pos = _parse_arc(values, is_rel, curr_pos)
                segments.extend(curves)

            else:
                points = _to_points(values, is_rel, curr_pos)

                if current in {"T", "S"}:
                    prev_commands = {"Q", "T"} if current == "T" else {"C", "S"}
                    if prev_control is not None and last_command in prev_commands:
                        # Reflect previous control point
                        reflected = 2 * curr_pos - prev_control
                    else:
                        reflected = complex(curr_pos)
                    points = [Point(reflected), *points]

                if current in {"Q", "T"}:
                    control = points[0]
                    segments.append(
                        CubicCurveTo.from_quadratic(curr_pos, points[0], points[1])
                    )
                else:
                    control = points[1]
                    segments.append(CubicCurveTo.from_points(*points))

                curr_pos = points[-1]

            prev_control = control
            last_command = current

    return segments


def format_number(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a coordinate, dropping a trailing ``.0``.

    Examples:
        >>> format_number(10.0)
        '10'
        >>> format_number(0.1234567)
        '0.12346'
    """
    rounded = round(value, precision)
    if rounded == 0:
        # avoid "-0"
        return "0"
    text = repr(rounded)
    return text.removesuffix(".0")


def to_path_data(
    segments: Iterable[PathSegment], precision: int = DEFAULT_PRECISION
) -> str:
    """Write segments as SVG path data with absolute commands.

    Every segment gets its own command letter. Quadratic markers from the
    degree reducer are written as ``C`` with a duplicated control point.
    """

    def fmt(*values: float) -> str:
        return " ".join(format_number(v, precision) for v in values)

    d: list[str] = []
    for seg in segments:
        if isinstance(seg, MoveTo):
            d.append(f"M {fmt(seg.x, seg.y)}")
        elif isinstance(seg, LineTo):
            d.append(f"L {fmt(seg.x, seg.y)}")
        elif isinstance(seg, CubicCurveTo):
            d.append(f"C {fmt(seg.x1, seg.y1, seg.x2, seg.y2, seg.x, seg.y)}")
        else:
            d.append("Z")

    return " ".join(d)


def segments_bbox(
    segments: Iterable[PathSegment], transform: Transform = IDENTITY
) -> Rect:
    """Calculates the exact bounding box of the segments.

    All control points are mapped through ``transform`` first, so the result
    is exact in the target space. A lone move command contributes its point.

    Returns:
        The bounds, empty if there are no segments.
    """
    bbox = Rect.empty()

    curr_pos = complex(0, 0)
    start_pos = complex(0, 0)

    for seg in segments:
        if isinstance(seg, MoveTo):
            curr_pos = start_pos = transform.apply(seg.end)
            bbox = bbox.include(curr_pos)

        elif isinstance(seg, LineTo):
            curr_pos = transform.apply(seg.end)
            bbox = bbox.include(curr_pos)

        elif isinstance(seg, CubicCurveTo):
            end = transform.apply(seg.end)
            low, high = cubic_bezier_bbox(
                complex(curr_pos),
                complex(transform.apply(seg.ctrl1)),
                complex(transform.apply(seg.ctrl2)),
                complex(end),
            )
            bbox = bbox.include(low).include(high)
            curr_pos = end

        else:
            curr_pos = start_pos

    return bbox


def get_bbox(d: str) -> Rect:
    """Calculates the bounding box of SVG path data.

    Example:
        >>> get_bbox("M 10 10 L 20 20 L 10 30 Z").as_bbox()
        (10.0, 10.0, 10.0, 20.0)
    """
    return segments_bbox(parse_path_data(d))
