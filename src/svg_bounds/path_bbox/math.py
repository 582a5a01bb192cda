# %%
"""Mathematical functions for Bezier curves."""

# allow mathematical names, which would be invalid otherwise
# ruff: noqa: N803
from __future__ import annotations

import math
import os
from typing import TYPE_CHECKING, Any, ParamSpec, TypeVar

import numba
from numba import njit
from numpy import nan

if TYPE_CHECKING:
    from collections.abc import Callable

P = ParamSpec("P")
R = TypeVar("R")

# for easier access
f64 = numba.types.float64
c128 = numba.types.complex128
Tuple = numba.types.Tuple

if os.environ.get("COVERAGE_DEBUG", "0") == "1":

    def njit(  # pylint: disable=function-redefined
        *args: Any, **kwargs: Any
    ) -> Callable[[Callable[P, R]], Callable[P, R]]:
        """Dummy decorator if numba is deactivated."""
        del args, kwargs  # as it is just a debug tool, args and kwargs are not used

        def decorator(func: Callable[P, R]) -> Callable[P, R]:
            return func

        return decorator


@njit(f64(f64, f64, f64, f64, f64))
def cubic_bezier(t: float, P0: float, P1: float, P2: float, P3: float) -> float:
    """Evaluate the cubic Bezier curve at t."""
    return (
        (1 - t) ** 3 * P0
        + 3 * (1 - t) ** 2 * t * P1
        + 3 * (1 - t) * t**2 * P2
        + t**3 * P3
    )


@njit(c128(f64, c128, c128, c128, c128))
def cubic_point(t: float, P0: complex, P1: complex, P2: complex, P3: complex) -> complex:
    """Evaluate the cubic Bezier curve at t in both coordinates."""
    return complex(
        cubic_bezier(t, P0.real, P1.real, P2.real, P3.real),
        cubic_bezier(t, P0.imag, P1.imag, P2.imag, P3.imag),
    )


@njit(c128(f64, c128, c128, c128, c128))
def cubic_tangent(
    t: float, P0: complex, P1: complex, P2: complex, P3: complex
) -> complex:
    """Evaluate the first derivative of the cubic Bezier curve at t."""
    return (
        3 * (1 - t) ** 2 * (P1 - P0)
        + 6 * (1 - t) * t * (P2 - P1)
        + 3 * t**2 * (P3 - P2)
    )


@njit(Tuple([f64, f64, f64])(f64, f64, f64, f64))
def derivative_coefficients(
    P0: float, P1: float, P2: float, P3: float
) -> tuple[float, float, float]:
    """Get the coefficients of the derivative of the cubic Bezier curve.

    1. derivative: -3(1-t)^2P0 + 3(1-t)^2P1 - 6t(1-t)P1 + 6t(1-t)P2 - 3t^2P2 + 3t^2P3
    to the form: at^2 + bt + c
    gives the coefficients: a, b, c
    """
    return (
        -3 * P0 + 9 * P1 - 9 * P2 + 3 * P3,
        6 * P0 - 12 * P1 + 6 * P2,
        -3 * P0 + 3 * P1,
    )


@njit(Tuple([f64, f64])(f64, f64, f64))
def solve_quadratic_from_coeffs(a: float, b: float, c: float) -> tuple[float, float]:
    """Solve a quadratic equation from the coefficients.

    Returns:
        A tuple with the two solutions of the quadratic equation.
        NaN if a solution is non-real.
    """
    # Solve the quadratic equation ax^2 + bx + c = 0
    # -b +- sqrt(b^2 - 4ac) / 2a
    if a == 0:
        if b == 0:
            return (nan, nan)  # No solution if both `a` and `b` are zero
        # single solution
        return (-c / b, nan)

    discriminant = b**2 - 4 * a * c
    if discriminant < 0:
        # No solutions
        return (nan, nan)

    sqrt_discriminant = math.sqrt(discriminant)
    t1 = (-b + sqrt_discriminant) / (2 * a)
    t2 = (-b - sqrt_discriminant) / (2 * a)
    # two solutions
    return (t1, t2)


@njit(Tuple([f64, f64, f64, f64])(c128, c128, c128, c128))
def cubic_critical_params(
    P0: complex, P1: complex, P2: complex, P3: complex
) -> tuple[float, float, float, float]:
    """Parameters where the tangent of the cubic is axis-aligned.

    The first two values belong to the x direction, the last two to the
    y direction. Values outside the open interval (0, 1) are NaN.
    """
    tx1, tx2 = solve_quadratic_from_coeffs(
        *derivative_coefficients(P0.real, P1.real, P2.real, P3.real)
    )
    ty1, ty2 = solve_quadratic_from_coeffs(
        *derivative_coefficients(P0.imag, P1.imag, P2.imag, P3.imag)
    )
    ts = [tx1, tx2, ty1, ty2]
    for i in range(4):
        if not 0 < ts[i] < 1:
            ts[i] = nan
    return ts[0], ts[1], ts[2], ts[3]


@njit(Tuple([c128, c128])(c128, c128, c128, c128))
def cubic_bezier_bbox(
    P0: complex, P1: complex, P2: complex, P3: complex
) -> tuple[complex, complex]:
    """Get the bounding box of a cubic Bezier curve.

    https://www.desmos.com/calculator/ifyeddi2eh
    """
    # Solve for critical points in x and y directions

    # get the coefficients of the derivative of the cubic Bezier curve
    # in the form at^2 + bt + c
    dx_coeffs = derivative_coefficients(P0.real, P1.real, P2.real, P3.real)
    dy_coeffs = derivative_coefficients(P0.imag, P1.imag, P2.imag, P3.imag)

    txs = solve_quadratic_from_coeffs(*dx_coeffs)
    tys = solve_quadratic_from_coeffs(*dy_coeffs)

    # Evaluate the cubic Bezier curve at t = 0, t = 1, and at the critical points
    x_points = [P0.real, P3.real] + [
        cubic_bezier(t, P0.real, P1.real, P2.real, P3.real) for t in txs if 0 <= t <= 1
    ]
    y_points = [P0.imag, P3.imag] + [
        cubic_bezier(t, P0.imag, P1.imag, P2.imag, P3.imag) for t in tys if 0 <= t <= 1
    ]

    return complex(min(x_points), min(y_points)), complex(max(x_points), max(y_points))

