"""Vector transforms, screen projections and helpers for anti-aliased lines."""

from __future__ import annotations

Vector = tuple[float, float, float]


def orthographic_projection(v: Vector) -> tuple[int, int]:
    """Drop the depth and round the x and y coordinates to screen offsets."""
    return int(v[0] + 0.5), int(v[1] + 0.5)


def perspective_projection(v: Vector, focal: float, screen_p: float) -> tuple[int, int]:
    """Project a point through a pinhole ``focal`` behind a screen at depth ``screen_p``.

    Raises ZeroDivisionError when the point lies in the focal plane.
    """
    distance = screen_p - v[2] + focal
    return (
        int(v[0] / distance * focal + 0.5),
        int(v[1] / distance * focal + 0.5),
    )


def scale(v: Vector, factor: float) -> Vector:
    """Return ``v`` multiplied by ``factor``."""
    return v[0] * factor, v[1] * factor, v[2] * factor


def translate(v: Vector, dx: float, dy: float, dz: float) -> Vector:
    """Return ``v`` moved by the given offsets."""
    return v[0] + dx, v[1] + dy, v[2] + dz


def frac_num(x: float) -> float:
    """Fractional part of a positive number; for ``x <= 0`` it is ``x - (trunc(x) + 1)``."""
    if x > 0:
        return x - int(x)
    return x - (int(x) + 1)


def rfrac_num(x: float) -> float:
    """One minus :func:`frac_num`."""
    return 1 - frac_num(x)