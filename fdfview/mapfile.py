"""Reading height maps and building the vertex mesh laid over them."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from os import PathLike

_ATOI = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]*)")


class MapError(ValueError):
    """A map file is missing, empty or not rectangular."""


def _atoi(token: str) -> int:
    """Leading integer of ``token``, 0 when there is none; trailing text is ignored."""
    match = _ATOI.match(token)
    try:
        return int(match.group(1)) if match else 0
    except ValueError:
        return 0


@dataclass(frozen=True)
class HeightMap:
    """A rectangular grid of integer heights, indexed ``rows[i][j]``."""

    rows: tuple[tuple[int, ...], ...]

    def __post_init__(self) -> None:
        rows = tuple(tuple(int(value) for value in row) for row in self.rows)
        object.__setattr__(self, "rows", rows)
        if not rows or not rows[0]:
            raise MapError("map has no values")
        width = len(rows[0])
        for number, row in enumerate(rows, 1):
            if len(row) != width:
                raise MapError(f"row {number} has {len(row)} values, expected {width}")

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def format(self) -> str:
        """Render the map as text, each value followed by a space, one row per line."""
        return "".join(
            "".join(f"{value} " for value in row) + "\n" for row in self.rows
        )


def read_map(lines: Iterable[str]) -> HeightMap:
    """Build a height map from lines of space-separated integers.

    Every line must hold as many values as the first one.
    """
    rows: list[list[int]] = []
    width: int | None = None
    for number, line in enumerate(lines, 1):
        tokens = [token for token in line.split(" ") if token]
        if width is None:
            width = len(tokens)
        elif len(tokens) != width:
            raise MapError(
                f"line {number}: expected {width} values, found {len(tokens)}"
            )
        rows.append([_atoi(token) for token in tokens])
    if not rows:
        raise MapError("map is empty")
    return HeightMap(tuple(tuple(row) for row in rows))


def parse_map(path: str | PathLike[str]) -> HeightMap:
    """Read a height map from a file."""
    try:
        with open(path, encoding="utf-8", errors="replace") as handle:
            return read_map(handle)
    except OSError as exc:
        raise MapError(f"cannot open {path}: {exc.strerror or exc}") from exc


@dataclass
class Mesh:
    """Vertices laid over a height map, centred on the origin.

    Neighbouring vertices are ``2 * half_spacing`` apart; ``value_weight``
    scales heights when the mesh is drawn.
    """

    heightmap: HeightMap
    vertices: list[list[tuple[float, float, float]]]
    half_spacing: float
    max_height: int
    min_height: int
    value_weight: float = 1.0

    @property
    def width(self) -> int:
        return self.heightmap.width

    @property
    def height(self) -> int:
        return self.heightmap.height

    def neighbours(self, i: int, j: int) -> dict[str, tuple[int, int]]:
        """Grid positions next to ``(i, j)`` keyed by top, left, bot and right."""
        if not (0 <= i < self.height and 0 <= j < self.width):
            raise IndexError(f"no vertex at ({i}, {j})")
        candidates = {
            "top": (i - 1, j),
            "left": (i, j - 1),
            "bot": (i + 1, j),
            "right": (i, j + 1),
        }
        return {
            name: (row, col)
            for name, (row, col) in candidates.items()
            if 0 <= row < self.height and 0 <= col < self.width
        }


def create_vertices(heightmap: HeightMap) -> Mesh:
    """Place one vertex per map cell, with the height as its z coordinate."""
    height, width = heightmap.height, heightmap.width
    half = float(1 + 2000 // (height * width))
    vertices = [
        [
            (
                (j - width // 2) * 2 * half + half,
                (i - height // 2) * 2 * half + half,
                float(value),
            )
            for j, value in enumerate(row)
        ]
        for i, row in enumerate(heightmap.rows)
    ]
    values = [value for row in heightmap.rows for value in row]
    return Mesh(
        heightmap=heightmap,
        vertices=vertices,
        half_spacing=half,
        max_height=max(values),
        min_height=min(values),
    )