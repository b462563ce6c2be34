"""Orientation, animation and drawing of a height-map mesh."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from .canvas import Canvas, Point
from .geometry import Vector, perspective_projection, scale, translate
from .mapfile import Mesh

log = logging.getLogger(__name__)

_PI_4 = math.pi / 4
SCREEN_DEPTH = 25.0
FOCAL_MAX = 209715200
FOCAL_MIN = 130
SLERP_STEP = 0.05


@dataclass(frozen=True)
class Quaternion:
    """A rotation quaternion ``w + xi + yj + zk``."""

    w: float = 1.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    @classmethod
    def identity(cls) -> Quaternion:
        return cls()

    @classmethod
    def _about_axis(cls, angle: float, axis: Vector) -> Quaternion:
        s = math.sin(angle / 2)
        return cls(math.cos(angle / 2), s * axis[0], s * axis[1], s * axis[2])

    @classmethod
    def x_rotation(cls, angle: float) -> Quaternion:
        return cls._about_axis(angle, (1.0, 0.0, 0.0))

    @classmethod
    def y_rotation(cls, angle: float) -> Quaternion:
        return cls._about_axis(angle, (0.0, 1.0, 0.0))

    @classmethod
    def z_rotation(cls, angle: float) -> Quaternion:
        return cls._about_axis(angle, (0.0, 0.0, 1.0))

    def __mul__(self, other: Quaternion) -> Quaternion:
        a, b = self, other
        return Quaternion(
            a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
            a.w * b.x + a.x * b.w + a.y * b.z - a.z * b.y,
            a.w * b.y - a.x * b.z + a.y * b.w + a.z * b.x,
            a.w * b.z + a.x * b.y - a.y * b.x + a.z * b.w,
        )

    def __neg__(self) -> Quaternion:
        return Quaternion(-self.w, -self.x, -self.y, -self.z)

    def conjugate(self) -> Quaternion:
        return Quaternion(self.w, -self.x, -self.y, -self.z)

    def dot(self, other: Quaternion) -> float:
        return self.w * other.w + self.x * other.x + self.y * other.y + self.z * other.z

    def norm(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Quaternion:
        """The unit quaternion with the same direction."""
        length = self.norm()
        if length == 0:
            raise ValueError("cannot normalise a zero quaternion")
        return Quaternion(self.w / length, self.x / length, self.y / length, self.z / length)

    def rotate(self, v: Vector) -> Vector:
        """Rotate a vector by this quaternion."""
        p = self * Quaternion(0.0, v[0], v[1], v[2]) * self.conjugate()
        return p.x, p.y, p.z

    def slerp(self, other: Quaternion, t: float) -> Quaternion:
        """Spherical interpolation from this rotation (t=0) to ``other`` (t=1)."""
        cos_theta = self.dot(other)
        end = other
        if cos_theta < 0:
            end = -other
            cos_theta = -cos_theta
        if cos_theta > 0.9995:
            return Quaternion(
                self.w + t * (end.w - self.w),
                self.x + t * (end.x - self.x),
                self.y + t * (end.y - self.y),
                self.z + t * (end.z - self.z),
            ).normalized()
        theta = math.acos(min(cos_theta, 1.0))
        sin_theta = math.sin(theta)
        a = math.sin((1 - t) * theta) / sin_theta
        b = math.sin(t * theta) / sin_theta
        return Quaternion(
            a * self.w + b * end.w,
            a * self.x + b * end.x,
            a * self.y + b * end.y,
            a * self.z + b * end.z,
        )


@dataclass
class Slerp:
    """State of an orientation animation; it runs while ``t < 1``."""

    start: Quaternion = field(default_factory=Quaternion.identity)
    end: Quaternion = field(default_factory=Quaternion.identity)
    out: Quaternion = field(default_factory=Quaternion.identity)
    sign: int = 1
    t: float = 1.1


def _isometric(base: Quaternion) -> Quaternion:
    return Quaternion.x_rotation(-_PI_4) * (Quaternion.z_rotation(-_PI_4) * base)


def _off_screen(canvas: Canvas, point: Point, border: float) -> bool:
    half_w, half_h = canvas.width // 2, canvas.height // 2
    x, y = point
    return (
        x >= half_w + border
        or x <= -half_w - border
        or y >= half_h + border
        or y <= -half_h - border
    )


@dataclass
class Scene:
    """A mesh together with its orientation, position, zoom and colouring."""

    mesh: Mesh
    focal_len: float = 300.0
    orientation: Quaternion = field(default_factory=Quaternion.identity)
    position: Vector = (0.0, 0.0, 0.0)
    scale: float = 1.0
    slerp: Slerp = field(default_factory=Slerp)
    cycle_per_frame: int = 400
    cycle_count: int = 0
    base_hue: int = 0
    hue_range: int = 360
    line_spacing: float = 0.0

    def __post_init__(self) -> None:
        if not self.line_spacing:
            self.line_spacing = self.mesh.half_spacing

    def set_isometric(self) -> None:
        """Turn the current orientation into the isometric view without animating."""
        self.orientation = _isometric(self.orientation)
        self.slerp = Slerp(
            start=self.orientation,
            end=Quaternion.identity(),
            out=Quaternion.identity(),
            sign=1,
            t=1.1,
        )

    def animate_to_iso(self) -> None:
        self.slerp.start = self.orientation
        self.slerp.end = _isometric(Quaternion.identity())
        self.slerp.t = 0.0
        self.slerp.sign = 1
        self.orientation = self.slerp.end
        log.info("animating to isometric projection...")

    def animate_to_perspective(self) -> None:
        self.slerp.start = self.orientation
        self.slerp.end = self.orientation
        self.slerp.out = self.orientation
        self.slerp.t = 0.0
        self.slerp.sign = -1
        log.info("animating to perspective projection...")

    def animate_to_top(self) -> None:
        self.slerp.start = self.orientation
        self.slerp.end = Quaternion.identity()
        self.slerp.t = 0.0
        self.slerp.sign = 1
        self.orientation = self.slerp.end
        log.info("animating to top view...")

    def transformed_vertices(self) -> list[list[Vector]]:
        """Mesh vertices rotated, moved and scaled into view space."""
        rotation = self.slerp.out if self.slerp.t < 1 else self.orientation
        px, py, pz = self.position
        weight = self.mesh.value_weight
        return [
            [
                scale(
                    translate(
                        rotation.rotate((x, y, z * weight)),
                        px / self.scale,
                        py / self.scale,
                        pz / self.scale,
                    ),
                    self.scale,
                )
                for x, y, z in row
            ]
            for row in self.mesh.vertices
        ]

    def _project(self, v: Vector) -> Point | None:
        try:
            return perspective_projection(v, self.focal_len, SCREEN_DEPTH)
        except ZeroDivisionError:
            return None

    def _hue(self, a: int, b: int) -> int:
        span = self.mesh.max_height - self.mesh.min_height
        ratio = max(a, b) / span if span else 0.0
        return int(self.base_hue + ratio * self.hue_range)

    def _draw_node(self, canvas: Canvas, vertices, start: Point, i: int, j: int, skip: int) -> None:
        rows = self.mesh.heightmap.rows
        if j + skip < self.mesh.width:
            end = self._project(vertices[i][j + skip])
            if end is not None:
                canvas.plot_line(start, end, self._hue(rows[i][j], rows[i][j + skip]))
        if i + skip < self.mesh.height:
            end = self._project(vertices[i + skip][j])
            if end is not None:
                canvas.plot_line(start, end, self._hue(rows[i][j], rows[i + skip][j]))

    def render(self, canvas: Canvas) -> None:
        """Clear ``canvas`` and draw the mesh's wire frame on it."""
        canvas.clear()
        skip = int(1 / (self.line_spacing * 0.9) + 1)
        vertices = self.transformed_vertices()
        border = self.line_spacing * 4
        for i in range(0, self.mesh.height, skip):
            j = 0
            while j < self.mesh.width:
                v = vertices[i][j]
                start = self._project(v)
                if start is None or _off_screen(canvas, start, border) or v[2] > self.focal_len:
                    j += 1
                    continue
                self._draw_node(canvas, vertices, start, i, j, skip)
                j += skip

    def _advance_animation(self) -> None:
        slerp = self.slerp
        if slerp.start != slerp.end:
            slerp.out = slerp.start.slerp(slerp.end, slerp.t)
        slerp.out = slerp.out.normalized()
        slerp.t += SLERP_STEP
        if slerp.sign == 1 and self.focal_len < FOCAL_MAX:
            self.focal_len = (self.focal_len - FOCAL_MIN) * 2
        elif self.focal_len > FOCAL_MIN:
            self.focal_len = self.focal_len / 2 + FOCAL_MIN

    def tick(self) -> bool:
        """Advance the frame counter and any animation; True when a redraw is due."""
        if self.cycle_count < self.cycle_per_frame:
            self.cycle_count += 1
        else:
            self.cycle_count = 0
        if self.cycle_count:
            return False
        redraw = False
        if self.slerp.t < 1:
            self._advance_animation()
            redraw = True
        if 1.0 <= self.slerp.t <= 1.05:
            self.slerp.t += 0.10
            redraw = True
        return redraw