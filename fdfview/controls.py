"""Keyboard and mouse handling for an interactive scene."""

from __future__ import annotations

import logging
from enum import IntEnum

from .color import hue_to_int
from .geometry import translate
from .scene import FOCAL_MAX, FOCAL_MIN, Quaternion, Scene

log = logging.getLogger(__name__)

PAN_STEP = 10
ZOOM_FACTOR = 0.9
WEIGHT_STEP = 0.1
HUE_STEP = 10
SCROLL_ANGLE = 0.1
DRAG_DIVISOR = 600
MOVE_SKIP = 10
MENU_GREY = 0xFFBBBBBB


class Key(IntEnum):
    """Keys the viewer knows, valued by their X11 keysyms."""

    A = 97
    B = 98
    C = 99
    D = 100
    E = 101
    F = 102
    G = 103
    H = 104
    I = 105  # noqa: E741
    J = 106
    K = 107
    L = 108
    M = 109
    N = 110
    O = 111  # noqa: E741
    P = 112
    Q = 113
    R = 114
    S = 115
    T = 116
    U = 117
    V = 118
    W = 119
    X = 120
    Y = 121
    Z = 122
    NUM_0 = 48
    NUM_1 = 49
    NUM_2 = 50
    NUM_3 = 51
    NUM_4 = 52
    NUM_5 = 53
    NUM_6 = 54
    NUM_7 = 55
    NUM_8 = 56
    NUM_9 = 57
    LEFT = 65361
    UP = 65362
    RIGHT = 65363
    DOWN = 65364
    SPACE = 32
    ESCAPE = 65307
    TAB = 65289


MACOS_KEYCODES: dict[int, Key] = {
    0: Key.A, 11: Key.B, 8: Key.C, 2: Key.D, 14: Key.E, 3: Key.F, 5: Key.G,
    4: Key.H, 34: Key.I, 38: Key.J, 40: Key.K, 37: Key.L, 46: Key.M,
    45: Key.N, 31: Key.O, 35: Key.P, 12: Key.Q, 15: Key.R, 1: Key.S,
    17: Key.T, 32: Key.U, 9: Key.V, 13: Key.W, 7: Key.X, 16: Key.Y, 6: Key.Z,
    29: Key.NUM_0, 18: Key.NUM_1, 19: Key.NUM_2, 20: Key.NUM_3,
    21: Key.NUM_4, 23: Key.NUM_5, 22: Key.NUM_6, 26: Key.NUM_7,
    28: Key.NUM_8, 25: Key.NUM_9,
    123: Key.LEFT, 124: Key.RIGHT, 126: Key.UP, 125: Key.DOWN,
    49: Key.SPACE, 53: Key.ESCAPE, 48: Key.TAB,
}
"""Native macOS key codes mapped to the keys they stand for."""


class MouseButton(IntEnum):
    """Mouse buttons and wheel directions, valued as X11 numbers them."""

    LEFT = 1
    MIDDLE = 2
    RIGHT = 3
    SCROLL_UP = 4
    SCROLL_DOWN = 5


MACOS_BUTTONS: dict[int, MouseButton] = {
    1: MouseButton.LEFT,
    2: MouseButton.RIGHT,
    3: MouseButton.MIDDLE,
    4: MouseButton.SCROLL_UP,
    5: MouseButton.SCROLL_DOWN,
}
"""Native macOS button numbers mapped to the buttons they stand for."""

_HOLDABLE = frozenset({MouseButton.LEFT, MouseButton.MIDDLE, MouseButton.RIGHT})


class ExitRequested(Exception):
    """The user asked to leave the viewer."""

    def __init__(self, status: int = 0) -> None:
        super().__init__(f"exit requested with status {status}")
        self.status = status


class Controller:
    """Turns key presses and mouse events into changes of a scene.

    Each handler returns True when the scene must be drawn again at once.
    """

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        self.held: set[MouseButton] = set()
        self.prev_x = 0.0
        self.prev_y = 0.0
        self._moves = 0

    def key_press(self, key: Key | int) -> bool:
        """Handle a key; raises ExitRequested for Escape."""
        try:
            key = Key(key)
        except ValueError:
            return False
        scene = self.scene
        if key is Key.ESCAPE:
            log.info("exiting the program")
            raise ExitRequested(0)
        views = {
            Key.NUM_1: scene.animate_to_iso,
            Key.NUM_2: scene.animate_to_perspective,
            Key.NUM_3: scene.animate_to_top,
        }
        if key in views:
            views[key]()
            return False
        pans = {
            Key.LEFT: (-PAN_STEP, 0),
            Key.RIGHT: (PAN_STEP, 0),
            Key.DOWN: (0, PAN_STEP),
            Key.UP: (0, -PAN_STEP),
        }
        if key in pans:
            dx, dy = pans[key]
            scene.position = translate(scene.position, dx, dy, 0)
            return True
        return self._adjust_view(key) or self._adjust_hue(key)

    def _adjust_view(self, key: Key) -> bool:
        scene = self.scene
        if key is Key.E and scene.focal_len < FOCAL_MAX:
            scene.focal_len = (scene.focal_len - FOCAL_MIN) * 2
        elif key is Key.D and scene.focal_len >= FOCAL_MIN:
            scene.focal_len = scene.focal_len / 2 + FOCAL_MIN
        elif key is Key.A:
            scene.mesh.value_weight -= WEIGHT_STEP
        elif key is Key.Q:
            scene.mesh.value_weight += WEIGHT_STEP
        elif key is Key.S:
            scene.scale *= ZOOM_FACTOR
            scene.line_spacing *= ZOOM_FACTOR
        elif key is Key.W:
            scene.scale *= 1.0 / ZOOM_FACTOR
            scene.line_spacing *= 1.0 / ZOOM_FACTOR
        else:
            return False
        return True

    def _adjust_hue(self, key: Key) -> bool:
        scene = self.scene
        if key is Key.R:
            scene.base_hue += HUE_STEP
        elif key is Key.F:
            scene.base_hue -= HUE_STEP
        elif key is Key.T:
            scene.hue_range += HUE_STEP
        elif key is Key.G:
            scene.hue_range -= HUE_STEP
        else:
            return False
        return True

    def _spin(self, angle: float) -> None:
        q = Quaternion.z_rotation(angle).normalized()
        self.scene.orientation = q * self.scene.orientation

    def mouse_down(self, button: MouseButton | int, x: int, y: int) -> bool:
        """Start a drag with a held button, or spin the view with the wheel."""
        self.prev_x, self.prev_y = float(x), float(y)
        try:
            button = MouseButton(button)
        except ValueError:
            return False
        if button in _HOLDABLE:
            self.held.add(button)
            return False
        self._spin(-SCROLL_ANGLE if button is MouseButton.SCROLL_UP else SCROLL_ANGLE)
        return True

    def mouse_up(self, button: MouseButton | int, x: int, y: int) -> bool:
        """Release a held button."""
        try:
            self.held.discard(MouseButton(button))
        except ValueError:
            pass
        return False

    def mouse_move(self, x: int, y: int) -> bool:
        """Rotate with the right button held, pan with the left; every tenth move is dropped."""
        self._moves += 1
        if self._moves == MOVE_SKIP:
            self._moves = 0
            return False
        scene = self.scene
        redraw = False
        if MouseButton.RIGHT in self.held:
            q = Quaternion.y_rotation((self.prev_x - x) / DRAG_DIVISOR).normalized()
            self.prev_x = float(x)
            scene.orientation = q * scene.orientation
            q = Quaternion.x_rotation(-(self.prev_y - y) / DRAG_DIVISOR).normalized()
            self.prev_y = float(y)
            scene.orientation = q * scene.orientation
            redraw = True
        if MouseButton.LEFT in self.held:
            scene.position = translate(
                scene.position, x - self.prev_x, y - self.prev_y, 0
            )
            self.prev_x, self.prev_y = float(x), float(y)
            redraw = True
        if MouseButton.MIDDLE in self.held:
            log.info("middle:: x:%i,y:%i", x, y)
        return redraw

    def menu_lines(self) -> list[tuple[str, int]]:
        """Text of the on-screen menu, top to bottom, each with its packed colour."""
        scene = self.scene
        return [
            ("FDF", MENU_GREY),
            (f"height weight( q/a ): {int(scene.mesh.value_weight)}", MENU_GREY),
            (f"base hue( r/f ): {scene.base_hue}", hue_to_int(scene.base_hue, 0xFF)),
            (
                f"hue range( t/g ): {scene.hue_range}",
                hue_to_int(scene.base_hue + scene.hue_range, 0xFF),
            ),
            (f"focal length( e/d ): {int(scene.focal_len)}", MENU_GREY),
        ]