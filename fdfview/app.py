"""Command-line entry point: open a map file and show it in a window."""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from os import PathLike

from .canvas import Canvas
from .controls import Controller, ExitRequested, Key, MouseButton
from .mapfile import MapError, create_vertices, parse_map
from .scene import Scene

log = logging.getLogger(__name__)

WINDOW_WIDTH = 1200
WINDOW_HEIGHT = 900
TITLE = "fdf!!!"
MENU_X = 100
MENU_TOP = 200
MENU_LINE_HEIGHT = 20

_RED = "\033[1;31m"
_GREEN = "\033[1;32m"
_RESET = "\033[0m"
_CLEAR = "\033[H\033[2J"


def load_scene(
    path: str | PathLike[str], width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT
) -> tuple[Scene, Canvas]:
    """Read a map, set up an isometric scene for it and draw it on a new canvas."""
    heightmap = parse_map(path)
    log.info("w:%i h:%i", heightmap.width, heightmap.height)
    mesh = create_vertices(heightmap)
    log.info("max:%i, min:%i", mesh.max_height, mesh.min_height)
    scene = Scene(mesh)
    scene.set_isometric()
    canvas = Canvas(width, height)
    scene.render(canvas)
    return scene, canvas


def _rgb(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def _pygame_keys(pygame) -> dict[int, Key]:
    mapping: dict[int, Key] = {}
    for key in Key:
        if len(key.name) == 1:
            attr = "K_" + key.name.lower()
        elif key.name.startswith("NUM_"):
            attr = "K_" + key.name[4:]
        else:
            attr = "K_" + key.name
        mapping[getattr(pygame, attr)] = key
    return mapping


def _present(pygame, screen, font, canvas: Canvas, controller: Controller) -> None:
    image = pygame.image.frombuffer(
        canvas.to_bytes(), (canvas.width, canvas.height), "BGRA"
    )
    screen.fill((0, 0, 0))
    screen.blit(image, (0, 0))
    for row, (text, color) in enumerate(controller.menu_lines()):
        label = font.render(text, True, _rgb(color))
        screen.blit(label, (MENU_X, canvas.height - MENU_TOP + MENU_LINE_HEIGHT * row))
    pygame.display.flip()


def _dispatch(pygame, event, controller: Controller, keymap: dict[int, Key]) -> bool:
    if event.type == pygame.KEYDOWN:
        key = keymap.get(event.key)
        return controller.key_press(key) if key is not None else False
    if event.type == pygame.MOUSEBUTTONDOWN:
        x, y = event.pos
        return controller.mouse_down(event.button, x, y)
    if event.type == pygame.MOUSEBUTTONUP:
        x, y = event.pos
        return controller.mouse_up(event.button, x, y)
    if event.type == pygame.MOUSEMOTION:
        x, y = event.pos
        return controller.mouse_move(x, y)
    return False


def _show(scene: Scene, canvas: Canvas) -> int:
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((canvas.width, canvas.height))
        pygame.display.set_caption(TITLE)
        font = pygame.font.Font(None, 22)
        controller = Controller(scene)
        keymap = _pygame_keys(pygame)
        _present(pygame, screen, font, canvas, controller)
        while True:
            redraw = False
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    log.info("exiting the program")
                    return 0
                try:
                    redraw = _dispatch(pygame, event, controller, keymap) or redraw
                except ExitRequested as request:
                    return request.status
            if scene.tick():
                redraw = True
            if redraw:
                scene.render(canvas)
                _present(pygame, screen, font, canvas, controller)
    finally:
        pygame.quit()


def run(path: str | PathLike[str]) -> int:
    """Open the viewer window on a map file; returns the exit status."""
    scene, canvas = load_scene(path, WINDOW_WIDTH, WINDOW_HEIGHT)
    return _show(scene, canvas)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the viewer on the single map file named on the command line."""
    args = sys.argv[1:] if argv is None else list(argv)
    print(_CLEAR, end="")
    print(f"{_GREEN}fdf!!!{_RESET}")
    if len(args) != 1:
        return 1
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    try:
        return run(args[0])
    except MapError as exc:
        if isinstance(exc.__cause__, OSError):
            reason = "fail to open file"
        else:
            reason = "error parsing map"
        print(f"{_RED}{reason}, abort!{_RESET}")
        return 1


if __name__ == "__main__":
    sys.exit(main())