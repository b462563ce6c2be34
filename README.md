# fdfview

An interactive wireframe viewer for height maps stored as plain-text `.fdf`
files. Each line of a map file is a row of space-separated integer heights,
and every row must have as many values as the first one. A value that does
not start with an integer counts as 0; text after the leading integer is
ignored.

```
0 0 0 0 0
0 1 2 1 0
0 2 4 2 0
0 1 2 1 0
0 0 0 0 0
```

The grid is drawn as an anti-aliased wireframe, coloured by height, in a
1200×900 window titled `fdf!!!`. It opens in an isometric view.

## Installation

```
pip install .
```

## Usage

```
fdfview path/to/map.fdf
```

The command exits with status 1 if it is not given exactly one file, if the
file cannot be opened ("fail to open file, abort!"), or if the map is empty
or its rows have different lengths ("error parsing map, abort!"). Leaving with
`Esc` or by closing the window exits with status 0. While running, the map's
size, its lowest and highest heights, and animation messages are logged to
the terminal.

## Controls

| Input                       | Action                                   |
|-----------------------------|------------------------------------------|
| `1`                         | animate to the isometric view            |
| `2`                         | animate to the perspective view          |
| `3`                         | animate to the top view                  |
| arrow keys                  | move the map by 10 pixels                |
| `w` / `s`                   | zoom in / out                            |
| `q` / `a`                   | raise / lower the height weight by 0.1   |
| `e` / `d`                   | lengthen / shorten the focal length      |
| `r` / `f`                   | shift the base hue up / down by 10       |
| `t` / `g`                   | widen / narrow the hue range by 10       |
| left mouse drag             | move the map                             |
| right mouse drag            | rotate around the X and Y axes           |
| scroll wheel                | rotate around the Z axis                 |
| middle mouse drag           | log the pointer position                 |
| `Esc` or closing the window | quit                                     |

The height weight (as a whole number), base hue, hue range and focal length
are shown in the lower-left corner of the window.

## Using it as a library

Parsing, projection and rendering work without opening a window:

```python
from fdfview.mapfile import read_map, create_vertices
from fdfview.canvas import Canvas
from fdfview.scene import Scene
from fdfview.controls import Controller, Key

heightmap = read_map(["0 1 0", "1 2 1", "0 1 0"])
scene = Scene(create_vertices(heightmap))
scene.set_isometric()

canvas = Canvas(1200, 900)
scene.render(canvas)
raw = canvas.to_bytes()        # rows of 32-bit pixels, bytes B, G, R, A

controller = Controller(scene)
if controller.key_press(Key.W):   # True when a redraw is due
    scene.render(canvas)
```

- `fdfview.mapfile`: `read_map(lines)` builds a `HeightMap` from any iterable
  of text lines, `parse_map(path)` reads one from a file, and both raise
  `MapError` for an empty or ragged map or an unreadable file.
  `create_vertices(heightmap)` returns a `Mesh` centred on the origin.
- `fdfview.scene`: `Scene` holds the orientation (a `Quaternion`), position,
  zoom, focal length and hue settings; `render(canvas)` draws the wireframe
  and `tick()` advances view animations.
- `fdfview.canvas`: `Canvas` is an in-memory ARGB image addressed from its
  centre, with `add_pixel`, `pixel`, `plot_line`, `clear` and `to_bytes`.
- `fdfview.controls`: `Controller` turns keys and mouse events into scene
  changes; `Esc` raises `ExitRequested`.
- `fdfview.app`: `load_scene(path, width, height)` returns a `(scene, canvas)`
  pair already drawn in the isometric view; `run(path)` opens the window.

## What it does not do

The viewer only displays maps. It does not save rendered images to files,
edit maps, or read colour values written alongside heights.

## Running the tests

```
pip install .[test]
pytest
```