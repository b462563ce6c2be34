import pytest

from fdfview.mapfile import (
    HeightMap,
    MapError,
    Mesh,
    create_vertices,
    parse_map,
    read_map,
)


def test_read_map_rows():
    hm = read_map(["0 1 2\n", "3 4 5\n"])
    assert hm.rows == ((0, 1, 2), (3, 4, 5))
    assert (hm.width, hm.height) == (3, 2)


def test_read_map_ignores_repeated_spaces():
    hm = read_map(["  7   -8  9\n", "1 2 3"])
    assert hm.rows == ((7, -8, 9), (1, 2, 3))


def test_read_map_ignores_colour_suffix():
    hm = read_map(["10,0xFF 20,0x00FF00\n"])
    assert hm.rows == ((10, 20),)


def test_trailing_space_before_newline_adds_zero_column():
    hm = read_map(["1 2 \n", "3 4 5\n"])
    assert hm.rows[0] == (1, 2, 0)


def test_read_map_rejects_ragged_rows():
    with pytest.raises(MapError):
        read_map(["1 2 3\n", "4 5\n"])


def test_read_map_rejects_empty_input():
    with pytest.raises(MapError):
        read_map([])


def test_heightmap_rejects_ragged_rows():
    with pytest.raises(MapError):
        HeightMap(((1, 2), (3,)))


def test_format_round_trip():
    hm = read_map(["0 1 2\n", "3 -4 5\n"])
    assert read_map(hm.format().splitlines()) == hm


def test_format_ends_every_row_with_newline():
    hm = read_map(["1 2\n", "3 4\n", "5 6\n"])
    text = hm.format()
    assert text.count("\n") == hm.height
    assert text.endswith("\n")


def test_parse_map_from_file(tmp_path):
    path = tmp_path / "map.fdf"
    path.write_text("0 0 0\n0 10 0\n0 0 0\n")
    hm = parse_map(path)
    assert hm.rows == ((0, 0, 0), (0, 10, 0), (0, 0, 0))


def test_parse_map_missing_file(tmp_path):
    with pytest.raises(MapError):
        parse_map(tmp_path / "missing.fdf")


def test_parse_map_empty_file(tmp_path):
    path = tmp_path / "empty.fdf"
    path.write_text("")
    with pytest.raises(MapError):
        parse_map(path)


def _mesh(lines):
    return create_vertices(read_map(lines))


def test_mesh_height_extremes():
    mesh = _mesh(["0 -3 2\n", "9 4 5\n"])
    assert mesh.max_height == max(max(r) for r in mesh.heightmap.rows)
    assert mesh.min_height == min(min(r) for r in mesh.heightmap.rows)
    assert isinstance(mesh, Mesh) and mesh.value_weight == pytest.approx(1.0)


def test_mesh_z_is_height():
    mesh = _mesh(["0 -3 2\n", "9 4 5\n"])
    for vrow, hrow in zip(mesh.vertices, mesh.heightmap.rows):
        assert [v[2] for v in vrow] == [float(h) for h in hrow]


def test_mesh_spacing_is_twice_half_spacing():
    mesh = _mesh(["1 2 3 4\n", "5 6 7 8\n", "9 10 11 12\n"])
    step = 2 * mesh.half_spacing
    for i, row in enumerate(mesh.vertices):
        for j, vertex in enumerate(row):
            if j + 1 < mesh.width:
                assert row[j + 1][0] - vertex[0] == pytest.approx(step)
            if i + 1 < mesh.height:
                assert mesh.vertices[i + 1][j][1] - vertex[1] == pytest.approx(step)


def test_large_map_has_unit_half_spacing():
    mesh = _mesh(["0 " * 50 + "\n"] * 50)
    assert mesh.half_spacing == 1.0


def test_odd_grid_centre_column_sits_at_half_spacing():
    mesh = _mesh(["0 0 0\n", "0 0 0\n", "0 0 0\n"])
    centre = mesh.vertices[1][1]
    assert centre[0] == mesh.half_spacing
    assert centre[1] == mesh.half_spacing


def test_corner_neighbours():
    mesh = _mesh(["0 0 0\n", "0 0 0\n"])
    assert mesh.neighbours(0, 0) == {"bot": (1, 0), "right": (0, 1)}


def test_neighbours_are_symmetric():
    mesh = _mesh(["1 2 3\n", "4 5 6\n", "7 8 9\n"])
    opposite = {"top": "bot", "bot": "top", "left": "right", "right": "left"}
    for i in range(mesh.height):
        for j in range(mesh.width):
            for name, (ni, nj) in mesh.neighbours(i, j).items():
                assert mesh.neighbours(ni, nj)[opposite[name]] == (i, j)


def test_neighbours_out_of_range():
    mesh = _mesh(["0 0\n", "0 0\n"])
    with pytest.raises(IndexError):
        mesh.neighbours(2, 0)