import pytest

from fdfview.canvas import Canvas
from fdfview.color import hue_to_int
from fdfview.geometry import frac_num, rfrac_num


def test_size_must_be_positive():
    with pytest.raises(ValueError):
        Canvas(0, 10)


def test_fresh_canvas_is_opaque_black():
    canvas = Canvas(20, 10)
    assert canvas.pixel(0, 0) == 0xFF000000
    assert canvas.to_bytes() == b"\x00\x00\x00\xff" * 200


def test_add_pixel_then_read_back():
    canvas = Canvas(20, 10)
    canvas.add_pixel(3, -2, 0x11223344)
    assert canvas.pixel(3, -2) == 0x11223344


def test_pixel_off_canvas_raises():
    canvas = Canvas(20, 10)
    with pytest.raises(IndexError):
        canvas.pixel(10, 0)
    with pytest.raises(IndexError):
        canvas.pixel(0, -5)


def test_add_pixel_off_canvas_is_ignored():
    canvas = Canvas(20, 10)
    before = canvas.to_bytes()
    canvas.add_pixel(10, 0, 0x11223344)
    canvas.add_pixel(-10, 0, 0x11223344)
    canvas.add_pixel(0, 5, 0x11223344)
    assert canvas.to_bytes() == before


def test_to_bytes_layout():
    canvas = Canvas(4, 4)
    canvas.add_pixel(-1, -1, 0x11223344)
    data = canvas.to_bytes()
    assert len(data) == 4 * 4 * 4
    offset = (1 * 4 + 1) * 4
    assert data[offset:offset + 4] == b"\x44\x33\x22\x11"


def test_clear_resets_pixels():
    canvas = Canvas(20, 10)
    fresh = canvas.to_bytes()
    canvas.add_pixel(1, 1, 0x12345678)
    canvas.clear()
    assert canvas.to_bytes() == fresh


def test_horizontal_line_pixels():
    canvas = Canvas(40, 20)
    blank = canvas.pixel(4, 0)
    canvas.plot_line((0, 0), (3, 0), 100)
    for x in range(4):
        assert canvas.pixel(x, 0) == hue_to_int(100, rfrac_num(0.0))
        assert canvas.pixel(x, -1) == hue_to_int(100, frac_num(0.0))
    assert canvas.pixel(4, 0) == blank


def test_vertical_line_pixels():
    canvas = Canvas(40, 20)
    canvas.plot_line((0, 0), (0, 3), 200)
    for y in range(4):
        assert canvas.pixel(0, y) == hue_to_int(200, rfrac_num(0.0))
        assert canvas.pixel(-1, y) == hue_to_int(200, frac_num(0.0))


def test_line_direction_does_not_matter():
    forward = Canvas(60, 40)
    backward = Canvas(60, 40)
    forward.plot_line((-7, 3), (12, -5), 300)
    backward.plot_line((12, -5), (-7, 3), 300)
    assert forward.to_bytes() == backward.to_bytes()


def test_zero_length_line_marks_start():
    canvas = Canvas(20, 10)
    canvas.plot_line((2, 2), (2, 2), 50)
    assert canvas.pixel(2, 2) == hue_to_int(50, rfrac_num(2.0))


def test_long_line_is_clipped_to_canvas():
    canvas = Canvas(20, 10)
    canvas.plot_line((-1_000_000, 0), (1_000_000, 0), 10)
    assert canvas.pixel(9, 0) == hue_to_int(10, rfrac_num(0.0))
    assert canvas.pixel(-9, 0) == hue_to_int(10, rfrac_num(0.0))