"""Packing colours into 32-bit ARGB integers."""

_MASK32 = 0xFFFFFFFF
_HUE_PERIOD = 766


def _c_rem(value: int, modulus: int) -> int:
    """Remainder that keeps the sign of the dividend, as integer division truncates."""
    remainder = abs(value) % modulus
    return -remainder if value < 0 else remainder


def _alpha_bits(a: float) -> int:
    return _c_rem(int(255 * a), 256) << 24


def rgba_to_int(r: int, g: int, b: int, a: float) -> int:
    """Pack channels into an unsigned 32-bit ``0xAARRGGBB`` value.

    Each channel is reduced modulo 256; ``a`` is a fraction of full opacity.
    """
    color = (
        _c_rem(int(b), 256)
        | _c_rem(int(g), 256) << 8
        | _c_rem(int(r), 256) << 16
        | _alpha_bits(a)
    )
    return color & _MASK32


def hue_to_int(hue: int, a: float) -> int:
    """Map a hue on a 766-step blue-green-red wheel to a packed colour.

    The hue is taken as an unsigned 32-bit number, so negative values wrap.
    """
    h = (int(hue) & _MASK32) % _HUE_PERIOD
    if h < 256:
        color = (255 - h) | h << 8
    elif h < 511:
        shifted = h - 255
        color = (255 - shifted) << 8 | shifted << 16
    else:
        shifted = h - 510
        color = (255 - shifted) << 16 | shifted
    return (color | _alpha_bits(a)) & _MASK32