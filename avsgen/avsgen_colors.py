"""
Color literal parsing for the ``c`` modifier.

AviSynth writes colors as ``$RRGGBB`` (or ``$AARRGGBB``) hex literals. Values
may be given as integers, hex strings (``0x123ABC``, ``#F0F``, ``FF00FF``) or
color names, which are resolved through Pillow.
"""

import re

import PIL.ImageColor

from avsgen.avsgen_errors import TypeMismatchColor

_HEX_RE = re.compile(r'^(?:0x|#|\$)?([0-9a-f]{3}|[0-9a-f]{6})$', re.IGNORECASE)


def format_color(value: int) -> str:
    if value > 0xFFFFFF:
        return f"${value:08X}"
    return f"${value:06X}"


def parse_color(value) -> str:
    """
    Convert an integer, hex string or color name into an AviSynth color literal.

    Args:
        value: int, integral float, or string.

    Returns:
        The color literal, e.g. ``$FF00FF``.
    """
    if isinstance(value, bool):
        raise TypeMismatchColor(value)
    if isinstance(value, float):
        if not value.is_integer():
            raise TypeMismatchColor(value)
        value = int(value)
    if isinstance(value, int):
        if value < 0 or value > 0xFFFFFFFF:
            raise TypeMismatchColor(value)
        return format_color(value)
    if not isinstance(value, str):
        raise TypeMismatchColor(value)

    # hex forms first, a bare "F0F" is never a color name
    text = value.strip()
    match = _HEX_RE.match(text)
    if match:
        digits = match.group(1)
        if len(digits) == 3:
            digits = ''.join(digit * 2 for digit in digits)
        return format_color(int(digits, 16))
    try:
        rgb = PIL.ImageColor.getrgb(text)
    except ValueError as e:
        raise TypeMismatchColor(value) from e
    return format_color((rgb[0] << 16) | (rgb[1] << 8) | rgb[2])
