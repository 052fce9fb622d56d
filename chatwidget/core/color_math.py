import re
from typing import Union

Number = Union[int, float]

HEX6_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")
HEX3_RE = re.compile(r"^#[0-9A-Fa-f]{3}$")


def format_number(value: Number) -> str:
    """Prints numbers the way the runtime script does (12.0 -> "12", 12.5 -> "12.5")."""
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(round(value, 10))
    return str(value)


def expand_hex(color: str) -> str:
    """#abc -> #aabbcc. Any other input is returned as-is."""
    if HEX3_RE.match(color):
        return "#" + "".join(ch * 2 for ch in color[1:])
    return color


def _channels(hex_color: str):
    value = int(hex_color.lstrip("#"), 16)
    return (value >> 16) & 255, (value >> 8) & 255, value & 255


def _to_hex(r: int, g: int, b: int) -> str:
    return f"#{r:02x}{g:02x}{b:02x}"


def lighten(hex_color: str, amount: float) -> str:
    """Moves each channel toward 255 by `amount` of its remaining headroom."""
    r, g, b = _channels(hex_color)
    return _to_hex(*(min(255, int(c + (255 - c) * amount)) for c in (r, g, b)))


def darken(hex_color: str, amount: float) -> str:
    """Scales each channel toward 0 by `amount`."""
    r, g, b = _channels(hex_color)
    return _to_hex(*(max(0, int(c * (1 - amount))) for c in (r, g, b)))


def hsl(hue: Number, saturation: Number, lightness: Number) -> str:
    return f"hsl({format_number(hue)}, {format_number(saturation)}%, {format_number(lightness)}%)"


def hsla(hue: Number, saturation: Number, lightness: Number, alpha: Number) -> str:
    return (
        f"hsla({format_number(hue)}, {format_number(saturation)}%, "
        f"{format_number(lightness)}%, {format_number(alpha)})"
    )
