"""
Color parsing utilities

Pure functions that turn hex strings, CSS functional notations and numeric
triples into validated (r, g, b) tuples. Named colors live in
config/colors.yaml and are resolved by ColorManager.

Out-of-range values are rejected with InvalidColorSpec, never clamped.
"""

import math
import re
from numbers import Real
from typing import Iterable, List, Tuple

from models.errors import InvalidColorSpec

RGB = Tuple[int, int, int]

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3,8})$")
_FUNCTIONAL_RE = re.compile(r"^(rgba?|hsla?)\s*\((.*)\)$", re.IGNORECASE)
_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def parse_hex(text: str) -> RGB:
    """
    Parse #RGB, #RGBA, #RRGGBB or #RRGGBBAA

    Alpha digits are accepted but ignored: the caller's opacity always wins.

    Example:
        parse_hex("#fff")       # (255, 255, 255)
        parse_hex("#1e90ff")    # (30, 144, 255)
    """
    match = _HEX_RE.match(text.strip())
    if not match:
        raise InvalidColorSpec(text, "not a hex color")

    digits = match.group(1)
    if len(digits) in (3, 4):
        return tuple(int(ch * 2, 16) for ch in digits[:3])  # type: ignore[return-value]
    if len(digits) in (6, 8):
        return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))  # type: ignore[return-value]

    raise InvalidColorSpec(text, f"hex color must have 3, 4, 6 or 8 digits, got {len(digits)}")


def _split_arguments(body: str) -> Tuple[List[str], List[str]]:
    """Split functional notation arguments into (channels, alpha)"""
    if "," in body:
        parts = [p.strip() for p in body.split(",")]
        return parts[:3], parts[3:]

    main, _, alpha = body.partition("/")
    channels = main.split()
    return channels, ([alpha.strip()] if alpha else [])


def _parse_number(token: str, source: str) -> float:
    if not _NUMBER_RE.match(token):
        raise InvalidColorSpec(source, f"'{token}' is not a number")
    return float(token)


def _parse_rgb_channel(token: str, source: str) -> int:
    if token.endswith("%"):
        percent = _parse_number(token[:-1], source)
        if not 0 <= percent <= 100:
            raise InvalidColorSpec(source, f"channel {token} outside 0%-100%")
        return int(percent * 255 / 100 + 0.5)

    value = _parse_number(token, source)
    if not 0 <= value <= 255:
        raise InvalidColorSpec(source, f"channel {token} outside 0-255")
    return int(value + 0.5)


def _parse_alpha(token: str, source: str) -> None:
    if token.endswith("%"):
        value = _parse_number(token[:-1], source) / 100
    else:
        value = _parse_number(token, source)
    if not 0 <= value <= 1:
        raise InvalidColorSpec(source, f"alpha {token} outside 0-1")


def _parse_hue(token: str, source: str) -> float:
    if token.lower().endswith("deg"):
        token = token[:-3]
    return _parse_number(token, source) % 360


def _parse_percentage(token: str, source: str) -> float:
    if not token.endswith("%"):
        raise InvalidColorSpec(source, f"'{token}' must be a percentage")
    value = _parse_number(token[:-1], source)
    if not 0 <= value <= 100:
        raise InvalidColorSpec(source, f"{token} outside 0%-100%")
    return value / 100


def hsl_to_rgb(hue: float, saturation: float, lightness: float) -> RGB:
    """
    Convert HSL to RGB

    Args:
        hue: Degrees (any value, wrapped to 0-360)
        saturation: 0.0-1.0
        lightness: 0.0-1.0

    Returns:
        (r, g, b) tuple with values 0-255

    Example:
        hsl_to_rgb(0, 1.0, 0.5)     # (255, 0, 0)
        hsl_to_rgb(120, 1.0, 0.25)  # (0, 128, 0)
    """
    chroma = (1 - abs(2 * lightness - 1)) * saturation
    sector = (hue % 360) / 60
    x = chroma * (1 - abs(sector % 2 - 1))

    if sector < 1:
        r, g, b = chroma, x, 0.0
    elif sector < 2:
        r, g, b = x, chroma, 0.0
    elif sector < 3:
        r, g, b = 0.0, chroma, x
    elif sector < 4:
        r, g, b = 0.0, x, chroma
    elif sector < 5:
        r, g, b = x, 0.0, chroma
    else:
        r, g, b = chroma, 0.0, x

    m = lightness - chroma / 2
    return (int((r + m) * 255 + 0.5), int((g + m) * 255 + 0.5), int((b + m) * 255 + 0.5))


def parse_functional(text: str) -> RGB:
    """
    Parse rgb()/rgba()/hsl()/hsla() notation

    Both the legacy comma syntax and the space syntax with '/ alpha' are
    accepted. Alpha is validated but ignored.

    Example:
        parse_functional("rgb(255, 0, 0)")        # (255, 0, 0)
        parse_functional("rgb(100% 0% 0% / 50%)") # (255, 0, 0)
        parse_functional("hsl(120, 100%, 25%)")   # (0, 128, 0)
    """
    match = _FUNCTIONAL_RE.match(text.strip())
    if not match:
        raise InvalidColorSpec(text, "not a functional color notation")

    name = match.group(1).lower()
    channels, alpha = _split_arguments(match.group(2))

    if len(channels) != 3 or len(alpha) > 1 or any(not c for c in channels):
        raise InvalidColorSpec(text, "expected three channels and an optional alpha")
    if alpha:
        _parse_alpha(alpha[0], text)

    if name.startswith("rgb"):
        return tuple(_parse_rgb_channel(c, text) for c in channels)  # type: ignore[return-value]

    hue = _parse_hue(channels[0], text)
    saturation = _parse_percentage(channels[1], text)
    lightness = _parse_percentage(channels[2], text)
    return hsl_to_rgb(hue, saturation, lightness)


def coerce_rgb_triple(values: Iterable) -> RGB:
    """
    Validate an already-numeric color

    Accepts ints and finite floats (rounded to the nearest integer).
    Booleans and strings are rejected.

    Example:
        coerce_rgb_triple((255, 128, 0))    # (255, 128, 0)
        coerce_rgb_triple([0, 0, 256])      # raises InvalidColorSpec
    """
    channels = list(values)
    if len(channels) != 3:
        raise InvalidColorSpec(values, f"expected 3 channels, got {len(channels)}")

    result = []
    for channel in channels:
        if isinstance(channel, bool) or not isinstance(channel, Real):
            raise InvalidColorSpec(values, f"channel {channel!r} is not a number")
        if not math.isfinite(channel):
            raise InvalidColorSpec(values, f"channel {channel!r} is not finite")
        if not 0 <= channel <= 255:
            raise InvalidColorSpec(values, f"channel {channel!r} outside 0-255")
        result.append(int(channel + 0.5))
    return tuple(result)  # type: ignore[return-value]


def looks_like_hex(text: str) -> bool:
    return text.strip().startswith("#")


def looks_like_functional(text: str) -> bool:
    return bool(_FUNCTIONAL_RE.match(text.strip()))
