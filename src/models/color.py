"""
Color models - RGBA descriptor, color spec and theme palette

RGBA is the normalized result of every color transformation. It is frozen
so identical inputs always produce equal, hashable descriptors.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union


def format_channel_number(value: float) -> str:
    """
    Format a number the way a browser prints it inside rgba()

    Example:
        format_channel_number(1.0)   # "1"
        format_channel_number(0.7)   # "0.7"
    """
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


@dataclass(frozen=True)
class RGBA:
    """
    Normalized color with opacity

    r, g, b: 0-255 integers
    a: 0.0-1.0 opacity
    """
    r: int
    g: int
    b: int
    a: float = 1.0

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_css(self) -> str:
        """Render as a CSS rgba() string, e.g. 'rgba(255, 255, 255, 0.7)'"""
        return f"rgba({self.r}, {self.g}, {self.b}, {format_channel_number(self.a)})"

    def to_dict(self) -> Dict[str, Any]:
        return {"r": self.r, "g": self.g, "b": self.b, "a": self.a}

    def __str__(self) -> str:
        return self.to_css()


ColorValue = Union[str, Tuple[float, float, float], list, RGBA]


@dataclass(frozen=True)
class ColorSpec:
    """Opaque color value plus the opacity it should be rendered at"""
    value: Any
    opacity: float = 0.7


@dataclass(frozen=True)
class ThemePalette:
    """
    Live theme color pair

    primary: text/accent color of the section
    background: section background color
    """
    primary: Any
    background: Any


@dataclass(frozen=True)
class SelectionColors:
    """
    Inverted text-selection colors derived from a ThemePalette

    background: primary color at the selection background opacity
    foreground: background color at the selection foreground opacity
    """
    background: RGBA
    foreground: RGBA

    def to_css_rule(self, class_name: str = "inverted-selection") -> str:
        return (
            f".{class_name}::selection {{\n"
            f"  background: {self.background.to_css()} !important;\n"
            f"  color: {self.foreground.to_css()} !important;\n"
            f"}}"
        )
