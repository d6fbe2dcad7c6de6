"""
Color Transformer

Normalizes any supported color specification into an RGBA descriptor at a
caller-chosen opacity. Pure: no caller state is touched and the same input
always yields an equal descriptor.
"""

import math
from numbers import Real
from typing import Any, Tuple

from managers.color_manager import ColorManager
from models.color import RGBA, ColorSpec, SelectionColors
from models.errors import InvalidColorSpec, InvalidOpacity
from utils.colors import coerce_rgb_triple, looks_like_functional, looks_like_hex, parse_functional, parse_hex
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.COLOR)

DEFAULT_OPACITY = 0.7
SELECTION_BACKGROUND_OPACITY = 0.7
SELECTION_FOREGROUND_OPACITY = 1.0


def validate_opacity(opacity: Any) -> float:
    """
    Raises:
        InvalidOpacity: Not a finite number in [0, 1]
    """
    if isinstance(opacity, bool) or not isinstance(opacity, Real):
        raise InvalidOpacity(opacity)
    if not math.isfinite(opacity) or not 0.0 <= opacity <= 1.0:
        raise InvalidOpacity(opacity)
    return float(opacity)


class ColorTransformer:
    """
    Converts color specifications to RGBA

    Accepted inputs:
    - CSS color names ("black", "RebeccaPurple") via ColorManager
    - Hex: #RGB, #RGBA, #RRGGBB, #RRGGBBAA
    - rgb()/rgba()/hsl()/hsla() notation
    - Numeric triples (255, 128, 0) and RGBA instances

    Example:
        transformer = ColorTransformer(color_manager)
        transformer.to_rgba("#ffffff", 0.7)   # RGBA(255, 255, 255, 0.7)
        transformer.to_rgba("black", 1.0)     # RGBA(0, 0, 0, 1.0)
    """

    def __init__(self, color_manager: ColorManager):
        self.color_manager = color_manager

    def resolve_rgb(self, value: Any) -> Tuple[int, int, int]:
        """
        Resolve a color value to (r, g, b)

        Raises:
            InvalidColorSpec: Unknown, malformed or out-of-range color
        """
        if isinstance(value, RGBA):
            return coerce_rgb_triple(value.rgb)

        if isinstance(value, str):
            text = value.strip()
            if not text:
                raise InvalidColorSpec(value, "empty color")
            if looks_like_hex(text):
                return parse_hex(text)
            if looks_like_functional(text):
                return parse_functional(text)
            if self.color_manager.has_name(text):
                return self.color_manager.get_named_rgb(text)
            raise InvalidColorSpec(value, "unknown color name")

        if isinstance(value, (tuple, list)):
            return coerce_rgb_triple(value)

        raise InvalidColorSpec(value, f"unsupported type {type(value).__name__}")

    def to_rgba(self, color: Any, opacity: float = DEFAULT_OPACITY) -> RGBA:
        """
        Convert a color to RGBA at the given opacity

        Args:
            color: Name, hex, functional notation, numeric triple or RGBA
            opacity: 0.0-1.0

        Raises:
            InvalidOpacity: opacity outside [0, 1]
            InvalidColorSpec: color cannot be resolved
        """
        alpha = validate_opacity(opacity)
        r, g, b = self.resolve_rgb(color)
        return RGBA(r, g, b, alpha)

    def transform(self, spec: ColorSpec) -> RGBA:
        """Convert a ColorSpec (value + opacity)"""
        return self.to_rgba(spec.value, spec.opacity)

    def selection_colors(
        self,
        primary: Any,
        background: Any,
        background_opacity: float = SELECTION_BACKGROUND_OPACITY,
        foreground_opacity: float = SELECTION_FOREGROUND_OPACITY,
    ) -> SelectionColors:
        """
        Derive the inverted selection pair from the two theme colors

        Selected text is drawn in the background color on a translucent
        primary color.
        """
        selection = SelectionColors(
            background=self.to_rgba(primary, background_opacity),
            foreground=self.to_rgba(background, foreground_opacity),
        )
        log.debug(
            "Selection colors derived",
            background=selection.background.to_css(),
            foreground=selection.foreground.to_css()
        )
        return selection
