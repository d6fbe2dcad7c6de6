"""
Theme Service

Holds the live (primary, background) color pair and the selection colors
derived from it. Both are stored as one snapshot and replaced in a single
assignment, so readers never observe a palette next to stale selection
colors.
"""

from dataclasses import dataclass
from typing import Any, Optional

from models.color import SelectionColors, ThemePalette
from models.events import ThemeChangedEvent
from services.color_transformer import (
    ColorTransformer,
    SELECTION_BACKGROUND_OPACITY,
    SELECTION_FOREGROUND_OPACITY,
)
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.THEME)

DEFAULT_SELECTION_CLASS = "inverted-selection"


@dataclass(frozen=True)
class ThemeSnapshot:
    palette: ThemePalette
    selection: SelectionColors


class ThemeService:
    """
    Theme palette holder and selection color deriver

    Example:
        theme = ThemeService(transformer, event_bus, palette=ThemePalette("black", "white"))
        theme.set_palette("#1e90ff", "white")
        theme.selection_css()
        # .inverted-selection::selection {
        #   background: rgba(30, 144, 255, 0.7) !important;
        #   color: rgba(255, 255, 255, 1) !important;
        # }
    """

    def __init__(
        self,
        transformer: ColorTransformer,
        event_bus: Optional[EventBus] = None,
        palette: Optional[ThemePalette] = None,
        background_opacity: float = SELECTION_BACKGROUND_OPACITY,
        foreground_opacity: float = SELECTION_FOREGROUND_OPACITY,
        class_name: str = DEFAULT_SELECTION_CLASS,
    ):
        self.transformer = transformer
        self.event_bus = event_bus
        self.background_opacity = background_opacity
        self.foreground_opacity = foreground_opacity
        self.class_name = class_name

        palette = palette or ThemePalette(primary="black", background="white")
        self._snapshot = ThemeSnapshot(palette, self.derive_selection(palette))

    @property
    def palette(self) -> ThemePalette:
        return self._snapshot.palette

    @property
    def selection(self) -> SelectionColors:
        return self._snapshot.selection

    def snapshot(self) -> ThemeSnapshot:
        return self._snapshot

    def derive_selection(self, palette: ThemePalette) -> SelectionColors:
        """
        Raises:
            InvalidColorSpec / InvalidOpacity: From the transformer
        """
        return self.transformer.selection_colors(
            palette.primary,
            palette.background,
            self.background_opacity,
            self.foreground_opacity,
        )

    def set_palette(self, primary: Any, background: Any) -> SelectionColors:
        """
        Publish a new theme pair

        The selection colors are computed before anything is replaced; an
        invalid color raises and leaves the current snapshot untouched.

        Returns:
            The new selection colors
        """
        palette = ThemePalette(primary=primary, background=background)
        if palette == self._snapshot.palette:
            return self._snapshot.selection

        snapshot = ThemeSnapshot(palette, self.derive_selection(palette))
        self._snapshot = snapshot

        log.info(
            "Theme changed",
            primary=primary,
            background=background,
            selection=snapshot.selection.background.to_css()
        )
        if self.event_bus:
            self.event_bus.publish_sync(ThemeChangedEvent(snapshot.palette, snapshot.selection))
        return snapshot.selection

    def selection_css(self) -> str:
        """Stylesheet rule for the inverted selection class"""
        return self._snapshot.selection.to_css_rule(self.class_name)
