from dataclasses import dataclass

from models.color import SelectionColors, ThemePalette
from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class ThemeChangedEvent(Event):
    """New palette published together with its derived selection colors"""
    palette: ThemePalette
    selection: SelectionColors

    def __init__(self, palette: ThemePalette, selection: SelectionColors):
        super().__init__(
            type=EventType.THEME_CHANGED,
            source=EventSource.THEME_SERVICE,
        )
        self.palette = palette
        self.selection = selection
