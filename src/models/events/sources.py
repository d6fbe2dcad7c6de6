from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers for application events"""
    VISIBILITY_TRIGGER = auto()  # Region observation
    STAGGER_ANIMATOR = auto()    # Animation runs
    THEME_SERVICE = auto()       # Theme palette updates
