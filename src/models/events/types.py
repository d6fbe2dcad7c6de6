from enum import Enum, auto


class EventType(Enum):
    # Visibility
    BECAME_VISIBLE = auto()
    OBSERVATION_RELEASED = auto()

    # Animation
    ANIMATION_RUN_STARTED = auto()
    ANIMATION_RUN_COMPLETED = auto()
    ANIMATION_RUN_SUPERSEDED = auto()
    ANIMATION_RUN_CANCELLED = auto()

    # Theme
    THEME_CHANGED = auto()
