"""
Event system for the reveal section

Visibility, animation lifecycle and theme events routed through EventBus.
"""

from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

from models.events.visibility_events import (
    BecameVisibleEvent,
    ObservationReleasedEvent,
)
from models.events.animation_events import (
    AnimationRunEvent,
    AnimationRunStartedEvent,
    AnimationRunCompletedEvent,
    AnimationRunSupersededEvent,
    AnimationRunCancelledEvent,
)
from models.events.theme_events import ThemeChangedEvent

__all__ = [
    "EventType",
    "Event",
    "EventSource",

    # Visibility
    "BecameVisibleEvent",
    "ObservationReleasedEvent",

    # Animation
    "AnimationRunEvent",
    "AnimationRunStartedEvent",
    "AnimationRunCompletedEvent",
    "AnimationRunSupersededEvent",
    "AnimationRunCancelledEvent",

    # Theme
    "ThemeChangedEvent",
]
