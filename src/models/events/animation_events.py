from dataclasses import dataclass

from models.animation import AnimationRun
from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class AnimationRunEvent(Event):
    """Lifecycle change of one AnimationRun"""
    run: AnimationRun

    def __init__(self, type: EventType, run: AnimationRun):
        super().__init__(type=type, source=EventSource.STAGGER_ANIMATOR)
        self.run = run

    @property
    def run_id(self) -> int:
        return self.run.run_id


class AnimationRunStartedEvent(AnimationRunEvent):
    def __init__(self, run: AnimationRun):
        super().__init__(EventType.ANIMATION_RUN_STARTED, run)


class AnimationRunCompletedEvent(AnimationRunEvent):
    def __init__(self, run: AnimationRun):
        super().__init__(EventType.ANIMATION_RUN_COMPLETED, run)


class AnimationRunSupersededEvent(AnimationRunEvent):
    def __init__(self, run: AnimationRun):
        super().__init__(EventType.ANIMATION_RUN_SUPERSEDED, run)


class AnimationRunCancelledEvent(AnimationRunEvent):
    def __init__(self, run: AnimationRun):
        super().__init__(EventType.ANIMATION_RUN_CANCELLED, run)
