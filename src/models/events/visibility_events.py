from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class BecameVisibleEvent(Event):
    """Region ratio crossed from below to at/above its threshold"""
    region_id: str
    ratio: float
    threshold: float
    crossing: int

    def __init__(self, region_id: str, ratio: float, threshold: float, crossing: int):
        super().__init__(
            type=EventType.BECAME_VISIBLE,
            source=EventSource.VISIBILITY_TRIGGER,
        )
        self.region_id = region_id
        self.ratio = ratio
        self.threshold = threshold
        self.crossing = crossing


@dataclass(init=False)
class ObservationReleasedEvent(Event):
    region_id: str
    crossings: int

    def __init__(self, region_id: str, crossings: int):
        super().__init__(
            type=EventType.OBSERVATION_RELEASED,
            source=EventSource.VISIBILITY_TRIGGER,
        )
        self.region_id = region_id
        self.crossings = crossings
