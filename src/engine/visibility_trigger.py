"""
Visibility Trigger

Observes regions against the viewport and emits BecameVisible whenever a
region's visible ratio rises from below its threshold to at/above it.
Geometry is pushed in by the host (update_ratio / update_geometry); the
trigger itself never polls.

Re-scrolling into view re-triggers by default. Pass fire_once=True to
release the observation after the first event.
"""

from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional

from models.events import BecameVisibleEvent, ObservationReleasedEvent
from models.geometry import Rect, visible_ratio
from models.region import ObservedRegion, validate_threshold
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.VISIBILITY)

VisibilityListener = Callable[[BecameVisibleEvent], None]


class Observation:
    """
    Active observation of one region (the signal stream)

    Listeners are called synchronously, in subscription order.
    """

    def __init__(self, region: ObservedRegion, threshold: float, fire_once: bool):
        self.region = region
        self.threshold = threshold
        self.fire_once = fire_once
        self.listeners: List[VisibilityListener] = []
        self.visible = False
        self.last_ratio = 0.0
        self.crossings = 0
        self.active = True

    @property
    def region_id(self) -> str:
        return self.region.region_id

    def subscribe(self, listener: VisibilityListener) -> None:
        if listener not in self.listeners:
            self.listeners.append(listener)

    def unsubscribe(self, listener: VisibilityListener) -> None:
        if listener in self.listeners:
            self.listeners.remove(listener)

    def is_visible(self, ratio: float) -> bool:
        """Threshold 0 means 'any part visible'"""
        if self.threshold == 0.0:
            return ratio > 0.0
        return ratio >= self.threshold

    def __repr__(self):
        return f"Observation({self.region_id}, threshold={self.threshold}, crossings={self.crossings})"


class VisibilityTrigger:
    """
    Region visibility observer

    Example:
        trigger = VisibilityTrigger(event_bus)
        region = ObservedRegion("aboutme", threshold=0.5)

        with trigger.observing(region, listener=lambda e: animator.run()):
            trigger.update_ratio(region, 0.3)   # nothing
            trigger.update_ratio(region, 0.6)   # BecameVisible
            trigger.update_ratio(region, 0.8)   # nothing (still visible)
    """

    def __init__(self, event_bus: Optional[EventBus] = None, fire_once: bool = False):
        self.event_bus = event_bus
        self.fire_once = fire_once
        self._observations: Dict[str, Observation] = {}

    # ------------------------------------------------------------
    # Observation lifecycle
    # ------------------------------------------------------------

    def observe(
        self,
        region: ObservedRegion,
        threshold: Optional[float] = None,
        listener: Optional[VisibilityListener] = None,
        fire_once: Optional[bool] = None,
    ) -> Observation:
        """
        Start observing a region

        Re-observing an observed region returns the same observation. An
        explicit threshold or fire_once is applied to it; visibility is then
        re-evaluated from the last ratio without emitting an event.

        Args:
            region: Region to observe
            threshold: Overrides region.threshold
            listener: Optional first subscriber
            fire_once: Overrides the trigger-wide fire_once

        Returns:
            The region's observation (existing one if already observed)

        Raises:
            InvalidThreshold: threshold outside [0, 1]
        """
        effective = validate_threshold(region.threshold if threshold is None else threshold)

        observation = self._observations.get(region.region_id)
        if observation is not None:
            if threshold is not None:
                observation.threshold = effective
                observation.visible = observation.is_visible(observation.last_ratio)
            if fire_once is not None:
                observation.fire_once = fire_once
            log.debug(
                "Region already observed",
                region=region.region_id,
                threshold=observation.threshold,
                fire_once=observation.fire_once
            )
        else:
            observation = Observation(
                region,
                effective,
                self.fire_once if fire_once is None else fire_once,
            )
            self._observations[region.region_id] = observation
            log.info("Observing region", region=region.region_id, threshold=effective)

        if listener is not None:
            observation.subscribe(listener)
        return observation

    def unobserve(self, region: ObservedRegion) -> bool:
        """
        Stop observing a region. Safe to call repeatedly or for unknown regions.

        Returns:
            True if an observation was released
        """
        observation = self._observations.pop(region.region_id, None)
        if observation is None:
            return False

        observation.active = False
        observation.listeners.clear()
        log.info("Observation released", region=region.region_id, crossings=observation.crossings)

        if self.event_bus:
            self.event_bus.publish_sync(ObservationReleasedEvent(region.region_id, observation.crossings))
        return True

    def disconnect(self) -> None:
        """Release every observation"""
        for observation in list(self._observations.values()):
            self.unobserve(observation.region)

    @contextmanager
    def observing(
        self,
        region: ObservedRegion,
        threshold: Optional[float] = None,
        listener: Optional[VisibilityListener] = None,
        fire_once: Optional[bool] = None,
    ) -> Iterator[Observation]:
        """Observe for the duration of a with-block; released on every exit path"""
        observation = self.observe(region, threshold, listener, fire_once)
        try:
            yield observation
        finally:
            self.unobserve(region)

    def is_observing(self, region: ObservedRegion) -> bool:
        return region.region_id in self._observations

    def get_observation(self, region: ObservedRegion) -> Optional[Observation]:
        return self._observations.get(region.region_id)

    # ------------------------------------------------------------
    # Geometry input
    # ------------------------------------------------------------

    def update_geometry(self, region: ObservedRegion, bounds: Rect, viewport: Rect) -> Optional[BecameVisibleEvent]:
        """Measure the region against the viewport and process the ratio"""
        return self.update_ratio(region, visible_ratio(bounds, viewport))

    def update_ratio(self, region: ObservedRegion, ratio: float) -> Optional[BecameVisibleEvent]:
        """
        Process a new visible ratio for a region

        Returns:
            The emitted event on an upward crossing, otherwise None
            (also None for regions that are not observed)
        """
        observation = self._observations.get(region.region_id)
        if observation is None:
            return None

        ratio = min(1.0, max(0.0, float(ratio)))
        was_visible = observation.visible
        observation.visible = observation.is_visible(ratio)
        observation.last_ratio = ratio

        if was_visible or not observation.visible:
            return None

        observation.crossings += 1
        event = BecameVisibleEvent(
            region_id=observation.region_id,
            ratio=ratio,
            threshold=observation.threshold,
            crossing=observation.crossings,
        )
        log.info(
            "Region became visible",
            region=observation.region_id,
            ratio=f"{ratio:.2f}",
            crossing=observation.crossings
        )
        self._emit(observation, event)

        if observation.fire_once:
            self.unobserve(observation.region)
        return event

    def _emit(self, observation: Observation, event: BecameVisibleEvent) -> None:
        for listener in list(observation.listeners):
            try:
                listener(event)
            except Exception as e:
                log.error(
                    f"Visibility listener failed: {getattr(listener, '__name__', repr(listener))}",
                    region=observation.region_id,
                    exception=repr(e)
                )

        if self.event_bus:
            self.event_bus.publish_sync(event)
