"""
RevealSectionController - owns the "About me." section

Registers the heading letters with the animator, starts a staggered reveal
each time the section scrolls into view, and keeps the inverted selection
stylesheet in sync with the theme.
"""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from typing import Deque, Dict, Iterator, List, Optional

from engine.stagger_animator import StaggerAnimator
from engine.visibility_trigger import VisibilityTrigger
from models.animation import AnimationRun
from models.enums import TargetPhase
from models.events import BecameVisibleEvent, EventType, ThemeChangedEvent
from models.geometry import Rect
from models.region import ObservedRegion
from models.target import TargetUpdate, VisualState
from services.event_bus import EventBus
from services.service_container import ServiceContainer
from services.theme_service import ThemeService
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SECTION)

RUN_HISTORY = 16


class RevealSectionController:
    """
    Section view controller.

    Responsibilities:
    - split the heading into letter targets
    - observe the section region and trigger the reveal
    - track per-letter visual state from the animator stream
    - keep selection_css current on theme changes

    Does NOT:
    - measure geometry (host pushes ratios or rects)
    - drive the clock (FrameClock ticks the animator)
    - cancel runs on unmount (in-flight runs finish)
    """

    def __init__(
        self,
        services: ServiceContainer,
        heading: Optional[str] = None,
        region: Optional[ObservedRegion] = None,
    ):
        self.trigger: VisibilityTrigger = services.visibility_trigger
        self.animator: StaggerAnimator = services.animator
        self.theme_service: ThemeService = services.theme_service
        self.event_bus: EventBus = services.event_bus

        self.heading = heading if heading is not None else services.config_manager.heading
        self.region = region or services.config_manager.region

        self.letter_states: Dict[int, VisualState] = {}
        self.letter_phases: Dict[int, TargetPhase] = {}
        self.runs: Deque[AnimationRun] = deque(maxlen=RUN_HISTORY)
        self.selection_css = self.theme_service.selection_css()
        self.is_mounted = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def mount(self) -> None:
        if self.is_mounted:
            log.warn("Section already mounted", region=self.region.region_id)
            return

        targets = self.animator.register(list(self.heading))
        for target in targets:
            self.letter_states[target.index] = target.state
            self.letter_phases[target.index] = target.phase

        self.animator.add_listener(self._on_updates)
        self.event_bus.subscribe(EventType.THEME_CHANGED, self._on_theme_changed)
        self.trigger.observe(self.region, listener=self._on_visible)
        self.selection_css = self.theme_service.selection_css()
        self.is_mounted = True

        log.info("Section mounted", region=self.region.region_id, letters=len(targets))

    def unmount(self) -> None:
        """
        Release observation and subscriptions. Safe to call repeatedly.

        A reveal still in flight keeps playing; the animator listener is
        dropped once no run is active.
        """
        if not self.is_mounted:
            return

        self.trigger.unobserve(self.region)
        self.event_bus.unsubscribe(EventType.THEME_CHANGED, self._on_theme_changed)
        self.is_mounted = False
        self._detach_if_idle()

        log.info("Section unmounted", region=self.region.region_id, runs=len(self.runs))

    @contextmanager
    def mounted(self) -> Iterator["RevealSectionController"]:
        self.mount()
        try:
            yield self
        finally:
            self.unmount()

    # ------------------------------------------------------------------
    # Host geometry
    # ------------------------------------------------------------------

    def update_ratio(self, ratio: float) -> Optional[BecameVisibleEvent]:
        return self.trigger.update_ratio(self.region, ratio)

    def update_geometry(self, bounds: Rect, viewport: Rect) -> Optional[BecameVisibleEvent]:
        return self.trigger.update_geometry(self.region, bounds, viewport)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------

    def _on_visible(self, event: BecameVisibleEvent) -> None:
        run = self.animator.run()
        self.runs.append(run)
        log.debug("Reveal started", run_id=run.run_id, crossing=event.crossing)

    def _on_updates(self, updates: List[TargetUpdate]) -> None:
        for update in updates:
            self.letter_states[update.index] = update.state
            self.letter_phases[update.index] = update.phase
        if not self.is_mounted:
            self._detach_if_idle()

    def _detach_if_idle(self) -> None:
        if not any(run.is_active for run in self.runs):
            self.animator.remove_listener(self._on_updates)

    def _on_theme_changed(self, event: ThemeChangedEvent) -> None:
        self.selection_css = event.selection.to_css_rule(self.theme_service.class_name)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def letters(self) -> List[str]:
        return list(self.heading)

    def is_revealed(self) -> bool:
        """Every letter settled at its final state"""
        return bool(self.letter_phases) and all(
            phase == TargetPhase.SETTLED for phase in self.letter_phases.values()
        )
