"""
Animatable target model

One target is one discrete element (a letter) driven by a StaggerAnimator.
The target owns its per-phase state machine:

    IDLE → SCHEDULED → ANIMATING → SETTLED
              ↑____________|__________|   (new run)
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from models.easing import EaseFunction, ease_linear
from models.enums import TargetPhase


@dataclass(frozen=True)
class VisualState:
    """Rendered properties of a target"""
    opacity: float
    offset_y: float

    def lerp(self, other: "VisualState", t: float) -> "VisualState":
        """Interpolate every channel with the same factor"""
        return VisualState(
            opacity=self.opacity + (other.opacity - self.opacity) * t,
            offset_y=self.offset_y + (other.offset_y - self.offset_y) * t,
        )

    def clamped(self) -> "VisualState":
        """Opacity limited to [0, 1] for rendering"""
        return VisualState(opacity=min(1.0, max(0.0, self.opacity)), offset_y=self.offset_y)


INITIAL_STATE = VisualState(opacity=0.0, offset_y=50.0)
FINAL_STATE = VisualState(opacity=1.0, offset_y=0.0)


@dataclass(frozen=True)
class TargetUpdate:
    """One element of the render stream"""
    index: int
    handle: Any
    state: VisualState
    phase: TargetPhase
    run_id: Optional[int]


@dataclass(eq=False)
class AnimatableTarget:
    """
    Single animated element

    index: Ordinal position, stable for the target's lifetime
    handle: Host element (opaque to the core)
    owner: Animator that registered the target
    """
    index: int
    handle: Any
    owner: Any = None
    state: VisualState = INITIAL_STATE
    phase: TargetPhase = TargetPhase.IDLE

    # Schedule of the current run
    run_id: Optional[int] = None
    start_at: float = 0.0
    end_at: float = 0.0
    from_state: VisualState = INITIAL_STATE
    to_state: VisualState = FINAL_STATE
    ease: EaseFunction = field(default=ease_linear, repr=False)
    settled_at: Optional[float] = None

    @property
    def in_flight(self) -> bool:
        return self.phase in (TargetPhase.SCHEDULED, TargetPhase.ANIMATING)

    def schedule(
        self,
        run_id: int,
        start_at: float,
        duration: float,
        ease: EaseFunction,
        from_state: VisualState,
        to_state: VisualState,
    ) -> None:
        """Accept a new schedule, discarding any in-flight interpolation"""
        self.run_id = run_id
        self.start_at = start_at
        self.end_at = start_at + duration
        self.ease = ease
        self.from_state = from_state
        self.to_state = to_state
        self.settled_at = None
        self.phase = TargetPhase.SCHEDULED

    def advance(self, now: float) -> bool:
        """
        Move the state machine to `now`

        Returns:
            True if the visual state or phase changed
        """
        if self.phase == TargetPhase.SCHEDULED:
            if now < self.start_at:
                return False
            self.phase = TargetPhase.ANIMATING

        if self.phase != TargetPhase.ANIMATING:
            return False

        if now >= self.end_at:
            self.state = self.to_state
            self.phase = TargetPhase.SETTLED
            self.settled_at = self.end_at
            return True

        progress = (now - self.start_at) / (self.end_at - self.start_at)
        self.state = self.from_state.lerp(self.to_state, self.ease(progress))
        return True

    def freeze(self) -> None:
        """Stop where it is (explicit cancellation)"""
        self.phase = TargetPhase.IDLE
        self.run_id = None

    def to_update(self) -> TargetUpdate:
        return TargetUpdate(
            index=self.index,
            handle=self.handle,
            state=self.state.clamped(),
            phase=self.phase,
            run_id=self.run_id,
        )
