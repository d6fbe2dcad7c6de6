"""
Animation domain models

StaggerOptions is the immutable, validated configuration of a staggered
reveal. AnimationRun is the ephemeral record of one execution of it.
"""

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Optional, Set

from models.easing import DEFAULT_EASE, EaseFunction, resolve_ease
from models.enums import RestartMode, RunStatus
from models.errors import InvalidStaggerConfig
from models.target import FINAL_STATE, INITIAL_STATE, VisualState

DEFAULT_STAGGER_INTERVAL = 0.1
DEFAULT_DURATION = 1.5


def _check_seconds(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InvalidStaggerConfig(name, value, "must be a number of seconds")
    if not math.isfinite(value) or value < 0:
        raise InvalidStaggerConfig(name, value, "must be finite and >= 0")
    return float(value)


@dataclass(frozen=True)
class StaggerOptions:
    """
    Staggered reveal configuration

    Attributes:
        stagger_interval: Seconds between successive target starts
        duration: Per-target transition duration in seconds
        ease: Easing name ("elastic.out(1, 0.3)"), EaseSpec or callable
        from_state: Visual state every target starts from
        to_state: Visual state every target settles at
        restart_from: INITIAL jumps re-run targets to from_state,
                      CURRENT tweens them from where they are

    Raises:
        InvalidStaggerConfig: On construction with out-of-range values
    """
    stagger_interval: float = DEFAULT_STAGGER_INTERVAL
    duration: float = DEFAULT_DURATION
    ease: Any = DEFAULT_EASE
    from_state: VisualState = INITIAL_STATE
    to_state: VisualState = FINAL_STATE
    restart_from: RestartMode = RestartMode.INITIAL

    ease_label: str = field(init=False, compare=False)
    ease_function: EaseFunction = field(init=False, compare=False, repr=False)

    def __post_init__(self):
        object.__setattr__(self, "stagger_interval", _check_seconds("stagger_interval", self.stagger_interval))
        object.__setattr__(self, "duration", _check_seconds("duration", self.duration))

        try:
            label, function = resolve_ease(self.ease)
        except ValueError as e:
            raise InvalidStaggerConfig("ease", self.ease, str(e)) from e
        object.__setattr__(self, "ease_label", label)
        object.__setattr__(self, "ease_function", function)

        if not isinstance(self.restart_from, RestartMode):
            raise InvalidStaggerConfig("restart_from", self.restart_from, "must be a RestartMode")

    def delay_for(self, position: int) -> float:
        """Start offset of the target at `position` in the run order"""
        return position * self.stagger_interval

    def total_time(self, count: int) -> float:
        """Closed-form run length: (N-1)·interval + duration (0 for N=0)"""
        if count <= 0:
            return 0.0
        return self.delay_for(count - 1) + self.duration


@dataclass
class AnimationRun:
    """
    One execution of the stagger sequence

    All targets share duration and ease; only the start delay varies.
    """
    run_id: int
    started_at: float
    stagger_interval: float
    duration: float
    ease: str
    target_indices: List[int] = field(default_factory=list)
    delays: Dict[int, float] = field(default_factory=dict)
    status: RunStatus = RunStatus.RUNNING
    completed_at: Optional[float] = None
    pending: Set[int] = field(default_factory=set)
    settled: Set[int] = field(default_factory=set)

    @property
    def completes_at(self) -> float:
        """Scheduled finish of the last target (started_at for empty runs)"""
        if not self.target_indices:
            return self.started_at
        last = self.target_indices[-1]
        return (self.started_at + self.delays[last]) + self.duration

    @property
    def is_active(self) -> bool:
        return self.status == RunStatus.RUNNING

    def release(self, index: int) -> None:
        """A newer run took this target over"""
        self.pending.discard(index)

    def mark_settled(self, index: int, settled_at: float) -> None:
        if index not in self.pending:
            return
        self.pending.discard(index)
        self.settled.add(index)
        if self.completed_at is None or settled_at > self.completed_at:
            self.completed_at = settled_at
