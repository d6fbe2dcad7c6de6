"""
Stagger Animator

Drives an ordered list of targets from an initial to a final visual state.
Target i starts at t0 + i·interval and runs for `duration`; every target of
a run shares the same ease. Runs are advanced by tick(now), usually from a
FrameClock, so all target timers are live at once instead of a blocking loop.

A new run on a target that is still in flight replaces its schedule
(last-writer-wins). The older run becomes SUPERSEDED once none of its
targets are left.
"""

import itertools
import time
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

from models.animation import AnimationRun, StaggerOptions
from models.enums import RestartMode, RunStatus, TargetPhase
from models.errors import TargetOwnershipError
from models.events import (
    AnimationRunCancelledEvent,
    AnimationRunCompletedEvent,
    AnimationRunStartedEvent,
    AnimationRunSupersededEvent,
)
from models.target import AnimatableTarget, TargetUpdate
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)

UpdateListener = Callable[[List[TargetUpdate]], None]


class StaggerAnimator:
    """
    Staggered reveal sequencer

    Example:
        animator = StaggerAnimator(StaggerOptions())
        targets = animator.register(list("About me."))

        run = animator.run(now=0.0)
        animator.tick(0.5)
        animator.tick(run.completes_at)   # every letter settled
    """

    def __init__(
        self,
        options: Optional[StaggerOptions] = None,
        clock: Callable[[], float] = time.monotonic,
        event_bus: Optional[EventBus] = None,
    ):
        self.options = options or StaggerOptions()
        self.clock = clock
        self.event_bus = event_bus

        self.targets: List[AnimatableTarget] = []
        self.runs: Dict[int, AnimationRun] = {}
        self._listeners: List[UpdateListener] = []
        self._run_ids = itertools.count(1)

    # ------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------

    def register(self, handles: Iterable[Any]) -> List[AnimatableTarget]:
        """
        Register the ordered targets this animator owns

        Replaces any previous registration; in-flight runs on old targets
        are cancelled.
        """
        if self.runs:
            self.cancel()

        for target in self.targets:
            target.owner = None

        self.targets = [
            AnimatableTarget(index=i, handle=handle, owner=self)
            for i, handle in enumerate(handles)
        ]
        log.debug("Targets registered", count=len(self.targets))
        return self.targets

    def add_listener(self, listener: UpdateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: UpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ------------------------------------------------------------
    # Runs
    # ------------------------------------------------------------

    def run(
        self,
        targets: Optional[Sequence[AnimatableTarget]] = None,
        options: Optional[StaggerOptions] = None,
        now: Optional[float] = None,
    ) -> AnimationRun:
        """
        Start a staggered run

        Args:
            targets: Targets to animate (default: all registered), ordered by index
            options: Per-run options (default: animator options)
            now: Run start time (default: clock())

        Returns:
            The AnimationRun (already COMPLETED for an empty target list)

        Raises:
            TargetOwnershipError: A target belongs to another animator
        """
        opts = options or self.options
        t0 = self.clock() if now is None else now
        chosen = list(self.targets if targets is None else targets)

        for target in chosen:
            if target.owner is not self:
                raise TargetOwnershipError(target.index)
        chosen.sort(key=lambda t: t.index)

        run = AnimationRun(
            run_id=next(self._run_ids),
            started_at=t0,
            stagger_interval=opts.stagger_interval,
            duration=opts.duration,
            ease=opts.ease_label,
        )

        if not chosen:
            run.status = RunStatus.COMPLETED
            run.completed_at = t0
            log.debug("Empty run completed immediately", run_id=run.run_id)
            return run

        updates: List[TargetUpdate] = []
        superseded: List[AnimationRun] = []

        for position, target in enumerate(chosen):
            previous = self.runs.get(target.run_id) if target.in_flight else None
            if previous is not None:
                previous.release(target.index)
                if not previous.pending:
                    superseded.append(previous)

            from_state = opts.from_state if opts.restart_from == RestartMode.INITIAL else target.state
            delay = opts.delay_for(position)
            target.schedule(
                run_id=run.run_id,
                start_at=t0 + delay,
                duration=opts.duration,
                ease=opts.ease_function,
                from_state=from_state,
                to_state=opts.to_state,
            )
            target.state = from_state

            run.target_indices.append(target.index)
            run.delays[target.index] = delay
            run.pending.add(target.index)
            updates.append(target.to_update())

        self.runs[run.run_id] = run

        for old in superseded:
            self._finish(old, RunStatus.SUPERSEDED)

        log.info(
            "Run started",
            run_id=run.run_id,
            targets=len(chosen),
            ease=run.ease,
            completes_in=f"{run.completes_at - t0:.2f}s"
        )
        self._publish(AnimationRunStartedEvent(run))

        # Targets without delay begin immediately
        updates = self._merge(updates, self._advance(t0))
        self._notify(updates)
        return run

    def tick(self, now: Optional[float] = None) -> List[TargetUpdate]:
        """
        Advance every in-flight target to `now`

        Returns:
            Updates for targets whose state or phase changed
        """
        now = self.clock() if now is None else now
        updates = self._advance(now)
        self._notify(updates)
        return updates

    def cancel(self, run: Optional[AnimationRun] = None) -> None:
        """
        Cancel one run (or all runs); its targets freeze in place as IDLE
        """
        victims = [run] if run is not None else list(self.runs.values())
        for victim in victims:
            if victim.run_id not in self.runs:
                continue
            for target in self.targets:
                if target.run_id == victim.run_id and target.in_flight:
                    target.freeze()
            self._finish(victim, RunStatus.CANCELLED)

    @property
    def is_animating(self) -> bool:
        return bool(self.runs)

    def get_target(self, index: int) -> AnimatableTarget:
        return self.targets[index]

    # ------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------

    def _advance(self, now: float) -> List[TargetUpdate]:
        updates: List[TargetUpdate] = []
        completed: List[AnimationRun] = []

        for target in self.targets:
            if not target.in_flight:
                continue
            if not target.advance(now):
                continue
            updates.append(target.to_update())

            if target.phase == TargetPhase.SETTLED:
                run = self.runs.get(target.run_id)
                if run is None:
                    continue
                run.mark_settled(target.index, target.settled_at)
                if not run.pending and run not in completed:
                    completed.append(run)

        for run in completed:
            self._finish(run, RunStatus.COMPLETED)
        return updates

    def _finish(self, run: AnimationRun, status: RunStatus) -> None:
        self.runs.pop(run.run_id, None)
        run.status = status

        if status == RunStatus.COMPLETED:
            log.info("Run completed", run_id=run.run_id, completed_at=f"{run.completed_at:.3f}")
            self._publish(AnimationRunCompletedEvent(run))
        elif status == RunStatus.SUPERSEDED:
            log.info("Run superseded", run_id=run.run_id, settled=len(run.settled))
            self._publish(AnimationRunSupersededEvent(run))
        elif status == RunStatus.CANCELLED:
            log.info("Run cancelled", run_id=run.run_id, settled=len(run.settled))
            self._publish(AnimationRunCancelledEvent(run))

    @staticmethod
    def _merge(first: List[TargetUpdate], second: List[TargetUpdate]) -> List[TargetUpdate]:
        """Later updates for the same target replace earlier ones"""
        merged = {u.index: u for u in first}
        for update in second:
            merged[update.index] = update
        return [merged[i] for i in sorted(merged)]

    def _notify(self, updates: List[TargetUpdate]) -> None:
        if not updates:
            return
        for listener in list(self._listeners):
            try:
                listener(updates)
            except Exception as e:
                log.error(
                    f"Update listener failed: {getattr(listener, '__name__', repr(listener))}",
                    exception=repr(e)
                )

    def _publish(self, event) -> None:
        if self.event_bus:
            self.event_bus.publish_sync(event)
