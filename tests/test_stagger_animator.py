"""
Tests for StaggerAnimator: stagger timing, settlement, last-writer-wins,
cancellation and lifecycle events.
"""

import math

import pytest

from engine.stagger_animator import StaggerAnimator
from models.animation import StaggerOptions
from models.enums import RestartMode, RunStatus, TargetPhase
from models.errors import InvalidStaggerConfig, TargetOwnershipError
from models.events import EventType
from models.target import FINAL_STATE, INITIAL_STATE, VisualState

HEADING = "About me."


@pytest.fixture
def animator(clock):
    animator = StaggerAnimator(StaggerOptions(), clock=clock)
    animator.register(list(HEADING))
    return animator


class TestOptions:

    def test_defaults(self):
        options = StaggerOptions()

        assert options.stagger_interval == 0.1
        assert options.duration == 1.5
        assert options.ease_label == "elastic.out(1, 0.3)"
        assert options.from_state == VisualState(opacity=0.0, offset_y=50.0)
        assert options.to_state == VisualState(opacity=1.0, offset_y=0.0)
        assert options.restart_from == RestartMode.INITIAL

    def test_total_time(self):
        options = StaggerOptions()

        assert options.total_time(9) == pytest.approx(2.3)
        assert options.total_time(1) == pytest.approx(1.5)
        assert options.total_time(0) == 0.0

    @pytest.mark.parametrize("kwargs", [
        {"stagger_interval": -0.1},
        {"duration": -1},
        {"duration": math.nan},
        {"stagger_interval": math.inf},
        {"duration": "fast"},
        {"stagger_interval": True},
        {"ease": "wobble.out"},
        {"ease": 7},
        {"restart_from": "initial"},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(InvalidStaggerConfig):
            StaggerOptions(**kwargs)


class TestTiming:

    def test_delays_follow_index(self, animator):
        run = animator.run(now=0.0)

        assert run.target_indices == list(range(len(HEADING)))
        for target in animator.targets:
            assert target.start_at == pytest.approx(target.index * 0.1)
            assert target.end_at == pytest.approx(target.index * 0.1 + 1.5)
        assert run.completes_at == pytest.approx(2.3)

    def test_first_target_starts_immediately(self, animator):
        animator.run(now=0.0)

        assert animator.get_target(0).phase == TargetPhase.ANIMATING
        assert animator.get_target(1).phase == TargetPhase.SCHEDULED
        assert animator.get_target(1).state == INITIAL_STATE

    def test_targets_start_in_order(self, animator):
        animator.run(now=0.0)
        animator.tick(0.15)

        phases = [t.phase for t in animator.targets]
        assert phases[:2] == [TargetPhase.ANIMATING, TargetPhase.ANIMATING]
        assert set(phases[2:]) == {TargetPhase.SCHEDULED}

    def test_settles_at_final_state(self, animator):
        run = animator.run(now=0.0)

        animator.tick(1.5)
        assert animator.get_target(0).phase == TargetPhase.SETTLED
        assert animator.get_target(0).state == FINAL_STATE
        assert animator.get_target(1).phase == TargetPhase.ANIMATING

        animator.tick(run.completes_at)
        assert all(t.phase == TargetPhase.SETTLED for t in animator.targets)
        assert all(t.state == FINAL_STATE for t in animator.targets)
        assert run.status == RunStatus.COMPLETED
        assert run.completed_at == pytest.approx(2.3)
        assert not animator.is_animating

    def test_late_tick_settles_everything(self, animator):
        run = animator.run(now=0.0)

        animator.tick(100.0)

        assert run.status == RunStatus.COMPLETED
        assert run.completed_at == pytest.approx(run.completes_at)

    def test_clock_is_used_without_explicit_now(self, animator, clock):
        clock.now = 10.0
        run = animator.run()

        clock.advance(5.0)
        animator.tick()

        assert run.started_at == 10.0
        assert run.status == RunStatus.COMPLETED

    def test_emitted_opacity_is_clamped(self, animator):
        animator.run(now=0.0)

        # Elastic overshoot at 10% progress of the first letter
        updates = {u.index: u for u in animator.tick(0.15)}

        assert updates[0].state.opacity == 1.0
        assert updates[0].state.offset_y == pytest.approx(-12.5, abs=0.05)
        assert animator.get_target(0).state.opacity > 1.0


class TestEdgeCases:

    def test_empty_run_completes_immediately(self, clock):
        animator = StaggerAnimator(clock=clock)

        run = animator.run(now=3.0)

        assert run.status == RunStatus.COMPLETED
        assert run.completed_at == 3.0
        assert not animator.is_animating

    def test_zero_duration_snaps(self, clock):
        animator = StaggerAnimator(StaggerOptions(duration=0), clock=clock)
        animator.register("abc")

        run = animator.run(now=0.0)
        assert animator.get_target(0).phase == TargetPhase.SETTLED

        animator.tick(0.5)
        assert run.status == RunStatus.COMPLETED
        assert all(t.state == FINAL_STATE for t in animator.targets)

    def test_zero_interval_starts_together(self, clock):
        animator = StaggerAnimator(StaggerOptions(stagger_interval=0), clock=clock)
        animator.register("abc")

        animator.run(now=0.0)

        assert all(t.phase == TargetPhase.ANIMATING for t in animator.targets)

    def test_subset_is_ordered_by_index(self, animator):
        targets = animator.targets
        run = animator.run([targets[4], targets[2]], now=0.0)

        assert run.target_indices == [2, 4]
        assert targets[2].start_at == 0.0
        assert targets[4].start_at == pytest.approx(0.1)
        assert targets[0].phase == TargetPhase.IDLE

    def test_foreign_target_rejected(self, animator, clock):
        other = StaggerAnimator(clock=clock)
        foreign = other.register("xyz")

        with pytest.raises(TargetOwnershipError):
            animator.run(foreign)
        assert not animator.is_animating


class TestOverlappingRuns:

    def test_restart_supersedes_previous_run(self, animator):
        first = animator.run(now=0.0)
        animator.tick(0.5)

        second = animator.run(now=0.5)

        assert first.status == RunStatus.SUPERSEDED
        assert second.status == RunStatus.RUNNING
        assert all(t.run_id == second.run_id for t in animator.targets)
        # Restart jumps back to the initial state
        assert animator.get_target(5).state == INITIAL_STATE

        animator.tick(second.completes_at)
        assert second.status == RunStatus.COMPLETED
        assert all(t.state == FINAL_STATE for t in animator.targets)

    def test_partial_overlap_keeps_older_run(self, animator):
        targets = animator.targets
        first = animator.run(now=0.0)
        animator.tick(1.55)

        second = animator.run([targets[0], targets[1]], now=1.55)

        assert first.status == RunStatus.RUNNING
        assert 1 not in first.pending

        animator.tick(10.0)
        assert first.status == RunStatus.COMPLETED
        assert first.settled == {0, 2, 3, 4, 5, 6, 7, 8}
        assert second.status == RunStatus.COMPLETED
        assert second.settled == {0, 1}

    def test_restart_from_current_state(self, clock):
        animator = StaggerAnimator(StaggerOptions(restart_from=RestartMode.CURRENT), clock=clock)
        animator.register("ab")
        animator.run(now=0.0)
        animator.tick(0.5)
        midway = animator.get_target(1).state

        animator.run(now=0.5)

        assert midway != INITIAL_STATE
        assert animator.get_target(1).from_state == midway
        assert animator.get_target(1).state == midway


class TestCancel:

    def test_cancel_freezes_targets(self, animator):
        run = animator.run(now=0.0)
        animator.tick(0.5)
        frozen = animator.get_target(0).state

        animator.cancel()

        assert run.status == RunStatus.CANCELLED
        assert not animator.is_animating
        assert all(t.phase in (TargetPhase.IDLE, TargetPhase.SETTLED) for t in animator.targets)
        assert animator.get_target(0).state == frozen

        animator.tick(10.0)
        assert animator.get_target(0).state == frozen

    def test_register_cancels_running(self, animator):
        run = animator.run(now=0.0)

        animator.register("new")

        assert run.status == RunStatus.CANCELLED
        assert len(animator.targets) == 3


class TestNotifications:

    def test_listener_receives_updates(self, animator):
        batches = []
        animator.add_listener(batches.append)

        animator.run(now=0.0)
        animator.tick(0.35)

        assert [u.index for u in batches[0]] == list(range(len(HEADING)))
        assert [u.index for u in batches[1]] == [0, 1, 2, 3]

    def test_failing_listener_does_not_stop_run(self, animator):
        def broken(updates):
            raise RuntimeError("render crash")

        animator.add_listener(broken)
        run = animator.run(now=0.0)
        animator.tick(5.0)

        assert run.status == RunStatus.COMPLETED

    def test_lifecycle_events(self, clock, event_bus):
        seen = []
        for event_type in (
            EventType.ANIMATION_RUN_STARTED,
            EventType.ANIMATION_RUN_COMPLETED,
            EventType.ANIMATION_RUN_SUPERSEDED,
            EventType.ANIMATION_RUN_CANCELLED,
        ):
            event_bus.subscribe(event_type, lambda e: seen.append((e.type, e.run_id)))

        animator = StaggerAnimator(clock=clock, event_bus=event_bus)
        animator.register(HEADING)
        first = animator.run(now=0.0)
        second = animator.run(now=0.2)
        animator.tick(10.0)
        third = animator.run(now=11.0)
        animator.cancel(third)

        assert seen == [
            (EventType.ANIMATION_RUN_STARTED, first.run_id),
            (EventType.ANIMATION_RUN_SUPERSEDED, first.run_id),
            (EventType.ANIMATION_RUN_STARTED, second.run_id),
            (EventType.ANIMATION_RUN_COMPLETED, second.run_id),
            (EventType.ANIMATION_RUN_STARTED, third.run_id),
            (EventType.ANIMATION_RUN_CANCELLED, third.run_id),
        ]
