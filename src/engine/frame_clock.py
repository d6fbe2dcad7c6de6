"""
FrameClock — fixed-rate tick source for animations.

Architecture:
  - One asyncio task ticks every registered listener at the target FPS
  - Listeners receive the clock time, so every consumer in one frame sees
    the same `now`
  - Listener failures are logged and never stop the loop
  - Supports pause/step/FPS control for debugging
"""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CLOCK)

TickListener = Callable[[float], object]

MIN_FPS = 1
MAX_FPS = 240


class FrameClock:
    """
    Frame clock driving StaggerAnimator.tick

    Example:
        clock = FrameClock(fps=60)
        clock.add_tick_listener(animator.tick)
        await clock.start()
        ...
        await clock.stop()
    """

    def __init__(self, fps: int = 60, clock: Callable[[], float] = time.monotonic):
        """
        Initialize FrameClock.

        Args:
            fps: Target tick frequency (1-240, default 60)
            clock: Time source shared with the animator
        """
        self.fps = max(MIN_FPS, min(fps, MAX_FPS))
        self.clock = clock

        self._listeners: List[TickListener] = []

        # Runtime state
        self.running = False
        self.paused = False
        self.step_requested = False
        self.tick_task: Optional[asyncio.Task] = None

        # Metrics
        self.ticks = 0
        self.listener_errors = 0
        self.tick_times: Deque[float] = deque(maxlen=300)

        log.debug("FrameClock initialized", fps=self.fps)

    # === Listener registration ===

    def add_tick_listener(self, listener: TickListener) -> None:
        if listener in self._listeners:
            log.warn("Tick listener already registered")
            return
        self._listeners.append(listener)

    def remove_tick_listener(self, listener: TickListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # === Control API ===

    def pause(self) -> None: self.paused = True

    def resume(self) -> None: self.paused = False

    def step_frame(self) -> None: self.step_requested = True

    # === Lifecycle ===

    async def start(self) -> None:
        """Start the tick loop."""
        if self.running:
            log.warn("FrameClock already running")
            return

        self.running = True
        self.tick_task = asyncio.create_task(self._tick_loop())
        log.info(f"FrameClock started @ {self.fps} FPS")

    async def stop(self) -> None:
        """Stop the tick loop."""
        if not self.running:
            return
        self.running = False
        if self.tick_task:
            self.tick_task.cancel()
            try:
                await self.tick_task
            except asyncio.CancelledError:
                pass
            self.tick_task = None

        log.info("FrameClock stopped", ticks=self.ticks, listener_errors=self.listener_errors)

    # === Ticking ===

    def tick(self, now: Optional[float] = None) -> float:
        """Deliver one frame to every listener"""
        now = self.clock() if now is None else now
        for listener in list(self._listeners):
            try:
                listener(now)
            except Exception as e:
                self.listener_errors += 1
                log.error(
                    f"Tick listener failed: {getattr(listener, '__name__', repr(listener))}",
                    exception=repr(e)
                )
        self.ticks += 1
        self.tick_times.append(time.perf_counter())
        return now

    async def _tick_loop(self) -> None:
        """Main loop @ target FPS."""
        while self.running:
            if self.paused and not self.step_requested:
                await asyncio.sleep(0.01)
                continue

            self.tick()
            self.step_requested = False

            await asyncio.sleep(1.0 / self.fps)

    # === Metrics ===

    def get_actual_fps(self) -> float:
        """Get measured FPS over recent ticks."""
        if len(self.tick_times) < 2:
            return 0.0
        duration = self.tick_times[-1] - self.tick_times[0]
        if duration <= 0:
            return 0.0
        return (len(self.tick_times) - 1) / duration

    def get_metrics(self) -> Dict:
        return {
            "fps_target": self.fps,
            "fps_actual": self.get_actual_fps(),
            "ticks": self.ticks,
            "listener_errors": self.listener_errors,
            "listeners": len(self._listeners),
        }
