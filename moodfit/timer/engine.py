# -*- coding: utf-8 -*-
"""
Countdown timer engine

Pull-driven: the host calls ``tick()`` at its own cadence and the remaining
time is recomputed from the clock captured at start/resume, so missed or
irregular ticks never cause drift.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    FINISHED = "finished"


class TimerListener:
    """Optional push notifications; override what you need."""

    def on_tick(self, remaining_seconds: int) -> None:
        pass

    def on_finish(self) -> None:
        pass

    def on_start(self) -> None:
        pass

    def on_pause(self) -> None:
        pass

    def on_resume(self) -> None:
        pass


@dataclass(frozen=True)
class TimerSnapshot:
    state: TimerState
    total_seconds: int
    remaining_seconds: int
    progress: float
    formatted_time: str
    finished: bool = False  # True only on the tick that reached zero


def format_seconds(seconds: int) -> str:
    seconds = max(0, int(seconds))
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class WorkoutTimer:
    def __init__(
        self,
        total_seconds: int,
        *,
        clock: Optional[Clock] = None,
        listener: Optional[TimerListener] = None,
    ) -> None:
        self.clock: Clock = clock or time.time
        self.listener = listener
        self._total = max(0, int(total_seconds))
        self._remaining = self._total
        self._running = False
        self._paused = False
        self._finished = False
        self._start_ts = 0.0
        self._pause_ts = 0.0

    # ---- state -------------------------------------------------------------

    @property
    def total_seconds(self) -> int:
        return self._total

    def set_total_seconds(self, seconds: int) -> None:
        self._total = max(0, int(seconds))
        self._remaining = self._total

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def elapsed_seconds(self) -> int:
        return self._total - self._remaining

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_paused(self) -> bool:
        return self._paused

    @property
    def state(self) -> TimerState:
        if self._paused:
            return TimerState.PAUSED
        if self._running:
            return TimerState.RUNNING
        if self._finished:
            return TimerState.FINISHED
        return TimerState.IDLE

    @property
    def progress(self) -> float:
        if self._total <= 0:
            return 0.0
        return (self._total - self._remaining) / self._total

    @property
    def formatted_time(self) -> str:
        return format_seconds(self._remaining)

    def snapshot(self, *, finished: bool = False) -> TimerSnapshot:
        return TimerSnapshot(
            state=self.state,
            total_seconds=self._total,
            remaining_seconds=self._remaining,
            progress=self.progress,
            formatted_time=self.formatted_time,
            finished=finished,
        )

    # ---- transitions -------------------------------------------------------

    def start(self) -> bool:
        if self._running or self._paused:
            return False
        self._running = True
        self._finished = False
        self._remaining = self._total
        self._start_ts = self.clock()
        logger.debug("Timer started (%ss)", self._total)
        if self.listener:
            self.listener.on_start()
        return True

    def pause(self) -> bool:
        if not self._running or self._paused:
            return False
        self._paused = True
        self._pause_ts = self.clock()
        if self.listener:
            self.listener.on_pause()
        return True

    def resume(self) -> bool:
        if not self._paused:
            return False
        self._paused = False
        # Shift the start forward so paused time never counts as elapsed.
        self._start_ts += self.clock() - self._pause_ts
        if self.listener:
            self.listener.on_resume()
        return True

    def reset(self) -> None:
        self._running = False
        self._paused = False
        self._finished = False
        self._remaining = self._total
        self._start_ts = 0.0
        self._pause_ts = 0.0

    def stop(self) -> bool:
        """Finish an active (running or paused) countdown. No-op otherwise."""
        if not self._running and not self._paused:
            return False
        self._finish()
        return True

    def force_finish(self) -> None:
        """Finish unconditionally, notifying the listener even when idle."""
        self._finish()

    def _finish(self) -> None:
        self._running = False
        self._paused = False
        self._finished = True
        logger.debug("Timer finished with %ss remaining", self._remaining)
        if self.listener:
            self.listener.on_finish()

    def tick(self) -> TimerSnapshot:
        if not self._running or self._paused:
            return self.snapshot()

        elapsed = int(max(0.0, self.clock() - self._start_ts))
        # Never move backwards, even if the clock does.
        self._remaining = min(self._remaining, max(0, self._total - elapsed))

        if self.listener:
            self.listener.on_tick(self._remaining)

        if self._remaining <= 0:
            self.stop()
            return self.snapshot(finished=True)
        return self.snapshot()
