# -*- coding: utf-8 -*-
"""Repeated timer cycles for one exercise, as driven by the workout screen."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..catalog.models import Exercise
from ..config import settings
from .engine import Clock, TimerListener, TimerSnapshot, TimerState, WorkoutTimer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimerResult:
    completed_cycles: int
    active_seconds: int

    @property
    def succeeded(self) -> bool:
        return self.completed_cycles > 0

    @property
    def actual_minutes(self) -> int:
        if not self.succeeded:
            return 0
        return max(1, self.active_seconds // 60)


class TimerSession:
    """Counts completed cycles and re-arms the timer after each one."""

    def __init__(
        self,
        duration_seconds: Optional[int] = None,
        *,
        clock: Optional[Clock] = None,
        listener: Optional[TimerListener] = None,
    ) -> None:
        seconds = duration_seconds if duration_seconds is not None else settings.timer_default_sec
        self.timer = WorkoutTimer(seconds, clock=clock, listener=listener)
        self.completed_cycles = 0
        self._active_seconds = 0

    @classmethod
    def for_exercise(cls, exercise: Exercise, **kwargs) -> "TimerSession":
        """One cycle spans the exercise's estimated duration when it has one."""
        minutes = exercise.estimated_duration_minutes
        return cls(minutes * 60 if minutes > 0 else None, **kwargs)

    @property
    def duration_seconds(self) -> int:
        return self.timer.total_seconds

    @property
    def tick_interval_seconds(self) -> float:
        """Suggested cadence for the host's tick loop."""
        return settings.tick_interval_ms / 1000.0

    def select_preset(self, seconds: int) -> bool:
        if seconds not in settings.timer_presets_sec:
            return False
        return self.change_duration(seconds)

    def change_duration(self, seconds: int) -> bool:
        """Only allowed between cycles."""
        if self.timer.state in (TimerState.RUNNING, TimerState.PAUSED):
            return False
        self.timer.set_total_seconds(seconds)
        return True

    def start(self) -> bool:
        return self.timer.start()

    def toggle_pause(self) -> bool:
        if self.timer.is_paused:
            return self.timer.resume()
        self.tick()
        return self.timer.pause()

    def tick(self) -> TimerSnapshot:
        snap = self.timer.tick()
        if snap.finished:
            self.completed_cycles += 1
            self._active_seconds += snap.total_seconds
            logger.info("Timer cycle %d complete (%ss)", self.completed_cycles, snap.total_seconds)
            self.timer.reset()
        return snap

    def finish(self) -> TimerResult:
        """End the session; time spent in an unfinished cycle still counts."""
        if self.timer.is_running and not self.timer.is_paused:
            self.tick()
        partial = self.timer.elapsed_seconds if self.timer.state != TimerState.IDLE else 0
        self.timer.reset()
        return TimerResult(
            completed_cycles=self.completed_cycles,
            active_seconds=self._active_seconds + partial,
        )
