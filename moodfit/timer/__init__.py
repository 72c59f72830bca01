# -*- coding: utf-8 -*-
"""
计时模块

Pull-driven workout countdown timer and its multi-cycle session wrapper.
"""

from .engine import TimerListener, TimerSnapshot, TimerState, WorkoutTimer, format_seconds
from .session import TimerResult, TimerSession

__all__ = [
    'TimerListener',
    'TimerSnapshot',
    'TimerState',
    'WorkoutTimer',
    'format_seconds',
    'TimerResult',
    'TimerSession',
]
