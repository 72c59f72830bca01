# -*- coding: utf-8 -*-
"""
进度模块

Workout sessions, the calendar-day streak and aggregate progress.
"""

from .engine import ProgressEngine
from .models import User, UserProgress, UserStats, WorkoutSession

__all__ = [
    'ProgressEngine',
    'User',
    'UserProgress',
    'UserStats',
    'WorkoutSession',
]
