"""MoodFit backend: mood-based workouts, timer, streaks and progress."""

__version__ = "1.0.0"
