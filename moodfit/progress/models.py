# -*- coding: utf-8 -*-
"""Progress domain models: workout sessions, the user and aggregate progress."""

from __future__ import annotations

import itertools
import logging
import time
from datetime import datetime, timedelta, tzinfo
from typing import Dict, List, Optional, Set

from pydantic import BaseModel, Field, field_validator

from ..catalog.models import DifficultyLevel, Exercise, MoodType, WorkoutCategory
from .streaks import as_utc, is_same_day, local_day, local_time, month_key, utc_now

logger = logging.getLogger(__name__)

_id_counter = itertools.count()


def _millis_id(prefix: str) -> str:
    # Millisecond stamp plus a process-local counter keeps ids unique within a burst.
    return f"{prefix}_{int(time.time() * 1000)}{next(_id_counter) % 1000:03d}"


def _clamp_rating(value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    return max(1, min(5, int(value)))


class WorkoutSession(BaseModel):
    session_id: str = Field(default_factory=lambda: _millis_id("session"))
    user_id: Optional[str] = None
    mood: Optional[MoodType] = None
    exercises: List[Exercise] = Field(default_factory=list)
    start_time: datetime = Field(default_factory=utc_now)
    end_time: Optional[datetime] = None
    duration_minutes: int = 0
    calories_burned: int = 0
    completed: bool = False
    notes: Optional[str] = None
    rating: Optional[int] = None

    @field_validator("rating")
    @classmethod
    def _clamp(cls, value: Optional[int]) -> Optional[int]:
        return _clamp_rating(value)

    @field_validator("start_time", "end_time")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @property
    def is_active(self) -> bool:
        return self.end_time is None and not self.completed

    def exercise_list(self) -> List[Exercise]:
        return list(self.exercises)

    def categories(self) -> Set[WorkoutCategory]:
        return {exercise.category for exercise in self.exercises}

    def add_exercise(self, exercise: Exercise) -> bool:
        if self.completed:
            logger.warning("Ignoring exercise %s for completed session %s", exercise.name, self.session_id)
            return False
        self.exercises = self.exercises + [exercise]
        self.calories_burned += exercise.estimated_calories
        return True

    def end_workout(self, now: Optional[datetime] = None) -> bool:
        """Complete the session once. Later calls leave it untouched."""
        if self.completed:
            return False
        self.end_time = as_utc(now) or utc_now()
        elapsed = (self.end_time - self.start_time).total_seconds()
        self.duration_minutes = max(0, int(elapsed // 60))
        self.completed = True
        return True

    def duration_seconds(self, now: Optional[datetime] = None) -> float:
        end = self.end_time or as_utc(now) or utc_now()
        return max(0.0, (end - self.start_time).total_seconds())

    def set_rating(self, value: int) -> None:
        self.rating = _clamp_rating(value)


class User(BaseModel):
    user_id: str = Field(default_factory=lambda: _millis_id("user"))
    username: Optional[str] = None
    current_streak: int = 0
    best_streak: int = 0
    total_workouts: int = 0
    total_minutes: int = 0
    last_workout_date: Optional[datetime] = None
    sound_enabled: bool = True
    notifications_enabled: bool = True
    preferred_difficulty: DifficultyLevel = DifficultyLevel.BEGINNER
    account_created_date: datetime = Field(default_factory=utc_now)
    is_first_time_user: bool = True
    last_open_date: datetime = Field(default_factory=utc_now)
    total_app_opens: int = 1

    @field_validator("last_workout_date", "account_created_date", "last_open_date")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    def increment_streak(self) -> None:
        self.current_streak += 1
        self.best_streak = max(self.best_streak, self.current_streak)

    def reset_streak(self) -> None:
        self.current_streak = 0

    def add_workout(self, duration_minutes: int, now: datetime) -> None:
        self.total_workouts += 1
        self.total_minutes += max(0, int(duration_minutes))
        self.last_workout_date = as_utc(now)

    def has_worked_out_today(self, now: datetime, tz: Optional[tzinfo] = None) -> bool:
        if self.last_workout_date is None:
            return False
        return is_same_day(self.last_workout_date, now, tz)

    def record_app_open(self, now: datetime) -> None:
        self.total_app_opens += 1
        self.last_open_date = as_utc(now)

    def complete_onboarding(self, username: str) -> None:
        self.username = username
        self.is_first_time_user = False

    def welcome_message(self, now: datetime, tz: Optional[tzinfo] = None) -> str:
        if not (self.username or "").strip():
            return "Welcome back!"
        hour = local_time(now, tz).hour
        if hour < 12:
            greeting = "Good morning"
        elif hour < 17:
            greeting = "Good afternoon"
        else:
            greeting = "Good evening"
        return f"{greeting}, {self.username}!"

    def motivational_message(self) -> str:
        streak = self.current_streak
        if streak == 0:
            return "Ready to start your fitness journey?"
        if streak == 1:
            return "Great start! Keep the momentum going!"
        if streak < 7:
            return "You're building a great habit!"
        if streak < 30:
            return "Amazing streak! You're on fire! 🔥"
        return "Incredible dedication! You're a fitness champion!"

    def days_using_app(self, now: datetime) -> int:
        days = int((as_utc(now) - self.account_created_date).total_seconds() // 86400)
        return max(1, days)


class UserProgress(BaseModel):
    user_id: Optional[str] = None
    current_streak: int = 0
    longest_streak: int = 0
    total_workouts: int = 0
    total_minutes: int = 0
    total_calories: int = 0
    last_workout_date: Optional[datetime] = None
    monthly_minutes: Dict[str, int] = Field(default_factory=dict)
    mood_frequency: Dict[MoodType, int] = Field(default_factory=dict)
    category_preference: Dict[WorkoutCategory, int] = Field(default_factory=dict)
    workout_dates: List[datetime] = Field(default_factory=list)

    @field_validator("last_workout_date")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @field_validator("workout_dates")
    @classmethod
    def _utc_dates(cls, values: List[datetime]) -> List[datetime]:
        return [as_utc(ts) for ts in values]

    def record_workout(self, session: WorkoutSession, tz: Optional[tzinfo] = None) -> None:
        """Fold one completed session into the aggregates. Streaks are set by the engine."""
        finished_at = as_utc(session.end_time or session.start_time)
        self.total_workouts += 1
        self.total_minutes += session.duration_minutes
        self.total_calories += session.calories_burned
        self.last_workout_date = finished_at
        self.workout_dates.append(finished_at)

        month = month_key(finished_at, tz)
        self.monthly_minutes[month] = self.monthly_minutes.get(month, 0) + session.duration_minutes

        if session.mood is not None:
            self.mood_frequency[session.mood] = self.mood_frequency.get(session.mood, 0) + 1
        for category in session.categories():
            self.category_preference[category] = self.category_preference.get(category, 0) + 1

    def sync_streaks(self, user: User) -> None:
        self.current_streak = user.current_streak
        self.longest_streak = user.best_streak

    def workouts_this_week(self, now: datetime) -> int:
        week_start = as_utc(now) - timedelta(days=7)
        return sum(1 for ts in self.workout_dates if ts >= week_start)

    def minutes_this_month(self, now: datetime, tz: Optional[tzinfo] = None) -> int:
        return self.monthly_minutes.get(month_key(now, tz), 0)

    def active_days(self, tz: Optional[tzinfo] = None) -> List[str]:
        return sorted({local_day(ts, tz).isoformat() for ts in self.workout_dates})

    def most_frequent_mood(self) -> MoodType:
        if not self.mood_frequency:
            return MoodType.NEUTRAL
        return max(self.mood_frequency.items(), key=lambda item: item[1])[0]

    def favorite_category(self) -> WorkoutCategory:
        if not self.category_preference:
            return WorkoutCategory.CARDIO
        return max(self.category_preference.items(), key=lambda item: item[1])[0]


class UserStats(BaseModel):
    current_streak: int = 0
    best_streak: int = 0
    total_workouts: int = 0
    total_minutes: int = 0
    workouts_this_week: int = 0
    total_calories: int = 0
    most_frequent_mood: MoodType = MoodType.NEUTRAL
    favorite_category: WorkoutCategory = WorkoutCategory.CARDIO
    motivational_message: str = ""


# ---- API payloads ---------------------------------------------------------


class UserResponse(BaseModel):
    user: User
    welcome_message: str
    motivational_message: str
    days_using_app: int
    has_worked_out_today: bool


class UserSetupRequest(BaseModel):
    username: str
    preferred_difficulty: Optional[DifficultyLevel] = None


class UserPreferencesRequest(BaseModel):
    preferred_difficulty: Optional[DifficultyLevel] = None
    sound_enabled: Optional[bool] = None
    notifications_enabled: Optional[bool] = None


class ProgressResponse(BaseModel):
    progress: UserProgress
    workouts_this_week: int
    minutes_this_month: int
    most_frequent_mood: MoodType
    favorite_category: WorkoutCategory


class SessionStartRequest(BaseModel):
    mood: Optional[str] = None


class SessionExerciseRequest(BaseModel):
    exercise_id: Optional[str] = None
    name: Optional[str] = None


class SessionCompleteRequest(BaseModel):
    rating: Optional[int] = None
    notes: Optional[str] = None


class SessionListResponse(BaseModel):
    count: int
    items: List[WorkoutSession]
