# -*- coding: utf-8 -*-
"""
Progress engine

Owns the persisted user, aggregate progress and session history. Every
operation is load-mutate-save against the injected repository; nothing is
cached between calls so two engines over one repository stay consistent.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, tzinfo
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..catalog.models import MoodType
from ..config import settings
from ..storage import (
    KEY_ACTIVE_SESSIONS,
    KEY_USER_DATA,
    KEY_USER_PROGRESS,
    KEY_WORKOUT_SESSIONS,
    KeyValueRepository,
)
from .models import User, UserProgress, UserStats, WorkoutSession
from .streaks import as_utc, is_before_yesterday, utc_now

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)
DateTimeClock = Callable[[], datetime]


class ProgressEngine:
    def __init__(
        self,
        repository: KeyValueRepository,
        clock: Optional[DateTimeClock] = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.repository = repository
        self.clock: DateTimeClock = clock or utc_now
        self.tz = tz if tz is not None else settings.tz

    # ---- persistence helpers ---------------------------------------------

    def _load_model(self, key: str, model: Type[ModelT]) -> Optional[ModelT]:
        raw = self.repository.load(key)
        if raw is None:
            return None
        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Stored %s is invalid, recreating: %s", key, exc.errors()[:3])
            return None

    def _load_sessions(self, key: str) -> List[WorkoutSession]:
        raw = self.repository.load(key)
        if not isinstance(raw, list):
            return []
        sessions: List[WorkoutSession] = []
        for item in raw:
            try:
                sessions.append(WorkoutSession.model_validate(item))
            except ValidationError:
                logger.warning("Skipping invalid stored session in %s", key)
        return sessions

    def _save_sessions(self, key: str, sessions: List[WorkoutSession]) -> None:
        self.repository.save(key, [s.model_dump(mode="json") for s in sessions])

    # ---- user ------------------------------------------------------------

    def current_user(self) -> User:
        user = self._load_model(KEY_USER_DATA, User)
        if user is None:
            now = self.clock()
            user = User(account_created_date=now, last_open_date=now)
            self.save_user(user)
            logger.info("Created default user %s", user.user_id)
        return user

    def save_user(self, user: User) -> None:
        self.repository.save(KEY_USER_DATA, user.model_dump(mode="json"))

    def update_user(self, mutate: Callable[[User], Any]) -> User:
        user = self.current_user()
        mutate(user)
        self.save_user(user)
        return user

    def has_stored_user(self) -> bool:
        return self.repository.load(KEY_USER_DATA) is not None

    def record_app_open(self, now: Optional[datetime] = None) -> Optional[User]:
        """Count an app open for an existing user. No user is created here."""
        user = self._load_model(KEY_USER_DATA, User)
        if user is None:
            return None
        user.record_app_open(now or self.clock())
        self.save_user(user)
        return user

    # ---- progress --------------------------------------------------------

    def user_progress(self) -> UserProgress:
        progress = self._load_model(KEY_USER_PROGRESS, UserProgress)
        if progress is None:
            user = self.current_user()
            progress = UserProgress(user_id=user.user_id)
            progress.sync_streaks(user)
            self.save_progress(progress)
        return progress

    def save_progress(self, progress: UserProgress) -> None:
        self.repository.save(KEY_USER_PROGRESS, progress.model_dump(mode="json"))

    def _apply_decay(self, user: User, now: datetime) -> bool:
        if user.current_streak == 0 or user.has_worked_out_today(now, self.tz):
            return False
        if not is_before_yesterday(user.last_workout_date, now, self.tz):
            return False
        logger.info("Streak of %d lapsed (last workout %s)", user.current_streak, user.last_workout_date)
        user.reset_streak()
        return True

    def refresh_streak(self, now: Optional[datetime] = None) -> User:
        """Reset a lapsed streak. Called when the home screen resumes."""
        now = now or self.clock()
        user = self.current_user()
        if self._apply_decay(user, now):
            self.save_user(user)
            progress = self.user_progress()
            progress.sync_streaks(user)
            self.save_progress(progress)
        return user

    def record_workout_completion(self, session: WorkoutSession, now: Optional[datetime] = None) -> User:
        """Fold a completed session into the user, progress and history.

        At most one streak increment per calendar day; a lapsed streak is
        reset before the increment. Raises ``ValueError`` for a session that
        was never completed.
        """
        if session is None or not session.completed:
            logger.warning("Rejecting incomplete workout session %s", getattr(session, "session_id", None))
            raise ValueError("Invalid or incomplete workout session")

        now = now or self.clock()
        user = self.current_user()

        if user.has_worked_out_today(now, self.tz):
            logger.info("Already worked out today, streak stays at %d", user.current_streak)
        else:
            self._apply_decay(user, now)
            previous = user.current_streak
            user.increment_streak()
            logger.info("Streak incremented from %d to %d", previous, user.current_streak)

        user.add_workout(session.duration_minutes, now)
        if session.user_id is None:
            session.user_id = user.user_id
        self.save_user(user)

        history = self._load_sessions(KEY_WORKOUT_SESSIONS)
        history.append(session)
        self._save_sessions(KEY_WORKOUT_SESSIONS, history)

        progress = self.user_progress()
        progress.user_id = user.user_id
        progress.record_workout(session, self.tz)
        progress.sync_streaks(user)
        self.save_progress(progress)
        return user

    def reset_todays_workout(self) -> User:
        def _clear(user: User) -> None:
            user.last_workout_date = None

        user = self.update_user(_clear)
        logger.info("Cleared last workout date for %s", user.user_id)
        return user

    # ---- sessions --------------------------------------------------------

    def start_session(self, mood: Optional[MoodType], now: Optional[datetime] = None) -> WorkoutSession:
        user = self.current_user()
        session = WorkoutSession(user_id=user.user_id, mood=mood, start_time=now or self.clock())
        active = self._load_sessions(KEY_ACTIVE_SESSIONS)
        active.append(session)
        self._save_sessions(KEY_ACTIVE_SESSIONS, active)
        return session

    def active_session(self, session_id: str) -> Optional[WorkoutSession]:
        for session in self._load_sessions(KEY_ACTIVE_SESSIONS):
            if session.session_id == session_id:
                return session
        return None

    def save_active_session(self, session: WorkoutSession) -> None:
        active = [s for s in self._load_sessions(KEY_ACTIVE_SESSIONS) if s.session_id != session.session_id]
        active.append(session)
        self._save_sessions(KEY_ACTIVE_SESSIONS, active)

    def discard_active_session(self, session_id: str) -> None:
        active = [s for s in self._load_sessions(KEY_ACTIVE_SESSIONS) if s.session_id != session_id]
        self._save_sessions(KEY_ACTIVE_SESSIONS, active)

    def complete_session(
        self,
        session_id: str,
        now: Optional[datetime] = None,
        rating: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> Optional[WorkoutSession]:
        """End an active session and record it. ``None`` when no such active session."""
        session = self.active_session(session_id)
        if session is None:
            return None
        now = now or self.clock()
        session.end_workout(now)
        if rating is not None:
            session.set_rating(rating)
        if notes is not None:
            session.notes = notes
        self.record_workout_completion(session, now)
        self.discard_active_session(session_id)
        return session

    def session_history(self) -> List[WorkoutSession]:
        return self._load_sessions(KEY_WORKOUT_SESSIONS)

    def find_session(self, session_id: str) -> Optional[WorkoutSession]:
        for session in self.session_history():
            if session.session_id == session_id:
                return session
        return None

    def recent_sessions(self, days: int = 30, now: Optional[datetime] = None) -> List[WorkoutSession]:
        cutoff = as_utc(now or self.clock()) - timedelta(days=days)
        return [s for s in self.session_history() if s.end_time is not None and s.end_time >= cutoff]

    # ---- dashboards ------------------------------------------------------

    def workouts_this_week(self, now: Optional[datetime] = None) -> int:
        return self.user_progress().workouts_this_week(now or self.clock())

    def user_stats(self, now: Optional[datetime] = None) -> UserStats:
        user = self.current_user()
        progress = self.user_progress()
        return UserStats(
            current_streak=user.current_streak,
            best_streak=user.best_streak,
            total_workouts=user.total_workouts,
            total_minutes=user.total_minutes,
            workouts_this_week=progress.workouts_this_week(now or self.clock()),
            total_calories=progress.total_calories,
            most_frequent_mood=progress.most_frequent_mood(),
            favorite_category=progress.favorite_category(),
            motivational_message=user.motivational_message(),
        )

    # ---- maintenance -----------------------------------------------------

    def reset_all_data(self) -> bool:
        self.repository.clear()
        logger.info("All app data reset")
        return True

    def export_data(self) -> str:
        payload: Dict[str, Any] = {key: self.repository.load(key) for key in self.repository.keys()}
        payload["exported_at"] = self.clock().isoformat()
        return json.dumps(payload, ensure_ascii=False, indent=2)
