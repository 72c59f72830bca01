# -*- coding: utf-8 -*-

from __future__ import annotations

import json
import unittest
from datetime import datetime, timedelta, timezone

from moodfit.catalog import DifficultyLevel, MoodType, WorkoutCategory, find_by_name
from moodfit.progress import ProgressEngine, User, UserProgress, WorkoutSession
from moodfit.storage import KEY_USER_DATA, KEY_USER_PROGRESS, KEY_WORKOUT_SESSIONS, InMemoryRepository

UTC = timezone.utc


class MutableClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def _completed_session(start: datetime, minutes: int = 20, mood: MoodType = MoodType.HAPPY, names=("Burpees",)):
    session = WorkoutSession(mood=mood, start_time=start)
    for name in names:
        session.add_exercise(find_by_name(name))
    session.end_workout(start + timedelta(minutes=minutes, seconds=30))
    return session


class TestWorkoutSession(unittest.TestCase):
    def setUp(self) -> None:
        self.start = datetime(2024, 5, 1, 8, 0, tzinfo=UTC)

    def test_calories_and_duration(self) -> None:
        session = WorkoutSession(mood=MoodType.NEUTRAL, start_time=self.start)
        self.assertTrue(session.is_active)
        session.add_exercise(find_by_name("Burpees"))
        session.add_exercise(find_by_name("Lunges"))
        expected = find_by_name("Burpees").estimated_calories + find_by_name("Lunges").estimated_calories
        self.assertEqual(session.calories_burned, expected)

        self.assertTrue(session.end_workout(self.start + timedelta(minutes=12, seconds=59)))
        self.assertEqual(session.duration_minutes, 12)
        self.assertTrue(session.completed)
        self.assertFalse(session.is_active)

    def test_terminal_state(self) -> None:
        session = _completed_session(self.start)
        end_time = session.end_time
        self.assertFalse(session.end_workout(self.start + timedelta(hours=3)))
        self.assertEqual(session.end_time, end_time)
        self.assertEqual(session.duration_minutes, 20)

        calories = session.calories_burned
        self.assertFalse(session.add_exercise(find_by_name("Lunges")))
        self.assertEqual(len(session.exercises), 1)
        self.assertEqual(session.calories_burned, calories)

    def test_exercise_list_is_a_copy(self) -> None:
        session = WorkoutSession(start_time=self.start)
        session.add_exercise(find_by_name("Lunges"))
        copy = session.exercise_list()
        copy.append(find_by_name("Burpees"))
        self.assertEqual(len(session.exercises), 1)

    def test_naive_times_are_read_as_utc(self) -> None:
        session = WorkoutSession(start_time=datetime(2024, 5, 1, 8, 0))
        self.assertEqual(session.start_time, self.start)
        session.end_workout(datetime(2024, 5, 1, 8, 30))
        self.assertEqual(session.end_time.tzinfo, UTC)
        self.assertEqual(session.duration_minutes, 30)

    def test_rating_is_clamped(self) -> None:
        session = WorkoutSession(rating=9)
        self.assertEqual(session.rating, 5)
        session.set_rating(0)
        self.assertEqual(session.rating, 1)
        session.set_rating(4)
        self.assertEqual(session.rating, 4)

    def test_ids_are_unique(self) -> None:
        ids = {WorkoutSession().session_id for _ in range(200)}
        self.assertEqual(len(ids), 200)
        self.assertTrue(all(i.startswith("session_") for i in ids))


class TestUser(unittest.TestCase):
    def test_best_streak_tracks_current(self) -> None:
        user = User()
        for _ in range(4):
            user.increment_streak()
            self.assertGreaterEqual(user.best_streak, user.current_streak)
        user.reset_streak()
        self.assertEqual((user.current_streak, user.best_streak), (0, 4))
        user.increment_streak()
        self.assertEqual((user.current_streak, user.best_streak), (1, 4))

    def test_worked_out_today_is_calendar_based(self) -> None:
        user = User()
        late = datetime(2024, 5, 1, 23, 30, tzinfo=UTC)
        self.assertFalse(user.has_worked_out_today(late, UTC))
        user.add_workout(15, late)
        self.assertTrue(user.has_worked_out_today(late + timedelta(minutes=20), UTC))
        self.assertFalse(user.has_worked_out_today(late + timedelta(minutes=40), UTC))
        self.assertEqual((user.total_workouts, user.total_minutes), (1, 15))

    def test_welcome_message(self) -> None:
        user = User()
        self.assertEqual(user.welcome_message(datetime(2024, 5, 1, 9, tzinfo=UTC), UTC), "Welcome back!")
        user.complete_onboarding("Sam")
        self.assertFalse(user.is_first_time_user)
        self.assertEqual(user.welcome_message(datetime(2024, 5, 1, 9, tzinfo=UTC), UTC), "Good morning, Sam!")
        self.assertEqual(user.welcome_message(datetime(2024, 5, 1, 13, tzinfo=UTC), UTC), "Good afternoon, Sam!")
        self.assertEqual(user.welcome_message(datetime(2024, 5, 1, 20, tzinfo=UTC), UTC), "Good evening, Sam!")

    def test_motivational_message(self) -> None:
        user = User()
        expected = {
            0: "Ready to start your fitness journey?",
            1: "Great start! Keep the momentum going!",
            3: "You're building a great habit!",
            10: "Amazing streak! You're on fire! 🔥",
            45: "Incredible dedication! You're a fitness champion!",
        }
        for streak, message in expected.items():
            user.current_streak = streak
            self.assertEqual(user.motivational_message(), message)

    def test_days_using_app(self) -> None:
        created = datetime(2024, 5, 1, tzinfo=UTC)
        user = User(account_created_date=created)
        self.assertEqual(user.days_using_app(created + timedelta(hours=3)), 1)
        self.assertEqual(user.days_using_app(created + timedelta(days=9, hours=1)), 9)

    def test_app_open(self) -> None:
        user = User()
        now = datetime(2024, 5, 2, tzinfo=UTC)
        user.record_app_open(now)
        self.assertEqual(user.total_app_opens, 2)
        self.assertEqual(user.last_open_date, now)


class TestUserProgress(unittest.TestCase):
    def test_distinct_categories_and_moods(self) -> None:
        progress = UserProgress()
        start = datetime(2024, 5, 1, 8, tzinfo=UTC)
        progress.record_workout(_completed_session(start, names=("Burpees", "Mountain Climbers", "Headstand")), UTC)
        self.assertEqual(progress.category_preference[WorkoutCategory.CARDIO], 1)
        self.assertEqual(progress.category_preference[WorkoutCategory.YOGA], 1)
        self.assertEqual(progress.mood_frequency[MoodType.HAPPY], 1)
        self.assertEqual(progress.total_workouts, 1)
        self.assertEqual(progress.total_minutes, 20)
        self.assertEqual(progress.monthly_minutes, {"2024-05": 20})
        self.assertEqual(progress.minutes_this_month(start, UTC), 20)

    def test_defaults(self) -> None:
        progress = UserProgress()
        self.assertEqual(progress.most_frequent_mood(), MoodType.NEUTRAL)
        self.assertEqual(progress.favorite_category(), WorkoutCategory.CARDIO)
        self.assertEqual(progress.workouts_this_week(datetime(2024, 5, 1, tzinfo=UTC)), 0)

    def test_trailing_week(self) -> None:
        progress = UserProgress()
        now = datetime(2024, 5, 10, 12, tzinfo=UTC)
        for days_ago in (0, 2, 6, 8, 30):
            progress.record_workout(_completed_session(now - timedelta(days=days_ago, minutes=30)), UTC)
        self.assertEqual(progress.workouts_this_week(now), 3)

    def test_most_frequent(self) -> None:
        progress = UserProgress()
        start = datetime(2024, 5, 1, tzinfo=UTC)
        progress.record_workout(_completed_session(start, mood=MoodType.STRESSED, names=("Box Breathing",)), UTC)
        progress.record_workout(_completed_session(start, mood=MoodType.STRESSED, names=("Box Breathing",)), UTC)
        progress.record_workout(_completed_session(start, mood=MoodType.HAPPY), UTC)
        self.assertEqual(progress.most_frequent_mood(), MoodType.STRESSED)
        self.assertEqual(progress.favorite_category(), WorkoutCategory.BREATHING)


class TestProgressEngine(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryRepository()
        self.clock = MutableClock(datetime(2024, 5, 10, 18, 0, tzinfo=UTC))
        self.engine = ProgressEngine(self.repo, clock=self.clock, tz=UTC)

    def _set_user(self, **fields) -> None:
        self.engine.update_user(lambda u: [setattr(u, k, v) for k, v in fields.items()])

    def _complete_now(self, minutes: int = 20) -> User:
        session = _completed_session(self.clock.now - timedelta(minutes=minutes + 1), minutes=minutes)
        return self.engine.record_workout_completion(session, self.clock.now)

    def test_default_user_is_created_once(self) -> None:
        self.assertIsNone(self.repo.load(KEY_USER_DATA))
        user = self.engine.current_user()
        self.assertIsNotNone(self.repo.load(KEY_USER_DATA))
        self.assertEqual(self.engine.current_user().user_id, user.user_id)
        self.assertTrue(user.is_first_time_user)
        self.assertEqual(user.preferred_difficulty, DifficultyLevel.BEGINNER)

    def test_streak_continues_from_yesterday(self) -> None:
        self._set_user(current_streak=6, best_streak=6, last_workout_date=self.clock.now - timedelta(days=1))
        user = self._complete_now()
        self.assertEqual(user.current_streak, 7)
        self.assertEqual(user.best_streak, 7)

        progress = self.engine.user_progress()
        self.assertEqual(progress.current_streak, 7)
        self.assertEqual(progress.longest_streak, 7)

    def test_best_streak_is_kept(self) -> None:
        self._set_user(current_streak=6, best_streak=10, last_workout_date=self.clock.now - timedelta(days=1))
        user = self._complete_now()
        self.assertEqual((user.current_streak, user.best_streak), (7, 10))

    def test_one_increment_per_day(self) -> None:
        first = self._complete_now()
        self.assertEqual(first.current_streak, 1)
        self.clock.now += timedelta(hours=2)
        second = self._complete_now()
        self.assertEqual(second.current_streak, 1)
        self.assertEqual(second.total_workouts, 2)
        self.assertEqual(self.engine.user_progress().total_workouts, 2)

    def test_consecutive_days(self) -> None:
        for day in range(3):
            user = self._complete_now()
            self.assertEqual(user.current_streak, day + 1)
            self.clock.now += timedelta(days=1)

    def test_lapsed_streak_restarts_at_one(self) -> None:
        self._set_user(current_streak=5, best_streak=5, last_workout_date=self.clock.now - timedelta(days=3))
        user = self._complete_now()
        self.assertEqual((user.current_streak, user.best_streak), (1, 5))

    def test_refresh_streak(self) -> None:
        self._set_user(current_streak=4, best_streak=4, last_workout_date=self.clock.now - timedelta(days=1))
        self.assertEqual(self.engine.refresh_streak().current_streak, 4)

        self.clock.now += timedelta(days=2)
        user = self.engine.refresh_streak()
        self.assertEqual((user.current_streak, user.best_streak), (0, 4))
        self.assertEqual(self.engine.user_progress().current_streak, 0)

    def test_incomplete_session_rejected(self) -> None:
        session = WorkoutSession(start_time=self.clock.now)
        with self.assertRaises(ValueError):
            self.engine.record_workout_completion(session)
        self.assertIsNone(self.repo.load(KEY_WORKOUT_SESSIONS))

    def test_history_and_recent_sessions(self) -> None:
        old = _completed_session(self.clock.now - timedelta(days=45))
        self.engine.record_workout_completion(old, self.clock.now - timedelta(days=45))
        self._complete_now()
        self.assertEqual(len(self.engine.session_history()), 2)
        self.assertEqual(len(self.engine.recent_sessions()), 1)
        self.assertEqual(self.engine.workouts_this_week(), 1)

    def test_naive_session_times(self) -> None:
        session = WorkoutSession(mood=MoodType.HAPPY, start_time=datetime(2024, 5, 10, 11, 0))
        session.add_exercise(find_by_name("Push-Ups"))
        session.end_workout(datetime(2024, 5, 10, 11, 30))
        self.engine.record_workout_completion(session)

        self.assertEqual(self.engine.workouts_this_week(), 1)
        self.assertEqual(self.engine.workouts_this_week(datetime(2024, 5, 10, 18, 0)), 1)
        self.assertEqual(len(self.engine.recent_sessions(now=datetime(2024, 5, 10, 18, 0))), 1)
        self.assertEqual(self.engine.user_stats().workouts_this_week, 1)

    def test_user_stats(self) -> None:
        self._complete_now(minutes=25)
        stats = self.engine.user_stats()
        self.assertEqual(stats.current_streak, 1)
        self.assertEqual(stats.total_workouts, 1)
        self.assertEqual(stats.total_minutes, 25)
        self.assertEqual(stats.workouts_this_week, 1)
        self.assertEqual(stats.most_frequent_mood, MoodType.HAPPY)
        self.assertEqual(stats.favorite_category, WorkoutCategory.CARDIO)

    def test_session_lifecycle(self) -> None:
        start = self.clock.now
        session = self.engine.start_session(MoodType.STRESSED)
        self.assertIsNotNone(self.engine.active_session(session.session_id))

        session.add_exercise(find_by_name("Box Breathing"))
        self.engine.save_active_session(session)

        self.clock.now = start + timedelta(minutes=11)
        done = self.engine.complete_session(session.session_id, rating=8, notes="calm")
        self.assertTrue(done.completed)
        self.assertEqual(done.duration_minutes, 11)
        self.assertEqual(done.rating, 5)
        self.assertIsNone(self.engine.active_session(session.session_id))
        self.assertIsNotNone(self.engine.find_session(session.session_id))
        self.assertIsNone(self.engine.complete_session(session.session_id))

    def test_app_open_needs_existing_user(self) -> None:
        self.assertIsNone(self.engine.record_app_open())
        self.engine.current_user()
        self.assertEqual(self.engine.record_app_open().total_app_opens, 2)

    def test_reset_todays_workout(self) -> None:
        self._complete_now()
        user = self.engine.reset_todays_workout()
        self.assertIsNone(user.last_workout_date)
        self.assertFalse(user.has_worked_out_today(self.clock.now, UTC))

    def test_export_and_reset(self) -> None:
        self._complete_now()
        exported = json.loads(self.engine.export_data())
        for key in (KEY_USER_DATA, KEY_USER_PROGRESS, KEY_WORKOUT_SESSIONS):
            self.assertIn(key, exported)
        self.assertIn("exported_at", exported)

        self.assertTrue(self.engine.reset_all_data())
        self.assertEqual(self.repo.keys(), [])

    def test_corrupt_user_is_recreated(self) -> None:
        self.repo.save(KEY_USER_DATA, {"current_streak": "lots"})
        user = self.engine.current_user()
        self.assertEqual(user.current_streak, 0)


if __name__ == "__main__":
    unittest.main()
