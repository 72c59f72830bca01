# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date, datetime, timedelta, timezone

from moodfit.progress import WorkoutSession
from moodfit.progress.insights import build_insights, daily_activity, week_slot, week_start, weekly_insights

UTC = timezone.utc


def _session(end: datetime, minutes: int, calories: int = 50) -> WorkoutSession:
    session = WorkoutSession(start_time=end - timedelta(minutes=minutes), calories_burned=calories)
    session.end_workout(end)
    return session


class TestInsights(unittest.TestCase):
    def test_week_helpers(self) -> None:
        sunday = date(2024, 5, 5)
        self.assertEqual(week_slot(sunday), 0)
        self.assertEqual(week_slot(date(2024, 5, 11)), 6)
        self.assertEqual(week_start(date(2024, 5, 8)), sunday)

    def test_weekly_rollup(self) -> None:
        sessions = [
            _session(datetime(2024, 5, 5, 9, tzinfo=UTC), 10, 40),   # Sunday
            _session(datetime(2024, 5, 5, 18, tzinfo=UTC), 15, 60),  # Sunday again
            _session(datetime(2024, 5, 8, 7, tzinfo=UTC), 20, 90),   # Wednesday
            _session(datetime(2024, 5, 13, 7, tzinfo=UTC), 5, 10),   # next Monday
            WorkoutSession(start_time=datetime(2024, 5, 9, tzinfo=UTC)),  # never completed
        ]
        weeks = weekly_insights(sessions, UTC)
        self.assertEqual([w.week_start for w in weeks], ["2024-05-05", "2024-05-12"])

        first = weeks[0]
        self.assertEqual(first.workouts, 3)
        self.assertEqual(first.minutes, 45)
        self.assertEqual(first.calories, 190)
        self.assertEqual(first.active_days, [True, False, False, True, False, False, False])

        second = weeks[1]
        self.assertEqual(second.workouts, 1)
        self.assertEqual(second.active_days, [False, True, False, False, False, False, False])

    def test_empty(self) -> None:
        self.assertEqual(weekly_insights([], UTC), [])
        daily = daily_activity([], datetime(2024, 5, 10, tzinfo=UTC), days=3, tz=UTC)
        self.assertEqual([d.date for d in daily], ["2024-05-08", "2024-05-09", "2024-05-10"])
        self.assertTrue(all(d.workouts == 0 and d.minutes == 0 for d in daily))

    def test_daily_series(self) -> None:
        now = datetime(2024, 5, 10, 20, tzinfo=UTC)
        sessions = [
            _session(datetime(2024, 5, 10, 8, tzinfo=UTC), 12),
            _session(datetime(2024, 5, 10, 9, tzinfo=UTC), 8),
            _session(datetime(2024, 5, 8, 9, tzinfo=UTC), 30),
            _session(datetime(2024, 4, 1, 9, tzinfo=UTC), 30),
        ]
        result = build_insights(sessions, now, days=7, tz=UTC)
        self.assertEqual(len(result.daily), 7)
        by_day = {d.date: d for d in result.daily}
        self.assertEqual(by_day["2024-05-10"].workouts, 2)
        self.assertEqual(by_day["2024-05-10"].minutes, 20)
        self.assertEqual(by_day["2024-05-08"].minutes, 30)
        self.assertEqual(by_day["2024-05-09"].workouts, 0)
        self.assertNotIn("2024-04-01", by_day)


if __name__ == "__main__":
    unittest.main()
