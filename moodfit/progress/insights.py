from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd
from pydantic import BaseModel, Field

from .models import WorkoutSession
from .streaks import local_day

_COLUMNS = ["day", "week_start", "slot", "minutes", "calories"]


class WeeklyInsight(BaseModel):
    week_start: str
    workouts: int
    minutes: int
    calories: int
    # Sunday first.
    active_days: List[bool] = Field(default_factory=lambda: [False] * 7)


class DailyActivity(BaseModel):
    date: str
    workouts: int
    minutes: int


class InsightsResponse(BaseModel):
    weeks: List[WeeklyInsight]
    daily: List[DailyActivity]


def week_slot(day: date) -> int:
    """Sunday=0 ... Saturday=6."""
    return (day.weekday() + 1) % 7


def week_start(day: date) -> date:
    return day - timedelta(days=week_slot(day))


def sessions_frame(sessions: Sequence[WorkoutSession], tz: Optional[tzinfo] = None) -> pd.DataFrame:
    rows = []
    for session in sessions:
        if not session.completed or session.end_time is None:
            continue
        day = local_day(session.end_time, tz)
        rows.append(
            {
                "day": day,
                "week_start": week_start(day),
                "slot": week_slot(day),
                "minutes": session.duration_minutes,
                "calories": session.calories_burned,
            }
        )
    return pd.DataFrame(rows, columns=_COLUMNS)


def weekly_insights(sessions: Sequence[WorkoutSession], tz: Optional[tzinfo] = None) -> List[WeeklyInsight]:
    df = sessions_frame(sessions, tz)
    if df.empty:
        return []
    out: List[WeeklyInsight] = []
    for start, group in df.groupby("week_start", sort=True):
        active = np.zeros(7, dtype=bool)
        active[group["slot"].to_numpy(dtype=int)] = True
        out.append(
            WeeklyInsight(
                week_start=start.isoformat(),
                workouts=int(len(group)),
                minutes=int(group["minutes"].sum()),
                calories=int(group["calories"].sum()),
                active_days=active.tolist(),
            )
        )
    return out


def daily_activity(
    sessions: Sequence[WorkoutSession],
    now: datetime,
    days: int = 7,
    tz: Optional[tzinfo] = None,
) -> List[DailyActivity]:
    """Per-day counts for the trailing ``days`` calendar days, zero-filled."""
    today = local_day(now, tz)
    index = [today - timedelta(days=offset) for offset in range(max(1, days) - 1, -1, -1)]
    df = sessions_frame(sessions, tz)
    grouped = df.groupby("day").agg(workouts=("minutes", "size"), minutes=("minutes", "sum"))
    grouped = grouped.reindex(index, fill_value=0)
    return [
        DailyActivity(date=day.isoformat(), workouts=int(row.workouts), minutes=int(row.minutes))
        for day, row in grouped.iterrows()
    ]


def build_insights(
    sessions: Sequence[WorkoutSession],
    now: datetime,
    days: int = 7,
    tz: Optional[tzinfo] = None,
) -> InsightsResponse:
    return InsightsResponse(
        weeks=weekly_insights(sessions, tz),
        daily=daily_activity(sessions, now, days, tz),
    )
