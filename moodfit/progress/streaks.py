# -*- coding: utf-8 -*-
"""Calendar-day helpers for streak bookkeeping."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional

from ..config import settings


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(ts: Optional[datetime]) -> Optional[datetime]:
    """Naive values are taken as UTC; aware values are converted."""
    if ts is None:
        return None
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def _zone(tz: Optional[tzinfo]) -> Optional[tzinfo]:
    return tz if tz is not None else settings.tz


def local_time(ts: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """``ts`` in the configured zone (host local when unset). Naive values are UTC."""
    return as_utc(ts).astimezone(_zone(tz))


def local_day(ts: datetime, tz: Optional[tzinfo] = None) -> date:
    return local_time(ts, tz).date()


def is_same_day(a: datetime, b: datetime, tz: Optional[tzinfo] = None) -> bool:
    return local_day(a, tz) == local_day(b, tz)


def is_before_yesterday(last: Optional[datetime], now: datetime, tz: Optional[tzinfo] = None) -> bool:
    """True when ``last`` falls on a calendar day earlier than yesterday."""
    if last is None:
        return False
    yesterday = local_day(now, tz) - timedelta(days=1)
    return local_day(last, tz) < yesterday


def month_key(ts: datetime, tz: Optional[tzinfo] = None) -> str:
    return local_day(ts, tz).strftime("%Y-%m")
