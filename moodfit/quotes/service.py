# -*- coding: utf-8 -*-
"""Daily motivational quote, chosen once per calendar day."""

from __future__ import annotations

import logging
import random
import sqlite3
from datetime import datetime, tzinfo
from typing import Callable, Optional, Tuple

from pydantic import BaseModel, ValidationError

from ..config import settings
from ..progress.streaks import local_day, utc_now
from ..storage import KEY_DAILY_QUOTE, KeyValueRepository

logger = logging.getLogger(__name__)

# text, author, category
QUOTES: Tuple[Tuple[str, str, str], ...] = (
    ("The only bad workout is the one that didn't happen.", "Daily Motivation", "general"),
    ("Your body can do it. It's your mind you need to convince.", "Fitness Wisdom", "general"),
    ("Fitness is not about being better than someone else. It's about being better than you used to be.",
     "Health Quote", "general"),
    ("The groundwork for all happiness is good health.", "Emerson", "health"),
    ("Take care of your body. It's the only place you have to live.", "Jim Rohn", "health"),
    ("A healthy outside starts from the inside.", "Robert Urich", "health"),
    ("Exercise is king. Nutrition is queen. Put them together and you've got a kingdom.", "Jack LaLanne", "success"),
    ("The first wealth is health.", "Emerson", "success"),
    ("Physical fitness is not only one of the most important keys to a healthy body, it is the basis of "
     "dynamic and creative intellectual activity.", "John F. Kennedy", "success"),
    ("Success isn't always about greatness. It's about consistency. Consistent hard work leads to success.",
     "Dwayne Johnson", "inspiration"),
    ("The pain you feel today will be the strength you feel tomorrow.", "Fitness Wisdom", "inspiration"),
    ("Don't limit your challenges, challenge your limits.", "Daily Motivation", "inspiration"),
    ("To keep the body in good health is a duty... otherwise we shall not be able to keep our mind strong "
     "and clear.", "Buddha", "mindfulness"),
    ("A strong body makes the mind strong.", "Thomas Jefferson", "mindfulness"),
    ("Happiness is the highest form of health.", "Dalai Lama", "mindfulness"),
)

CATEGORIES = ("general", "health", "success", "inspiration", "mindfulness")


class MotivationalQuote(BaseModel):
    text: str
    author: str
    category: str
    is_daily: bool = False
    date_shown: Optional[str] = None  # ISO calendar day

    def was_shown_on(self, day: str) -> bool:
        return self.date_shown == day


FALLBACK_QUOTE = MotivationalQuote(
    text="Every workout brings you one step closer to your goals.",
    author="MoodFit",
    category="motivation",
)


class DailyQuoteService:
    def __init__(
        self,
        repository: KeyValueRepository,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.repository = repository
        self.rng = rng or random.Random()
        self.clock = clock or utc_now
        self.tz = tz if tz is not None else settings.tz

    def random_quote(self) -> MotivationalQuote:
        text, author, category = self.rng.choice(QUOTES)
        return MotivationalQuote(text=text, author=author, category=category)

    def daily_quote(self, now: Optional[datetime] = None) -> MotivationalQuote:
        today = local_day(now or self.clock(), self.tz).isoformat()
        try:
            stored = self._stored()
            if stored is not None and stored.was_shown_on(today):
                return stored
            quote = self.random_quote()
            quote.is_daily = True
            quote.date_shown = today
            self.repository.save(KEY_DAILY_QUOTE, quote.model_dump(mode="json"))
            logger.info("New daily quote for %s (%s)", today, quote.category)
            return quote
        except sqlite3.Error:
            logger.exception("Error getting daily quote")
            return FALLBACK_QUOTE

    def _stored(self) -> Optional[MotivationalQuote]:
        raw = self.repository.load(KEY_DAILY_QUOTE)
        if raw is None:
            return None
        try:
            return MotivationalQuote.model_validate(raw)
        except ValidationError:
            logger.warning("Stored daily quote is invalid, choosing a new one")
            return None
