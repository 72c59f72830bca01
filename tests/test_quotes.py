# -*- coding: utf-8 -*-

from __future__ import annotations

import random
import sqlite3
import unittest
from datetime import datetime, timedelta, timezone

from moodfit.quotes import CATEGORIES, FALLBACK_QUOTE, QUOTES, DailyQuoteService
from moodfit.storage import KEY_DAILY_QUOTE, InMemoryRepository

UTC = timezone.utc


class BrokenRepository(InMemoryRepository):
    def load(self, key):
        raise sqlite3.OperationalError("disk I/O error")


class TestDailyQuote(unittest.TestCase):
    def setUp(self) -> None:
        self.repo = InMemoryRepository()
        self.morning = datetime(2024, 5, 10, 7, tzinfo=UTC)

    def test_table(self) -> None:
        self.assertEqual(len(QUOTES), 15)
        self.assertEqual({q[2] for q in QUOTES}, set(CATEGORIES))

    def test_same_quote_all_day(self) -> None:
        service = DailyQuoteService(self.repo, rng=random.Random(1), tz=UTC)
        first = service.daily_quote(self.morning)
        self.assertTrue(first.is_daily)
        self.assertEqual(first.date_shown, "2024-05-10")
        self.assertEqual(self.repo.load(KEY_DAILY_QUOTE)["text"], first.text)

        other = DailyQuoteService(self.repo, rng=random.Random(99), tz=UTC)
        self.assertEqual(other.daily_quote(self.morning + timedelta(hours=15)).text, first.text)

    def test_new_day_new_pick(self) -> None:
        service = DailyQuoteService(self.repo, rng=random.Random(1), tz=UTC)
        service.daily_quote(self.morning)
        tomorrow = service.daily_quote(self.morning + timedelta(days=1))
        self.assertEqual(tomorrow.date_shown, "2024-05-11")
        self.assertIn((tomorrow.text, tomorrow.author, tomorrow.category), QUOTES)

    def test_fallback_on_storage_error(self) -> None:
        service = DailyQuoteService(BrokenRepository(), rng=random.Random(1), tz=UTC)
        quote = service.daily_quote(self.morning)
        self.assertEqual(quote, FALLBACK_QUOTE)
        self.assertEqual(quote.author, "MoodFit")


if __name__ == "__main__":
    unittest.main()
