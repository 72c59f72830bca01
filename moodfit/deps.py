# -*- coding: utf-8 -*-
"""FastAPI dependencies: repository, clock and the engines built on them."""

from __future__ import annotations

import random
from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Query

from .config import settings
from .progress.engine import ProgressEngine
from .progress.streaks import utc_now
from .quotes.service import DailyQuoteService
from .storage import KeyValueRepository, SQLiteRepository


def get_repository() -> KeyValueRepository:
    return SQLiteRepository(settings.db_path)


def get_clock() -> Callable[[], datetime]:
    return utc_now


def get_rng(seed: Optional[int] = Query(default=None, description="Seed for reproducible draws")) -> random.Random:
    return random.Random(seed)


def get_progress_engine(
    repository: KeyValueRepository = Depends(get_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ProgressEngine:
    return ProgressEngine(repository, clock=clock)


def get_quote_service(
    repository: KeyValueRepository = Depends(get_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> DailyQuoteService:
    return DailyQuoteService(repository, clock=clock)
