# -*- coding: utf-8 -*-
"""Context-aware random exercise selection with a remembered history."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..config import settings
from ..storage import KEY_RANDOM_HISTORY, KeyValueRepository
from .data import FALLBACK_EXERCISE, load_catalog
from .models import DifficultyLevel, Exercise, WorkoutCategory

logger = logging.getLogger(__name__)

MIN_WEIGHT = 0.05
QUICK_SESSION_SECONDS = 300
_FUN_KEYWORDS = ("Dance", "Animal", "Superhero", "Ninja")
_WEEKEND_FUN_KEYWORDS = ("Dance", "Fun", "Creative", "Animal")


@dataclass
class SelectionHistory:
    recent_names: List[str] = field(default_factory=list)
    last_category: Optional[WorkoutCategory] = None
    last_selection_ts: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "recent_names": list(self.recent_names),
            "last_category": self.last_category.value if self.last_category else None,
            "last_selection_ts": self.last_selection_ts,
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SelectionHistory":
        if not isinstance(data, dict):
            return cls()
        try:
            category = WorkoutCategory(data["last_category"]) if data.get("last_category") else None
        except ValueError:
            category = None
        names = [str(n).strip() for n in data.get("recent_names") or [] if str(n).strip()]
        return cls(
            recent_names=names,
            last_category=category,
            last_selection_ts=float(data.get("last_selection_ts") or 0.0),
        )


@dataclass
class SelectionContext:
    hour_of_day: int
    weekday: int  # Monday == 0
    user_difficulty: DifficultyLevel
    recent_names: List[str]
    last_category: Optional[WorkoutCategory]
    needs_category_variety: bool
    is_first_selection: bool
    is_quick_session: bool

    @property
    def is_weekend(self) -> bool:
        return self.weekday >= 5

    @property
    def is_morning(self) -> bool:
        return self.hour_of_day <= 10

    @property
    def is_evening(self) -> bool:
        return self.hour_of_day >= 18


class SmartSelector:
    """Weighted random pick that favours the user's level and avoids repeats."""

    def __init__(
        self,
        repository: KeyValueRepository,
        rng: Optional[random.Random] = None,
        catalog: Optional[Sequence[Exercise]] = None,
    ) -> None:
        self.repository = repository
        self.rng = rng or random.Random()
        self.catalog: Tuple[Exercise, ...] = tuple(load_catalog() if catalog is None else catalog)
        self.history = SelectionHistory.from_dict(repository.load(KEY_RANDOM_HISTORY))

    def select(self, difficulty: DifficultyLevel, now: datetime) -> Exercise:
        if not self.catalog:
            return FALLBACK_EXERCISE
        context = self._build_context(difficulty, now)
        pool = [(e, self.exercise_weight(e, context)) for e in self.catalog]
        pool.sort(key=lambda item: item[1], reverse=True)
        chosen = self._weighted_choice(pool)
        self._remember(chosen, now)
        logger.debug(
            "Smart selection: %s (category %s, difficulty %s)",
            chosen.name, chosen.category.value, chosen.difficulty.value,
        )
        return chosen

    def _build_context(self, difficulty: DifficultyLevel, now: datetime) -> SelectionContext:
        since_last = now.timestamp() - self.history.last_selection_ts
        return SelectionContext(
            hour_of_day=now.hour,
            weekday=now.weekday(),
            user_difficulty=difficulty,
            recent_names=list(self.history.recent_names),
            last_category=self.history.last_category,
            needs_category_variety=self._needs_category_variety(),
            is_first_selection=not self.history.recent_names,
            is_quick_session=since_last < QUICK_SESSION_SECONDS,
        )

    def _needs_category_variety(self) -> bool:
        last = self.history.last_category
        if last is None:
            return False
        by_name = {e.name: e.category for e in self.catalog}
        same = sum(1 for name in self.history.recent_names if by_name.get(name) == last)
        return same >= 2

    def exercise_weight(self, exercise: Exercise, context: SelectionContext) -> float:
        weight = 1.0
        weight *= _difficulty_weight(exercise.difficulty, context)

        if exercise.name in context.recent_names:
            recent_index = context.recent_names.index(exercise.name)
            penalty = 1.0 - (0.8 - recent_index * 0.1)
            weight *= max(penalty, 0.1)

        weight *= _category_weight(exercise.category, context)
        weight *= _time_weight(exercise, context)
        weight *= _special_context_weight(exercise, context)

        if exercise.category == WorkoutCategory.CARDIO and any(k in exercise.name for k in _FUN_KEYWORDS):
            weight *= 1.3

        weight *= _duration_weight(exercise, context)
        return max(weight, MIN_WEIGHT)

    def _weighted_choice(self, pool: List[Tuple[Exercise, float]]) -> Exercise:
        if not pool:
            return FALLBACK_EXERCISE
        total = sum(w for _, w in pool)
        point = self.rng.random() * total
        running = 0.0
        for exercise, weight in pool:
            running += weight
            if running >= point:
                return exercise
        return pool[0][0]

    def _remember(self, exercise: Exercise, now: datetime) -> None:
        names = [exercise.name] + self.history.recent_names
        self.history.recent_names = names[: settings.recent_history_size]
        self.history.last_category = exercise.category
        self.history.last_selection_ts = now.timestamp()
        self.repository.save(KEY_RANDOM_HISTORY, self.history.to_dict())


def _difficulty_weight(difficulty: DifficultyLevel, context: SelectionContext) -> float:
    target = context.user_difficulty
    if difficulty == target:
        return 1.0
    if difficulty.is_one_level_easier_than(target):
        return 0.4
    if difficulty.is_one_level_harder_than(target):
        return 0.6 if context.is_weekend else 0.3
    return 0.1


def _category_weight(category: WorkoutCategory, context: SelectionContext) -> float:
    weight = 1.0
    if context.needs_category_variety and category != context.last_category:
        weight *= 1.5
    if category == context.last_category:
        weight *= 0.8
    return weight


def _time_weight(exercise: Exercise, context: SelectionContext) -> float:
    weight = 1.0
    category = exercise.category
    calming = {WorkoutCategory.YOGA, WorkoutCategory.BREATHING}

    if context.is_morning:
        if category in calming:
            weight *= 1.4
        elif category == WorkoutCategory.CARDIO:
            weight *= 1.2
        elif category == WorkoutCategory.HIIT:
            weight *= 0.7
    elif context.is_evening:
        if category in calming:
            weight *= 1.3
        elif category == WorkoutCategory.FLEXIBILITY:
            weight *= 1.2
        elif category == WorkoutCategory.HIIT and context.hour_of_day > 20:
            weight *= 0.6

    if context.is_weekend:
        if any(k in exercise.name for k in _WEEKEND_FUN_KEYWORDS):
            weight *= 1.3
        if exercise.estimated_duration_minutes > 15:
            weight *= 1.2
    return weight


def _special_context_weight(exercise: Exercise, context: SelectionContext) -> float:
    weight = 1.0
    if context.is_first_selection:
        if exercise.difficulty == DifficultyLevel.BEGINNER:
            weight *= 1.2
        elif exercise.difficulty == DifficultyLevel.ADVANCED:
            weight *= 0.8

    if context.is_quick_session:
        if exercise.estimated_duration_minutes <= 8:
            weight *= 1.3
        elif exercise.estimated_duration_minutes > 15:
            weight *= 0.7

    # Mondays and late evenings lean towards breathing work.
    if (context.weekday == 0 or context.hour_of_day > 21) and exercise.category == WorkoutCategory.BREATHING:
        weight *= 1.4
    return weight


def _duration_weight(exercise: Exercise, context: SelectionContext) -> float:
    duration = exercise.estimated_duration_minutes
    if 5 <= duration <= 12:
        return 1.2
    if duration <= 4:
        return 0.9
    if duration > 20:
        return 1.0 if context.is_weekend else 0.7
    return 1.0
