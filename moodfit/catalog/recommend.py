# -*- coding: utf-8 -*-
"""Exercise recommendation: mood dispatch table, weighted draws, mood workouts."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import settings
from .data import FALLBACK_EXERCISE, create_exercise, exercises_by_difficulty, load_catalog
from .media import generate_gif_name
from .models import DifficultyLevel, Exercise, MoodType, WorkoutCategory
from .moods import is_generally_good

logger = logging.getLogger(__name__)

# Weighted draw probabilities.
SECOND_COPY_PROBABILITY = 0.7
ONE_EASIER_PROBABILITY = 0.2
ONE_HARDER_PROBABILITY = 0.1


@dataclass(frozen=True)
class _MoodPick:
    name: str
    description: str
    instructions: str
    category: WorkoutCategory
    duration_minutes: int
    calories: int


# Two curated picks per mood: the lead (cardio/HIIT-leaning where the mood
# allows it) followed by a secondary.
MOOD_EXERCISES: Dict[MoodType, Tuple[_MoodPick, _MoodPick]] = {
    MoodType.HAPPY: (
        _MoodPick("Dance Cardio Party", "Ride the good mood with upbeat dancing",
                  "Dance to 3 upbeat songs, keep moving between tracks", WorkoutCategory.CARDIO, 10, 110),
        _MoodPick("Jump Squats", "Explosive squats to burn extra energy",
                  "Squat down, jump up, land softly. 3 sets of 12", WorkoutCategory.STRENGTH, 8, 90),
    ),
    MoodType.NEUTRAL: (
        _MoodPick("Brisk Marching", "Steady cardio to wake the body up",
                  "March briskly with arm swings for 1 minute, repeat 5 times", WorkoutCategory.CARDIO, 8, 60),
        _MoodPick("Full Body Stretch", "Balanced mobility from neck to ankles",
                  "Hold each stretch 20 seconds, move top to bottom", WorkoutCategory.FLEXIBILITY, 6, 30),
    ),
    MoodType.FRUSTRATED: (
        _MoodPick("Shadow Boxing Intervals", "Punch out the frustration safely",
                  "30 seconds fast combos, 15 seconds rest. 8 rounds", WorkoutCategory.HIIT, 10, 130),
        _MoodPick("Power Push-Ups", "Channel tension into strength",
                  "Controlled push-ups, explosive on the way up. 3 sets of 10", WorkoutCategory.STRENGTH, 8, 80),
    ),
    MoodType.STRESSED: (
        _MoodPick("Gentle Yoga Flow", "Slow flow to release tension",
                  "Move through child's pose, cat-cow and forward fold with slow breaths", WorkoutCategory.YOGA, 10, 40),
        _MoodPick("Calming Box Breathing", "Four-count breathing to settle the mind",
                  "Inhale 4, hold 4, exhale 4, hold 4. Repeat for 5 minutes", WorkoutCategory.BREATHING, 5, 15),
    ),
}


def generate_mood_specific_exercises(mood: Optional[MoodType], difficulty: DifficultyLevel) -> List[Exercise]:
    """Return the two curated exercises for ``mood``.

    Pure table lookup; ``difficulty`` is only stamped onto the result.
    A missing mood is treated as Neutral.
    """
    picks = MOOD_EXERCISES[mood or MoodType.NEUTRAL]
    mood_key = (mood or MoodType.NEUTRAL).name.lower()
    return [
        create_exercise(
            pick.name,
            pick.description,
            pick.instructions,
            difficulty,
            pick.category,
            pick.duration_minutes,
            pick.calories,
            exercise_id=f"ex_mood_{mood_key}_{idx}",
            media_reference=generate_gif_name(pick.name),
            moods=(mood or MoodType.NEUTRAL,),
        )
        for idx, pick in enumerate(picks)
    ]


def filter_exercises_by_difficulty(
    target: DifficultyLevel,
    rng: random.Random,
    catalog: Optional[Sequence[Exercise]] = None,
) -> List[Exercise]:
    """Build the candidate multiset for a random draw around ``target``."""
    items = list(load_catalog() if catalog is None else catalog)
    filtered: List[Exercise] = []

    for exercise in items:
        difficulty = exercise.difficulty
        if difficulty == target:
            filtered.append(exercise)
            if rng.random() < SECOND_COPY_PROBABILITY:
                filtered.append(exercise)
        elif difficulty.is_one_level_easier_than(target):
            if rng.random() < ONE_EASIER_PROBABILITY:
                filtered.append(exercise)
        elif difficulty.is_one_level_harder_than(target):
            if rng.random() < ONE_HARDER_PROBABILITY:
                filtered.append(exercise)

    if not filtered:
        filtered = [e for e in items if e.difficulty == target]
    if not filtered:
        filtered = items
    return filtered


def select_random_exercise(
    target: DifficultyLevel,
    rng: random.Random,
    catalog: Optional[Sequence[Exercise]] = None,
) -> Exercise:
    candidates = filter_exercises_by_difficulty(target, rng, catalog)
    if not candidates:
        logger.warning("Empty catalog, using fallback exercise")
        return FALLBACK_EXERCISE
    return rng.choice(candidates)


def _available_for_difficulty(
    difficulty: DifficultyLevel,
    grouped: Dict[DifficultyLevel, List[Exercise]],
) -> List[Exercise]:
    primary = grouped.get(difficulty, [])
    # Primary level twice, plus the easier end of the neighbouring levels.
    available = list(primary) + list(primary)
    if difficulty == DifficultyLevel.BEGINNER:
        available += grouped.get(DifficultyLevel.INTERMEDIATE, [])[:4]
    elif difficulty == DifficultyLevel.INTERMEDIATE:
        available += grouped.get(DifficultyLevel.BEGINNER, [])[:3]
        available += grouped.get(DifficultyLevel.ADVANCED, [])[:3]
    else:
        available += grouped.get(DifficultyLevel.INTERMEDIATE, [])
    return available


def _filter_by_mood(exercises: List[Exercise], mood: MoodType, min_count: int) -> List[Exercise]:
    filtered = [e for e in exercises if e.is_suitable_for_mood(mood)]
    if len(filtered) < min_count:
        for exercise in exercises:
            if exercise not in filtered and is_generally_good(exercise.name, exercise.difficulty):
                filtered.append(exercise)
                if len(filtered) >= min_count * 2:
                    break
    return filtered


def determine_workout_size(difficulty: DifficultyLevel, rng: random.Random) -> int:
    low = settings.min_exercises_per_workout
    high = settings.max_exercises_per_workout
    base = rng.randint(low, high)
    if difficulty == DifficultyLevel.BEGINNER:
        return max(low, base - 1)
    if difficulty == DifficultyLevel.ADVANCED:
        return min(high, base + 1)
    return base


def _ensure_variety(available: List[Exercise], target_count: int, rng: random.Random) -> List[Exercise]:
    selected: List[Exercise] = []
    used_categories: set[WorkoutCategory] = set()

    for exercise in available:
        if len(selected) >= target_count:
            break
        if exercise.category not in used_categories:
            selected.append(exercise)
            used_categories.add(exercise.category)

    for exercise in available:
        if len(selected) >= target_count:
            break
        if exercise not in selected:
            selected.append(exercise)

    rng.shuffle(selected)
    return selected


def recommend_workout(
    mood: Optional[MoodType],
    difficulty: DifficultyLevel,
    rng: random.Random,
    catalog: Optional[Sequence[Exercise]] = None,
) -> List[Exercise]:
    """Assemble a varied multi-exercise workout for a mood."""
    mood = mood or MoodType.NEUTRAL
    items = list(load_catalog() if catalog is None else catalog)
    grouped = exercises_by_difficulty(items)

    available = _available_for_difficulty(difficulty, grouped)
    pool = _filter_by_mood(available, mood, settings.min_exercises_per_workout)
    if not pool:
        logger.warning("No %s exercises for %s, using full catalog", mood.value, difficulty.value)
        pool = items
    if not pool:
        return [FALLBACK_EXERCISE]

    size = determine_workout_size(difficulty, rng)
    pool = list(pool)
    rng.shuffle(pool)
    workout = _ensure_variety(pool, size, rng)
    logger.info(
        "Generated %d exercises for %s mood (%s) from %d candidates",
        len(workout), mood.value, difficulty.value, len(pool),
    )
    return workout
