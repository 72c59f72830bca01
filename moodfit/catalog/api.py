# -*- coding: utf-8 -*-
"""Catalog and recommendation endpoints."""

from __future__ import annotations

import random
from datetime import datetime
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..deps import get_clock, get_repository, get_rng
from ..progress.streaks import local_time
from ..storage import KeyValueRepository
from .data import exercises_by_difficulty, load_catalog
from .models import CatalogResponse, DifficultyLevel, Exercise, MoodInfo, MoodType
from .recommend import generate_mood_specific_exercises, recommend_workout, select_random_exercise
from .smart import SmartSelector

router = APIRouter(prefix="/api/catalog", tags=["Catalog"])
recommendations_router = APIRouter(prefix="/api/recommendations", tags=["Recommendations"])


class WorkoutRecommendation(BaseModel):
    mood: MoodType
    difficulty: DifficultyLevel
    count: int
    total_minutes: int
    total_calories: int
    exercises: List[Exercise]


def _strict_difficulty(value: str) -> DifficultyLevel:
    level = DifficultyLevel.lookup(value)
    if level is not None:
        return level
    raise HTTPException(status_code=400, detail=f"Unknown difficulty: {value}")


def _recommendation(mood: MoodType, difficulty: DifficultyLevel, exercises: List[Exercise]) -> WorkoutRecommendation:
    return WorkoutRecommendation(
        mood=mood,
        difficulty=difficulty,
        count=len(exercises),
        total_minutes=sum(e.estimated_duration_minutes for e in exercises),
        total_calories=sum(e.estimated_calories for e in exercises),
        exercises=exercises,
    )


@router.get("", response_model=CatalogResponse, summary="Full exercise catalog")
def list_catalog():
    items = list(load_catalog())
    return CatalogResponse(difficulty=None, count=len(items), exercises=items)


@router.get("/moods", response_model=List[MoodInfo], summary="Selectable moods")
def list_moods():
    return [
        MoodInfo(mood=m, display_name=m.display_name, emoji=m.emoji, color_hex=m.color_hex)
        for m in MoodType
    ]


@router.get("/{difficulty}", response_model=CatalogResponse, summary="Catalog for one difficulty level")
def list_catalog_by_difficulty(difficulty: str):
    level = _strict_difficulty(difficulty)
    items = exercises_by_difficulty()[level]
    return CatalogResponse(difficulty=level, count=len(items), exercises=items)


@recommendations_router.get(
    "/mood/{mood}",
    response_model=WorkoutRecommendation,
    summary="The two curated exercises for a mood",
)
def mood_exercises(mood: str, difficulty: Optional[str] = Query(default=None)):
    mood_type = MoodType.parse(mood)
    level = DifficultyLevel.parse(difficulty)
    return _recommendation(mood_type, level, generate_mood_specific_exercises(mood_type, level))


@recommendations_router.get(
    "/workout/{mood}",
    response_model=WorkoutRecommendation,
    summary="A varied multi-exercise workout for a mood",
)
def mood_workout(
    mood: str,
    difficulty: Optional[str] = Query(default=None),
    rng: random.Random = Depends(get_rng),
):
    mood_type = MoodType.parse(mood)
    level = DifficultyLevel.parse(difficulty)
    return _recommendation(mood_type, level, recommend_workout(mood_type, level, rng))


@recommendations_router.get("/random", response_model=Exercise, summary="One random exercise near a difficulty")
def random_exercise(
    difficulty: Optional[str] = Query(default=None),
    smart: bool = Query(default=False, description="Context-aware pick with remembered history"),
    rng: random.Random = Depends(get_rng),
    repository: KeyValueRepository = Depends(get_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    level = DifficultyLevel.parse(difficulty)
    if smart:
        return SmartSelector(repository, rng=rng).select(level, local_time(clock()))
    return select_random_exercise(level, rng)
