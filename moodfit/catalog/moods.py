# -*- coding: utf-8 -*-
"""Mood profiles: which categories and name keywords suit each mood."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple

from .models import DifficultyLevel, MoodType, WorkoutCategory


@dataclass(frozen=True)
class MoodProfile:
    """Suitability rule for one mood"""
    categories: FrozenSet[WorkoutCategory]
    keywords: Tuple[str, ...]
    summary: str


MOOD_PROFILES: Dict[MoodType, MoodProfile] = {
    MoodType.HAPPY: MoodProfile(
        categories=frozenset({WorkoutCategory.CARDIO, WorkoutCategory.HIIT}),
        keywords=("jumping", "dance", "tabata", "emom"),
        summary="High-energy, fun movement",
    ),
    MoodType.NEUTRAL: MoodProfile(
        categories=frozenset({WorkoutCategory.STRENGTH, WorkoutCategory.CARDIO, WorkoutCategory.FLEXIBILITY}),
        keywords=("squat", "push", "stretch"),
        summary="Balanced work across categories",
    ),
    MoodType.FRUSTRATED: MoodProfile(
        categories=frozenset({WorkoutCategory.HIIT, WorkoutCategory.STRENGTH}),
        keywords=("burpee", "mountain", "fight", "death", "push-up"),
        summary="High-intensity, powerful efforts",
    ),
    MoodType.STRESSED: MoodProfile(
        categories=frozenset({WorkoutCategory.YOGA, WorkoutCategory.BREATHING, WorkoutCategory.FLEXIBILITY}),
        keywords=("breathing", "child", "stretch", "yoga"),
        summary="Calming, restorative practice",
    ),
}

# Names that are too specialised to pad a workout with.
_GENERAL_EXCLUDED_KEYWORDS = ("single-arm", "pistol", "death", "fight")


def matches_mood(name: str, category: WorkoutCategory, mood: MoodType) -> bool:
    profile = MOOD_PROFILES.get(mood)
    if profile is None:
        return True
    lowered = name.lower()
    return category in profile.categories or any(k in lowered for k in profile.keywords)


def suitable_moods(name: str, category: WorkoutCategory) -> Tuple[MoodType, ...]:
    return tuple(m for m in MoodType if matches_mood(name, category, m))


def is_generally_good(name: str, difficulty: DifficultyLevel) -> bool:
    lowered = name.lower()
    if any(k in lowered for k in _GENERAL_EXCLUDED_KEYWORDS):
        return False
    return difficulty != DifficultyLevel.ADVANCED
