# -*- coding: utf-8 -*-
"""Catalog domain: enums and the immutable Exercise model."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class DifficultyLevel(str, Enum):
    """Exercise difficulty, ordered by level."""
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def level(self) -> int:
        return _DIFFICULTY_LEVELS[self]

    def is_one_level_easier_than(self, target: "DifficultyLevel") -> bool:
        return self.level == target.level - 1

    def is_one_level_harder_than(self, target: "DifficultyLevel") -> bool:
        return self.level == target.level + 1

    @classmethod
    def lookup(cls, value: Optional[str]) -> "DifficultyLevel | None":
        key = (value or "").strip().lower()
        for member in cls:
            if key in {member.value.lower(), member.name.lower()}:
                return member
        return None

    @classmethod
    def parse(cls, value: Optional[str], default: "DifficultyLevel | None" = None) -> "DifficultyLevel":
        return cls.lookup(value) or default or cls.BEGINNER


_DIFFICULTY_LEVELS = {
    DifficultyLevel.BEGINNER: 1,
    DifficultyLevel.INTERMEDIATE: 2,
    DifficultyLevel.ADVANCED: 3,
}


class WorkoutCategory(str, Enum):
    """Exercise category"""
    CARDIO = "Cardio"
    STRENGTH = "Strength"
    FLEXIBILITY = "Flexibility"
    BREATHING = "Breathing"
    YOGA = "Yoga"
    HIIT = "HIIT"

    @property
    def display_name(self) -> str:
        return self.value


class MoodType(str, Enum):
    """Self-reported mood at workout-selection time."""
    HAPPY = "Happy"
    NEUTRAL = "Neutral"
    FRUSTRATED = "Frustrated"
    STRESSED = "Stressed"

    @property
    def display_name(self) -> str:
        return self.value

    @property
    def emoji(self) -> str:
        return _MOOD_STYLE[self][0]

    @property
    def color_hex(self) -> str:
        return _MOOD_STYLE[self][1]

    @classmethod
    def parse(cls, value: Optional[str]) -> "MoodType":
        """Total: anything unrecognised is Neutral."""
        key = (value or "").strip().lower()
        for member in cls:
            if key in {member.value.lower(), member.name.lower()}:
                return member
        return cls.NEUTRAL


_MOOD_STYLE = {
    MoodType.HAPPY: ("😊", "#10B981"),
    MoodType.NEUTRAL: ("😑", "#6B7280"),
    MoodType.FRUSTRATED: ("😤", "#F59E0B"),
    MoodType.STRESSED: ("😩", "#EF4444"),
}


class Exercise(BaseModel):
    model_config = ConfigDict(frozen=True)

    exercise_id: str
    name: str
    description: str = ""
    instructions: str = ""
    difficulty: DifficultyLevel
    category: WorkoutCategory
    estimated_duration_minutes: int = Field(0, ge=0)
    estimated_calories: int = Field(0, ge=0)
    media_reference: Optional[str] = None
    suitable_for_moods: Tuple[MoodType, ...] = ()
    target_muscles: Tuple[str, ...] = ()

    def is_suitable_for_mood(self, mood: MoodType) -> bool:
        return mood in self.suitable_for_moods


class MoodInfo(BaseModel):
    mood: MoodType
    display_name: str
    emoji: str
    color_hex: str


class CatalogResponse(BaseModel):
    difficulty: Optional[DifficultyLevel] = None
    count: int
    exercises: list[Exercise]
