# -*- coding: utf-8 -*-
"""
动作库模块

Static exercise catalog and mood / difficulty based recommendation.
"""

from .data import FALLBACK_EXERCISE, exercises_by_difficulty, find_by_name, load_catalog
from .media import generate_gif_name, media_reference_for
from .models import DifficultyLevel, Exercise, MoodType, WorkoutCategory
from .recommend import (
    filter_exercises_by_difficulty,
    generate_mood_specific_exercises,
    recommend_workout,
    select_random_exercise,
)
from .smart import SmartSelector

__all__ = [
    'FALLBACK_EXERCISE',
    'exercises_by_difficulty',
    'find_by_name',
    'load_catalog',
    'generate_gif_name',
    'media_reference_for',
    'DifficultyLevel',
    'Exercise',
    'MoodType',
    'WorkoutCategory',
    'filter_exercises_by_difficulty',
    'generate_mood_specific_exercises',
    'recommend_workout',
    'select_random_exercise',
    'SmartSelector',
]
