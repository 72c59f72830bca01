# -*- coding: utf-8 -*-
"""
Static exercise catalog

Twelve hand-authored exercises per difficulty level. Loaded once and treated
as read-only.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from .media import generate_gif_name, media_reference_for
from .models import DifficultyLevel, Exercise, WorkoutCategory
from .moods import suitable_moods

BEG = DifficultyLevel.BEGINNER
INT = DifficultyLevel.INTERMEDIATE
ADV = DifficultyLevel.ADVANCED

C = WorkoutCategory

# name, description, instructions, difficulty, category, minutes, kcal
_CATALOG_ROWS: Tuple[Tuple[str, str, str, DifficultyLevel, WorkoutCategory, int, int], ...] = (
    # Beginner
    ("Marching in Place", "Simple stationary march to get your heart pumping",
     "March with high knees for 30 seconds, rest 10 seconds, repeat 5 times", BEG, C.CARDIO, 5, 50),
    ("Wall Push-Ups", "Modified push-ups against a wall for beginners",
     "Stand arm's length from wall, push and return. 3 sets of 10 reps", BEG, C.STRENGTH, 8, 60),
    ("Seated Leg Lifts", "Cardio workout you can do from a chair",
     "Lift alternating legs while seated. 2 sets of 20 per leg", BEG, C.FLEXIBILITY, 6, 40),
    ("Chair Squats", "Build leg strength using a chair for support",
     "Lower down to chair, hover briefly, stand up. 2 sets of 12", BEG, C.STRENGTH, 8, 70),
    ("Wall Sits", "Static leg strengthening exercise",
     "Back against wall, slide down to sitting position. Hold for 30 seconds", BEG, C.STRENGTH, 5, 50),
    ("Modified Planks", "Core strengthening on knees",
     "Plank position on knees. Hold for 20 seconds, repeat 3 times", BEG, C.STRENGTH, 6, 40),
    ("Neck Rolls", "Gentle neck and shoulder mobility",
     "Slow, controlled neck circles. 5 each direction", BEG, C.FLEXIBILITY, 5, 30),
    ("Shoulder Shrugs", "Release shoulder tension",
     "Lift shoulders to ears, hold 5 seconds, release. Repeat 10 times", BEG, C.FLEXIBILITY, 4, 25),
    ("Box Breathing", "Simple 4-count breathing pattern",
     "Inhale 4, hold 4, exhale 4, hold 4. Repeat for 5 minutes", BEG, C.BREATHING, 5, 15),
    ("Belly Breathing", "Deep diaphragmatic breathing",
     "Hand on chest, hand on belly. Breathe so only belly hand moves", BEG, C.BREATHING, 6, 20),
    ("Child's Pose", "Restorative rest and gentle stretch",
     "Kneel, sit back on heels, fold forward. Rest and breathe for 1-2 minutes", BEG, C.YOGA, 5, 25),
    ("Mountain Pose", "Foundation of all standing poses",
     "Stand tall, feet together, arms at sides. Focus on alignment for 1 minute", BEG, C.YOGA, 4, 20),
    # Intermediate
    ("Jumping Jacks", "Classic full-body cardio movement",
     "Jump feet apart while raising arms overhead. 4 sets of 25 reps", INT, C.CARDIO, 10, 100),
    ("Step-Ups", "Use stairs or a sturdy platform for cardio",
     "Step up and down on platform. 3 sets of 15 per leg", INT, C.CARDIO, 12, 120),
    ("Dancing", "Put on your favorite song and dance!",
     "Dance freely to 3-4 songs. Let the music move you!", INT, C.CARDIO, 15, 140),
    ("Push-Ups", "Classic upper body strength builder",
     "Full push-ups maintaining straight line. 3 sets of 10-15 reps", INT, C.STRENGTH, 10, 90),
    ("Bodyweight Squats", "Fundamental lower body exercise",
     "Deep squats with proper form. 3 sets of 15 reps", INT, C.STRENGTH, 12, 100),
    ("Lunges", "Single-leg strength and balance",
     "Alternating forward lunges. 2 sets of 12 per leg", INT, C.STRENGTH, 10, 80),
    ("Classic Tabata", "High-intensity 4-minute protocol",
     "20 seconds max effort, 10 seconds rest. 8 rounds of chosen exercise", INT, C.HIIT, 15, 150),
    ("EMOM Challenge", "Every minute on the minute",
     "Set number of reps each minute for 10 minutes. Rest remaining time", INT, C.HIIT, 18, 180),
    ("Sun Salutation A", "Dynamic flowing sequence",
     "Complete sun salutation sequence. Repeat 5 rounds with breath", INT, C.YOGA, 12, 80),
    ("Warrior II Flow", "Standing strength and focus",
     "Warrior II to extended side angle. Hold 45 seconds each side", INT, C.YOGA, 10, 60),
    ("Cat-Cow Stretches", "Spinal mobility and flexibility",
     "On hands and knees, arch and round spine slowly. 15 reps", INT, C.FLEXIBILITY, 8, 40),
    ("Hip Flexor Stretch", "Open tight hip flexors",
     "Kneeling lunge position, lean forward gently. Hold 30 seconds each side", INT, C.FLEXIBILITY, 10, 35),
    # Advanced
    ("Burpees", "Ultimate full-body cardio challenge",
     "Squat, jump back to plank, push-up, jump forward, jump up. 3 sets of 10", ADV, C.CARDIO, 15, 200),
    ("Mountain Climbers", "High-intensity core and cardio combo",
     "Plank position, alternate bringing knees to chest rapidly. 4 sets of 30 seconds", ADV, C.CARDIO, 12, 150),
    ("Single-Arm Push-Ups", "Ultimate upper body challenge",
     "Push-ups with one arm behind back. Work up to 5 per arm", ADV, C.STRENGTH, 15, 180),
    ("Pistol Squats", "Single-leg squat mastery",
     "Single-leg squat to full depth. Assisted or full. 3 sets of 5 per leg", ADV, C.STRENGTH, 18, 160),
    ("Death by Burpees", "Progressive intensity challenge",
     "Minute 1: 1 burpee, Minute 2: 2 burpees, etc. Go until failure", ADV, C.HIIT, 20, 250),
    ("Fight Gone Bad", "Mixed modal high intensity",
     "5 exercises, 1 minute each, 1 minute rest. Repeat 3 rounds", ADV, C.HIIT, 25, 300),
    ("Crow Pose", "Arm balance and core strength",
     "Balance on hands with knees on upper arms. Work up to 30 seconds", ADV, C.YOGA, 15, 100),
    ("Headstand", "Inversion and full-body strength",
     "Supported headstand against wall. Build up to 2-3 minutes", ADV, C.YOGA, 18, 120),
    ("Full Splits", "Advanced hip and leg flexibility",
     "Work toward front or side splits. Hold comfortable edge for 1-2 minutes", ADV, C.FLEXIBILITY, 15, 50),
    ("Backbend Flow", "Spinal extension and chest opening",
     "Bridge to wheel pose progression. Hold for 30 seconds each", ADV, C.FLEXIBILITY, 12, 60),
    ("Breath of Fire", "Energizing rapid breathing",
     "Rapid, shallow breathing through nose. 30 breaths, 3 rounds", ADV, C.BREATHING, 12, 50),
    ("Wim Hof Method", "Power breathing technique",
     "30 deep breaths, hold breath after exhale, repeat 3 rounds", ADV, C.BREATHING, 15, 60),
)


def create_exercise(
    name: str,
    description: str,
    instructions: str,
    difficulty: DifficultyLevel,
    category: WorkoutCategory,
    duration: int,
    calories: int,
    *,
    exercise_id: Optional[str] = None,
    media_reference: Optional[str] = None,
    moods: Optional[Sequence] = None,
) -> Exercise:
    return Exercise(
        exercise_id=exercise_id or generate_gif_name(name).replace("gif_", "ex_", 1),
        name=name,
        description=description,
        instructions=instructions,
        difficulty=difficulty,
        category=category,
        estimated_duration_minutes=duration,
        estimated_calories=calories,
        media_reference=media_reference or media_reference_for(name),
        suitable_for_moods=tuple(moods) if moods is not None else suitable_moods(name, category),
    )


FALLBACK_EXERCISE = create_exercise(
    "Jumping Jacks",
    "Classic full-body cardio exercise",
    "Jump feet apart while raising arms overhead. Do for 30 seconds, rest 10 seconds, repeat 5 times.",
    DifficultyLevel.BEGINNER,
    WorkoutCategory.CARDIO,
    5,
    50,
    exercise_id="ex_fallback_jumping_jacks",
)


@lru_cache(maxsize=1)
def load_catalog() -> Tuple[Exercise, ...]:
    return tuple(create_exercise(*row) for row in _CATALOG_ROWS)


def exercises_by_difficulty(catalog: Optional[Sequence[Exercise]] = None) -> Dict[DifficultyLevel, List[Exercise]]:
    items = load_catalog() if catalog is None else catalog
    grouped: Dict[DifficultyLevel, List[Exercise]] = {d: [] for d in DifficultyLevel}
    for exercise in items:
        grouped[exercise.difficulty].append(exercise)
    return grouped


def find_by_name(name: str, catalog: Optional[Sequence[Exercise]] = None) -> Optional[Exercise]:
    items = load_catalog() if catalog is None else catalog
    lowered = (name or "").strip().lower()
    for exercise in items:
        if exercise.name.lower() == lowered:
            return exercise
    return None


def find_by_id(exercise_id: str, catalog: Optional[Sequence[Exercise]] = None) -> Optional[Exercise]:
    items = load_catalog() if catalog is None else catalog
    for exercise in items:
        if exercise.exercise_id == exercise_id:
            return exercise
    return None
