# -*- coding: utf-8 -*-
"""Media references (animated demo slugs) for catalog exercises."""

from __future__ import annotations

import logging
import re
from typing import Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_REFERENCE = "gif_default"

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")
_REPEATED_UNDERSCORE = re.compile(r"_+")

# Hand-curated names for bundled media; anything else gets a generated slug.
EXERCISE_MEDIA_MAP: Dict[str, str] = {
    # Beginner
    "Marching in Place": "gif_marching_in_place",
    "Wall Push-Ups": "gif_wall_pushups",
    "Seated Leg Lifts": "gif_seated_leg_lifts",
    "Chair Squats": "gif_chair_squats",
    "Wall Sits": "gif_wall_sits",
    "Modified Planks": "gif_modified_planks",
    "Neck Rolls": "gif_neck_rolls",
    "Shoulder Shrugs": "gif_shoulder_shrugs",
    "Box Breathing": "gif_box_breathing",
    "Belly Breathing": "gif_belly_breathing",
    "Child's Pose": "gif_childs_pose",
    "Mountain Pose": "gif_mountain_pose",
    # Intermediate
    "Jumping Jacks": "gif_jumping_jacks",
    "Step-Ups": "gif_stepups",
    "Dancing": "gif_dancing",
    "Push-Ups": "gif_pushups",
    "Bodyweight Squats": "gif_bodyweight_squats",
    "Lunges": "gif_lunges",
    "Classic Tabata": "gif_classic_tabata",
    "EMOM Challenge": "gif_emom_challenge",
    "Sun Salutation A": "gif_sun_salutation_a",
    "Warrior II Flow": "gif_warrior_ii_flow",
    "Cat-Cow Stretches": "gif_catcow_stretches",
    "Hip Flexor Stretch": "gif_hip_flexor_stretch",
    # Advanced
    "Burpees": "gif_burpees",
    "Mountain Climbers": "gif_mountain_climbers",
    "Single-Arm Push-Ups": "gif_singlearm_pushups",
    "Pistol Squats": "gif_pistol_squats",
    "Death by Burpees": "gif_death_by_burpees",
    "Fight Gone Bad": "gif_fight_gone_bad",
    "Crow Pose": "gif_crow_pose",
    "Headstand": "gif_headstand",
    "Full Splits": "gif_full_splits",
    "Backbend Flow": "gif_backbend_flow",
    "Breath of Fire": "gif_breath_of_fire",
    "Wim Hof Method": "gif_wim_hof_method",
}


def generate_gif_name(exercise_name: Optional[str]) -> str:
    """Derive a media slug from a display name.

    Lower-cases, drops anything outside ``[a-z0-9\\s]``, turns whitespace runs
    into a single underscore and prefixes ``gif_``. Edge underscores are
    stripped so the slug never ends in ``_`` or doubles the prefix separator.
    """
    if exercise_name is None:
        return DEFAULT_MEDIA_REFERENCE
    slug = _NON_SLUG_CHARS.sub("", exercise_name.lower())
    slug = _WHITESPACE.sub("_", slug.strip())
    slug = _REPEATED_UNDERSCORE.sub("_", slug).strip("_")
    if not slug:
        return DEFAULT_MEDIA_REFERENCE
    return f"gif_{slug}"


def media_reference_for(exercise_name: str) -> str:
    mapped = EXERCISE_MEDIA_MAP.get(exercise_name)
    if mapped:
        return mapped
    generated = generate_gif_name(exercise_name)
    logger.debug("No media mapping for %r, using generated %s", exercise_name, generated)
    return generated
