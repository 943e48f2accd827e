"""Utilities for exercise name normalization and matching."""

import re
from difflib import SequenceMatcher

from ..models.exercises import Exercise, ExerciseCategory


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name for comparison.

    Converts to lowercase, removes extra whitespace, and standardizes common variations.
    """
    # Lowercase and strip
    normalized = name.lower().strip()

    # Remove extra whitespace
    normalized = re.sub(r"\s+", " ", normalized)

    # Common abbreviation expansions
    abbreviations = {
        "bb": "barbell",
        "db": "dumbbell",
        "kb": "kettlebell",
        "ohp": "overhead press",
        "rdl": "romanian deadlift",
        "bss": "bulgarian split squat",
    }

    # Check if the entire name is an abbreviation
    if normalized in abbreviations:
        return abbreviations[normalized]

    # Replace abbreviations at word boundaries
    for abbrev, full in abbreviations.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)

    return normalized


def find_matching_exercise(
    name: str,
    exercises: list[Exercise],
    aliases: dict[str, list[str]] | None = None,
    threshold: float = 0.8,
) -> Exercise | None:
    """Find the catalog exercise a user most likely meant.

    Args:
        name: The exercise name as typed
        exercises: Catalog to search
        aliases: Extra names per catalog exercise name
        threshold: Minimum similarity ratio (0-1) to consider a match

    Returns:
        The best matching Exercise or None if no match above threshold
    """
    aliases = aliases or {}
    normalized_name = normalize_exercise_name(name)

    best_match: Exercise | None = None
    best_score = 0.0

    for exercise in exercises:
        candidates = [exercise.name, *aliases.get(exercise.name, [])]
        for candidate in candidates:
            normalized_candidate = normalize_exercise_name(candidate)
            if normalized_candidate == normalized_name:
                return exercise

            score = SequenceMatcher(None, normalized_name, normalized_candidate).ratio()
            if score > best_score:
                best_score = score
                best_match = exercise

    if best_score >= threshold:
        return best_match

    return None


def group_by_category(
    exercises: list[Exercise],
) -> dict[ExerciseCategory, list[Exercise]]:
    """Group exercises by category, every category present as a key."""
    result: dict[ExerciseCategory, list[Exercise]] = {category: [] for category in ExerciseCategory}

    for exercise in exercises:
        result[exercise.category].append(exercise)

    return result
