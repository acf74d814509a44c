"""Utilities for exercise name normalization and matching."""

import re
from collections.abc import Sequence
from difflib import SequenceMatcher
from typing import Protocol, TypeVar


class Named(Protocol):
    name: str


N = TypeVar("N", bound=Named)

ABBREVIATIONS = {
    "bb": "barbell",
    "db": "dumbbell",
    "kb": "kettlebell",
    "ohp": "overhead press",
    "rdl": "romanian deadlift",
    "bss": "bulgarian split squat",
}


def normalize_exercise_name(name: str) -> str:
    """Normalize an exercise name for comparison.

    Converts to lowercase, removes extra whitespace and hyphens, and
    expands common abbreviations.
    """
    normalized = name.lower().strip()
    normalized = normalized.replace("-", " ")
    normalized = re.sub(r"\s+", " ", normalized)

    if normalized in ABBREVIATIONS:
        return ABBREVIATIONS[normalized]

    for abbrev, full in ABBREVIATIONS.items():
        normalized = re.sub(rf"\b{abbrev}\b", full, normalized)

    return normalized


def find_matching_exercise(
    name: str,
    exercises: Sequence[N],
    threshold: float = 0.8,
) -> N | None:
    """Find the best matching exercise by name.

    Args:
        name: The exercise name to match
        exercises: Catalog templates or plan exercises to search
        threshold: Minimum similarity ratio (0-1) to consider a match

    Returns:
        The best match or None if nothing scores above the threshold
    """
    normalized_name = normalize_exercise_name(name)

    best_match = None
    best_score = 0.0

    for exercise in exercises:
        candidate = normalize_exercise_name(exercise.name)
        if candidate == normalized_name:
            return exercise

        score = SequenceMatcher(None, normalized_name, candidate).ratio()
        if score > best_score:
            best_score = score
            best_match = exercise

    if best_score >= threshold:
        return best_match

    return None
