"""Candidate selection from the exercise catalog."""

import logging
import random
from collections.abc import Iterable, Sequence
from typing import TypeVar

from ..errors import DomainEmptyError
from ..models.exercises import FOCUS_AREA_MUSCLES, ExerciseTemplate, FocusArea

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffled(items: Iterable[T], rng: random.Random | None = None) -> list[T]:
    """Return a uniformly shuffled copy of items (Fisher-Yates)."""
    result = list(items)
    (rng or random).shuffle(result)
    return result


def focus_muscles(focus_areas: Iterable[FocusArea | str]) -> set[str]:
    """Expand focus areas into the muscle tags they cover.

    Unknown focus tags contribute nothing.
    """
    muscles: set[str] = set()
    for area in focus_areas:
        try:
            muscles.update(FOCUS_AREA_MUSCLES[FocusArea(area)])
        except ValueError:
            continue
    return muscles


def filter_candidates(
    catalog: Sequence[ExerciseTemplate],
    max_difficulty: int,
    focus_areas: Iterable[FocusArea | str] | None = None,
    rng: random.Random | None = None,
) -> list[ExerciseTemplate]:
    """Filter the catalog to eligible exercises and rank them.

    Keeps templates at or below max_difficulty that carry a name, a
    category and at least one target muscle. With focus areas, exercises
    hitting a focused muscle come first; each group is shuffled on its
    own. Without focus areas the whole list is shuffled. Templates with
    no difficulty rating are never eligible.

    Raises:
        DomainEmptyError: If no template survives filtering
    """
    eligible = [
        t for t in catalog if t.has_difficulty and t.difficulty <= max_difficulty
    ]
    if not eligible:
        logger.warning(
            "No catalog exercises at or below difficulty %s (catalog size %d)",
            max_difficulty,
            len(catalog),
        )
        raise DomainEmptyError(details={"max_difficulty": max_difficulty})

    valid = [t for t in eligible if t.is_valid]
    if not valid:
        logger.warning("All %d eligible catalog exercises are incomplete", len(eligible))
        raise DomainEmptyError(
            details={"max_difficulty": max_difficulty, "eligible": len(eligible)}
        )

    logger.debug(
        "Catalog filter: %d eligible, %d valid at difficulty <= %s",
        len(eligible),
        len(valid),
        max_difficulty,
    )

    targets = focus_muscles(focus_areas or [])
    if not targets:
        return shuffled(valid, rng)

    matching = [t for t in valid if targets.intersection(t.target_muscles)]
    others = [t for t in valid if not targets.intersection(t.target_muscles)]
    logger.debug("Focus ranking: %d matching, %d other", len(matching), len(others))

    return shuffled(matching, rng) + shuffled(others, rng)
