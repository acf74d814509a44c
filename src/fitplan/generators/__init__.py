"""Rule-based workout plan generation."""

from .difficulty import resolve_difficulty
from .exercise_pool import filter_candidates, shuffled
from .plan_generator import assemble_plan
from .training_params import TrainingParams, get_training_params

__all__ = [
    "TrainingParams",
    "assemble_plan",
    "filter_candidates",
    "get_training_params",
    "resolve_difficulty",
    "shuffled",
]
