"""Labs: contrato de ejercicios e implementaciones incluidas."""

from .exercise import (
    Exercise,
    ExerciseError,
    get_exercise_class,
    load_exercise,
    register_exercise,
)
from . import evaluator  # noqa: F401  registra "output" y "pytest"

__all__ = [
    "Exercise",
    "ExerciseError",
    "get_exercise_class",
    "load_exercise",
    "register_exercise",
]
