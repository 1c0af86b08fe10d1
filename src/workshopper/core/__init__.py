"""Core: catálogo, progreso y ciclo de vida de los ejercicios."""

from .catalog import CatalogEntry, ExerciseCatalog
from .errors import (
    ConfigurationError,
    ExecutionError,
    ResolutionError,
    UsageError,
    WorkshopError,
)
from .persistence import ProgressStore
from .state import ProgressState

__all__ = [
    "CatalogEntry",
    "ExerciseCatalog",
    "ConfigurationError",
    "ExecutionError",
    "ResolutionError",
    "UsageError",
    "WorkshopError",
    "ProgressStore",
    "ProgressState",
]
