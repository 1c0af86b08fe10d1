"""Errores del ciclo de vida de los ejercicios."""

from __future__ import annotations


class WorkshopError(Exception):
    """Error que termina la invocación actual con estado distinto de cero."""

    exit_code = 1


class ConfigurationError(WorkshopError):
    """Taller o ejercicio mal configurado (catálogo, directorio, entry file)."""


class UsageError(WorkshopError):
    """Comando invocado sin lo que necesita (ejercicio activo, archivo)."""


class ResolutionError(WorkshopError):
    """El nombre no coincide con ningún ejercicio del catálogo."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No such exercise: {name}")
        self.name = name


class ExecutionError(WorkshopError):
    """Un hook del ejercicio falló; no es un suspenso."""
