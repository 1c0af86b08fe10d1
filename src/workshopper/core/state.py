"""Documentos de progreso del estudiante: ejercicio actual y completados."""

from __future__ import annotations

from typing import Any

from .persistence import ProgressStore

CURRENT_KEY = "current"
COMPLETED_KEY = "completed"


def as_completed_list(document: Any) -> list[str]:
    """Interpretar el documento `completed`; cualquier otra forma cuenta como vacío."""
    if not isinstance(document, list):
        return []
    return [name for name in document if isinstance(name, str)]


def mark_completed(document: Any, name: str) -> list[str]:
    """Añadir `name` al final si no estaba; idempotente y conserva el orden."""
    completed = as_completed_list(document)
    if name in completed:
        return completed
    return [*completed, name]


class ProgressState:
    """Acceso tipado a los documentos `current` y `completed`."""

    def __init__(self, store: ProgressStore) -> None:
        self.store = store

    @property
    def current(self) -> str | None:
        """Nombre del último ejercicio seleccionado."""
        value = self.store.read(CURRENT_KEY)
        return value if isinstance(value, str) and value else None

    def set_current(self, name: str) -> None:
        self.store.write(CURRENT_KEY, lambda _: name)

    @property
    def completed(self) -> list[str]:
        """Ejercicios completados en orden de finalización."""
        return as_completed_list(self.store.read(COMPLETED_KEY))

    def mark_completed(self, name: str) -> list[str]:
        """Registrar un ejercicio como completado y devolver la lista resultante."""
        return self.store.write(COMPLETED_KEY, lambda document: mark_completed(document, name))
