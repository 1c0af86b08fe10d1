"""Catálogo ordenado de ejercicios."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator

import yaml

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

MENU_FILES = ("menu.yaml", "menu.yml", "menu.json")


def id_from_name(name: str) -> str:
    """Convertir un nombre de ejercicio en un identificador estable."""
    slug = re.sub(r"\s", "_", name.strip().lower())
    return re.sub(r"[^a-z0-9_]", "", slug)


def _normalize(name: str) -> str:
    return name.strip().casefold()


@dataclass(frozen=True)
class CatalogEntry:
    """Un ejercicio del catálogo."""

    name: str
    number: int  # posición 1-based
    id: str
    directory: Path


class ExerciseCatalog:
    """Lista de nombres de ejercicio, fija durante toda la ejecución."""

    def __init__(self, names: Iterable[str], exercises_dir: Path) -> None:
        """Inicializar con nombres en orden y el directorio de ejercicios."""
        self.exercises_dir = Path(exercises_dir)
        self._names: tuple[str, ...] = tuple(names)
        self._index: dict[str, int] = {}

        for position, name in enumerate(self._names):
            if not isinstance(name, str) or not name.strip():
                raise ConfigurationError(f"Invalid exercise name in catalog: {name!r}")
            key = _normalize(name)
            if key in self._index:
                raise ConfigurationError(f"Duplicate exercise name in catalog: {name}")
            self._index[key] = position

    @classmethod
    def load(cls, exercises_dir: Path) -> ExerciseCatalog:
        """Cargar el catálogo desde `menu.yaml` (o `menu.json`)."""
        exercises_dir = Path(exercises_dir)
        if not exercises_dir.is_dir():
            raise ConfigurationError(f"Exercise directory [{exercises_dir}] does not exist or is not a directory")

        for filename in MENU_FILES:
            menu_file = exercises_dir / filename
            if menu_file.is_file():
                break
        else:
            raise ConfigurationError(f"No menu file found in {exercises_dir} (expected one of {', '.join(MENU_FILES)})")

        # JSON es un subconjunto de YAML: un único parser para ambos
        try:
            with open(menu_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not read catalog {menu_file}: {e}") from e

        if isinstance(data, dict):
            data = data.get("exercises")
        if not isinstance(data, list):
            raise ConfigurationError(f"Malformed catalog {menu_file}: expected a list of exercise names")

        catalog = cls(data, exercises_dir)
        logger.debug("Loaded %d exercises from %s", catalog.count(), menu_file)
        return catalog

    def resolve(self, name: str) -> CatalogEntry | None:
        """Buscar un ejercicio por nombre (sin distinguir mayúsculas ni espacios extremos)."""
        position = self._index.get(_normalize(name))
        if position is None:
            return None
        return self._entry(position)

    def count(self) -> int:
        """Número de ejercicios del catálogo."""
        return len(self._names)

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def dir_from_name(self, name: str) -> Path:
        """Directorio en disco para un nombre de ejercicio."""
        return self.exercises_dir / id_from_name(name)

    def _entry(self, position: int) -> CatalogEntry:
        name = self._names[position]
        return CatalogEntry(
            name=name,
            number=position + 1,
            id=id_from_name(name),
            directory=self.dir_from_name(name),
        )

    def __iter__(self) -> Iterator[CatalogEntry]:
        for position in range(len(self._names)):
            yield self._entry(position)
