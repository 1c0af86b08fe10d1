"""Contrato de los ejercicios y registro de implementaciones."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable, ClassVar

import yaml

from ..core.errors import ConfigurationError
from .workspace import ExerciseWorkspace

if TYPE_CHECKING:
    from ..core.catalog import CatalogEntry

logger = logging.getLogger(__name__)

ENTRY_FILE = "exercise.yaml"
DEFAULT_KIND = "output"
TEXT_FILES = (("problem.md", "md"), ("problem.txt", "txt"))


class ExerciseError(Exception):
    """Error de un hook del ejercicio (no es un suspenso)."""

    pass


class Exercise(ABC):
    """Interfaz base para ejercicios.

    El controlador llama a `init` una vez y después espera cada hook de uno
    en uno. Cada coroutine se resuelve exactamente una vez; los errores se
    señalan lanzando una excepción.
    """

    kind: ClassVar[str] = ""
    hide_solutions: bool = False

    def __init__(self, *, timeout: int = 30, hide_solutions: bool | None = None) -> None:
        """Inicializar ejercicio."""
        self.timeout = timeout
        if hide_solutions is not None:
            self.hide_solutions = bool(hide_solutions)

        # Identidad (se establece en init)
        self.id = ""
        self.name = ""
        self.directory = Path()
        self.number = 0

    def init(self, id: str, name: str, directory: Path, number: int) -> None:
        """Establecer la identidad antes de cualquier otro hook."""
        self.id = id
        self.name = name
        self.directory = Path(directory)
        self.number = number

    @property
    def workspace(self) -> ExerciseWorkspace:
        return ExerciseWorkspace(self.directory)

    async def prepare(self) -> None:
        """Preparar la entrega: copiar la plantilla `starter/` al directorio actual."""
        copied = self.workspace.initialize_from_starter(Path.cwd())
        for path in copied:
            logger.debug("Copied starter file %s", path)

    async def get_exercise_text(self) -> tuple[str, str]:
        """Devolver `(tipo, texto)` de las instrucciones."""
        for filename, content_type in TEXT_FILES:
            path = self.directory / filename
            if path.is_file():
                try:
                    return content_type, path.read_text(encoding="utf-8")
                except OSError as e:
                    raise ExerciseError(f"Could not read {path}: {e}") from e
        raise ExerciseError(f"No problem file found in {self.directory}")

    @abstractmethod
    async def run(self, args: list[str]) -> bool:
        """Ejecutar la entrega sin evaluar."""
        pass

    @abstractmethod
    async def verify(self, args: list[str]) -> bool:
        """Ejecutar y evaluar la entrega."""
        pass

    async def end(self, mode: str, passed: bool) -> None:
        """Limpieza tras `run`/`verify`."""
        pass

    async def get_solution_files(self) -> list[Path]:
        """Archivos de la solución oficial, en orden de presentación."""
        return self.workspace.get_solution_files()


# Registro de implementaciones por nombre
_EXERCISE_REGISTRY: dict[str, type[Exercise]] = {}


def register_exercise(kind: str) -> Callable[[type[Exercise]], type[Exercise]]:
    """Registrar una implementación de ejercicio bajo `kind`."""

    def decorator(cls: type[Exercise]) -> type[Exercise]:
        cls.kind = kind
        _EXERCISE_REGISTRY[kind] = cls
        return cls

    return decorator


def get_exercise_class(kind: str) -> type[Exercise]:
    """Obtener implementación por nombre."""
    try:
        return _EXERCISE_REGISTRY[kind]
    except KeyError:
        valid = ", ".join(sorted(_EXERCISE_REGISTRY))
        raise ConfigurationError(f"Unknown exercise type '{kind}'. Valid types: {valid}") from None


def load_exercise(entry: CatalogEntry, timeout: int = 30) -> Exercise:
    """Construir e inicializar el ejercicio de una entrada del catálogo."""
    directory = entry.directory
    entry_file = directory / ENTRY_FILE

    if not directory.is_dir():
        raise ConfigurationError(f"ERROR: {directory} does not exist!")
    if not entry_file.is_file():
        raise ConfigurationError(f"ERROR: {entry_file} does not exist!")

    try:
        with open(entry_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"ERROR: {entry_file} could not be read: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"ERROR: {entry_file} is not a workshopper exercise")

    options: dict[str, Any] = dict(data)
    kind = str(options.pop("type", DEFAULT_KIND))
    options.setdefault("timeout", timeout)
    cls = get_exercise_class(kind)

    try:
        exercise = cls(**options)
    except TypeError as e:
        raise ConfigurationError(f"ERROR: {entry_file} is not a workshopper exercise: {e}") from e

    exercise.init(entry.id, entry.name, directory, entry.number)
    logger.debug("Loaded %s exercise %r from %s", kind, entry.name, directory)
    return exercise
