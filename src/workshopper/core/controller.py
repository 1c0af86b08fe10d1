"""Ciclo de vida de un ejercicio: seleccionar, ejecutar, verificar, registrar."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Callable

from ..labs import Exercise, load_exercise
from .catalog import CatalogEntry, ExerciseCatalog
from .errors import ExecutionError, ResolutionError, UsageError
from .persistence import ProgressStore
from .state import ProgressState

if TYPE_CHECKING:
    from ..config import Config
    from ..tui.presenter import Presenter

logger = logging.getLogger(__name__)

MODES = ("run", "verify")
NO_ACTIVE_EXERCISE = "No active exercise. Select one from the menu."

ExerciseLoader = Callable[[CatalogEntry, int], Exercise]


@dataclass
class WorkshopContext:
    """Todo lo que una invocación necesita; se construye una vez por proceso."""

    catalog: ExerciseCatalog
    store: ProgressStore
    presenter: Presenter
    app_name: str = "workshopper"
    title: str = "WORKSHOPPER"
    timeout: int = 30
    loader: ExerciseLoader = field(default=load_exercise)

    @classmethod
    def from_config(cls, config: Config, presenter: Presenter | None = None) -> WorkshopContext:
        """Crear contexto a partir de la configuración del taller."""
        from ..tui.presenter import ConsolePresenter

        return cls(
            catalog=ExerciseCatalog.load(config.exercises_dir),
            store=ProgressStore(config.data_dir),
            presenter=presenter or ConsolePresenter(config.app_name, config.width),
            app_name=config.app_name,
            title=config.title,
            timeout=config.timeout,
        )


class LifecycleController:
    """Orquesta selección, ejecución, evaluación y progreso de los ejercicios."""

    def __init__(self, context: WorkshopContext) -> None:
        self.context = context
        self.catalog = context.catalog
        self.presenter = context.presenter
        self.state = ProgressState(context.store)

    def load(self, name: str) -> Exercise:
        """Resolver un nombre y cargar su ejercicio inicializado."""
        entry = self.catalog.resolve(name)
        if entry is None:
            raise ResolutionError(name)
        return self.context.loader(entry, self.context.timeout)

    async def select(self, name: str) -> Exercise:
        """Seleccionar un ejercicio, prepararlo y mostrar sus instrucciones."""
        exercise = self.load(name)

        self.presenter.exercise_header(self.context.title, exercise.name, exercise.number, self.catalog.count())
        self.state.set_current(exercise.name)

        try:
            await exercise.prepare()
        except Exception as e:
            raise ExecutionError(f"Error preparing exercise: {e}") from e

        try:
            content_type, text = await exercise.get_exercise_text()
        except Exception as e:
            raise ExecutionError(f"Error loading exercise text: {e}") from e

        self.presenter.exercise_text(content_type, text)
        self.presenter.instructions_footer()
        return exercise

    async def print_current(self) -> Exercise:
        """Volver a mostrar el ejercicio actual."""
        current = self.state.current
        if current is None:
            raise UsageError(NO_ACTIVE_EXERCISE)
        return await self.select(current)

    async def execute(self, mode: str, args: list[str]) -> int:
        """Ejecutar (`run`) o evaluar (`verify`) la entrega; devuelve el código de salida."""
        if mode not in MODES:
            raise UsageError(f"Unknown mode: {mode}")
        if not args:
            raise UsageError(f"Usage: {self.context.app_name} {mode} mysubmission")

        current = self.state.current
        if current is None:
            raise UsageError(NO_ACTIVE_EXERCISE)

        exercise = self.load(current)
        hook = exercise.run if mode == "run" else exercise.verify

        try:
            passed = await hook(list(args))
        except Exception as e:
            raise ExecutionError(f"Could not {mode}: {e}") from e

        if mode == "run":
            return 0
        if not passed:
            return await self.handle_fail(mode, exercise)
        return await self.handle_pass(mode, exercise)

    async def handle_fail(self, mode: str, exercise: Exercise) -> int:
        self.presenter.failed(exercise.name)
        return await self.end(mode, False, exercise)

    async def handle_pass(self, mode: str, exercise: Exercise) -> int:
        """Camino de aprobado: solución, progreso y ejercicios restantes."""
        self.presenter.passed(exercise.name)

        if not exercise.hide_solutions:
            await self.show_solutions(exercise)

        completed = self.state.mark_completed(exercise.name)
        remaining = self.catalog.count() - len(completed)
        if remaining <= 0:
            self.presenter.finished_all()
        else:
            self.presenter.remaining(remaining)

        return await self.end(mode, True, exercise)

    async def show_solutions(self, exercise: Exercise) -> None:
        """Mostrar la solución oficial; un fallo aquí termina la invocación."""
        try:
            files = await exercise.get_solution_files()
            solutions = await read_files(files)
        except Exception as e:
            raise ExecutionError(f"ERROR: There was a problem printing the solution files: {e}") from e
        self.presenter.solutions(solutions)

    async def end(self, mode: str, passed: bool, exercise: Exercise) -> int:
        """Invocar el hook de limpieza; su error no cambia el resultado."""
        try:
            await exercise.end(mode, passed)
        except Exception as e:
            logger.warning("Cleanup of %s failed: %s", exercise.name, e)
            self.presenter.error(f"Error cleaning up: {e}")
        return 0 if passed else 1


async def read_files(files: list[Path]) -> list[tuple[Path, str]]:
    """Leer archivos en paralelo conservando el orden de entrada."""
    paths = [Path(f) for f in files]
    logger.debug("Reading %d solution files", len(paths))
    contents = await asyncio.gather(
        *(asyncio.to_thread(path.read_text, encoding="utf-8") for path in paths)
    )
    return list(zip(paths, contents))
