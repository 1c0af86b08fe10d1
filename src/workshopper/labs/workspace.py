"""Archivos de un ejercicio en disco: plantilla, solución y tests."""

from __future__ import annotations

import shutil
from pathlib import Path


class ExerciseWorkspace:
    """Gestiona los directorios de un ejercicio."""

    STARTER_DIR = "starter"
    SOLUTION_DIR = "solution"
    TESTS_DIR = "tests"

    def __init__(self, directory: Path) -> None:
        """Inicializar workspace."""
        self.directory = Path(directory)
        self.starter_path = self.directory / self.STARTER_DIR
        self.solution_path = self.directory / self.SOLUTION_DIR
        self.tests_path = self.directory / self.TESTS_DIR

    def initialize_from_starter(self, target_dir: Path) -> list[Path]:
        """Copiar archivos starter a `target_dir` sin sobrescribir nada."""
        copied: list[Path] = []
        if not self.starter_path.is_dir():
            return copied

        target_dir.mkdir(parents=True, exist_ok=True)
        for item in sorted(self.starter_path.iterdir()):
            destination = target_dir / item.name
            if destination.exists():
                continue  # Ya hay archivos, no sobrescribir
            if item.is_file():
                shutil.copy2(item, destination)
            elif item.is_dir():
                shutil.copytree(item, destination)
            copied.append(destination)
        return copied

    def get_solution_files(self) -> list[Path]:
        """Obtener lista de archivos de la solución."""
        return self._files_in(self.solution_path)

    def get_test_files(self) -> list[Path]:
        """Obtener archivos de test (`test*.py`)."""
        if not self.tests_path.exists():
            return []
        return sorted(p for p in self.tests_path.rglob("test*.py") if p.is_file())

    def get_main_solution(self) -> Path | None:
        """Obtener programa principal de la solución."""
        files = self.get_solution_files()
        if not files:
            return None

        # Prioridad: main.*, solution.*, primer archivo
        for stem in ("main", "solution"):
            for f in files:
                if f.stem == stem:
                    return f
        return files[0]

    def _files_in(self, path: Path) -> list[Path]:
        if not path.exists():
            return []
        return sorted(item for item in path.rglob("*") if item.is_file())
