"""Fixtures compartidas: talleres en disco y un presentador que graba."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest


class RecordingPresenter:
    """Presentador que guarda cada llamada en `calls`."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []

    def _record(self, name: str, *args: Any) -> None:
        self.calls.append((name, args))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def args_of(self, name: str) -> list[Any]:
        return [args for call, args in self.calls if call == name]

    def exercise_header(self, title: str, name: str, number: int, total: int) -> None:
        self._record("exercise_header", title, name, number, total)

    def exercise_text(self, content_type: str, text: str) -> None:
        self._record("exercise_text", content_type, text)

    def instructions_footer(self) -> None:
        self._record("instructions_footer")

    def passed(self, name: str) -> None:
        self._record("passed", name)

    def failed(self, name: str) -> None:
        self._record("failed", name)

    def solutions(self, files: list[tuple[Path, str]]) -> None:
        self._record("solutions", files)

    def remaining(self, count: int) -> None:
        self._record("remaining", count)

    def finished_all(self) -> None:
        self._record("finished_all")

    def error(self, message: str) -> None:
        self._record("error", message)

    def info(self, message: str) -> None:
        self._record("info", message)


@pytest.fixture
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


def write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


@pytest.fixture
def workshop(tmp_path: Path) -> Path:
    """Taller con dos ejercicios reales: uno de salida y uno con pytest."""
    root = tmp_path / "workshop"
    write(root / "workshop.yaml", """
        name: learnyoupython
        title: LEARN YOU PYTHON
        subtitle: Exercises for the impatient
        timeout: 20
    """)
    write(root / "exercises" / "menu.yaml", """
        - Hello World
        - Sum Args
    """)

    hello = root / "exercises" / "hello_world"
    write(hello / "exercise.yaml", "type: output\n")
    write(hello / "problem.md", """
        # Hello World

        Write a program that prints `HELLO WORLD`.
    """)
    write(hello / "solution" / "solution.py", 'print("HELLO WORLD")\n')
    write(hello / "starter" / "program.py", "# write your solution here\n")

    sum_args = root / "exercises" / "sum_args"
    write(sum_args / "exercise.yaml", """
        type: pytest
        module: solution.py
    """)
    write(sum_args / "problem.txt", "Write add(a, b) returning a + b.\n")
    write(sum_args / "solution" / "solution.py", """
        def add(a, b):
            return a + b
    """)
    write(sum_args / "tests" / "test_add.py", """
        from solution import add


        def test_add():
            assert add(2, 3) == 5
    """)
    return root


@pytest.fixture
def python_program(tmp_path: Path):
    """Crear programas Python de prueba en un directorio temporal."""
    counter = iter(range(1000))

    def make(source: str, suffix: str = ".py") -> Path:
        return write(tmp_path / "programs" / f"program{next(counter)}{suffix}", source)

    return make


@pytest.fixture(autouse=True)
def _reset_config():
    from workshopper.config import set_config

    yield
    set_config(None)


