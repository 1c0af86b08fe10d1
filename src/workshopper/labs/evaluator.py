"""Implementaciones de ejercicio incluidas."""

from __future__ import annotations

import asyncio
import shutil
import sys
import tempfile
from itertools import zip_longest
from pathlib import Path

from .exercise import Exercise, ExerciseError, register_exercise
from .runner import ProgramResult, run_command, run_program

# Códigos de salida de pytest que no son "tests fallidos"
PYTEST_TESTS_FAILED = 1


def _submission(args: list[str]) -> Path:
    if not args:
        raise ExerciseError("No submission file given")
    return Path(args[0])


def _print_program_output(result: ProgramResult) -> None:
    if result.stdout:
        print(result.stdout, end="" if result.stdout.endswith("\n") else "\n")
    if result.stderr:
        print(f"\033[31m{result.stderr.rstrip()}\033[0m", file=sys.stderr)


@register_exercise("output")
class OutputExercise(Exercise):
    """Compara la salida estándar de la entrega con la de la solución oficial."""

    def __init__(
        self,
        *,
        args: list[str] | None = None,
        solution: str | None = None,
        timeout: int = 30,
        hide_solutions: bool | None = None,
    ) -> None:
        """Inicializar evaluador."""
        super().__init__(timeout=timeout, hide_solutions=hide_solutions)
        self.args = [str(a) for a in (args or [])]
        self.solution = solution

    def solution_program(self) -> Path:
        """Obtener el programa de referencia."""
        if self.solution:
            program = self.directory / self.solution
        else:
            program = self.workspace.get_main_solution()
        if program is None or not program.is_file():
            raise ExerciseError(f"No reference solution found for {self.name}")
        return program

    async def run(self, args: list[str]) -> bool:
        """Ejecutar la entrega y mostrar su salida."""
        result = await run_program(_submission(args), self.args, timeout=self.timeout)
        _print_program_output(result)
        return result.ok

    async def verify(self, args: list[str]) -> bool:
        """Ejecutar solución y entrega con los mismos argumentos y comparar."""
        submission = _submission(args)
        expected, actual = await asyncio.gather(
            run_program(self.solution_program(), self.args, timeout=self.timeout),
            run_program(submission, self.args, timeout=self.timeout),
        )

        if not expected.ok:
            raise ExerciseError(f"Reference solution exited with status {expected.returncode}: {expected.stderr.strip()}")

        matches = self._print_comparison(actual.lines, expected.lines)
        if actual.stderr:
            _print_program_output(ProgramResult(actual.returncode, "", actual.stderr))
        return matches and actual.ok

    def _print_comparison(self, actual: list[str], expected: list[str]) -> bool:
        """Imprimir salida real frente a esperada; True si coinciden."""
        width = max([len("ACTUAL"), *(len(repr(line)) for line in actual)]) + 2
        print("Your submission results compared to the expected:\n")
        print(f"  {'ACTUAL':<{width}}     EXPECTED")
        print("  " + "─" * (width + 13))

        matches = True
        for got, want in zip_longest(actual, expected):
            same = got == want
            matches = matches and same
            left = repr(got) if got is not None else ""
            right = repr(want) if want is not None else ""
            color = "\033[32m" if same else "\033[31m"
            marker = "==" if same else "!="
            print(f"  {color}{left:<{width}} {marker}  {right}\033[0m")
        print()
        return matches


@register_exercise("pytest")
class PytestExercise(Exercise):
    """Ejecuta los tests del ejercicio contra la entrega con pytest."""

    def __init__(
        self,
        *,
        module: str = "solution.py",
        timeout: int = 30,
        hide_solutions: bool | None = None,
    ) -> None:
        """Inicializar evaluador."""
        super().__init__(timeout=timeout, hide_solutions=hide_solutions)
        self.module = module

    async def run(self, args: list[str]) -> bool:
        """Ejecutar la entrega directamente."""
        result = await run_program(_submission(args), timeout=self.timeout)
        _print_program_output(result)
        return result.ok

    async def verify(self, args: list[str]) -> bool:
        """Evaluar la entrega con los tests del ejercicio."""
        submission = _submission(args)
        if not submission.is_file():
            raise ExerciseError(f"Submission not found: {submission}")

        test_files = self.workspace.get_test_files()
        if not test_files:
            raise ExerciseError("No test files found")

        # Directorio temporal para ejecución aislada
        with tempfile.TemporaryDirectory() as tmpdir:
            work_dir = Path(tmpdir)
            shutil.copy2(submission, work_dir / self.module)
            for extra in args[1:]:
                extra_path = Path(extra)
                if extra_path.is_file():
                    shutil.copy2(extra_path, work_dir / extra_path.name)
            self._copy_tree(self.workspace.tests_path, work_dir / "tests")

            cmd = [sys.executable, "-m", "pytest", "-q", "--tb=short", "-p", "no:cacheprovider", "tests"]
            result = await run_command(cmd, timeout=self.timeout, cwd=work_dir)

        if result.returncode not in (0, PYTEST_TESTS_FAILED):
            raise ExerciseError(f"pytest exited with status {result.returncode}: {(result.stdout + result.stderr).strip()[-500:]}")

        if not result.ok:
            _print_program_output(result)
        return result.ok

    def _copy_tree(self, src: Path, dst: Path) -> None:
        """Copiar directorio recursivamente."""
        if src.exists():
            shutil.copytree(src, dst, dirs_exist_ok=True)
