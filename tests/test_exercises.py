"""Tests para la carga y las implementaciones de ejercicios incluidas."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from workshopper.core.catalog import ExerciseCatalog
from workshopper.core.errors import ConfigurationError
from workshopper.labs import ExerciseError, get_exercise_class, load_exercise
from workshopper.labs.evaluator import OutputExercise, PytestExercise
from workshopper.labs.runner import build_command, run_program


def load(workshop: Path, name: str):
    catalog = ExerciseCatalog.load(workshop / "exercises")
    entry = catalog.resolve(name)
    assert entry is not None
    return load_exercise(entry, timeout=20)


class TestLoadExercise:
    """Tests para el registro y el entry file `exercise.yaml`."""

    def test_builtin_kinds_registered(self) -> None:
        assert get_exercise_class("output") is OutputExercise
        assert get_exercise_class("pytest") is PytestExercise

    def test_load_initializes_identity(self, workshop: Path) -> None:
        exercise = load(workshop, "sum args")

        assert isinstance(exercise, PytestExercise)
        assert exercise.id == "sum_args"
        assert exercise.name == "Sum Args"
        assert exercise.number == 2
        assert exercise.directory == workshop / "exercises" / "sum_args"

    def test_unknown_type(self, workshop: Path) -> None:
        (workshop / "exercises" / "hello_world" / "exercise.yaml").write_text("type: quiz\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="Unknown exercise type 'quiz'"):
            load(workshop, "Hello World")

    def test_missing_entry_file(self, workshop: Path) -> None:
        (workshop / "exercises" / "hello_world" / "exercise.yaml").unlink()

        with pytest.raises(ConfigurationError, match="does not exist"):
            load(workshop, "Hello World")

    def test_unexpected_option(self, workshop: Path) -> None:
        (workshop / "exercises" / "hello_world" / "exercise.yaml").write_text(
            "type: output\ncolour: blue\n", encoding="utf-8"
        )

        with pytest.raises(ConfigurationError, match="not a workshopper exercise"):
            load(workshop, "Hello World")

    def test_entry_file_must_be_mapping(self, workshop: Path) -> None:
        (workshop / "exercises" / "hello_world" / "exercise.yaml").write_text("- output\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="not a workshopper exercise"):
            load(workshop, "Hello World")


class TestDefaultHooks:
    """Tests para los hooks comunes de `Exercise`."""

    def test_markdown_text(self, workshop: Path) -> None:
        content_type, text = asyncio.run(load(workshop, "Hello World").get_exercise_text())

        assert content_type == "md"
        assert "HELLO WORLD" in text

    def test_plain_text(self, workshop: Path) -> None:
        content_type, _ = asyncio.run(load(workshop, "Sum Args").get_exercise_text())

        assert content_type == "txt"

    def test_missing_text(self, workshop: Path) -> None:
        (workshop / "exercises" / "hello_world" / "problem.md").unlink()

        with pytest.raises(ExerciseError, match="No problem file"):
            asyncio.run(load(workshop, "Hello World").get_exercise_text())

    def test_prepare_copies_starter_without_overwriting(
        self, workshop: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        work = tmp_path / "work"
        work.mkdir()
        monkeypatch.chdir(work)
        exercise = load(workshop, "Hello World")

        asyncio.run(exercise.prepare())
        assert (work / "program.py").read_text(encoding="utf-8") == "# write your solution here\n"

        (work / "program.py").write_text("print('mine')\n", encoding="utf-8")
        asyncio.run(exercise.prepare())
        assert (work / "program.py").read_text(encoding="utf-8") == "print('mine')\n"

    def test_solution_files(self, workshop: Path) -> None:
        files = asyncio.run(load(workshop, "Hello World").get_solution_files())

        assert [f.name for f in files] == ["solution.py"]


class TestRunner:
    """Tests para la ejecución de programas."""

    def test_interpreter_by_suffix(self) -> None:
        assert build_command(Path("a.js"), ["x"]) == ["node", "a.js", "x"]
        assert build_command(Path("a.bin")) == ["a.bin"]

    def test_captures_output(self, python_program) -> None:
        program = python_program("import sys\nprint('out', *sys.argv[1:])\nprint('err', file=sys.stderr)\n")

        result = asyncio.run(run_program(program, ["1", "2"]))

        assert result.ok
        assert result.lines == ["out 1 2"]
        assert result.stderr.strip() == "err"

    def test_missing_submission(self, tmp_path: Path) -> None:
        with pytest.raises(ExerciseError, match="Submission not found"):
            asyncio.run(run_program(tmp_path / "nope.py"))

    def test_timeout(self, python_program) -> None:
        program = python_program("import time\ntime.sleep(5)\n")

        with pytest.raises(ExerciseError, match="Timeout"):
            asyncio.run(run_program(program, timeout=0.5))


class TestOutputExercise:
    """Tests para ejercicios que comparan la salida."""

    def test_verify_pass(self, workshop: Path, python_program, capsys) -> None:
        program = python_program('print("HELLO WORLD")\n')

        assert asyncio.run(load(workshop, "Hello World").verify([str(program)])) is True
        assert "ACTUAL" in capsys.readouterr().out

    def test_verify_fail(self, workshop: Path, python_program) -> None:
        program = python_program('print("hello world")\n')

        assert asyncio.run(load(workshop, "Hello World").verify([str(program)])) is False

    def test_verify_fails_on_nonzero_exit(self, workshop: Path, python_program) -> None:
        program = python_program('print("HELLO WORLD")\nraise SystemExit(3)\n')

        assert asyncio.run(load(workshop, "Hello World").verify([str(program)])) is False

    def test_run_prints_output(self, workshop: Path, python_program, capsys) -> None:
        program = python_program('print("just trying")\n')

        asyncio.run(load(workshop, "Hello World").run([str(program)]))

        assert "just trying" in capsys.readouterr().out

    def test_missing_solution_is_error(self, workshop: Path, python_program) -> None:
        (workshop / "exercises" / "hello_world" / "solution" / "solution.py").unlink()
        program = python_program('print("HELLO WORLD")\n')

        with pytest.raises(ExerciseError, match="No reference solution"):
            asyncio.run(load(workshop, "Hello World").verify([str(program)]))


class TestPytestExercise:
    """Tests para ejercicios evaluados con pytest."""

    def test_verify_pass(self, workshop: Path, python_program) -> None:
        program = python_program("def add(a, b):\n    return a + b\n")

        assert asyncio.run(load(workshop, "Sum Args").verify([str(program)])) is True

    def test_verify_fail(self, workshop: Path, python_program) -> None:
        program = python_program("def add(a, b):\n    return a - b\n")

        assert asyncio.run(load(workshop, "Sum Args").verify([str(program)])) is False

    def test_no_tests_is_error(self, workshop: Path, python_program) -> None:
        (workshop / "exercises" / "sum_args" / "tests" / "test_add.py").unlink()
        program = python_program("def add(a, b):\n    return a + b\n")

        with pytest.raises(ExerciseError, match="No test files"):
            asyncio.run(load(workshop, "Sum Args").verify([str(program)]))
