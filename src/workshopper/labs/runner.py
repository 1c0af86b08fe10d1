"""Ejecución de programas entregados como subprocesos."""

from __future__ import annotations

import asyncio
import logging
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from .exercise import ExerciseError

logger = logging.getLogger(__name__)

INTERPRETERS: dict[str, list[str]] = {
    ".py": [sys.executable],
    ".js": ["node"],
    ".mjs": ["node"],
    ".sh": ["sh"],
}


@dataclass
class ProgramResult:
    """Resultado de ejecutar un programa."""

    returncode: int
    stdout: str
    stderr: str
    execution_time: float = 0.0

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def lines(self) -> list[str]:
        """Líneas de stdout sin espacios finales ni líneas vacías al final."""
        return [line.rstrip() for line in self.stdout.rstrip().splitlines()]


def build_command(program: Path, args: list[str] | None = None) -> list[str]:
    """Construir la línea de comandos según la extensión del programa."""
    interpreter = INTERPRETERS.get(program.suffix.lower(), [])
    return [*interpreter, str(program), *(args or [])]


async def run_command(
    cmd: list[str],
    timeout: float = 30,
    cwd: Path | None = None,
) -> ProgramResult:
    """Ejecutar un comando y capturar su salida."""
    logger.debug("Running %s (cwd=%s)", cmd, cwd)
    start_time = time.time()

    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except FileNotFoundError as e:
        raise ExerciseError(f"Program not found: {cmd[0]}") from e
    except PermissionError as e:
        raise ExerciseError(f"Program is not executable: {cmd[0]}") from e

    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
        raise ExerciseError(f"Timeout: the program took more than {timeout}s") from None

    return ProgramResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout.decode("utf-8", errors="replace"),
        stderr=stderr.decode("utf-8", errors="replace"),
        execution_time=time.time() - start_time,
    )


async def run_program(
    program: Path,
    args: list[str] | None = None,
    timeout: float = 30,
    cwd: Path | None = None,
) -> ProgramResult:
    """Ejecutar un programa entregado."""
    program = Path(program)
    if not program.is_file():
        raise ExerciseError(f"Submission not found: {program}")
    return await run_command(build_command(program.resolve(), args), timeout=timeout, cwd=cwd)
