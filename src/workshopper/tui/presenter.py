"""Salida de consola del taller."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Protocol

if sys.platform == "win32":
    import colorama
    colorama.init()

BOLD = "\033[1m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
CYAN = "\033[36m"
GREY = "\033[37m"
ITALIC = "\033[3m"
RESET = "\033[0m"

SEPARATOR_WIDTH = 90


class Presenter(Protocol):
    """Lo que el controlador necesita mostrar."""

    def exercise_header(self, title: str, name: str, number: int, total: int) -> None: ...

    def exercise_text(self, content_type: str, text: str) -> None: ...

    def instructions_footer(self) -> None: ...

    def passed(self, name: str) -> None: ...

    def failed(self, name: str) -> None: ...

    def solutions(self, files: list[tuple[Path, str]]) -> None: ...

    def remaining(self, count: int) -> None: ...

    def finished_all(self) -> None: ...

    def error(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


class ConsolePresenter:
    """Imprime en consola con códigos de color ANSI."""

    def __init__(self, app_name: str, width: int = 65) -> None:
        self.app_name = app_name
        self.width = width

    def exercise_header(self, title: str, name: str, number: int, total: int) -> None:
        """Imprimir encabezado del ejercicio seleccionado."""
        print()
        print(f" {BOLD}{GREEN}{title}{RESET}")
        print(f"{BOLD}{GREEN}{'─' * (len(title) + 2)}{RESET}")
        print(f" {BOLD}{YELLOW}{name}{RESET}")
        print(f" {ITALIC}{YELLOW}Exercise {number} of {total}{RESET}")
        print()

    def exercise_text(self, content_type: str, text: str) -> None:
        """Imprimir instrucciones; el markdown se muestra con títulos resaltados."""
        if content_type != "md":
            print(text.rstrip())
            return

        in_code = False
        for line in text.rstrip().splitlines():
            if line.strip().startswith("```"):
                in_code = not in_code
                continue
            if in_code:
                print(f"    {CYAN}{line}{RESET}")
            elif re.match(r"^#{1,6}\s", line):
                print(f"{BOLD}{YELLOW}{line.lstrip('#').strip()}{RESET}")
            else:
                print(re.sub(r"`([^`]+)`", rf"{CYAN}\1{RESET}", line))

    def instructions_footer(self) -> None:
        """Recordar los comandos disponibles tras las instrucciones."""
        app = self.app_name
        print()
        print(f"{BOLD} » To print these instructions again, run: `{app} print`.{RESET}")
        print(f"{BOLD} » To execute your program in a test environment, run:\n   `{app} run program`.{RESET}")
        print(f"{BOLD} » To verify your program, run: `{app} verify program`.{RESET}")
        print()

    def passed(self, name: str) -> None:
        print(f"{BOLD}{GREEN}# PASS{RESET}\n")
        print(f"{BOLD}{YELLOW}Your solution to {name} passed!{RESET}\n")

    def failed(self, name: str) -> None:
        print(f"{BOLD}{RED}# FAIL{RESET}")
        print(f"\nYour solution to {name} didn't pass. Try again!\n")

    def solutions(self, files: list[tuple[Path, str]]) -> None:
        """Imprimir la solución oficial, cada archivo con su separador."""
        if not files:
            return

        print("Here's the official solution if you want to compare notes:\n")
        for i, (path, content) in enumerate(files):
            print(f"{BOLD}{YELLOW}{'─' * SEPARATOR_WIDTH}{RESET}\n")
            if len(files) > 1:
                print(f"{BOLD}{YELLOW}{path.name}:{RESET}\n")
            print(content.rstrip())
            print()
            if i == len(files) - 1:
                print(f"{BOLD}{YELLOW}{'─' * SEPARATOR_WIDTH}{RESET}\n")

    def remaining(self, count: int) -> None:
        plural = "s" if count != 1 else ""
        print(f"You have {count} challenge{plural} left.")
        print(f"Type `{self.app_name}` to show the menu.\n")

    def finished_all(self) -> None:
        print(f"{BOLD}{YELLOW}You've finished all the challenges! Hooray!{RESET}\n")

    def error(self, message: str) -> None:
        print(f"{BOLD}{RED}{message}{RESET}")

    def info(self, message: str) -> None:
        print(message)

    def menu(self, title: str, subtitle: str | None, names: list[str], completed: list[str]) -> None:
        """Imprimir el menú numerado de ejercicios."""
        print()
        print(f"{BOLD}{YELLOW}{'=' * self.width}{RESET}")
        print(f"{BOLD}{YELLOW}{title.center(self.width)}{RESET}")
        if subtitle:
            print(f"{ITALIC}{YELLOW}{subtitle.center(self.width)}{RESET}")
        print(f"{BOLD}{YELLOW}{'=' * self.width}{RESET}")
        done = set(completed)
        for i, name in enumerate(names, start=1):
            if name in done:
                mark = f"{GREEN}[COMPLETED]{RESET}"
                print(f"  {i:>2}. {name} {mark}")
            else:
                print(f"  {i:>2}. {GREY}{name}{RESET}")
        print()
