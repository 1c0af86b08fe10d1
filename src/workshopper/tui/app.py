"""Línea de comandos del taller."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, NoReturn

import click

from .. import __version__
from ..config import Config, get_config, set_config
from ..core.controller import LifecycleController, WorkshopContext
from ..core.errors import UsageError, WorkshopError
from .presenter import ConsolePresenter

QUIT_CHOICES = {"q", "quit", "exit"}


def _presenter(config: Config) -> ConsolePresenter:
    return ConsolePresenter(config.app_name, config.width)


def _controller(config: Config) -> LifecycleController:
    return LifecycleController(WorkshopContext.from_config(config, _presenter(config)))


def _fail(ctx: click.Context, error: WorkshopError) -> NoReturn:
    """Mostrar el error y terminar con su código de salida."""
    _presenter(ctx.obj).error(str(error))
    ctx.exit(error.exit_code)


def _open(ctx: click.Context) -> LifecycleController:
    try:
        return _controller(ctx.obj)
    except WorkshopError as e:
        _fail(ctx, e)


def _run(
    ctx: click.Context,
    action: Callable[[LifecycleController], Awaitable[Any]],
    controller: LifecycleController | None = None,
) -> None:
    """Ejecutar una acción del controlador y terminar con su código de salida."""
    controller = controller or _open(ctx)
    try:
        result = asyncio.run(action(controller))
    except WorkshopError as e:
        _fail(ctx, e)
    ctx.exit(result if isinstance(result, int) else 0)


@click.group(invoke_without_command=True)
@click.option(
    "--workshop",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="WORKSHOPPER_HOME",
    help="Workshop root (contains workshop.yaml and exercises/).",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output.")
@click.version_option(__version__, prog_name="workshopper")
@click.pass_context
def cli(ctx: click.Context, workshop: Path | None, verbose: bool) -> None:
    """Interactive learning workshops: select, run and verify exercises."""
    # Sin `-v` solo se muestran errores
    logging.basicConfig(level=logging.DEBUG if verbose else logging.ERROR)
    try:
        config = Config.from_env(workshop)
        set_config(config)
    except WorkshopError as e:
        ConsolePresenter("workshopper").error(str(e))
        ctx.exit(e.exit_code)
    ctx.obj = get_config()

    if ctx.invoked_subcommand is None:
        ctx.invoke(menu)


@cli.command("list")
@click.pass_context
def list_exercises(ctx: click.Context) -> None:
    """Print exercise names in order."""

    async def action(controller: LifecycleController) -> int:
        for name in controller.catalog.names:
            controller.presenter.info(name)
        return 0

    _run(ctx, action)


@cli.command()
@click.pass_context
def current(ctx: click.Context) -> None:
    """Print the currently selected exercise."""

    async def action(controller: LifecycleController) -> int:
        name = controller.state.current
        if name is not None:
            controller.presenter.info(name)
        return 0

    _run(ctx, action)


@cli.command()
@click.argument("name", nargs=-1, required=True)
@click.pass_context
def select(ctx: click.Context, name: tuple[str, ...]) -> None:
    """Select an exercise and print its instructions."""
    _run(ctx, lambda controller: controller.select(" ".join(name)))


@cli.command("print")
@click.argument("name", nargs=-1)
@click.pass_context
def print_exercise(ctx: click.Context, name: tuple[str, ...]) -> None:
    """Print the instructions of an exercise (default: the current one)."""
    if name:
        _run(ctx, lambda controller: controller.select(" ".join(name)))
    else:
        _run(ctx, lambda controller: controller.print_current())


@cli.command()
@click.argument("files", nargs=-1, required=True)
@click.pass_context
def run(ctx: click.Context, files: tuple[str, ...]) -> None:
    """Run your program against the current exercise without grading it."""
    _run(ctx, lambda controller: controller.execute("run", list(files)))


@cli.command()
@click.argument("files", nargs=-1, required=True)
@click.pass_context
def verify(ctx: click.Context, files: tuple[str, ...]) -> None:
    """Verify your program against the current exercise."""
    _run(ctx, lambda controller: controller.execute("verify", list(files)))


@cli.command()
@click.pass_context
def menu(ctx: click.Context) -> None:
    """Show the exercise menu and select one."""
    config: Config = ctx.obj
    controller = _open(ctx)
    names = controller.catalog.names
    _presenter(config).menu(config.title, config.subtitle, names, controller.state.completed)

    choice = click.prompt("Choose an exercise (number or name, q to quit)", default="q", show_default=False).strip()
    if choice.lower() in QUIT_CHOICES:
        ctx.exit(0)
    if choice.isdigit():
        index = int(choice) - 1
        if not 0 <= index < len(names):
            _fail(ctx, UsageError("Invalid choice."))
        choice = names[index]

    _run(ctx, lambda c: c.select(choice), controller)


def main() -> None:
    """Console script entrypoint."""
    cli(prog_name="workshopper")
