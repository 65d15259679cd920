import click
import typer
from typer.core import TyperGroup

from taskmaster import __version__, build, store
from taskmaster.errors import NoTaskNameError
from taskmaster.lib import config, paths, prompts
from taskmaster.lib.detach import detach
from taskmaster.lib.errors import error_feedback, setup_logging

PASSTHROUGH = {"ignore_unknown_options": True, "allow_extra_args": True}


class TaskGroup(TyperGroup):
    """Custom group that runs a task when no subcommand matches."""

    def get_command(self, ctx, cmd_name):
        """Get command by name, or run the task called cmd_name."""
        cmd = super().get_command(ctx, cmd_name)
        if cmd is not None:
            return cmd

        @click.command(name=cmd_name, context_settings=PASSTHROUGH, add_help_option=False)
        @click.argument("task_args", nargs=-1, type=click.UNPROCESSED)
        def run_shorthand(task_args):
            _run(cmd_name, list(task_args))

        return run_shorthand


app = typer.Typer(
    cls=TaskGroup,
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
    help=(
        "Task master: a small home for your TypeScript CLIs.\n\n"
        'The shorthand "tm <task> [args...]" also runs a task.'
    ),
)


def _version(value: bool):
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
    version: bool = typer.Option(
        False, "--version", callback=_version, is_eager=True, help="Show version and exit."
    ),
):
    setup_logging(verbose)
    if ctx.resilient_parsing:
        return

    if store.ensure_root():
        typer.echo(f"Made tasks folder at {paths.store_root()}")
    config.init_config()

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@error_feedback
def _run(name: str | None, args: list[str]) -> None:
    task = store.resolve(name, "run")
    code = build.run_task(task, args)
    if code:
        raise typer.Exit(code)


def _edit(path) -> None:
    detach([config.editor(), str(path)])


@app.command()
@error_feedback
def new(
    name: str = typer.Argument(None, help="Name of the new task."),
    full: bool = typer.Option(
        False, "--full", "-f", help="Scaffold an npm package instead of a single script."
    ),
    edit: bool = typer.Option(True, "--edit/--no-edit", help="Open the task in the editor."),
):
    """Creates a new task"""
    if not name:
        name = prompts.text("Enter a name for the new task")
    if not name:
        raise NoTaskNameError()

    if full:
        task = store.create_package(name)
        typer.echo("Installing dependencies...")
        build.install(task)
    else:
        task = store.create_script(name)

    typer.echo(f'Task "{name}" created successfully')
    if edit:
        _edit(task.path)


@app.command()
@error_feedback
def remove(name: str = typer.Argument(None, help="Task to delete.")):
    """Deletes an existing task"""
    task = store.resolve(name, "remove")

    if not prompts.confirm(f'Deleting task "{task.name}", Are you sure?', default=True):
        return

    store.remove(task)
    typer.echo(f'Task "{task.name}" removed successfully')


@app.command()
@error_feedback
def edit(name: str = typer.Argument(None, help="Task to open.")):
    """Opens a task in the editor"""
    task = store.resolve(name, "edit")
    _edit(task.path)


@app.command("list")
@error_feedback
def list_cmd():
    """Lists all available tasks"""
    for name in store.list_tasks():
        typer.echo(name)


@app.command()
@error_feedback
def folder():
    """Opens the tasks folder"""
    detach([config.opener(), str(paths.scripts_dir())])


@app.command()
@error_feedback
def path(name: str = typer.Argument(None, help="Task to locate.")):
    """Prints the path of a task, or of the tasks folder"""
    if not name:
        typer.echo(str(paths.scripts_dir()))
        return
    typer.echo(str(store.get(name).path))


@app.command(context_settings=PASSTHROUGH)
def run(ctx: typer.Context, name: str = typer.Argument(None, help="Task to run.")):
    """Runs a task; extra arguments are passed to it"""
    _run(name, list(ctx.args))


def main() -> None:
    """Entry point for tm command."""
    app()
