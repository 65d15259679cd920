"""CLI error handling: wrap commands to report errors instead of tracebacks."""

import logging
from functools import wraps

import typer
from click.exceptions import Abort, Exit

from taskmaster.errors import TaskMasterError

logger = logging.getLogger(__name__)


def error_feedback(f):
    """Wrap command to catch exceptions and report them before exiting.

    Domain and OS errors are echoed to stderr as "Error: <message>" and the
    command exits with status 1. Exit requests keep their own status.
    """

    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except (SystemExit, Exit, typer.Exit, Abort):
            raise
        except TaskMasterError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e
        except OSError as e:
            typer.echo(f"Error: {_describe_os_error(e)}", err=True)
            raise typer.Exit(1) from e
        except Exception as e:
            logger.debug("Unhandled error", exc_info=True)
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(1) from e

    return wrapper


def _describe_os_error(e: OSError) -> str:
    """[Errno 2] No such file or directory: 'x' -> File error: No such file or directory (x)"""
    if e.filename is None:
        return f"File error: {e.strerror or e}"
    return f"File error: {e.strerror} ({e.filename})"


def setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(name)s] %(message)s")
