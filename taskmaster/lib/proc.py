"""Blocking subprocess calls that share the caller's terminal."""

import logging
import subprocess

from taskmaster.errors import ProcessError

logger = logging.getLogger(__name__)


def run(args: list[str], cwd: str | None = None) -> int:
    """Run a command with inherited stdio and return its exit status."""
    logger.debug(f"run: {' '.join(args)} (cwd={cwd})")
    try:
        result = subprocess.run(args, cwd=cwd, check=False)
    except FileNotFoundError as e:
        raise ProcessError(f"Command not found: {args[0]}") from e
    logger.debug(f"exit {result.returncode}: {args[0]}")
    return result.returncode


def run_checked(args: list[str], cwd: str | None = None) -> None:
    """Run a command and raise ProcessError on non-zero exit."""
    code = run(args, cwd=cwd)
    if code != 0:
        raise ProcessError(f"{' '.join(args)} exited with status {code}", returncode=code)


def capture(args: list[str], cwd: str | None = None) -> str:
    """Run a command and return its stdout as text."""
    logger.debug(f"capture: {' '.join(args)}")
    try:
        result = subprocess.run(args, cwd=cwd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise ProcessError(f"Command not found: {args[0]}") from e
    return result.stdout
