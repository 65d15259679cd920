"""Fire-and-forget subprocess that outlives parent."""

import logging
import subprocess

from taskmaster.errors import ProcessError

logger = logging.getLogger(__name__)


def detach(args: list[str], cwd: str | None = None) -> None:
    """Spawn process that survives parent exit."""
    logger.debug(f"detach: {' '.join(args)}")
    try:
        subprocess.Popen(
            args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
            cwd=cwd,
        )
    except FileNotFoundError as e:
        raise ProcessError(f"Command not found: {args[0]}") from e
