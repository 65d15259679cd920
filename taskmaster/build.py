"""Compile tasks when their sources change, then execute them."""

import logging

from taskmaster.errors import ProcessError
from taskmaster.lib import config, paths, proc
from taskmaster.store import Task, TaskKind

logger = logging.getLogger(__name__)

PACKAGE_MANIFESTS = ("package.json", "tsconfig.json")


def _newest_mtime(files) -> float:
    return max((f.stat().st_mtime for f in files if f.is_file()), default=0.0)


def source_mtime(task: Task) -> float:
    if task.kind is TaskKind.SCRIPT:
        return task.path.stat().st_mtime

    sources = list((task.path / "src").rglob("*"))
    sources += [task.path / name for name in PACKAGE_MANIFESTS]
    return _newest_mtime(sources)


def needs_build(task: Task) -> bool:
    """True when the compiled artifact is missing or older than any source."""
    artifact = task.artifact
    if not artifact.exists():
        return True
    return source_mtime(task) > artifact.stat().st_mtime


def compile_command(task: Task) -> list[str]:
    cfg = config.load_config()
    if task.kind is TaskKind.PACKAGE:
        return [cfg["package_manager"], "run", "--prefix", str(task.path), "build"]
    return [
        *cfg["compiler"],
        str(task.path),
        "--outDir",
        str(paths.dist_dir()),
        *cfg.get("compiler_flags", []),
    ]


def build(task: Task) -> None:
    logger.info(f"Compiling {task.name}")
    paths.dist_dir().mkdir(parents=True, exist_ok=True)
    try:
        proc.run_checked(compile_command(task))
    except ProcessError:
        # tsc may emit output even when it reports errors
        task.artifact.unlink(missing_ok=True)
        raise


def install(task: Task) -> None:
    """Install a package task's dependencies."""
    cfg = config.load_config()
    proc.run_checked([cfg["package_manager"], "install"], cwd=str(task.path))


def run_task(task: Task, args: list[str] | None = None) -> int:
    """Build the task if stale and run it. Returns the task's exit status."""
    if needs_build(task):
        build(task)
    else:
        logger.debug(f"{task.name} is up to date")

    runtime = config.load_config()["runtime"]
    return proc.run([runtime, str(task.artifact), *(args or [])])