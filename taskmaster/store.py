"""Task store: a directory of scripts and packages under ~/.tm/scripts."""

import json
import logging
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from taskmaster.errors import (
    InvalidTaskNameError,
    NoTaskSelectedError,
    TaskExistsError,
    TaskNotFoundError,
)
from taskmaster.lib import paths, prompts

logger = logging.getLogger(__name__)


class TaskKind(str, Enum):
    SCRIPT = "script"
    PACKAGE = "package"


@dataclass(frozen=True)
class Task:
    name: str
    path: Path
    kind: TaskKind

    @property
    def artifact(self) -> Path:
        """Compiled entry point executed by `run`."""
        if self.kind is TaskKind.PACKAGE:
            return paths.package_artifact(self.path)
        return paths.script_artifact(self.name)


def ensure_root() -> bool:
    """Create the store directories. Returns True if the root was just made."""
    root = paths.store_root()
    created = not root.exists()
    paths.scripts_dir().mkdir(parents=True, exist_ok=True)
    paths.dist_dir().mkdir(parents=True, exist_ok=True)
    if created:
        logger.debug(f"Created store at {root}")
    return created


def check_name(name: str) -> str:
    ok, reason = paths.validate_task_name(name)
    if not ok:
        raise InvalidTaskNameError(reason)
    return name


def list_tasks() -> list[str]:
    """Names of all tasks, sorted, each listed once."""
    folder = paths.scripts_dir()
    if not folder.exists():
        return []

    names = set()
    for entry in folder.iterdir():
        if entry.name.startswith(".") or entry.is_symlink():
            continue
        if entry.is_dir():
            names.add(entry.name)
        elif entry.suffix == ".ts":
            names.add(entry.stem)
    return sorted(names)


def find(name: str) -> Task | None:
    """Look a task up by name. A package folder wins over a script file."""
    check_name(name)
    folder = paths.package_path(name)
    if folder.is_dir():
        return Task(name, folder, TaskKind.PACKAGE)
    script = paths.script_path(name)
    if script.is_file():
        return Task(name, script, TaskKind.SCRIPT)
    return None


def get(name: str) -> Task:
    task = find(name)
    if task is None:
        raise TaskNotFoundError(name)
    return task


def select_task(action: str) -> str:
    """Prompt the user to pick a task for action."""
    name = prompts.select(f"Select a task to {action}:", list_tasks())
    if not name:
        raise NoTaskSelectedError(action)
    return name


def resolve(name: str | None, action: str) -> Task:
    """Resolve an optional name to an existing task, prompting if absent."""
    if not name:
        name = select_task(action)
    return get(name)


def create_script(name: str) -> Task:
    check_name(name)
    if find(name) is not None:
        raise TaskExistsError(name)

    target = paths.script_path(name)
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copyfile(paths.templates_dir() / "script.ts", target)
    logger.debug(f"Created script task at {target}")
    return Task(name, target, TaskKind.SCRIPT)


def create_package(name: str) -> Task:
    """Scaffold package.json, tsconfig.json and src/index.ts for a task.

    Dependencies are not installed here; see build.install.
    """
    check_name(name)
    if find(name) is not None:
        raise TaskExistsError(name)

    template = paths.templates_dir() / "package"
    target = paths.package_path(name)
    target.mkdir(parents=True)

    manifest = json.loads((template / "package.json").read_text())
    manifest["name"] = name
    (target / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")
    shutil.copyfile(template / "tsconfig.json", target / "tsconfig.json")
    (target / "src").mkdir()
    shutil.copyfile(template / "src" / "index.ts", target / "src" / "index.ts")

    logger.debug(f"Created package task at {target}")
    return Task(name, target, TaskKind.PACKAGE)


def remove(task: Task) -> None:
    """Delete a task and its compiled output."""
    if task.kind is TaskKind.PACKAGE:
        shutil.rmtree(task.path)
    else:
        task.path.unlink()
        task.artifact.unlink(missing_ok=True)
    logger.debug(f"Removed {task.kind.value} task {task.name}")
