import os
from pathlib import Path


def store_root() -> Path:
    """Returns the store root, ~/.tm (or $TM_ROOT)."""
    override = os.environ.get("TM_ROOT")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".tm"


def scripts_dir() -> Path:
    """Returns the directory holding tasks, ~/.tm/scripts."""
    return store_root() / "scripts"


def dist_dir() -> Path:
    """Returns compiled output of script tasks, ~/.tm/dist."""
    return store_root() / "dist"


def config_file() -> Path:
    return store_root() / "config.yaml"


def package_root() -> Path:
    """Returns taskmaster package root directory."""
    return Path(__file__).resolve().parent.parent


def templates_dir() -> Path:
    return package_root() / "templates"


def script_path(name: str) -> Path:
    return scripts_dir() / f"{name}.ts"


def package_path(name: str) -> Path:
    return scripts_dir() / name


def script_artifact(name: str) -> Path:
    """Returns compiled script output, ~/.tm/dist/<name>.js."""
    return dist_dir() / f"{name}.js"


def package_artifact(folder: Path) -> Path:
    return folder / "dist" / "index.js"


def validate_task_name(name: str) -> tuple[bool, str]:
    if not name or not name.strip():
        return False, "Task name cannot be empty"
    if name.startswith("."):
        return False, "Task name cannot start with '.'"
    if "/" in name or "\\" in name or os.sep in name:
        return False, "Task name cannot contain path separators"
    return True, ""
