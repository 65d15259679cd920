import logging
import os
import shutil
import sys
from functools import lru_cache
from pathlib import Path

import yaml

from . import paths

logger = logging.getLogger(__name__)


def get_default_config_path() -> Path:
    return paths.package_root() / "config.yaml"


def config_file() -> Path:
    """Return config file path in ~/.tm/"""
    return paths.config_file()


def _validate_config(cfg: dict) -> None:
    """Validate config structure. Fail fast on invalid types."""
    if not isinstance(cfg, dict):
        raise ValueError(f"Config must be a dict, got {type(cfg).__name__}")

    if "git" in cfg and not isinstance(cfg.get("git"), dict):
        raise ValueError("Config 'git' must be a dict")

    for key in ("compiler", "compiler_flags"):
        if key in cfg and not isinstance(cfg.get(key), list):
            raise ValueError(f"Config '{key}' must be a list")


def clear_cache():
    load_config.cache_clear()
    _load_defaults.cache_clear()


@lru_cache(maxsize=1)
def _load_defaults() -> dict:
    with open(get_default_config_path()) as f:
        return yaml.safe_load(f) or {}


@lru_cache(maxsize=1)
def load_config() -> dict:
    """Load config.yaml layered over the packaged defaults."""
    cfg = dict(_load_defaults())
    cfg["git"] = dict(cfg.get("git") or {})

    path = config_file()
    if path.exists():
        with open(path) as f:
            user_cfg = yaml.safe_load(f) or {}
        _validate_config(user_cfg)
        git_cfg = user_cfg.pop("git", None) or {}
        cfg.update(user_cfg)
        cfg["git"].update(git_cfg)
        logger.debug(f"Loaded config from {path}")

    return cfg


def init_config() -> None:
    """Initialize ~/.tm/config.yaml from defaults if missing."""
    target = config_file()
    if target.exists():
        return

    target.parent.mkdir(parents=True, exist_ok=True)

    default_config_path = get_default_config_path()
    if not default_config_path.exists():
        raise FileNotFoundError(f"Default config not found at {default_config_path}")

    shutil.copy(default_config_path, target)


def editor() -> str:
    return os.environ.get("TM_EDITOR") or load_config().get("editor") or "code"


def opener() -> str:
    configured = load_config().get("opener")
    if configured:
        return configured
    return "open" if sys.platform == "darwin" else "xdg-open"


def git_settings() -> dict:
    return load_config()["git"]
