import pytest

from taskmaster.lib import config


def test_defaults_load_without_user_file(tm_root):
    cfg = config.load_config()
    assert cfg["runtime"] == "node"
    assert cfg["git"]["pr_types"][0] == "Feat"


def test_user_config_overrides_defaults(tm_root):
    (tm_root / "config.yaml").write_text("runtime: bun\ngit:\n  username: zed\n")
    config.clear_cache()

    cfg = config.load_config()
    assert cfg["runtime"] == "bun"
    assert cfg["git"]["username"] == "zed"
    assert cfg["git"]["ticket_url"]


def test_invalid_git_section_fails_fast(tm_root):
    (tm_root / "config.yaml").write_text("git: nope\n")
    config.clear_cache()

    with pytest.raises(ValueError, match="'git' must be a dict"):
        config.load_config()


def test_init_config_copies_defaults_once(tm_root):
    config.init_config()
    target = tm_root / "config.yaml"
    assert target.exists()

    target.write_text("editor: vim\n")
    config.init_config()
    assert target.read_text() == "editor: vim\n"


def test_editor_env_override(tm_root, monkeypatch):
    monkeypatch.setenv("TM_EDITOR", "nano")
    assert config.editor() == "nano"


def test_opener_platform_default(tm_root, monkeypatch):
    monkeypatch.setattr(config.sys, "platform", "darwin")
    assert config.opener() == "open"
    monkeypatch.setattr(config.sys, "platform", "linux")
    assert config.opener() == "xdg-open"
