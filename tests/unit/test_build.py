import os
from unittest.mock import patch

import pytest

from taskmaster import build, store
from taskmaster.errors import ProcessError
from taskmaster.lib import paths


def _age(path, seconds):
    stamp = path.stat().st_mtime - seconds
    os.utime(path, (stamp, stamp))


def test_missing_artifact_needs_build(tm_root):
    task = store.create_script("fresh")
    assert build.needs_build(task)


def test_script_memoized_on_mtime(tm_root):
    task = store.create_script("memo")
    task.artifact.write_text("compiled")
    _age(task.path, 60)
    _age(task.artifact, 30)
    assert not build.needs_build(task)

    task.path.write_text("console.log('changed')")
    assert build.needs_build(task)


def test_package_source_change_triggers_build(tm_root):
    task = store.create_package("pkg")
    task.artifact.parent.mkdir()
    task.artifact.write_text("compiled")
    for f in task.path.rglob("*"):
        if f.is_file() and f != task.artifact:
            _age(f, 60)
    _age(task.artifact, 30)
    assert not build.needs_build(task)

    (task.path / "src" / "util.ts").write_text("export {}")
    assert build.needs_build(task)


def test_script_compile_command(tm_root):
    task = store.create_script("cmd")
    cmd = build.compile_command(task)
    assert cmd[:2] == ["tsc", str(task.path)]
    assert cmd[cmd.index("--outDir") + 1] == str(paths.dist_dir())


def test_package_compile_command(tm_root):
    task = store.create_package("pkg")
    assert build.compile_command(task) == ["npm", "run", "--prefix", str(task.path), "build"]


def test_run_builds_only_when_stale(tm_root):
    task = store.create_script("twice")

    def fake_compile(cmd, cwd=None):
        task.artifact.write_text("compiled")

    with patch("taskmaster.build.proc.run_checked", side_effect=fake_compile) as mock_compile:
        with patch("taskmaster.build.proc.run", return_value=0) as mock_run:
            assert build.run_task(task, ["--flag"]) == 0
            assert build.run_task(task) == 0

    assert mock_compile.call_count == 1
    mock_run.assert_any_call(["node", str(task.artifact), "--flag"])


def test_run_rebuilds_after_edit(tm_root):
    task = store.create_script("edited")
    task.artifact.write_text("compiled")
    _age(task.path, 60)
    _age(task.artifact, 30)

    with patch("taskmaster.build.proc.run_checked") as mock_compile:
        with patch("taskmaster.build.proc.run", return_value=0):
            build.run_task(task)
            assert mock_compile.call_count == 0

            task.path.write_text("console.log('new')")
            build.run_task(task)
            assert mock_compile.call_count == 1


def test_run_propagates_exit_code(tm_root):
    task = store.create_script("fails")
    task.artifact.write_text("compiled")
    _age(task.path, 60)
    _age(task.artifact, 30)

    with patch("taskmaster.build.proc.run", return_value=7):
        assert build.run_task(task) == 7


def test_failed_compile_skips_execution(tm_root):
    task = store.create_script("broken")
    with patch("taskmaster.build.proc.run_checked", side_effect=ProcessError("tsc failed", 2)):
        with patch("taskmaster.build.proc.run") as mock_run:
            with pytest.raises(ProcessError):
                build.run_task(task)
    mock_run.assert_not_called()


def test_failed_compile_discards_artifact_and_rebuilds(tm_root):
    task = store.create_script("typo")

    def emit_then_fail(cmd, cwd=None):
        task.artifact.write_text("half compiled")
        raise ProcessError("tsc exited with status 2", 2)

    with patch("taskmaster.build.proc.run_checked", side_effect=emit_then_fail) as mock_compile:
        with patch("taskmaster.build.proc.run") as mock_run:
            for _ in range(2):
                with pytest.raises(ProcessError):
                    build.run_task(task)

    assert not task.artifact.exists()
    assert mock_compile.call_count == 2
    mock_run.assert_not_called()


def test_default_flags_block_emit_on_error(tm_root):
    task = store.create_script("strict")
    assert "--noEmitOnError" in build.compile_command(task)
