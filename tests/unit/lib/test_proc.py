from unittest.mock import MagicMock, patch

import pytest

from taskmaster.errors import ProcessError
from taskmaster.lib import proc
from taskmaster.lib.detach import detach


def test_run_returns_exit_status():
    with patch("subprocess.run", return_value=MagicMock(returncode=3)) as mock_run:
        assert proc.run(["node", "x.js"]) == 3
    mock_run.assert_called_once_with(["node", "x.js"], cwd=None, check=False)


def test_run_checked_raises_on_failure():
    with patch("subprocess.run", return_value=MagicMock(returncode=1)):
        with pytest.raises(ProcessError) as exc:
            proc.run_checked(["npm", "install"])
    assert exc.value.returncode == 1


def test_missing_executable_is_process_error():
    with patch("subprocess.run", side_effect=FileNotFoundError()):
        with pytest.raises(ProcessError, match="Command not found: gh"):
            proc.capture(["gh", "pr", "view"])


def test_detach_starts_new_session():
    with patch("subprocess.Popen") as mock_popen:
        detach(["code", "/tmp/x.ts"])
    _, kwargs = mock_popen.call_args
    assert kwargs["start_new_session"] is True
