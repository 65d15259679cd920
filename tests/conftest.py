from unittest.mock import patch

import pytest

from taskmaster import store
from taskmaster.lib import config


@pytest.fixture
def tm_root(monkeypatch, tmp_path):
    """Isolated store root per test.

    Points TM_ROOT at a temp dir, resets cached config and creates the
    scripts/ and dist/ folders so CLI output starts clean.
    """
    root = tmp_path / ".tm"
    monkeypatch.setenv("TM_ROOT", str(root))
    monkeypatch.delenv("TM_EDITOR", raising=False)
    config.clear_cache()
    store.ensure_root()

    yield root

    config.clear_cache()


@pytest.fixture
def no_detach():
    """Swallow editor and opener launches."""
    with patch("subprocess.Popen") as mock_popen:
        yield mock_popen
