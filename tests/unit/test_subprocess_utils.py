"""Tests for subprocess_utils module."""

import subprocess
from unittest.mock import patch

import pytest

from extbuild.subprocess_utils import capture_output, get_subprocess_creation_flags, safe_run


def test_get_subprocess_creation_flags_linux():
    with patch("sys.platform", "linux"):
        assert get_subprocess_creation_flags() == 0


@pytest.mark.skipif(not hasattr(subprocess, "CREATE_NO_WINDOW"), reason="Windows-only constant")
def test_get_subprocess_creation_flags_windows():
    with patch("sys.platform", "win32"):
        assert get_subprocess_creation_flags() == subprocess.CREATE_NO_WINDOW


@patch("subprocess.run")
def test_safe_run_no_flags_on_linux(mock_run):
    with patch("sys.platform", "linux"):
        safe_run(["cc", "--version"], capture_output=True)

    call_kwargs = mock_run.call_args[1]
    assert "creationflags" not in call_kwargs
    assert call_kwargs["stdin"] == subprocess.DEVNULL


@patch("subprocess.run")
def test_safe_run_keeps_explicit_stdin(mock_run):
    safe_run(["cc"], stdin=subprocess.PIPE)
    assert mock_run.call_args[1]["stdin"] == subprocess.PIPE


@patch("subprocess.run")
def test_safe_run_accepts_tuples(mock_run):
    safe_run(("cc", "-c", "a.c"))
    assert mock_run.call_args[0][0] == ["cc", "-c", "a.c"]


@patch("subprocess.run")
def test_capture_output_strips(mock_run):
    mock_run.return_value = subprocess.CompletedProcess(["php-config"], 0, stdout="  /usr/local\n", stderr="")
    assert capture_output(["php-config", "--prefix"]) == "/usr/local"
    assert mock_run.call_args[1]["check"] is True
