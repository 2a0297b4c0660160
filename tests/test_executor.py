"""Tests for the command runner (with mocked subprocess)."""
import subprocess
import sys
from unittest.mock import MagicMock, patch

import pytest

from pkgbridge.core.executor import CommandResult, CommandRunner


@pytest.fixture
def command_runner(mock_logger):
    return CommandRunner(mock_logger, timeout=30)


def test_run_success(command_runner):
    """run returns CommandResult with success=True when process returns 0."""
    with patch("pkgbridge.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(
            returncode=0,
            stdout="jq 1.7.1\n",
            stderr="",
        )
        result = command_runner.run(["brew", "list", "--versions"])
    assert isinstance(result, CommandResult)
    assert result.success is True
    assert result.return_code == 0
    assert result.command == "brew list --versions"
    assert result.stdout == "jq 1.7.1\n"
    assert result.errored is False


def test_run_failure(command_runner):
    """run returns success=False when process returns non-zero."""
    with patch("pkgbridge.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(
            returncode=100,
            stdout="",
            stderr="E: No packages found",
        )
        result = command_runner.run(["apt", "show", "nope"])
    assert result.success is False
    assert result.return_code == 100
    assert "No packages found" in result.stderr
    assert result.errored is False


def test_run_uses_default_and_explicit_timeout(command_runner):
    with patch("pkgbridge.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        command_runner.run(["cargo", "install", "--list"])
        assert m_run.call_args.kwargs["timeout"] == 30
        command_runner.run(["cargo", "install", "ripgrep"], timeout=900)
        assert m_run.call_args.kwargs["timeout"] == 900


def test_run_timeout(command_runner):
    """A timed-out process is a failed result, not an exception."""
    with patch("pkgbridge.core.executor.subprocess.run") as m_run:
        m_run.side_effect = subprocess.TimeoutExpired(cmd=["brew", "install", "jq"], timeout=30)
        result = command_runner.run(["brew", "install", "jq"])
    assert result.success is False
    assert result.return_code == -1
    assert result.errored is True
    assert "timed out" in result.stderr


def test_run_missing_executable(command_runner):
    """A command that cannot be spawned is a failed result."""
    with patch("pkgbridge.core.executor.subprocess.run") as m_run:
        m_run.side_effect = FileNotFoundError("No such file or directory: 'port'")
        result = command_runner.run(["port", "installed"])
    assert result.success is False
    assert result.errored is True
    assert "port" in result.stderr


def test_run_decodes_with_replacement(command_runner):
    """Output is decoded as UTF-8 with replacement, never strictly."""
    with patch("pkgbridge.core.executor.subprocess.run") as m_run:
        m_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
        command_runner.run(["brew", "info", "jq"])
    kwargs = m_run.call_args.kwargs
    assert kwargs["encoding"] == "utf-8"
    assert kwargs["errors"] == "replace"
    assert "text" not in kwargs


def test_run_undecodable_output(command_runner):
    """A real process printing a non-UTF-8 byte yields a result, not an exception."""
    script = "import sys; sys.stdout.buffer.write(b'caf\\xe9\\n'); sys.exit(1)"
    result = command_runner.run([sys.executable, "-c", script])
    assert result.return_code == 1
    assert result.errored is False
    assert result.stdout == "caf\ufffd\n"
