import logging
import time
from pathlib import Path
from types import SimpleNamespace

import pytest

from noxdg.dispatch import launcher
from noxdg.errors import LaunchError


class StubRun:
    def __init__(self, returncode=0):
        self.returncode = returncode
        self.calls = []

    def __call__(self, argv, **kwargs):
        self.calls.append((argv, kwargs))
        return SimpleNamespace(returncode=self.returncode)


def test_build_shell_command_binds_target_to_dollar_zero(monkeypatch):
    monkeypatch.delenv("NO_XDG_OPEN_SHELL", raising=False)
    argv = launcher.build_shell_command("doc.pdf", "xpdf $0")
    assert argv == ["/bin/sh", "-c", "xpdf $0 &", "doc.pdf"]


def test_launch_runs_shell_without_waiting_on_app(monkeypatch):
    stub = StubRun()
    monkeypatch.setattr(launcher.subprocess, "run", stub)
    monkeypatch.setenv("NO_XDG_OPEN_SHELL", "/usr/bin/dash")

    launcher.launch("https://example.com", "firefox $0")

    argv, kwargs = stub.calls[0]
    assert argv == ["/usr/bin/dash", "-c", "firefox $0 &", "https://example.com"]
    assert kwargs.get("check") is False


def test_launch_logs_command_before_spawning(monkeypatch, caplog):
    monkeypatch.setattr(launcher.subprocess, "run", StubRun())
    monkeypatch.setattr(logging.getLogger("noxdg"), "propagate", True)
    with caplog.at_level(logging.INFO, logger="noxdg.dispatch.launcher"):
        launcher.launch("doc.pdf", "xpdf $0")
    assert "xpdf $0" in caplog.messages


def test_launch_reports_unstartable_shell(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("NO_XDG_OPEN_SHELL", str(tmp_path / "no-shell"))
    with pytest.raises(LaunchError, match="cannot start"):
        launcher.launch("doc.pdf", "xpdf $0")


def test_launch_reports_shell_failure(monkeypatch):
    monkeypatch.setattr(launcher.subprocess, "run", StubRun(returncode=2))
    with pytest.raises(LaunchError, match="status 2"):
        launcher.launch("doc.pdf", "xpdf $0 (")


def test_launch_expands_target_through_real_shell(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("NO_XDG_OPEN_SHELL", raising=False)
    out = tmp_path / "out.txt"
    target = tmp_path / "my file.pdf"
    launcher.launch(str(target), f'printf "%s" "$0" > "{out}"')

    # The job is backgrounded, so poll for its output.
    deadline = time.monotonic() + 5
    while time.monotonic() < deadline:
        if out.exists() and out.read_text(encoding="utf-8"):
            break
        time.sleep(0.05)
    assert out.read_text(encoding="utf-8") == str(target)
