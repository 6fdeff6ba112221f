import subprocess
from pathlib import Path

import pytest

from noxdg.dispatch import mime
from noxdg.errors import MimeDetectionError


def test_detect_mime_strips_output_and_passes_flags(tmp_path: Path, monkeypatch):
    target = tmp_path / "doc.pdf"
    target.write_bytes(b"%PDF-1.4")
    # echo stands in for file(1): its output is the argument list plus a newline.
    monkeypatch.setenv("NO_XDG_OPEN_FILE_COMMAND", "/bin/echo")

    assert mime.detect_mime(str(target)) == f"--mime-type -b {target}"


def test_detect_mime_returns_stdout(tmp_path: Path, monkeypatch):
    target = tmp_path / "doc.pdf"
    target.write_bytes(b"%PDF-1.4")
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        return subprocess.CompletedProcess(cmd, 0, stdout="application/pdf\n", stderr="")

    monkeypatch.delenv("NO_XDG_OPEN_FILE_COMMAND", raising=False)
    monkeypatch.setattr(mime.subprocess, "run", fake_run)
    assert mime.detect_mime(str(target)) == "application/pdf"
    assert seen["cmd"] == ["/usr/bin/file", "--mime-type", "-b", str(target)]


def test_missing_target_is_not_probed(tmp_path: Path, monkeypatch):
    def fail_run(*_args, **_kwargs):
        raise AssertionError("subprocess should not run for a missing target")

    monkeypatch.setattr(mime.subprocess, "run", fail_run)
    with pytest.raises(MimeDetectionError):
        mime.detect_mime(str(tmp_path / "absent.txt"))
    with pytest.raises(MimeDetectionError):
        mime.detect_mime("https://example.com/")


def test_missing_utility_is_a_detection_error(tmp_path: Path, monkeypatch):
    target = tmp_path / "a.txt"
    target.write_text("hi", encoding="utf-8")
    monkeypatch.setenv("NO_XDG_OPEN_FILE_COMMAND", str(tmp_path / "no-such-binary"))
    with pytest.raises(MimeDetectionError, match="cannot run"):
        mime.detect_mime(str(target))


def test_failing_utility_is_a_detection_error(tmp_path: Path, monkeypatch):
    target = tmp_path / "a.txt"
    target.write_text("hi", encoding="utf-8")

    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(returncode=1, cmd=cmd)

    monkeypatch.setattr(mime.subprocess, "run", fake_run)
    with pytest.raises(MimeDetectionError, match="status 1"):
        mime.detect_mime(str(target))
