"""Tests for installation state detection, cleanup and the CLI probe."""

import subprocess

from kirosetup.installer import cleanup_generated, detect_installation, get_install_instructions, is_available
from kirosetup.schemas import InstallState

from conftest import write


def test_absent_when_bmad_missing(project_dir):
    detection = detect_installation(project_dir, project_dir / "_bmad")

    assert detection.state == InstallState.ABSENT
    assert detection.can_proceed is False


def test_fresh_without_kiro_dir(project_dir, bmad_dir):
    detection = detect_installation(project_dir, bmad_dir)

    assert detection.state == InstallState.FRESH
    assert detection.can_proceed is True
    assert detection.target_exists is False


def test_existing_reports_subdirs(project_dir, bmad_dir):
    (project_dir / ".kiro" / "agents").mkdir(parents=True)
    detection = detect_installation(project_dir, bmad_dir)

    assert detection.state == InstallState.EXISTING
    assert detection.target_exists is True
    assert detection.agents_exists is True
    assert detection.commands_exists is False
    assert detection.steering_exists is False


def test_cleanup_removes_only_prefixed_entries(project_dir):
    kiro = project_dir / ".kiro"
    write(kiro / "agents" / "bmad-core-test.json", "{}")
    write(kiro / "agents" / "bmad-core-test-prompt.md", "")
    write(kiro / "agents" / "my-agent.json", "{}")
    write(kiro / "commands" / "bmad-bmm-create-prd.md", "")
    write(kiro / "commands" / "bmad-nested" / "inner.md", "")
    write(kiro / "commands" / "deploy.md", "")
    write(kiro / "steering" / "bmad-index.md", "")
    write(kiro / "steering" / "team-notes.md", "")

    removed = cleanup_generated(project_dir)

    assert removed == 5
    remaining = sorted(p.relative_to(kiro).as_posix() for p in kiro.rglob("*") if p.is_file())
    assert remaining == ["agents/my-agent.json", "commands/deploy.md", "steering/team-notes.md"]


def test_cleanup_without_kiro_dir(project_dir):
    assert cleanup_generated(project_dir) == 0


def test_probe_missing_binary():
    assert is_available("kirosetup-definitely-not-installed") is False


def test_probe_nonzero_exit(monkeypatch):
    def fake_run(*args, **kwargs):
        raise subprocess.CalledProcessError(1, args[0])

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert is_available() is False


def test_probe_timeout(monkeypatch):
    def fake_run(*args, **kwargs):
        raise subprocess.TimeoutExpired(args[0], kwargs.get("timeout"))

    monkeypatch.setattr(subprocess, "run", fake_run)
    assert is_available() is False


def test_probe_success(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)

    assert is_available() is True
    assert calls == [["kiro-cli", "--version"]]


def test_install_instructions_mention_kiro_cli():
    assert "kiro-cli" in get_install_instructions()
