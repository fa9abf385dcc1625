import json
import logging
import shutil
import subprocess
import sys
from pathlib import Path

import pytest

from gitprompt import __main__ as entrypoint
from gitprompt import cli
from gitprompt.core import gitmeta
from gitprompt.core.summary import RepositoryStatusSummary
from gitprompt.runners.git import CommandFailed, CommandTimeout


def test_entrypoint_delegates_to_cli(monkeypatch: pytest.MonkeyPatch):
    captured: dict[str, object] = {}

    def fake_main(argv):  # pragma: no cover - exercised in test
        captured["argv"] = argv
        return 42

    monkeypatch.setattr(entrypoint.cli, "main", fake_main)
    assert entrypoint.main(["--dir", "."]) == 42
    assert captured["argv"] == ["--dir", "."]


def test_prints_formatted_summary(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path):
    seen: dict[str, object] = {}

    def fake_collect(runner, hash_length=12):
        seen["runner"] = runner
        return RepositoryStatusSummary(branch="main", modified=1, untracked=2)

    monkeypatch.delenv("GITPROMPT_CONFIG", raising=False)
    monkeypatch.setattr(gitmeta, "collect_summary", fake_collect)
    code = cli.main(["--dir", str(tmp_path), "--timeout", "250", "--format", "%n:%b%m u%u"])

    assert code == 0
    assert capsys.readouterr().out == "git:main+ u2\n"
    runner = seen["runner"]
    assert runner.repo_dir == tmp_path
    assert runner.timeout == 0.25


def test_json_output(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    monkeypatch.delenv("GITPROMPT_CONFIG", raising=False)
    monkeypatch.setattr(gitmeta, "collect_summary", lambda runner, hash_length=12: RepositoryStatusSummary(branch="dev"))
    assert cli.main(["--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["branch"] == "dev"
    assert payload["remote"] == "."
    assert payload["dirty"] is False


def test_timeout_prints_fallback(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    def fake_collect(runner, hash_length=12):
        raise CommandTimeout(["git", "status"], runner.timeout)

    monkeypatch.delenv("GITPROMPT_CONFIG", raising=False)
    monkeypatch.setattr(gitmeta, "collect_summary", fake_collect)
    assert cli.main(["--timeout", "10"]) == 1
    assert capsys.readouterr().out == "timeout\n"


@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell")
def test_hanging_git_times_out(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    slow_git = tmp_path / "git"
    slow_git.write_text(f"#!/bin/sh\nexec {sys.executable} -c 'import time; time.sleep(30)'\n")
    slow_git.chmod(0o755)
    cfg_path = tmp_path / "gitprompt.yml"
    cfg_path.write_text(f"git: {slow_git}\n")

    code = cli.main(["--config", str(cfg_path), "--dir", str(tmp_path), "--timeout", "200"])

    assert code == 1
    assert capsys.readouterr().out == "timeout\n"


def test_status_failure_exits_non_zero(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    def fake_collect(runner, hash_length=12):
        raise CommandFailed(["git", "status"], 128, "fatal: not a git repository")

    monkeypatch.delenv("GITPROMPT_CONFIG", raising=False)
    monkeypatch.setattr(gitmeta, "collect_summary", fake_collect)
    assert cli.main([]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "not a git repository" in captured.err


def test_invalid_config_exits_two(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    cfg_path = tmp_path / "bad.yml"
    cfg_path.write_text("timeout: never\n")
    assert cli.main(["--config", str(cfg_path)]) == 2
    assert "invalid configuration" in capsys.readouterr().err


def test_version_flag(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert "gitprompt" in capsys.readouterr().out


def _git(repo: Path, *args: str) -> None:
    subprocess.run(
        ["git", "-c", "user.name=Test", "-c", "user.email=test@example.com", *args],
        cwd=repo,
        check=True,
        capture_output=True,
    )


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_real_repository(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    monkeypatch.delenv("GITPROMPT_CONFIG", raising=False)
    _git(tmp_path, "init", "-q")
    _git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    (tmp_path / "tracked.txt").write_text("one\n")
    _git(tmp_path, "add", "tracked.txt")
    _git(tmp_path, "commit", "-q", "-m", "initial")
    (tmp_path / "tracked.txt").write_text("one\ntwo\nthree\n")
    (tmp_path / "new.txt").write_text("x\n")

    code = cli.main(["--dir", str(tmp_path), "--timeout", "0", "--format", "%b %r%m u%u M%M +%x -%y s%s"])

    assert code == 0
    assert capsys.readouterr().out == "main .+ u1 M1 +2 -0 s0\n"


@pytest.mark.parametrize(
    "flags, level",
    [
        ([], logging.WARNING),
        (["-v"], logging.INFO),
        (["-vv"], logging.DEBUG),
        (["-q"], logging.ERROR),
        (["-q", "-vv"], logging.ERROR),
    ],
)
def test_verbosity_sets_package_log_level(monkeypatch: pytest.MonkeyPatch, flags: list[str], level: int):
    monkeypatch.delenv("GITPROMPT_CONFIG", raising=False)
    monkeypatch.setattr(gitmeta, "collect_summary", lambda runner, hash_length=12: RepositoryStatusSummary(branch="main"))
    assert cli.main(flags) == 0
    assert logging.getLogger("gitprompt").level == level


def test_flags_override_config_file(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path):
    cfg_path = tmp_path / "gitprompt.yml"
    cfg_path.write_text('timeout: 5000\nformat: "%b"\nhash_length: 8\n')
    seen: dict[str, object] = {}

    def fake_collect(runner, hash_length=12):
        seen["timeout"] = runner.timeout
        seen["hash_length"] = hash_length
        return RepositoryStatusSummary(branch="main")

    monkeypatch.setattr(gitmeta, "collect_summary", fake_collect)
    code = cli.main(["--config", str(cfg_path), "--timeout", "250", "--format", "[%b]"])

    assert code == 0
    assert capsys.readouterr().out == "[main]\n"
    assert seen["timeout"] == 0.25
    # values without a matching flag still come from the file
    assert seen["hash_length"] == 8


def test_config_file_used_without_flags(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str], tmp_path: Path):
    cfg_path = tmp_path / "gitprompt.yml"
    cfg_path.write_text('timeout: 5000\nformat: "%b"\n')
    seen: dict[str, object] = {}

    def fake_collect(runner, hash_length=12):
        seen["timeout"] = runner.timeout
        return RepositoryStatusSummary(branch="main")

    monkeypatch.setenv("GITPROMPT_CONFIG", str(cfg_path))
    monkeypatch.setattr(gitmeta, "collect_summary", fake_collect)
    assert cli.main([]) == 0
    assert capsys.readouterr().out == "main\n"
    assert seen["timeout"] == 5.0
