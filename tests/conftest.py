import shutil
import subprocess
from pathlib import Path

import pytest

from gitlab_mcp.git import CommandResult, GitOperations


class FakeRunner:
    """Records every git argv and answers from scripted results.

    Results are keyed by a prefix of the git arguments (``("push", "-u")``);
    the longest matching prefix wins, and scripting a prefix replaces any
    narrower result it covers. Unscripted commands succeed with empty
    output, except the work tree check which answers ``true``.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.responses: dict[tuple[str, ...], CommandResult] = {
            ("rev-parse", "--is-inside-work-tree"): CommandResult(ok=True, stdout="true\n", stderr=""),
        }

    def script(self, prefix: tuple[str, ...], ok: bool = True, stdout: str = "", stderr: str = "") -> None:
        for key in [key for key in self.responses if key[:len(prefix)] == prefix]:
            del self.responses[key]
        self.responses[prefix] = CommandResult(ok=ok, stdout=stdout, stderr=stderr)

    def run(self, args: list[str], cwd) -> CommandResult:
        self.calls.append(list(args))
        git_args = tuple(args[1:])
        for prefix in sorted(self.responses, key=len, reverse=True):
            if git_args[:len(prefix)] == prefix:
                scripted = self.responses[prefix]
                return CommandResult(ok=scripted.ok, stdout=scripted.stdout, stderr=scripted.stderr, args=list(args))
        return CommandResult(ok=True, stdout="", stderr="", args=list(args))

    def git_calls(self, *prefix: str) -> list[list[str]]:
        return [call[1:] for call in self.calls if tuple(call[1:1 + len(prefix)]) == prefix]


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def fake_ops(fake_runner: FakeRunner) -> GitOperations:
    return GitOperations(fake_runner)


def git(cwd: Path, *args: str) -> str:
    completed = subprocess.run(
        ["git", *args], cwd=cwd, capture_output=True, text=True, check=True,
    )
    return completed.stdout


@pytest.fixture
def remote_repo(tmp_path: Path) -> Path:
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    remote = tmp_path / "remote.git"
    remote.mkdir()
    git(remote, "init", "--bare")
    return remote


@pytest.fixture
def git_repo(tmp_path: Path, remote_repo: Path) -> Path:
    """Work tree on ``main`` with one commit, pushed to a bare ``origin``."""
    repo = tmp_path / "work"
    repo.mkdir()
    git(repo, "init")
    git(repo, "symbolic-ref", "HEAD", "refs/heads/main")
    git(repo, "config", "user.email", "dev@example.com")
    git(repo, "config", "user.name", "Dev")
    git(repo, "config", "commit.gpgsign", "false")
    (repo / "README.md").write_text("hello\n", encoding="utf-8")
    git(repo, "add", "-A")
    git(repo, "commit", "-m", "initial")
    git(repo, "remote", "add", "origin", str(remote_repo))
    git(repo, "push", "-u", "origin", "main")
    return repo
