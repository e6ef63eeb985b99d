from pathlib import Path

from .contracts import CommandResult
from .runner import CommandRunner

BRANCH_LIST_FORMAT = "%(refname:short)"


class GitOperations:
    """One method per git invocation the tools issue."""

    def __init__(self, runner: CommandRunner | None = None, remote: str = "origin") -> None:
        self.runner = runner or CommandRunner()
        self.remote = remote

    def _run(self, args: list[str], cwd: str | Path) -> CommandResult:
        return self.runner.run(["git", *args], cwd)

    def is_inside_work_tree(self, cwd: str | Path) -> CommandResult:
        return self._run(["rev-parse", "--is-inside-work-tree"], cwd)

    def list_local_branches(self, cwd: str | Path) -> CommandResult:
        return self._run(["branch", "--list", f"--format={BRANCH_LIST_FORMAT}"], cwd)

    def checkout(self, cwd: str | Path, branch: str) -> CommandResult:
        return self._run(["checkout", branch], cwd)

    def checkout_new_branch(self, cwd: str | Path, branch: str, from_ref: str | None = None) -> CommandResult:
        args = ["checkout", "-b", branch]
        if from_ref:
            args.append(from_ref)
        return self._run(args, cwd)

    def push_upstream(self, cwd: str | Path, branch: str) -> CommandResult:
        return self._run(["push", "-u", self.remote, branch], cwd)

    def stage_all(self, cwd: str | Path) -> CommandResult:
        return self._run(["add", "-A"], cwd)

    def commit(self, cwd: str | Path, message: str) -> CommandResult:
        return self._run(["commit", "-m", message], cwd)

    def push(self, cwd: str | Path, branch: str) -> CommandResult:
        return self._run(["push", self.remote, branch], cwd)
