from dataclasses import dataclass, field
from enum import Enum


@dataclass
class CommandResult:
    ok: bool
    stdout: str
    stderr: str
    args: list[str] = field(default_factory=list)


class BranchOutcome(Enum):
    """Terminal report of a git_create_branch call."""
    INVALID_INPUT = "invalid_input"
    NOT_A_GIT_REPO = "not_a_git_repo"
    CHECKOUT_FAILED = "checkout_failed"
    CREATE_FAILED = "create_failed"
    SUCCESS = "success"
    SUCCESS_WITH_UPSTREAM_WARNING = "success_with_upstream_warning"

    @property
    def succeeded(self) -> bool:
        return self in (BranchOutcome.SUCCESS, BranchOutcome.SUCCESS_WITH_UPSTREAM_WARNING)


class AcquireStrategy(Enum):
    CHECKOUT = "checkout"
    CREATE_FROM_REF = "create_from_ref"
    CREATE_FROM_HEAD = "create_from_head"


class UpstreamStatus(Enum):
    SKIPPED = "skipped"
    PUBLISHED = "published"
    WARNED = "warned"


@dataclass
class BranchLookup:
    in_work_tree: bool
    exists: bool
    error: str = ""


@dataclass
class Acquisition:
    strategy: AcquireStrategy
    result: CommandResult


@dataclass
class UpstreamResult:
    status: UpstreamStatus
    message: str | None = None


@dataclass
class BranchReport:
    outcome: BranchOutcome
    branch: str
    repo_path: str
    detail: str | None = None
    from_ref: str | None = None
    warning: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.outcome.succeeded

    @property
    def message(self) -> str:
        from .report import render_branch_outcome
        return render_branch_outcome(
            self.outcome,
            self.branch,
            self.repo_path,
            detail=self.detail,
            from_ref=self.from_ref,
            warning=self.warning,
        )


@dataclass
class CommitPushResult:
    branch: str
    staged: bool = False
    committed: bool = False
    nothing_to_commit: bool = False
    pushed: bool = False
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.pushed and not self.errors

    @property
    def message(self) -> str:
        if self.errors:
            return "\n".join(self.errors)
        if self.nothing_to_commit:
            return f"✅ Commit & push completed ({self.branch}) (no changes to commit)"
        return f"✅ Commit & push completed ({self.branch})"
