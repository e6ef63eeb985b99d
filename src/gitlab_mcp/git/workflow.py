import logging
import os
from pathlib import Path

from ..schemas import BranchRequest, CommitPushRequest
from .branch import BranchAcquirer, BranchResolver, UpstreamPublisher
from .contracts import (
    AcquireStrategy,
    BranchOutcome,
    BranchReport,
    CommitPushResult,
    UpstreamStatus,
)
from .operations import GitOperations

logger = logging.getLogger(__name__)

NOTHING_TO_COMMIT_MARKERS = ("nothing to commit", "no changes added to commit")


class CreateBranchWorkflow:
    """Resolve, acquire, publish, report. One BranchReport per request."""

    def __init__(self, ops: GitOperations | None = None) -> None:
        self.ops = ops or GitOperations()
        self.resolver = BranchResolver(self.ops)
        self.acquirer = BranchAcquirer(self.ops)
        self.publisher = UpstreamPublisher(self.ops)

    def run(self, request: BranchRequest) -> BranchReport:
        cwd = request.repo_path or os.getcwd()
        branch = request.branch_name

        lookup = self.resolver.resolve(branch, cwd)
        if not lookup.in_work_tree:
            return BranchReport(BranchOutcome.NOT_A_GIT_REPO, branch, cwd, detail=lookup.error)

        acquisition = self.acquirer.acquire(request, lookup.exists, cwd)
        if not acquisition.result.ok:
            if acquisition.strategy is AcquireStrategy.CHECKOUT:
                return BranchReport(BranchOutcome.CHECKOUT_FAILED, branch, cwd, detail=acquisition.result.stderr)
            from_ref = request.from_ref if acquisition.strategy is AcquireStrategy.CREATE_FROM_REF else None
            return BranchReport(
                BranchOutcome.CREATE_FAILED, branch, cwd,
                detail=acquisition.result.stderr, from_ref=from_ref,
            )

        upstream = self.publisher.publish(branch, cwd, request.set_upstream)
        if upstream.status is UpstreamStatus.WARNED:
            return BranchReport(
                BranchOutcome.SUCCESS_WITH_UPSTREAM_WARNING, branch, cwd,
                warning=upstream.message,
            )
        return BranchReport(BranchOutcome.SUCCESS, branch, cwd)


def _is_nothing_to_commit(stdout: str, stderr: str) -> bool:
    text = f"{stdout}\n{stderr}".lower()
    return any(marker in text for marker in NOTHING_TO_COMMIT_MARKERS)


class CommitPushWorkflow:
    """Stage everything, commit, push to the named branch."""

    def __init__(self, ops: GitOperations | None = None) -> None:
        self.ops = ops or GitOperations()

    def run(self, request: CommitPushRequest) -> CommitPushResult:
        cwd = Path(request.repo_path)
        result = CommitPushResult(branch=request.branch)

        staged = self.ops.stage_all(cwd)
        if not staged.ok:
            result.errors.append(f"❌ stage failed: \n{staged.stderr}")
            return result
        result.staged = True

        commit = self.ops.commit(cwd, request.message)
        if commit.ok:
            result.committed = True
        elif _is_nothing_to_commit(commit.stdout, commit.stderr):
            logger.info(f"No changes to commit in {cwd}")
            result.nothing_to_commit = True
        else:
            result.errors.append(f"❌ commit failed: \n{commit.stderr}")
            return result

        push = self.ops.push(cwd, request.branch)
        if not push.ok:
            result.errors.append(f"❌ push failed ({request.branch}): \n{push.stderr}")
            return result
        result.pushed = True

        return result
