"""Branch acquisition for git_create_branch.

Three steps, each a separate component so they can be exercised alone:

- ``BranchResolver`` confirms the directory is a work tree and looks the
  branch up in the local branch listing.
- ``BranchAcquirer`` runs exactly one of checkout, create-from-ref or
  create-from-HEAD. Existence wins over ``fromRef`` so that repeating a call
  checks out the branch instead of failing on "already exists".
- ``UpstreamPublisher`` pushes with upstream tracking. Its failures are
  advisory only.
"""

import logging
import re
from pathlib import Path

from ..schemas import BranchRequest
from .contracts import (
    Acquisition,
    AcquireStrategy,
    BranchLookup,
    UpstreamResult,
    UpstreamStatus,
)
from .operations import GitOperations

logger = logging.getLogger(__name__)

# git's wording varies across versions and locales; this is a heuristic.
BENIGN_PUSH_PATTERN = re.compile(
    r"set-upstream|up-to-date|up to date|already tracking|nothing to push",
    re.IGNORECASE,
)


def is_benign_push_failure(stderr: str) -> bool:
    """True when a failed upstream push means the intended state already holds."""
    return bool(BENIGN_PUSH_PATTERN.search(stderr or ""))


def parse_branch_listing(output: str) -> list[str]:
    branches = []
    for line in output.split("\n"):
        name = line.replace("'", "").replace("\r", "").strip()
        if name:
            branches.append(name)
    return branches


def choose_strategy(exists: bool, from_ref: str | None) -> AcquireStrategy:
    if exists:
        return AcquireStrategy.CHECKOUT
    if from_ref:
        return AcquireStrategy.CREATE_FROM_REF
    return AcquireStrategy.CREATE_FROM_HEAD


class BranchResolver:

    def __init__(self, ops: GitOperations) -> None:
        self.ops = ops

    def resolve(self, branch: str, cwd: str | Path) -> BranchLookup:
        check = self.ops.is_inside_work_tree(cwd)
        if not check.ok or check.stdout.strip() != "true":
            return BranchLookup(in_work_tree=False, exists=False, error=check.stderr)

        listing = self.ops.list_local_branches(cwd)
        if not listing.ok:
            logger.warning(f"Could not list branches in {cwd}, assuming {branch} is new: {listing.stderr.strip()}")
            return BranchLookup(in_work_tree=True, exists=False)

        return BranchLookup(in_work_tree=True, exists=branch in parse_branch_listing(listing.stdout))

    def branch_exists(self, branch: str, cwd: str | Path) -> bool:
        return self.resolve(branch, cwd).exists


class BranchAcquirer:

    def __init__(self, ops: GitOperations) -> None:
        self.ops = ops

    def acquire(self, request: BranchRequest, exists: bool, cwd: str | Path) -> Acquisition:
        strategy = choose_strategy(exists, request.from_ref)
        branch = request.branch_name
        logger.info(f"Acquiring branch {branch} in {cwd} via {strategy.value}")

        if strategy is AcquireStrategy.CHECKOUT:
            result = self.ops.checkout(cwd, branch)
        elif strategy is AcquireStrategy.CREATE_FROM_REF:
            result = self.ops.checkout_new_branch(cwd, branch, request.from_ref)
        else:
            result = self.ops.checkout_new_branch(cwd, branch)

        return Acquisition(strategy=strategy, result=result)


class UpstreamPublisher:

    def __init__(self, ops: GitOperations) -> None:
        self.ops = ops

    def publish(self, branch: str, cwd: str | Path, enabled: bool) -> UpstreamResult:
        if not enabled:
            return UpstreamResult(status=UpstreamStatus.SKIPPED)

        push = self.ops.push_upstream(cwd, branch)
        if push.ok or is_benign_push_failure(push.stderr):
            return UpstreamResult(status=UpstreamStatus.PUBLISHED)

        logger.warning(f"Upstream push of {branch} failed: {push.stderr.strip()}")
        return UpstreamResult(status=UpstreamStatus.WARNED, message=push.stderr or push.stdout)
