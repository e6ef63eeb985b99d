from .contracts import (
    Acquisition,
    AcquireStrategy,
    BranchLookup,
    BranchOutcome,
    BranchReport,
    CommandResult,
    CommitPushResult,
    UpstreamResult,
    UpstreamStatus,
)
from .runner import CommandRunner
from .operations import GitOperations
from .branch import (
    BranchAcquirer,
    BranchResolver,
    UpstreamPublisher,
    choose_strategy,
    is_benign_push_failure,
    parse_branch_listing,
)
from .report import render_branch_outcome
from .workflow import CommitPushWorkflow, CreateBranchWorkflow

__all__ = [
    "Acquisition",
    "AcquireStrategy",
    "BranchLookup",
    "BranchOutcome",
    "BranchReport",
    "CommandResult",
    "CommitPushResult",
    "UpstreamResult",
    "UpstreamStatus",
    "CommandRunner",
    "GitOperations",
    "BranchAcquirer",
    "BranchResolver",
    "UpstreamPublisher",
    "choose_strategy",
    "is_benign_push_failure",
    "parse_branch_listing",
    "render_branch_outcome",
    "CommitPushWorkflow",
    "CreateBranchWorkflow",
]
