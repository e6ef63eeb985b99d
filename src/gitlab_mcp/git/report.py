"""Status messages for git_create_branch outcomes."""

from .contracts import BranchOutcome


def render_branch_outcome(
    outcome: BranchOutcome,
    branch: str,
    repo_path: str,
    detail: str | None = None,
    from_ref: str | None = None,
    warning: str | None = None,
) -> str:
    detail = detail or ""

    if outcome is BranchOutcome.INVALID_INPUT:
        return f"❌ {detail or 'invalid arguments'}"
    if outcome is BranchOutcome.NOT_A_GIT_REPO:
        return f"❌ this is not a git repository: {repo_path}\n{detail}"
    if outcome is BranchOutcome.CHECKOUT_FAILED:
        return f"❌ checkout failed: \n{detail}"
    if outcome is BranchOutcome.CREATE_FAILED:
        if from_ref:
            return f"❌ create branch failed (from {from_ref}): \n{detail}"
        return f"❌ create branch failed: \n{detail}"
    if outcome is BranchOutcome.SUCCESS_WITH_UPSTREAM_WARNING:
        return f"✅ checked out to {branch}\n⚠️ setting upstream may fail: \n{warning or ''}"
    return f"✅ checked out to {branch} (repo: {repo_path})"
