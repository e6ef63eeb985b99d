"""Command-sequence tests for the branch and commit/push workflows."""

import os

import pytest

from gitlab_mcp.git import BranchOutcome, CommitPushWorkflow, CreateBranchWorkflow, GitOperations
from gitlab_mcp.schemas import BranchRequest, CommitPushRequest


def _branch_request(**arguments) -> BranchRequest:
    return BranchRequest.model_validate({"repoPath": "/repo", "branchName": "feature-x", **arguments})


@pytest.fixture
def workflow(fake_ops: GitOperations) -> CreateBranchWorkflow:
    return CreateBranchWorkflow(fake_ops)


class TestCreateBranchWorkflow:

    def test_new_branch_from_head_then_push(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        fake_runner.script(("branch", "--list"), stdout="main\n")
        report = workflow.run(_branch_request())

        assert report.outcome is BranchOutcome.SUCCESS
        assert report.message == "✅ checked out to feature-x (repo: /repo)"
        assert fake_runner.git_calls() == [
            ["rev-parse", "--is-inside-work-tree"],
            ["branch", "--list", "--format=%(refname:short)"],
            ["checkout", "-b", "feature-x"],
            ["push", "-u", "origin", "feature-x"],
        ]

    def test_existing_branch_only_checks_out(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        fake_runner.script(("branch", "--list"), stdout="main\nfeature-x\n")
        report = workflow.run(_branch_request(fromRef="develop", setUpstream=False))

        assert report.outcome is BranchOutcome.SUCCESS
        assert fake_runner.git_calls("checkout") == [["checkout", "feature-x"]]
        assert not any("develop" in call for call in fake_runner.git_calls())

    def test_absent_branch_with_ref(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        workflow.run(_branch_request(fromRef="develop"))
        assert fake_runner.git_calls("checkout") == [["checkout", "-b", "feature-x", "develop"]]

    def test_set_upstream_false_issues_no_push(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        report = workflow.run(_branch_request(setUpstream=False))
        assert report.outcome is BranchOutcome.SUCCESS
        assert fake_runner.git_calls("push") == []

    def test_not_a_repo_is_fatal(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        fake_runner.script(("rev-parse",), ok=False, stderr="fatal: not a git repository")
        report = workflow.run(_branch_request())

        assert report.outcome is BranchOutcome.NOT_A_GIT_REPO
        assert report.message == "❌ this is not a git repository: /repo\nfatal: not a git repository"
        assert len(fake_runner.calls) == 1

    def test_checkout_failure_is_fatal(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        fake_runner.script(("branch", "--list"), stdout="feature-x\n")
        fake_runner.script(("checkout",), ok=False, stderr="error: Your local changes would be overwritten")
        report = workflow.run(_branch_request())

        assert report.outcome is BranchOutcome.CHECKOUT_FAILED
        assert "Your local changes would be overwritten" in report.message
        assert fake_runner.git_calls("push") == []
        assert fake_runner.git_calls("checkout", "-b") == []

    def test_create_from_ref_failure_names_ref(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        fake_runner.script(("checkout", "-b"), ok=False, stderr="fatal: 'nope' is not a commit")
        report = workflow.run(_branch_request(fromRef="nope"))

        assert report.outcome is BranchOutcome.CREATE_FAILED
        assert report.message == "❌ create branch failed (from nope): \nfatal: 'nope' is not a commit"
        assert fake_runner.git_calls("push") == []

    def test_create_from_head_failure(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        fake_runner.script(("checkout", "-b"), ok=False, stderr="fatal: invalid branch name")
        report = workflow.run(_branch_request())

        assert report.outcome is BranchOutcome.CREATE_FAILED
        assert report.message == "❌ create branch failed: \nfatal: invalid branch name"

    def test_up_to_date_push_is_plain_success(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        fake_runner.script(("push", "-u"), ok=False, stderr="Everything up-to-date")
        report = workflow.run(_branch_request())

        assert report.outcome is BranchOutcome.SUCCESS
        assert "⚠️" not in report.message

    def test_push_failure_is_advisory(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        error = "remote: Permission to group/repo.git denied to dev."
        fake_runner.script(("push", "-u"), ok=False, stderr=error)
        report = workflow.run(_branch_request())

        assert report.outcome is BranchOutcome.SUCCESS_WITH_UPSTREAM_WARNING
        assert report.succeeded is True
        assert "✅ checked out to feature-x" in report.message
        assert error in report.message

    def test_defaults_to_current_directory(self, fake_runner, workflow: CreateBranchWorkflow) -> None:
        report = workflow.run(BranchRequest.model_validate({"branchName": "feature-x", "setUpstream": False}))
        assert report.repo_path == os.getcwd()


def _commit_request(**arguments) -> CommitPushRequest:
    return CommitPushRequest.model_validate(
        {"repoPath": "/repo", "message": "fix: update login flow", "branch": "main", **arguments}
    )


class TestCommitPushWorkflow:

    def test_stage_commit_push(self, fake_runner, fake_ops: GitOperations) -> None:
        result = CommitPushWorkflow(fake_ops).run(_commit_request())

        assert result.succeeded is True
        assert result.committed is True
        assert result.message == "✅ Commit & push completed (main)"
        assert fake_runner.git_calls() == [
            ["add", "-A"],
            ["commit", "-m", "fix: update login flow"],
            ["push", "origin", "main"],
        ]

    def test_nothing_to_commit_still_pushes(self, fake_runner, fake_ops: GitOperations) -> None:
        fake_runner.script(("commit",), ok=False, stdout="On branch main\nnothing to commit, working tree clean\n")
        result = CommitPushWorkflow(fake_ops).run(_commit_request())

        assert result.succeeded is True
        assert result.nothing_to_commit is True
        assert result.committed is False
        assert "no changes to commit" in result.message
        assert fake_runner.git_calls("push") == [["push", "origin", "main"]]

    def test_stage_failure_stops(self, fake_runner, fake_ops: GitOperations) -> None:
        fake_runner.script(("add",), ok=False, stderr="fatal: not a git repository")
        result = CommitPushWorkflow(fake_ops).run(_commit_request())

        assert result.succeeded is False
        assert result.message.startswith("❌ stage failed")
        assert fake_runner.git_calls("commit") == []

    def test_commit_failure_stops(self, fake_runner, fake_ops: GitOperations) -> None:
        fake_runner.script(("commit",), ok=False, stderr="Author identity unknown")
        result = CommitPushWorkflow(fake_ops).run(_commit_request())

        assert result.succeeded is False
        assert "Author identity unknown" in result.message
        assert fake_runner.git_calls("push") == []

    def test_push_failure_is_reported(self, fake_runner, fake_ops: GitOperations) -> None:
        fake_runner.script(("push",), ok=False, stderr="rejected: non-fast-forward")
        result = CommitPushWorkflow(fake_ops).run(_commit_request())

        assert result.succeeded is False
        assert result.committed is True
        assert result.message == "❌ push failed (main): \nrejected: non-fast-forward"
