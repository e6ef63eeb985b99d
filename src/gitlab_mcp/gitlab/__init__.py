from .contracts import IssueResult
from .issues import GitLabIssueClient, build_issue_form, encode_project_id

__all__ = [
    "IssueResult",
    "GitLabIssueClient",
    "build_issue_form",
    "encode_project_id",
]
