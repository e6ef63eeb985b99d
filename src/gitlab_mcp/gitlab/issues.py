import logging
from urllib.parse import quote, urlencode

import httpx

from ..config import DEFAULT_GITLAB_HOST, GitLabConfig
from ..schemas import CreateIssueRequest
from .contracts import IssueResult

logger = logging.getLogger(__name__)


def encode_project_id(project: str) -> str:
    """Numeric IDs pass through; "group/repo" paths become "group%2Frepo"."""
    if project.isdigit():
        return project
    return quote(project, safe="")


def build_issue_form(request: CreateIssueRequest) -> list[tuple[str, str]]:
    form = [("title", request.title)]
    if request.description:
        form.append(("description", request.description))
    if request.labels:
        form.append(("labels", ",".join(request.labels)))
    for assignee_id in request.assignee_ids or []:
        form.append(("assignee_ids[]", str(assignee_id)))
    if request.milestone_id is not None:
        form.append(("milestone_id", str(request.milestone_id)))
    if request.confidential is not None:
        form.append(("confidential", "true" if request.confidential else "false"))
    return form


class GitLabIssueClient:
    """Creates issues through the GitLab REST API."""

    def __init__(self, config: GitLabConfig | None = None, transport: httpx.BaseTransport | None = None) -> None:
        self.config = config or GitLabConfig()
        self._transport = transport

    def create_issue(self, request: CreateIssueRequest) -> IssueResult:
        host = (request.host or self.config.host or DEFAULT_GITLAB_HOST).rstrip("/")
        token = request.token or self.config.token
        if not token:
            return IssueResult(ok=False, error="missing GITLAB_TOKEN")

        url = f"{host}/projects/{encode_project_id(request.project)}/issues"
        headers = {
            "PRIVATE-TOKEN": token,
            "Content-Type": "application/x-www-form-urlencoded",
        }

        try:
            with httpx.Client(timeout=self.config.timeout, transport=self._transport) as client:
                response = client.post(url, content=urlencode(build_issue_form(request)), headers=headers)
        except httpx.HTTPError as e:
            logger.warning(f"GitLab request to {url} failed: {e}")
            return IssueResult(ok=False, error=f"GitLab create issue failed: {e}")

        if not response.is_success:
            logger.warning(f"GitLab rejected issue for {request.project}: {response.status_code}")
            return IssueResult(ok=False, status_code=response.status_code, error=response.text)

        try:
            issue = response.json()
        except ValueError:
            return IssueResult(
                ok=False,
                status_code=response.status_code,
                error=f"unreadable response: {response.text[:200]}",
            )

        return IssueResult(
            ok=True,
            iid=issue.get("iid"),
            web_url=issue.get("web_url"),
            status_code=response.status_code,
        )
