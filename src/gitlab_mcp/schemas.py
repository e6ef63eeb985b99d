"""Request models for the exposed tools.

Arguments arrive as loose JSON objects. Each tool validates them once here;
the git and GitLab layers only ever see these typed requests.
"""

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ToolRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _required_text(value: str, name: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError(f"{name} cannot be empty")
    return value


class BranchRequest(ToolRequest):
    repo_path: str | None = Field(
        default=None,
        alias="repoPath",
        description="Repository working directory (default: the server's working directory)",
    )
    branch_name: str = Field(alias="branchName", description="Branch to checkout or create")
    from_ref: str | None = Field(
        default=None,
        alias="fromRef",
        description="Base ref for a new branch (ignored if the branch already exists)",
    )
    set_upstream: bool = Field(
        default=True,
        alias="setUpstream",
        description="Push the branch with upstream tracking (default: true)",
    )

    @field_validator("branch_name")
    @classmethod
    def _strip_branch_name(cls, value: str) -> str:
        return _required_text(value, "branchName")

    @field_validator("repo_path", "from_ref")
    @classmethod
    def _blank_is_absent(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class CommitPushRequest(ToolRequest):
    repo_path: str = Field(alias="repoPath", description="Repository working directory")
    message: str = Field(description="Commit message")
    branch: str = Field(description="Branch to push to")

    @field_validator("repo_path")
    @classmethod
    def _check_repo_path(cls, value: str) -> str:
        return _required_text(value, "repoPath")

    @field_validator("message")
    @classmethod
    def _check_message(cls, value: str) -> str:
        return _required_text(value, "message")

    @field_validator("branch")
    @classmethod
    def _check_branch(cls, value: str) -> str:
        return _required_text(value, "branch")


class CreateIssueRequest(ToolRequest):
    project: str = Field(description='Project path ("group/repo") or numeric ID')
    title: str
    description: str | None = None
    labels: list[str] | None = None
    assignee_ids: list[int] | None = Field(default=None, alias="assigneeIds")
    milestone_id: int | None = Field(default=None, alias="milestoneId")
    confidential: bool | None = None
    host: str | None = Field(default=None, description="Overrides GITLAB_HOST")
    token: str | None = Field(default=None, description="Overrides GITLAB_TOKEN")

    @field_validator("project", mode="before")
    @classmethod
    def _project_as_text(cls, value):
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise ValueError("project must be a path or an integer ID")
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("project")
    @classmethod
    def _check_project(cls, value: str) -> str:
        return _required_text(value, "project")

    @field_validator("title")
    @classmethod
    def _check_title(cls, value: str) -> str:
        return _required_text(value, "title")


def input_schema(model: type[ToolRequest]) -> dict:
    """JSON schema advertised to MCP clients, using the camelCase argument names."""
    return model.model_json_schema(by_alias=True)


def describe_validation_error(error: ValidationError) -> str:
    """Collapse a pydantic error into one line for the caller."""
    parts = []
    for item in error.errors():
        if item.get("type") == "value_error" and "error" in item.get("ctx", {}):
            parts.append(str(item["ctx"]["error"]))
            continue
        field = ".".join(str(part) for part in item.get("loc", ()))
        parts.append(f"{field}: {item['msg']}" if field else item["msg"])
    return "; ".join(parts)
