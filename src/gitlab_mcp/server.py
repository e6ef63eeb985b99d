import asyncio
import logging
import sys

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent
from pydantic import ValidationError

from . import __version__
from .config import ServerConfig
from .git import (
    BranchOutcome,
    BranchReport,
    CommandRunner,
    CommitPushWorkflow,
    CreateBranchWorkflow,
    GitOperations,
)
from .gitlab import GitLabIssueClient
from .schemas import (
    BranchRequest,
    CommitPushRequest,
    CreateIssueRequest,
    describe_validation_error,
    input_schema,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-gitlab-server"


def _text(message: str) -> list[TextContent]:
    return [TextContent(type="text", text=message)]


class GitLabMCPServer:

    def __init__(self, config: ServerConfig | None = None) -> None:
        self.config = config or ServerConfig()
        self._server = Server(SERVER_NAME, version=__version__)
        ops = GitOperations(CommandRunner(timeout=self.config.git_timeout), remote=self.config.remote)
        self._branch_workflow = CreateBranchWorkflow(ops)
        self._commit_push_workflow = CommitPushWorkflow(ops)
        self._issue_client = GitLabIssueClient(self.config.gitlab)
        self._handlers = {
            "gitlab_create_issue": self._handle_create_issue,
            "git_commit_push": self._handle_commit_push,
            "git_create_branch": self._handle_create_branch,
        }
        self._register_handlers()

    def _register_handlers(self):
        self._server.list_tools()(self._list_tools)
        self._server.call_tool(validate_input=False)(self._call_tool)

    async def _list_tools(self) -> list[Tool]:
        return [
            Tool(
                name="gitlab_create_issue",
                title="Create GitLab Issue",
                description="Create an issue in the specified GitLab project",
                inputSchema=input_schema(CreateIssueRequest),
            ),
            Tool(
                name="git_commit_push",
                title="Git Commit & Push",
                description="Commit all changes and push to a branch",
                inputSchema=input_schema(CommitPushRequest),
            ),
            Tool(
                name="git_create_branch",
                title="Create/Checkout branch",
                description=(
                    "Checkout a branch, creating it from fromRef or the current HEAD if it does not "
                    "exist, then push it with upstream tracking unless setUpstream is false."
                ),
                inputSchema=input_schema(BranchRequest),
            ),
        ]

    async def _call_tool(self, name: str, arguments: dict | None) -> list[TextContent]:
        handler = self._handlers.get(name)
        if handler is None:
            return _text(f"Unknown tool: {name}")
        # git and HTTP calls block; keep them off the event loop.
        return await asyncio.to_thread(handler, arguments or {})

    def _handle_create_issue(self, arguments: dict) -> list[TextContent]:
        try:
            request = CreateIssueRequest.model_validate(arguments)
        except ValidationError as e:
            return _text(f"❌ {describe_validation_error(e)}")

        result = self._issue_client.create_issue(request)
        return _text(result.message)

    def _handle_commit_push(self, arguments: dict) -> list[TextContent]:
        try:
            request = CommitPushRequest.model_validate(arguments)
        except ValidationError as e:
            return _text(f"❌ {describe_validation_error(e)}")

        result = self._commit_push_workflow.run(request)
        return _text(result.message)

    def _handle_create_branch(self, arguments: dict) -> list[TextContent]:
        try:
            request = BranchRequest.model_validate(arguments)
        except ValidationError as e:
            report = BranchReport(
                BranchOutcome.INVALID_INPUT,
                str(arguments.get("branchName", "")),
                str(arguments.get("repoPath") or ""),
                detail=describe_validation_error(e),
            )
            return _text(report.message)

        report = self._branch_workflow.run(request)
        logger.info(f"git_create_branch {request.branch_name}: {report.outcome.value}")
        return _text(report.message)

    async def run(self):
        async with stdio_server() as (read_stream, write_stream):
            await self._server.run(read_stream, write_stream, self._server.create_initialization_options())


def main():
    load_dotenv()
    config = ServerConfig.from_env()
    logging.basicConfig(
        stream=sys.stderr,
        level=getattr(logging, config.log_level, logging.WARNING),
        format="[%(name)s] %(levelname)s: %(message)s",
    )
    server = GitLabMCPServer(config)
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        pass
    except Exception:
        logger.exception(f"[{SERVER_NAME}] fatal")
        sys.exit(1)


if __name__ == "__main__":
    main()
