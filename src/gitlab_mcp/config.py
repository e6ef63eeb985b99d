"""Server configuration, read from the environment once at startup."""

import logging
import os
from dataclasses import dataclass, field
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_GITLAB_HOST = "https://gitlab.com/api/v4"


def _float_or_default(env: Mapping[str, str], name: str, default: float | None) -> float | None:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring {name}={raw!r}: not a number")
        return default
    if value <= 0:
        logger.warning(f"Ignoring {name}={raw!r}: must be positive")
        return default
    return value


@dataclass(frozen=True)
class GitLabConfig:
    host: str = DEFAULT_GITLAB_HOST
    token: str | None = None
    timeout: float = 30.0

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "GitLabConfig":
        env = os.environ if env is None else env
        return cls(
            host=env.get("GITLAB_HOST") or DEFAULT_GITLAB_HOST,
            token=env.get("GITLAB_TOKEN") or None,
            timeout=_float_or_default(env, "GITLAB_TIMEOUT", 30.0),
        )


@dataclass(frozen=True)
class ServerConfig:
    gitlab: GitLabConfig = field(default_factory=GitLabConfig)
    git_timeout: float | None = None
    remote: str = "origin"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "ServerConfig":
        env = os.environ if env is None else env
        return cls(
            gitlab=GitLabConfig.from_env(env),
            git_timeout=_float_or_default(env, "GIT_COMMAND_TIMEOUT", None),
            remote=env.get("GIT_REMOTE") or "origin",
            log_level=(env.get("MCP_GITLAB_LOG_LEVEL") or "WARNING").upper(),
        )
