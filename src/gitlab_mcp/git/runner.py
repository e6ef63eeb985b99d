"""Runs git commands without ever raising to the caller."""

import logging
import subprocess
from pathlib import Path

from .contracts import CommandResult

logger = logging.getLogger(__name__)


def _as_text(output: str | bytes | None) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


class CommandRunner:
    """Executes one command in a working directory.

    Every failure (non-zero exit, missing executable or directory, timeout)
    is reported through ``CommandResult.ok``; ``run`` itself never raises.
    """

    def __init__(self, timeout: float | None = None) -> None:
        self.timeout = timeout

    def run(self, args: list[str], cwd: str | Path) -> CommandResult:
        logger.debug(f"Running {' '.join(args)} in {cwd}")
        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                encoding='utf-8',
                errors='replace',
            )
        except subprocess.TimeoutExpired as e:
            return self._failure(args, e.stdout, e.stderr, e)
        except (OSError, ValueError, subprocess.SubprocessError) as e:
            return self._failure(args, None, None, e)

        if completed.returncode != 0:
            stderr = completed.stderr or f"Command failed ({completed.returncode}): {' '.join(args)}"
            logger.debug(f"{args[0]} exited {completed.returncode}: {stderr.strip()}")
            return CommandResult(ok=False, stdout=completed.stdout or "", stderr=stderr, args=list(args))

        return CommandResult(ok=True, stdout=completed.stdout or "", stderr=completed.stderr or "", args=list(args))

    def _failure(self, args: list[str], stdout, stderr, error: Exception) -> CommandResult:
        stderr_text = _as_text(stderr) or str(error)
        logger.debug(f"{' '.join(args)} failed: {stderr_text.strip()}")
        return CommandResult(ok=False, stdout=_as_text(stdout), stderr=stderr_text, args=list(args))
