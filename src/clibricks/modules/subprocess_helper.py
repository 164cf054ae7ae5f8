"""Subprocess execution for external collaborators (docker compose, ...).

Philosophy:
- Single responsibility: run one external command and report its outcome
- Never raise for a failing command, report it in the result
- Commands are argument lists, never shell strings

Public API (the "studs"):
    CommandResult: Result dataclass
    run_command: Main execution function
"""

import logging
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

COMMAND_NOT_FOUND = 127


@dataclass
class CommandResult:
    """Result of an external command."""

    command: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False

    @property
    def success(self) -> bool:
        return self.returncode == 0 and not self.timed_out

    @property
    def command_line(self) -> str:
        """Command as it would be typed in a shell."""
        return shlex.join(self.command)


def run_command(
    cmd: list[str],
    cwd: Path | None = None,
    timeout: int | None = None,
    env: dict | None = None,
    capture: bool = True,
) -> CommandResult:
    """
    Run an external command.

    Args:
        cmd: Command and arguments
        cwd: Working directory
        timeout: Timeout in seconds (None = no timeout)
        env: Environment variables (None = inherit)
        capture: Capture stdout/stderr (False streams them to the terminal)

    Returns:
        CommandResult with output and exit code

    Example:
        >>> result = run_command(["echo", "hello"])
        >>> assert result.success
        >>> assert "hello" in result.stdout
    """
    logger.debug(f"Running: {shlex.join(cmd)}")

    try:
        completed = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            timeout=timeout,
            capture_output=capture,
            text=True,
            errors="replace",
            check=False,
        )
    except FileNotFoundError:
        return CommandResult(
            command=cmd,
            returncode=COMMAND_NOT_FOUND,
            stderr=f"Command not found: {cmd[0] if cmd else 'unknown'}",
        )
    except subprocess.TimeoutExpired as e:
        logger.warning(f"Command timed out after {timeout}s: {shlex.join(cmd)}")
        return CommandResult(
            command=cmd,
            returncode=-1,
            stdout=_as_text(e.stdout),
            stderr=_as_text(e.stderr),
            timed_out=True,
        )
    except OSError as e:
        return CommandResult(
            command=cmd,
            returncode=1,
            stderr=f"Error executing command: {e!s}",
        )

    return CommandResult(
        command=cmd,
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


def _as_text(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


__all__ = ["COMMAND_NOT_FOUND", "CommandResult", "run_command"]
