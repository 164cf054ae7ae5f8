"""Docker Compose command building and execution.

This module builds `docker compose` invocations for a project and runs
them through the subprocess helper.

Philosophy:
- Commands are built as argument lists, rendered only for display
- Project defaults (profile, env file) come from ProjectConfig
- Container lifecycle stays with docker compose itself

Public API:
    DockerCompose: Project-bound command runner
    build_command: Build a docker compose invocation
    build_options: Build the global options of an invocation
    ComposeError: Raised on invalid input or docker failures
"""

import logging
import shlex
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from clibricks.modules.subprocess_helper import CommandResult, run_command

if TYPE_CHECKING:
    from clibricks.config_manager import ProjectConfig

logger = logging.getLogger(__name__)

DOCKER_COMPOSE = ["docker", "compose"]

KNOWN_COMMANDS = frozenset(
    {
        "attach",
        "build",
        "config",
        "cp",
        "create",
        "down",
        "events",
        "exec",
        "images",
        "kill",
        "logs",
        "ls",
        "pause",
        "port",
        "ps",
        "pull",
        "push",
        "restart",
        "rm",
        "run",
        "scale",
        "start",
        "stats",
        "stop",
        "top",
        "unpause",
        "up",
        "version",
        "wait",
        "watch",
    }
)


class ComposeError(Exception):
    """Raised when a docker compose operation fails."""

    pass


def _split(opts: str | Sequence[str] | None) -> list[str]:
    if not opts:
        return []
    if isinstance(opts, str):
        return shlex.split(opts)
    return [part for opt in opts for part in shlex.split(opt)]


def build_options(
    opts: str | Sequence[str] | None = None,
    profile: str | None = None,
    env_file: str | Path | None = None,
) -> list[str]:
    """Build global docker compose options.

    User options come first, followed by the project profile and env file.

    Example:
        >>> build_options("-p=test1", profile="dev", env_file="/srv/app/.env")
        ['-p=test1', '--profile', 'dev', '--env-file', '/srv/app/.env']
    """
    options = _split(opts)
    if profile:
        options += ["--profile", profile]
    if env_file:
        options += ["--env-file", str(env_file)]
    return options


def build_command(
    compose_file: str | Path | None,
    command: str | None,
    opts: str | Sequence[str] | None = None,
    profile: str | None = None,
    env_file: str | Path | None = None,
    args: Sequence[str] = (),
) -> list[str]:
    """Build a docker compose invocation.

    Args:
        compose_file: Path to the docker-compose.yml file
        command: docker compose sub-command (start, up, ps, ...)
        opts: Global options placed before the sub-command
        profile: Compose profile to enable
        env_file: Env file handed to docker compose
        args: Arguments placed after the sub-command (services, flags)

    Returns:
        Command as an argument list

    Raises:
        ComposeError: If the file or command is missing, or the command is unknown
    """
    if not compose_file:
        raise ComposeError("Please provide a docker compose file")
    if not command:
        raise ComposeError("Please provide a command")
    if command not in KNOWN_COMMANDS:
        raise ComposeError(f"Unknown docker command: {command}")

    return [
        *DOCKER_COMPOSE,
        "-f",
        str(compose_file),
        *build_options(opts, profile, env_file),
        command,
        *args,
    ]


class DockerCompose:
    """Run docker compose commands for one project.

    Example:
        >>> compose = DockerCompose("docker-compose.yml", profile="dev")
        >>> compose.exec_command("start", dry_run=True).command_line
        'docker compose -f docker-compose.yml --profile dev start'
    """

    def __init__(
        self,
        compose_file: str | Path | None,
        profile: str | None = None,
        env_file: str | Path | None = None,
        runner: Callable[..., CommandResult] = run_command,
    ):
        """Initialize the runner.

        Args:
            compose_file: Path to the docker-compose.yml file
            profile: Compose profile enabled on every command
            env_file: Env file handed to docker compose on every command
            runner: Command runner (for testing)
        """
        self.compose_file = compose_file
        self.profile = profile
        self.env_file = env_file
        self.runner = runner

    @classmethod
    def from_config(cls, config: "ProjectConfig", **kwargs) -> "DockerCompose":
        return cls(
            compose_file=config.compose_file,
            profile=config.compose_profile,
            env_file=config.compose_env_file,
            **kwargs,
        )

    def command(
        self, command: str | None, opts: str | Sequence[str] | None = None, args: Sequence[str] = ()
    ) -> list[str]:
        """Build a command with the project profile and env file."""
        return build_command(
            self.compose_file,
            command,
            opts=opts,
            profile=self.profile,
            env_file=self.env_file,
            args=args,
        )

    def exec_command(
        self,
        command: str | None,
        opts: str | Sequence[str] | None = None,
        args: Sequence[str] = (),
        dry_run: bool = False,
    ) -> CommandResult:
        """Run a docker compose command, streaming its output.

        Args:
            command: docker compose sub-command
            opts: Global options placed before the sub-command
            args: Arguments placed after the sub-command
            dry_run: Only build the command, do not run it

        Returns:
            CommandResult (returncode 0 and no output for a dry run)

        Raises:
            ComposeError: If the file or command is missing, or the command is unknown
        """
        if not self.compose_file:
            raise ComposeError("Please provide a docker compose file")
        if not command:
            raise ComposeError("Please provide a docker compose command")

        cmd = self.command(command, opts, args)
        if dry_run:
            return CommandResult(command=cmd, returncode=0)

        logger.debug(f"Executing docker compose command: {command}")
        return self.runner(cmd, capture=False)

    def services(self) -> list[str]:
        """Service names declared in the compose file.

        Raises:
            ComposeError: If the compose file is missing or malformed
        """
        compose_path = self._existing_file()
        try:
            with open(compose_path) as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ComposeError(f"Failed to parse compose file {compose_path}: {e}") from e

        if not isinstance(data, dict):
            raise ComposeError(f"Invalid compose file: {compose_path}")
        services = data.get("services") or {}
        if not isinstance(services, dict):
            raise ComposeError(f"Invalid services section in compose file: {compose_path}")
        return list(services)

    def status(self, service: str | None) -> str:
        """Return the container state of a service (e.g. ``running``).

        Raises:
            ComposeError: If the file or service is missing, the service is not
                declared, or docker compose fails
        """
        self._existing_file()
        if not service:
            raise ComposeError("Please provide a docker compose service name")
        if service not in self.services():
            raise ComposeError(f"no such service: {service}")

        cmd = self.command("ps", args=["--all", "--format", "{{.State}}", service])
        result = self.runner(cmd)
        if not result.success:
            message = result.stderr.strip() or f"Failed to get status of service {service}"
            raise ComposeError(message)

        states = result.stdout.strip().splitlines()
        return states[0].strip() if states else "not created"

    def _existing_file(self) -> Path:
        if not self.compose_file or not Path(self.compose_file).is_file():
            raise ComposeError("Please provide a docker compose file")
        return Path(self.compose_file)


__all__ = [
    "DOCKER_COMPOSE",
    "KNOWN_COMMANDS",
    "ComposeError",
    "DockerCompose",
    "build_command",
    "build_options",
]
