import logging
import subprocess
from typing import Callable, Optional

from .errors import CommandFailedError, CommandPreconditionError

# Configure logging
logger = logging.getLogger(__name__)

SHELL = "/bin/sh"


class CommandExecutor:
    """Runs generated commands through the shell."""

    def __init__(self, shell: str = SHELL, echo: Optional[Callable[[str], None]] = None):
        self.shell = shell
        self.echo = echo

    def execute_command(self, command: str) -> None:
        """
        Execute a single shell command.

        The command runs under `sh -c` so globbing, pipes and redirection
        work. stdin and stdout are shared with uc so interactive programs
        behave normally; stderr is captured to explain failures.

        Args:
            command: The shell command to execute

        Raises:
            CommandPreconditionError: If the command is empty.
            CommandFailedError: If the shell cannot start or the command exits non-zero.
        """
        if not command or not command.strip():
            raise CommandPreconditionError("empty command")

        logger.info(f"Executing command: {command}")
        if self.echo:
            self.echo(command)

        try:
            process = subprocess.run(
                [self.shell, "-c", command],
                stderr=subprocess.PIPE,
                text=True,
            )
        except OSError as e:
            logger.debug(f"Error launching command '{command}': {str(e)}", exc_info=True)
            raise CommandFailedError(f"could not launch {self.shell}: {e}") from e

        if process.returncode == 0:
            logger.info(f"Command executed successfully: {command}")
            return

        stderr = (process.stderr or "").strip()
        logger.info(f"Command failed with return code {process.returncode}: {command}")
        if stderr:
            logger.info(f"stderr: {stderr}")
        raise CommandFailedError(
            stderr or f"command exited with status {process.returncode}",
            returncode=process.returncode,
            stderr=stderr,
        )
