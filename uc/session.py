import logging
from typing import Callable, Optional

from . import ui
from .api import BaseClient
from .errors import ExecutionError, GenerationError
from .executor import CommandExecutor

logger = logging.getLogger(__name__)


class Session:
    """
    The interactive read, classify and dispatch loop.

    A session owns the dry-run flag. It starts from the -n option, flips
    on the `dryrun` directive and lives only as long as the process.
    Failures of a single request are reported and never end the session.
    """

    def __init__(self, client: BaseClient, dry_run: bool = False,
                 executor: Optional[CommandExecutor] = None):
        self.client = client
        self.dry_run = dry_run
        self.executor = executor or CommandExecutor(echo=ui.display_command)

    def toggle_dry_run(self) -> bool:
        self.dry_run = not self.dry_run
        logger.info(f"Dry-run mode {'enabled' if self.dry_run else 'disabled'}")
        ui.display_mode(self.dry_run)
        return self.dry_run

    def handle_line(self, line: str) -> bool:
        """
        Handles one line of input.

        Args:
            line: The raw line as typed.

        Returns:
            False once the session should close, True otherwise.
        """
        text = line.strip()
        if not text:
            return True

        directive = text.lower()
        if directive == ui.CMD_EXIT:
            ui.display_goodbye()
            return False
        if directive == ui.CMD_HELP:
            ui.display_help()
            return True
        if directive == ui.CMD_DRY_RUN:
            self.toggle_dry_run()
            return True

        self.process_request(text)
        ui.console.print()
        return True

    def process_request(self, natural_language: str) -> bool:
        """
        Generates a command for one request, then shows or runs it.

        Returns:
            True if a command was produced and, outside dry-run, ran successfully.
        """
        try:
            with ui.status("Generating command..."):
                command = self.client.generate_command(natural_language)
        except GenerationError as e:
            logger.info(f"Generation failed for {natural_language!r}: {e}")
            ui.display_generation_error(e)
            return False

        if self.dry_run:
            ui.display_dry_run(command)
            return True

        try:
            self.executor.execute_command(command)
        except ExecutionError as e:
            ui.display_execution_error(e)
            return False
        return True

    def run(self, read_line: Callable[[bool], str]) -> None:
        """
        Runs the loop until `exit`, end of input or Ctrl-C on an empty line.

        Args:
            read_line: Returns the next line. It receives the current dry-run
                flag so the prompt can reflect it. It raises EOFError when
                input ends and KeyboardInterrupt when a partial line is
                discarded.
        """
        while True:
            try:
                line = read_line(self.dry_run)
            except EOFError:
                ui.console.print()
                ui.display_goodbye()
                break
            except KeyboardInterrupt:
                continue

            if not self.handle_line(line):
                break
