import io
import logging
import os
import shutil
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest.mock import patch, MagicMock

from uc.api import BaseClient
from uc.config import Config
from uc.errors import ConfigurationError, TransportError
from uc.executor import CommandExecutor
from uc.logger import LOG_FILE_NAME, setup_logging
from uc.main import main
from uc.session import Session


class TestSetupLogging(unittest.TestCase):
    """Test cases for what logging adds to the console without -v."""

    def setUp(self):
        """Set up test fixtures."""
        self.log_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.log_dir)

        root_logger = logging.getLogger()
        saved_handlers, saved_level = root_logger.handlers[:], root_logger.level
        self.addCleanup(self._restore_root_logger, saved_handlers, saved_level)

        status = patch('uc.ui.status')
        status.start()
        self.addCleanup(status.stop)

        self.client = MagicMock(spec=BaseClient)
        self.stderr = io.StringIO()
        self.stdout = io.StringIO()

    def _restore_root_logger(self, handlers, level):
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            if handler not in handlers:
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(level)

    def run_request(self, executor, request="list nope"):
        with redirect_stderr(self.stderr), redirect_stdout(self.stdout):
            setup_logging(Config(log_dir=self.log_dir), verbose=False)
            Session(self.client, executor=executor).process_request(request)
        return self.stderr.getvalue()

    def read_log_file(self):
        for handler in logging.getLogger().handlers:
            handler.flush()
        with open(os.path.join(self.log_dir, LOG_FILE_NAME)) as f:
            return f.read()

    @patch('uc.executor.subprocess.run')
    def test_command_stderr_is_shown_once(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stderr="ls: cannot access 'nope': No such file or directory\n")
        self.client.generate_command.return_value = "ls nope"

        stderr = self.run_request(CommandExecutor(echo=MagicMock()))

        self.assertEqual(stderr.count("cannot access 'nope'"), 1)
        self.assertNotIn("return code", stderr)
        # The log file still records the failure
        log = self.read_log_file()
        self.assertIn("Command failed with return code 2: ls nope", log)
        self.assertIn("cannot access 'nope'", log)

    def test_launch_failure_has_no_traceback(self):
        self.client.generate_command.return_value = "ls"

        stderr = self.run_request(CommandExecutor(shell="/no/such/sh", echo=MagicMock()))

        self.assertEqual(stderr.count("could not launch /no/such/sh"), 1)
        self.assertNotIn("Traceback", stderr)

    def test_generation_error_is_shown_once(self):
        self.client.generate_command.side_effect = TransportError("failed to call Ollama API: connection refused")

        stderr = self.run_request(MagicMock(spec=CommandExecutor))

        self.assertEqual(stderr.count("connection refused"), 1)
        self.assertIn("Generation failed for 'list nope'", self.read_log_file())

    @patch('uc.main.run_cli')
    def test_configuration_error_is_shown_once(self, mock_run_cli):
        def run_cli():
            setup_logging(Config(log_dir=self.log_dir), verbose=False)
            raise ConfigurationError("no OpenAI API key (set openai_key or UC_OPENAI_KEY)")
        mock_run_cli.side_effect = run_cli

        with redirect_stderr(self.stderr), redirect_stdout(self.stdout):
            with self.assertRaises(SystemExit) as ctx:
                main()

        self.assertEqual(ctx.exception.code, 1)
        self.assertEqual(self.stderr.getvalue().count("no OpenAI API key"), 1)


if __name__ == "__main__":
    unittest.main()
