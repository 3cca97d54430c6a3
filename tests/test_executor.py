import os
import subprocess
import unittest
from unittest.mock import patch, MagicMock

from uc.errors import CommandFailedError, CommandPreconditionError, ExecutionError
from uc.executor import CommandExecutor


class TestCommandExecutor(unittest.TestCase):
    """Test cases for the CommandExecutor class."""

    def setUp(self):
        """Set up test fixtures."""
        self.echo = MagicMock()
        self.executor = CommandExecutor(echo=self.echo)

    @patch('uc.executor.subprocess.run')
    def test_execute_command_success(self, mock_run):
        """Test successful command execution."""
        # Mock successful command execution
        mock_run.return_value = MagicMock(returncode=0, stderr="")

        # Execute command
        result = self.executor.execute_command("echo 'hello' | tr a-z A-Z")

        # Check results
        self.assertIsNone(result)
        self.echo.assert_called_once_with("echo 'hello' | tr a-z A-Z")

        # Check that the shell was called with the command unsplit
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], ["/bin/sh", "-c", "echo 'hello' | tr a-z A-Z"])
        self.assertEqual(kwargs["stderr"], subprocess.PIPE)
        self.assertNotIn("stdout", kwargs)
        self.assertNotIn("stdin", kwargs)

    @patch('uc.executor.subprocess.run')
    def test_execute_command_failure_with_stderr(self, mock_run):
        """Test failed command execution."""
        # Mock failed command execution
        mock_run.return_value = MagicMock(returncode=1, stderr="ls: cannot access 'nope': No such file or directory\n")

        with self.assertRaises(CommandFailedError) as ctx:
            self.executor.execute_command("ls nope")

        # Check results
        self.assertEqual(str(ctx.exception), "ls: cannot access 'nope': No such file or directory")
        self.assertEqual(ctx.exception.returncode, 1)

    @patch('uc.executor.subprocess.run')
    def test_execute_command_failure_without_stderr(self, mock_run):
        mock_run.return_value = MagicMock(returncode=2, stderr="   ")

        with self.assertRaises(CommandFailedError) as ctx:
            self.executor.execute_command("false")

        self.assertEqual(str(ctx.exception), "command exited with status 2")
        self.assertEqual(ctx.exception.stderr, "")

    @patch('uc.executor.subprocess.run')
    def test_launch_failure(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory", "/bin/sh")

        with self.assertRaises(CommandFailedError) as ctx:
            self.executor.execute_command("ls")
        self.assertIn("could not launch /bin/sh", str(ctx.exception))

    @patch('uc.executor.subprocess.run')
    def test_empty_command(self, mock_run):
        """Test that empty commands never reach the shell."""
        for command in ("", "   ", "\n\t"):
            with self.subTest(command=command):
                with self.assertRaises(CommandPreconditionError) as ctx:
                    self.executor.execute_command(command)
                self.assertIsInstance(ctx.exception, ExecutionError)

        mock_run.assert_not_called()
        self.echo.assert_not_called()

    @unittest.skipUnless(os.path.exists("/bin/sh"), "requires /bin/sh")
    def test_real_shell_captures_stderr(self):
        executor = CommandExecutor()

        with self.assertRaises(CommandFailedError) as ctx:
            executor.execute_command("echo oops >&2; exit 3")

        self.assertEqual(str(ctx.exception), "oops")
        self.assertEqual(ctx.exception.returncode, 3)

    @unittest.skipUnless(os.path.exists("/bin/sh"), "requires /bin/sh")
    def test_real_shell_success(self):
        CommandExecutor().execute_command("true && test -n \"$HOME$PATH\"")


if __name__ == "__main__":
    unittest.main()
