"""
Exceptions raised by uc.

Configuration errors are fatal and only happen at startup. Generation and
execution errors belong to a single request: the session reports them and
keeps reading input.
"""
from typing import Optional


class UCError(Exception):
    """Base exception class for uc errors."""

    pass


class ConfigurationError(UCError):
    """Settings are unreadable, or the selected provider cannot be used."""

    pass


class GenerationError(UCError):
    """The provider could not produce a usable command."""

    pass


class TransportError(GenerationError):
    """The HTTP call to the provider failed."""

    pass


class ResponseParseError(GenerationError):
    """The provider answered with a body that is not JSON."""

    pass


class UnexpectedResponseError(GenerationError):
    """The provider answered with JSON of the wrong shape."""

    def __init__(self, provider: str, detail: Optional[str] = None):
        message = f"unexpected response format from {provider}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.provider = provider
        self.detail = detail


class EmptyCommandError(GenerationError):
    """The provider answered, but nothing was left after cleaning."""

    def __init__(self, message: str = "LLM returned empty command"):
        super().__init__(message)


class ExecutionError(UCError):
    """A generated command could not be run successfully."""

    pass


class CommandPreconditionError(ExecutionError):
    """The command is empty, so there is nothing to run."""

    pass


class CommandFailedError(ExecutionError):
    """The command could not be launched or exited with a non-zero status."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr
