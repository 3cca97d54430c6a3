"""Line input for the interactive session: history, editing and Ctrl-C handling."""

import os
from typing import Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.history import FileHistory
from prompt_toolkit.key_binding import KeyBindings

PROMPT = "uc> "
DRY_RUN_PROMPT_STYLE = "ansigreen bold"


def build_key_bindings() -> KeyBindings:
    """Ctrl-C ends the session on an empty line and discards a partial one."""
    key_bindings = KeyBindings()

    @key_bindings.add("c-c", eager=True)
    def _handle_ctrl_c(event) -> None:
        if event.current_buffer.text:
            event.app.exit(exception=KeyboardInterrupt)
        else:
            event.app.exit(exception=EOFError)

    return key_bindings


def prompt_message(dry_run: bool) -> FormattedText:
    """The prompt is green while dry-run mode is on."""
    if dry_run:
        return FormattedText([(DRY_RUN_PROMPT_STYLE, PROMPT)])
    return FormattedText([("", PROMPT)])


def create_prompt_session(history_file: str) -> PromptSession:
    """Create a prompt-toolkit session with persistent history."""
    history_file = os.path.expanduser(history_file)
    history_dir = os.path.dirname(history_file)
    if history_dir:
        os.makedirs(history_dir, exist_ok=True)
    return PromptSession(
        history=FileHistory(history_file),
        key_bindings=build_key_bindings(),
    )


def line_reader(session: PromptSession) -> Callable[[bool], str]:
    """Adapts a prompt session to the reader the Session loop expects."""

    def read_line(dry_run: bool) -> str:
        return session.prompt(prompt_message(dry_run))

    return read_line
