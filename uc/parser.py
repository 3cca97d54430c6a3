from typing import FrozenSet

FENCE = "```"

# First lines of a fenced block that name the language instead of being part
# of the command.
LANGUAGE_TAGS: FrozenSet[str] = frozenset({"bash", "sh", "shell", "zsh"})


def clean_response(response: str) -> str:
    """
    Strips markdown wrapping from a raw model answer.

    Handles inline code (`ls -la`) and fenced blocks, dropping a leading
    language tag line such as ```bash. Never fails: text without any
    wrapping comes back trimmed.

    Args:
        response: The raw text returned by the model.

    Returns:
        The bare command, possibly empty.
    """
    response = response.strip()

    # A fence also starts and ends with a backtick, so it is checked first.
    if not _is_wrapped(response, FENCE) and _is_wrapped(response, "`"):
        response = response[1:-1].strip()

    if _is_wrapped(response, FENCE):
        response = response[len(FENCE):-len(FENCE)].strip()
        lines = response.split("\n")
        if lines and lines[0].strip() in LANGUAGE_TAGS:
            response = "\n".join(lines[1:]).strip()

    return response


def _is_wrapped(text: str, marker: str) -> bool:
    # A lone marker both starts and ends the text but wraps nothing.
    return len(text) >= 2 * len(marker) and text.startswith(marker) and text.endswith(marker)
