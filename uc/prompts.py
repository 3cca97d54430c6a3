"""
Prompt construction for command generation.

Every provider receives the same prompt text; only the wire format differs.
"""

BASE_PROMPT = (
    "You are a Unix command generator for {os_info}. Convert the following natural "
    "language request into a Unix command appropriate for this operating system. "
    "Only return the command, nothing else."
)

COMMAND_CUE = "Unix command:"


def build_prompt(request: str, os_info: str, custom_instructions: str = "") -> str:
    """
    Builds the prompt sent to the model for a single request.

    Args:
        request: The user's natural language request.
        os_info: Description of the host operating system.
        custom_instructions: Extra directives from the user's prompt file, if any.

    Returns:
        The complete prompt, ending with a cue after which the model writes the command.
    """
    sections = [BASE_PROMPT.format(os_info=os_info)]
    if custom_instructions:
        sections.append(f"Additional instructions: {custom_instructions}")
    sections.append(f"Operating System: {os_info}\nNatural language request: {request}")
    sections.append(COMMAND_CUE)
    return "\n\n".join(sections)
