from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

CMD_HELP = "help"
CMD_EXIT = "exit"
CMD_DRY_RUN = "dryrun"

SPINNER = "dots"

EXAMPLES = [
    "list all files in the current directory",
    "show me the contents of README.md",
    "find all Python files in this directory",
    "count the number of files in this directory",
    "show running processes",
    "check disk usage",
    "what's the current date and time",
    "ping google.com",
]


def display_banner(os_info: str, provider_info: str) -> None:
    """Displays the startup line of the interactive session."""
    console.print(f"[bold magenta]uc[/bold magenta] ([cyan]{escape(os_info)}[/cyan]) - [green]{escape(provider_info)}[/green]")
    console.print("Type your natural language commands below. Type 'exit' to exit, 'help' for help.")


def display_help() -> None:
    """Displays the interactive directives and a few example requests."""
    console.print("[bold magenta]Help - Unix Commands in Natural Language[/bold magenta]")
    console.print()

    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold green")
    table.add_column()
    table.add_row(CMD_HELP, "Show this help message")
    table.add_row(CMD_DRY_RUN, "Toggle dry-run mode (show commands without executing)")
    table.add_row(CMD_EXIT, "Exit the program")

    console.print("[bold cyan]Interactive Commands:[/bold cyan]")
    console.print(table)
    console.print()

    console.print("[bold cyan]Example Natural Language Commands:[/bold cyan]")
    for example in EXAMPLES:
        console.print(f"  [blue]- {example}[/blue]")
    console.print()


def status(message: str):
    """Returns a spinner context shown while a request is in flight."""
    return console.status(f"[cyan]{message}[/cyan]", spinner=SPINNER)


def display_command(command: str) -> None:
    """Echoes a command right before it runs."""
    console.print(escape(command), style="cyan", highlight=False)


def display_dry_run(command: str) -> None:
    """Shows a generated command that will not be run."""
    console.print(f"[bold yellow]\\[dry run][/bold yellow] [cyan]{escape(command)}[/cyan]", highlight=False)


def display_mode(dry_run: bool) -> None:
    """Reports the execution mode after a toggle."""
    if dry_run:
        console.print("[bold yellow]Dry-run mode enabled. Commands will be shown but not executed.[/bold yellow]")
    else:
        console.print("[bold green]Dry-run mode disabled. Commands will be executed normally.[/bold green]")


def display_error(message: str) -> None:
    err_console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def display_generation_error(error: Exception) -> None:
    display_error(f"Error generating command: {error}")
    console.print("The command can't be executed - failed to generate Unix equivalent.")


def display_execution_error(error: Exception) -> None:
    display_error(f"Error: {error}")
    console.print("[bold yellow]Command execution failed. See error details above.[/bold yellow]")


def display_goodbye() -> None:
    console.print("Goodbye!")
