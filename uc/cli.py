import argparse
import logging
from typing import List, Optional

from . import __version__
from .api import create_client
from .config import load_config, load_custom_instructions
from .logger import setup_logging
from .session import Session
from .shell import create_prompt_session, line_reader
from .system import detect_os
from .ui import console, display_banner

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="uc",
        description="""
        Describe what you want to do and uc turns it into a Unix command.

        With a request on the command line, uc handles it once and exits.
        Without one, it starts an interactive session.
        """
    )
    parser.add_argument("--config", type=str, default=None,
                        help="Path to configuration file (default: ~/.uc.json)")
    parser.add_argument("-n", dest="dry_run", action="store_true",
                        help="Dry run: show generated command without executing it")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Show informational log messages")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("request", nargs=argparse.REMAINDER,
                        help="Natural language request to run once")
    return parser


def run_cli(argv: Optional[List[str]] = None) -> int:
    """
    Parses arguments, builds the client and runs one request or a session.

    Returns:
        The process exit code.

    Raises:
        ConfigurationError: If settings cannot be loaded or the provider cannot be used.
    """
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    setup_logging(config, verbose=args.verbose)
    logger.info(f"Configuration: {config}")

    custom_instructions = load_custom_instructions(config.sys_prompt_file)
    os_info = detect_os()
    client = create_client(config, custom_instructions=custom_instructions, os_info=os_info)
    session = Session(client, dry_run=args.dry_run)

    if args.request:
        # Non-interactive mode: handle a single request
        natural_language = " ".join(args.request)
        console.print(natural_language, highlight=False, markup=False)
        session.process_request(natural_language)
        return 0

    display_banner(os_info, client.get_provider_info())
    prompt_session = create_prompt_session(config.history_file)
    session.run(line_reader(prompt_session))
    return 0
