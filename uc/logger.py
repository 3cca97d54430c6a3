import logging
import os
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler

from .config import Config

LOG_FILE_NAME = "uc.log"


def setup_logging(config: Config, verbose: bool = False) -> None:
    """
    Set up logging for the application.

    Warnings and errors go to stderr through Rich (everything from INFO up
    with verbose on); a rotating file in config.log_dir keeps INFO and up.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.INFO)

    # Console handler (with Rich)
    console = Console(stderr=True)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True
    )
    rich_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    root_logger.addHandler(rich_handler)

    # File handler (Rotating)
    log_dir = os.path.expanduser(config.log_dir)
    try:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE_NAME), maxBytes=10*1024*1024, backupCount=5  # 10 MB per file, 5 backups
        )
    except OSError as e:
        logging.getLogger(__name__).warning(f"File logging disabled, cannot write to {log_dir}: {e}")
    else:
        file_handler.setLevel(logging.INFO)
        file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(file_formatter)
        root_logger.addHandler(file_handler)

    # Configure specific loggers to be less verbose if needed
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.info(f"Logger initialized. Logs will be stored in {log_dir}")
