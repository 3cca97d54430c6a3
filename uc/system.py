import logging
import platform
import subprocess
from typing import Optional

logger = logging.getLogger(__name__)

OS_RELEASE_FILE = "/etc/os-release"


def _run(args) -> Optional[str]:
    """Runs a small probe command and returns its trimmed output, or None."""
    try:
        result = subprocess.run(args, capture_output=True, text=True, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug(f"OS probe {args[0]} failed: {e}")
        return None
    return result.stdout.strip() or None


def _linux_pretty_name(os_release_file: str = OS_RELEASE_FILE) -> Optional[str]:
    """Reads PRETTY_NAME from an os-release file."""
    try:
        with open(os_release_file, 'r') as f:
            for line in f:
                if line.startswith("PRETTY_NAME="):
                    return line[len("PRETTY_NAME="):].strip().strip('"') or None
    except IOError as e:
        logger.debug(f"Could not read {os_release_file}: {e}")
    return None


def detect_os() -> str:
    """
    Describes the host operating system for use as prompt context.

    Returns:
        A string such as "macOS 14.5", "Ubuntu 24.04 LTS" or "FreeBSD 14.1-RELEASE".
    """
    system = platform.system()

    if system == "Darwin":
        version = _run(["sw_vers", "-productVersion"])
        return f"macOS {version}" if version else "macOS"

    if system == "Linux":
        return _linux_pretty_name() or _run(["uname", "-sr"]) or "Linux"

    if system in ("FreeBSD", "OpenBSD", "NetBSD"):
        return _run(["uname", "-sr"]) or system

    return system.lower() or "unknown"
