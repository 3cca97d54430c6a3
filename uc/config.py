import os
import json
import logging
from dataclasses import dataclass, field, asdict
from typing import Optional, Any, Dict

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".uc.json"
DEFAULT_HISTORY_FILE = ".uc_history"
DEFAULT_PROMPT_FILE = "uc.prompts"

DEFAULT_PROVIDER = "ollama"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "llama3.2"
DEFAULT_OPENAI_MODEL = "gpt-4.1-mini"
DEFAULT_GEMINI_MODEL = "gemini-2.5-flash"

SUPPORTED_PROVIDERS = ("ollama", "openai", "gemini")

# Settings that must hold text; request_timeout is parsed separately.
STRING_FIELDS = (
    "provider", "ollama_url", "ollama_model", "openai_key", "openai_model",
    "gemini_key", "gemini_model", "sys_prompt_file", "history_file", "log_dir",
)

# Keys that never reach logs or the console unmasked.
SECRET_FIELDS = ("openai_key", "gemini_key")

PROMPT_FILE_TEMPLATE = """# UC System Prompts
# Add additional instructions for the LLM here.
# These will be included in all prompts sent to the language model.
# Examples:
# - Be more verbose in explanations
# - Use ffmpeg to process video files
# - Use psql to run SQL queries and manage PostgreSQL databases
# - Add safety warnings for dangerous commands

# Your custom instructions go below:

"""


def _home() -> str:
    return os.path.expanduser("~")


@dataclass
class Config:
    """Settings for uc, read from a JSON file with environment overrides."""

    provider: str = DEFAULT_PROVIDER
    ollama_url: str = DEFAULT_OLLAMA_URL
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    openai_key: str = ""
    openai_model: str = DEFAULT_OPENAI_MODEL
    gemini_key: str = ""
    gemini_model: str = DEFAULT_GEMINI_MODEL
    sys_prompt_file: str = field(default_factory=lambda: os.path.join(_home(), DEFAULT_PROMPT_FILE))
    request_timeout: Optional[float] = None
    history_file: str = field(default_factory=lambda: os.path.join(_home(), DEFAULT_HISTORY_FILE))
    log_dir: str = field(default_factory=lambda: os.path.join(_home(), ".uc", "logs"))
    config_file: str = field(default_factory=lambda: os.path.join(_home(), DEFAULT_CONFIG_FILE))

    @classmethod
    def from_dict(cls, values: Dict[str, Any], config_file: Optional[str] = None) -> "Config":
        """
        Builds a Config from parsed file values, applying environment overrides.

        Unknown keys are ignored so that older or newer config files still load.

        Raises:
            ConfigurationError: If a text setting holds another JSON type, or
                request_timeout is not a positive number.
        """
        config = cls()
        if config_file:
            config.config_file = config_file

        for name in _settable_fields():
            value = _get_config(name, values, getattr(config, name))
            setattr(config, name, value)

        for name in STRING_FIELDS:
            value = getattr(config, name)
            if not isinstance(value, str):
                raise ConfigurationError(f"{name} must be a string, got {value!r}")

        config.provider = config.provider.strip().lower()
        config.request_timeout = _parse_timeout(config.request_timeout)
        return config

    def validate(self) -> None:
        """
        Checks that exactly one usable provider is configured.

        Raises:
            ConfigurationError: If the provider is unknown or lacks its API key.
        """
        if self.provider not in SUPPORTED_PROVIDERS:
            raise ConfigurationError(f"unsupported LLM provider: {self.provider or '(none)'}")
        if self.provider == "openai" and not self.openai_key:
            raise ConfigurationError("no OpenAI API key (set openai_key or UC_OPENAI_KEY)")
        if self.provider == "gemini" and not self.gemini_key:
            raise ConfigurationError("no Gemini API key (set gemini_key or UC_GEMINI_KEY)")

    def __str__(self) -> str:
        """Return string representation of the configuration."""
        config_dict = asdict(self)
        for name in SECRET_FIELDS:
            secret = config_dict.get(name)
            if secret:
                config_dict[name] = f"{secret[:4]}...{secret[-4:]}" if len(secret) > 8 else "****"
        return str(config_dict)


def _settable_fields():
    return [name for name in Config.__dataclass_fields__ if name != "config_file"]


def _get_config(key: str, file_values: Dict[str, Any], default: Any = None) -> Any:
    """
    Get a configuration value, prioritizing environment variables,
    then the config file, and finally a default value.
    """
    # 1. Check environment variable
    value = os.environ.get(f"UC_{key.upper()}")
    if value is not None:
        return value

    # 2. Check config file
    if key in file_values and file_values[key] is not None:
        return file_values[key]

    # 3. Return default
    return default


def _parse_timeout(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"request_timeout must be a number of seconds, got {value!r}")
    if timeout <= 0:
        raise ConfigurationError(f"request_timeout must be positive, got {value!r}")
    return timeout


def default_config_path() -> str:
    return os.path.join(_home(), DEFAULT_CONFIG_FILE)


def create_default_config(config_file: str) -> None:
    """Creates a default configuration file."""
    defaults = Config()
    default_config = {
        "provider": defaults.provider,
        "ollama_url": defaults.ollama_url,
        "ollama_model": defaults.ollama_model,
        "openai_key": defaults.openai_key,
        "openai_model": defaults.openai_model,
        "gemini_key": defaults.gemini_key,
        "gemini_model": defaults.gemini_model,
        "sys_prompt_file": defaults.sys_prompt_file,
    }

    config_dir = os.path.dirname(config_file)
    if config_dir:
        os.makedirs(config_dir, exist_ok=True)
    with open(config_file, 'w') as f:
        json.dump(default_config, f, indent=2)
    logger.info(f"Created default config file at {config_file}")


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Loads settings from a JSON file, creating it with defaults if absent.

    Args:
        config_path: Path to the config file. Defaults to ~/.uc.json.

    Returns:
        The loaded configuration. It is not validated yet.

    Raises:
        ConfigurationError: If the file cannot be created, read or parsed.
    """
    config_file = os.path.expanduser(config_path) if config_path else default_config_path()

    if not os.path.exists(config_file):
        try:
            create_default_config(config_file)
        except OSError as e:
            raise ConfigurationError(f"error creating default config {config_file}: {e}")
        print(f"Created default configuration file: {config_file}")

    try:
        with open(config_file, 'r') as f:
            values = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"error reading config file {config_file}: {e}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"error parsing config file {config_file}: {e}")

    if not isinstance(values, dict):
        raise ConfigurationError(f"error parsing config file {config_file}: expected a JSON object")

    config = Config.from_dict(values, config_file=config_file)
    logger.info(f"Loaded configuration from {config_file}")
    return config


def load_custom_instructions(filename: Optional[str]) -> str:
    """
    Reads the user's extra prompt instructions.

    Lines starting with '#' and blank lines are skipped; the rest are joined
    with single spaces. A missing file is created from a commented template.
    Problems with the file are logged as warnings and yield no instructions.

    Args:
        filename: Path to the prompt file; '~' is expanded.

    Returns:
        The instructions on one line, or an empty string.
    """
    if not filename:
        return ""

    filename = os.path.expanduser(filename)

    if not os.path.exists(filename):
        try:
            with open(filename, 'w') as f:
                f.write(PROMPT_FILE_TEMPLATE)
        except OSError as e:
            logger.warning(f"Could not create system prompt file {filename}: {e}")
            return ""
        print(f"Created system prompt file: {filename}")
        return ""

    try:
        with open(filename, 'r') as f:
            content = f.read()
    except OSError as e:
        logger.warning(f"Could not read system prompt file {filename}: {e}")
        return ""

    valid_lines = []
    for line in content.splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            valid_lines.append(line)

    return " ".join(valid_lines)
