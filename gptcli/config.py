import os
import toml
import logging
from dataclasses import dataclass
from typing import Optional, Any
from dotenv import load_dotenv

from .errors import API_KEY_INFO, ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-3.5-turbo"
DEFAULT_API_URL = "https://api.openai.com/v1/chat/completions"
DEFAULT_TIMEOUT = 10.0
DEFAULT_MAX_TOKENS = 1000
DEFAULT_CONFIG_DIR = os.path.expanduser("~/.config/gpt-cli-tool")

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Config:
    """Immutable configuration for one invocation of the tool."""

    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT
    max_tokens: int = DEFAULT_MAX_TOKENS
    verbose: bool = False
    log_dir: Optional[str] = None

    @classmethod
    def load(cls, model: Optional[str] = None, verbose: Optional[bool] = None) -> "Config":
        """
        Build the configuration, prioritizing explicit arguments, then environment
        variables, then the config file, and finally defaults.

        Args:
            model: Model name given on the command line, if any.
            verbose: Verbosity given on the command line, if any.

        Returns:
            A frozen Config instance.
        """
        file_config = _load_config_from_file(_config_file_path())

        def get(key: str, default: Any = None) -> Any:
            value = os.environ.get(key)
            if value is not None:
                return value
            for section in file_config.values():
                if isinstance(section, dict) and key in section:
                    return section[key]
            if key in file_config and not isinstance(file_config[key], dict):
                return file_config[key]
            return default

        return cls(
            # The key is only taken from the environment, never from the file.
            api_key=os.environ.get("OPENAI_API_KEY") or None,
            model=model or get("GPT_CLI_MODEL", DEFAULT_MODEL),
            api_url=get("GPT_CLI_API_URL", DEFAULT_API_URL),
            timeout=_to_number(float, "GPT_CLI_TIMEOUT", get("GPT_CLI_TIMEOUT", DEFAULT_TIMEOUT)),
            max_tokens=_to_number(int, "GPT_CLI_MAX_TOKENS", get("GPT_CLI_MAX_TOKENS", DEFAULT_MAX_TOKENS)),
            verbose=verbose if verbose else _to_bool(get("GPT_CLI_VERBOSE", False)),
            log_dir=_expand(get("GPT_CLI_LOG_DIR")),
        )

    def validate(self) -> None:
        """Raise ConfigurationError when the API key is missing."""
        if not self.api_key:
            logger.error("OPENAI_API_KEY environment variable not set.")
            raise ConfigurationError("Error: OPENAI_API_KEY is not set.", API_KEY_INFO)

    @property
    def masked_api_key(self) -> str:
        if not self.api_key:
            return "<unset>"
        if len(self.api_key) > 8:
            return f"{self.api_key[:4]}...{self.api_key[-4:]}"
        return "****"

    def __str__(self) -> str:
        """Return string representation of the configuration."""
        config_dict = self.__dict__.copy()
        config_dict["api_key"] = self.masked_api_key
        return str(config_dict)


def _config_file_path() -> str:
    return os.environ.get("GPT_CLI_CONFIG_FILE") or os.path.join(DEFAULT_CONFIG_DIR, "config.toml")


def _load_config_from_file(config_file: str) -> dict:
    """Loads configuration from the TOML file, if there is one."""
    if not os.path.exists(config_file):
        return {}
    try:
        with open(config_file, "r") as f:
            return toml.load(f)
    except (toml.TomlDecodeError, IOError) as e:
        logger.warning(f"Could not read config file at {config_file}. Error: {e}")
        return {}


def _to_number(kind, key: str, value: Any):
    try:
        number = kind(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"Error: {key} must be a number, got {value!r}.")
    if number <= 0:
        raise ConfigurationError(f"Error: {key} must be positive, got {value!r}.")
    return number


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _expand(path: Optional[str]) -> Optional[str]:
    return os.path.expanduser(str(path)) if path else None
