"""Configuration module for the Slack incoming webhook sidecar file."""

import json
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

PathLike = Union[str, Path]


class ConfigError(Exception):
    """Raised when the config file cannot be read, parsed or written."""


@dataclass
class Config:
    """Configuration for posting to Slack.

    Attributes:
        slack_incoming_webhooks_url: Incoming webhook URL to post to
        slack_bot_name: Display name of the bot
        slack_bot_icon: Bot icon in emoji-code form, e.g. ":loudspeaker:"
        slack_channel: Target channel, e.g. "#general"
        log_enabled: Whether log lines are also appended to the log file
        log_level: Minimum log level (TRACE, DEBUG, INFO, WARN, ERROR, FATAL)
    """

    slack_incoming_webhooks_url: str = ""
    slack_bot_name: str = ""
    slack_bot_icon: str = ""
    slack_channel: str = ""
    log_enabled: bool = False
    log_level: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Build a Config from parsed JSON, missing or null keys left at zero.

        Args:
            data: Parsed JSON object

        Returns:
            The Config

        Raises:
            ConfigError: If a known key holds a value of the wrong type
        """
        values: Dict[str, Any] = {}
        for field in fields(cls):
            value = data.get(field.name)
            if value is None:
                continue
            expected = bool if field.type is bool else str
            if not isinstance(value, expected):
                raise ConfigError(
                    f"'{field.name}' must be a {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            values[field.name] = value
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Return the config as a JSON-ready dictionary."""
        return asdict(self)


DEFAULT_CONFIG = Config(
    slack_incoming_webhooks_url="YOUR_SLACK_INCOMING_WEBHOOKS_URL",
    slack_bot_name="ChatOps Bot",
    slack_bot_icon=":loudspeaker:",
    slack_channel="#general",
    log_enabled=False,
    log_level="INFO",
)


def config_path_for(program_path: PathLike) -> Path:
    """Return the config file path that sits beside the given program."""
    return Path(program_path).with_suffix(".json")


def log_path_for(program_path: PathLike) -> Path:
    """Return the log file path that sits beside the given program."""
    return Path(program_path).with_suffix(".log")


def write_default_config(path: PathLike) -> Config:
    """Create a config file holding the default placeholder values.

    Args:
        path: Where to write the config file

    Returns:
        The config that was written

    Raises:
        ConfigError: If the file cannot be created
    """
    config = Config(**DEFAULT_CONFIG.to_dict())
    try:
        Path(path).write_text(json.dumps(config.to_dict()), encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot create config file '{path}': {e}") from e
    return config


def load_config(path: PathLike) -> Config:
    """Read and parse the config file.

    Args:
        path: Path of the config file

    Returns:
        The parsed Config

    Raises:
        ConfigError: If the file is unreadable or not a valid config object
    """
    try:
        raw = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Malformed config file '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Malformed config file '{path}': expected a JSON object")

    return Config.from_dict(data)
