"""
PPQ Assistant Configuration Module
Reads the API token, endpoint and default model from ~/.ppq/config.json
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from errors import ConfigMissing, ConfigParseError

DEFAULT_API_URL = "https://api.ppq.ai/chat/completions"
DEFAULT_MODEL = "claude-3.7-sonnet"

CONFIG_DIR_NAME = ".ppq"
CONFIG_FILE_NAME = "config.json"

# Models accepted by --model
AVAILABLE_MODELS = [
    "deepseek-r1",
    "gpt-4.5-preview",
    "deepseek-chat",
    "claude-3.7-sonnet",
    "claude-3.5-sonnet",
    "gpt-4o",
    "llama-3.1-405b-instruct",
    "llama-3-70b-instruct",
    "gpt-4o-mini",
    "gemini-flash-1.5",
    "mixtral-8x7b-instruct",
    "claude-3-5-haiku-20241022:beta",
    "gemini-2.0-flash-exp",
    "grok-2",
    "qwq-32b-preview",
    "nova-pro-v1",
    "llama-3.1-nemotron-70b-instruct",
    "gpt-4",
    "dolphin-mixtral-8x22b",
]


@dataclass
class Config:
    api_token: str
    api_url: str = DEFAULT_API_URL
    default_model: str = DEFAULT_MODEL

    def masked_token(self) -> str:
        """Token with everything but the last four characters hidden"""
        if len(self.api_token) <= 4:
            return "*" * len(self.api_token)
        return "*" * 10 + self.api_token[-4:]


def get_config_path() -> Path:
    """
    Location of the config file.

    The directory is $PPQ_HOME when set, otherwise ~/.ppq
    """
    ppq_home = os.environ.get("PPQ_HOME")
    config_dir = Path(ppq_home) if ppq_home else Path.home() / CONFIG_DIR_NAME
    return config_dir / CONFIG_FILE_NAME


def _optional_str(data: dict, key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigParseError(f"Invalid config: '{key}' must be a string")
    return value


def load_config(path: Optional[Path] = None) -> Config:
    """
    Load and validate the config file.

    Args:
        path: Explicit config file (defaults to get_config_path())

    Returns:
        Config with defaults filled in for optional fields

    Raises:
        ConfigMissing: If the file does not exist
        ConfigParseError: If the file cannot be read or is not a valid config object
    """
    config_path = Path(path) if path else get_config_path()

    if not config_path.exists():
        raise ConfigMissing(
            f"Config file not found at {config_path}",
            hint="Please create ~/.ppq/config.json with your API token, "
                 'e.g. {"api_token": "sk-..."}',
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError(f"Invalid config file {config_path}: {e}")
    except OSError as e:
        raise ConfigParseError(f"Could not open config file at {config_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigParseError(f"Invalid config file {config_path}: expected a JSON object")

    api_token = data.get("api_token")
    if not isinstance(api_token, str):
        raise ConfigParseError(
            "Invalid config: 'api_token' is required and must be a string",
            hint=f"Add your API token to {config_path}",
        )

    return Config(
        api_token=api_token,
        api_url=_optional_str(data, "api_url", DEFAULT_API_URL),
        default_model=_optional_str(data, "default_model", DEFAULT_MODEL),
    )
