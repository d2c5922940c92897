"""Application configuration.

Settings live in ``config.json`` inside the persistent app data folder and
are merged over DEFAULT_CONFIG. The API URL can be overridden with the
``GALLERY_API_URL`` environment variable (useful against a local mock).
"""

import copy
import json
import logging
import os
from typing import Any, Dict, Optional

from gallery_tool.errors import GalleryToolError
from gallery_tool.page_provider import DEFAULT_API_URL, DEFAULT_FIELDS
from gallery_tool.utils import get_persistent_data_path

logger = logging.getLogger("GalleryToolLogger")

CONFIG_FILENAME = "config.json"
API_URL_ENV_VAR = "GALLERY_API_URL"

DEFAULT_CONFIG: Dict[str, Any] = {
    "api_url": DEFAULT_API_URL,
    "page_size": 12,
    "request_timeout": 10,
    "fields": list(DEFAULT_FIELDS),
}


class ConfigError(GalleryToolError):
    """Raised when the configuration file is unreadable or invalid."""
    pass


def validate_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """Check types and ranges of configuration values.

    Args:
        config: Merged configuration

    Returns:
        The same dict, for chaining

    Raises:
        ConfigError: If a value is invalid
    """
    page_size = config.get("page_size")
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ConfigError(f"'page_size' must be a positive integer, got {page_size!r}")

    timeout = config.get("request_timeout")
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError(f"'request_timeout' must be a positive number, got {timeout!r}")

    api_url = config.get("api_url")
    if not isinstance(api_url, str) or not api_url.startswith(("http://", "https://")):
        raise ConfigError(f"'api_url' must be an http(s) URL, got {api_url!r}")

    fields = config.get("fields")
    if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
        raise ConfigError("'fields' must be a list of strings")

    return config


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load configuration, falling back to defaults when no file exists.

    Args:
        config_path: Path to a JSON config file. Defaults to config.json in
            the persistent data folder.

    Returns:
        Validated configuration dictionary

    Raises:
        ConfigError: If the file is not valid JSON or holds invalid values
    """
    if config_path is None:
        config_path = get_persistent_data_path(CONFIG_FILENAME)

    config = copy.deepcopy(DEFAULT_CONFIG)

    if os.path.exists(config_path):
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file '{config_path}': {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read config file '{config_path}': {e}") from e

        if not isinstance(user_config, dict):
            raise ConfigError(f"Config file '{config_path}' must contain a JSON object")

        unknown = set(user_config) - set(DEFAULT_CONFIG)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")
        config.update({k: v for k, v in user_config.items() if k in DEFAULT_CONFIG})
        logger.info(f"Loaded configuration from {config_path}")
    else:
        logger.info(f"No config file at {config_path}, using defaults")

    env_url = os.environ.get(API_URL_ENV_VAR)
    if env_url:
        logger.info(f"Using API URL from environment variable: {env_url}")
        config["api_url"] = env_url

    return validate_config(config)
