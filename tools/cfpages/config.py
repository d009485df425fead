# File: cfpages/config.py

import os
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import dotenv

from .errors import ConfigError
from .interfaces.request import MAX_RESULTS_PER_PAGE

logger = logging.getLogger(__name__)

# --- Default Paths and Constants ---

PROJECT_ROOT_DIR = Path(__file__).resolve().parent.parent.parent
DEFAULT_CONFIG_FILE = PROJECT_ROOT_DIR / "config" / "cfpages.json"
DEFAULT_LOGS_DIR = PROJECT_ROOT_DIR / "logs"

# Environment variable for each ClientConfig field
ENV_VARS = {
    "api_host": "CF_API_HOST",
    "token": "CF_TOKEN",
    "results_per_page": "CF_RESULTS_PER_PAGE",
    "max_pages": "CF_MAX_PAGES",
    "timeout": "CF_TIMEOUT",
    "max_retries": "CF_MAX_RETRIES",
    "retry_delay": "CF_RETRY_DELAY",
    "verify_ssl": "CF_VERIFY_SSL",
}

REQUIRED_VALUE_FIELDS = ("timeout", "max_retries", "retry_delay", "verify_ssl")


@dataclass
class ClientConfig:
    """Connection and enumeration settings for the Cloud Controller client."""
    api_host: Optional[str] = None
    token: Optional[str] = None
    results_per_page: Optional[int] = 50
    max_pages: Optional[int] = 10000
    timeout: float = 30.0
    max_retries: int = 3
    retry_delay: float = 1.0
    verify_ssl: bool = True

    def validate(self) -> "ClientConfig":
        if not self.api_host:
            raise ConfigError(f"No Cloud Controller API host configured (set {ENV_VARS['api_host']})")
        if not self.api_host.startswith(("http://", "https://")):
            raise ConfigError(f"API host must be an http(s) URL, got '{self.api_host}'")
        if self.results_per_page is not None and not 1 <= self.results_per_page <= MAX_RESULTS_PER_PAGE:
            raise ConfigError(f"results_per_page must be between 1 and {MAX_RESULTS_PER_PAGE}")
        if self.max_pages is not None and self.max_pages < 1:
            raise ConfigError("max_pages must be at least 1")
        if self.timeout <= 0:
            raise ConfigError("timeout must be positive")
        if self.max_retries < 0:
            raise ConfigError("max_retries must not be negative")
        if self.retry_delay < 0:
            raise ConfigError("retry_delay must not be negative")
        return self


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw file/env/CLI value to the type of the named field."""
    if value is None:
        if name in REQUIRED_VALUE_FIELDS:
            raise ConfigError(f"{name} must not be null")
        return None
    try:
        if name in ("results_per_page", "max_pages"):
            if isinstance(value, str) and value.strip().lower() in ("", "none"):
                return None
            return int(value)
        if name == "max_retries":
            return int(value)
        if name in ("timeout", "retry_delay"):
            return float(value)
        if name == "verify_ssl":
            if isinstance(value, bool):
                return value
            return str(value).strip().lower() not in ("0", "false", "no", "off")
        return str(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e


def _load_json_config_file(file_path: Path) -> Dict[str, Any]:
    if not file_path.exists():
        logger.debug(f"Config file not found at: {file_path}")
        return {}
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        msg = f"Error decoding JSON from config file {file_path}: {e}"
        logger.error(msg)
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Could not read config file {file_path}: {e}"
        logger.error(msg)
        raise ConfigError(msg) from e
    if not isinstance(config_data, dict):
        raise ConfigError(f"Config file {file_path} must contain a JSON object")
    logger.info(f"Loaded client configuration from {file_path}")
    return config_data


def load_client_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None,
    load_env_file: bool = True,
) -> ClientConfig:
    """
    Build the effective ClientConfig.

    Later layers win: defaults, JSON config file, environment (a ``.env``
    file is read first), then explicit overrides such as command-line flags.
    None values in overrides are ignored.
    """
    if load_env_file and environ is None:
        dotenv.load_dotenv()
    env = os.environ if environ is None else environ

    known = {f.name for f in fields(ClientConfig)}
    values: Dict[str, Any] = {}

    file_values = _load_json_config_file(config_file or DEFAULT_CONFIG_FILE)
    for key, value in file_values.items():
        if key not in known:
            logger.warning(f"Ignoring unknown config key '{key}'")
            continue
        values[key] = _coerce(key, value)

    for key, env_name in ENV_VARS.items():
        if env_name in env:
            values[key] = _coerce(key, env[env_name])

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key not in known:
            raise ConfigError(f"Unknown configuration option '{key}'")
        values[key] = _coerce(key, value)

    config = ClientConfig(**values).validate()
    logger.info(
        f"Client configuration: host={config.api_host}, results_per_page={config.results_per_page}, "
        f"max_pages={config.max_pages}, timeout={config.timeout}, retries={config.max_retries}"
    )
    return config
