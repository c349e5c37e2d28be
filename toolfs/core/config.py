"""YAML configuration for toolfs.

Exposes the named external-tool locations and download settings the tool
layer reads. Values come from built-in defaults, an optional toolfs.yaml
file, and TOOLFS_<VAR> environment overrides, in that order.

Example toolfs.yaml:

    variables:
      CURL: /opt/curl/bin/curl
      LS: ls
    user_agent: "mypkg/2.1"
    connection_timeout: 15
    check_certificates: true
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

import yaml

from toolfs import __version__
from toolfs.core.exceptions import ConfigError
from toolfs.core.platform import detect_platform

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "toolfs.yaml"
ENV_PREFIX = "TOOLFS_"

DEFAULT_VARIABLES: Dict[str, str] = {
    "CURL": "curl",
    "WGET": "wget",
    "MD5SUM": "md5sum",
    "OPENSSL": "openssl",
    "MD5": "md5",
    "LS": "ls",
}

_NOCERT_FLAGS = {
    "WGETNOCERTFLAG": "--no-check-certificate",
    "CURLNOCERTFLAG": "-k",
}

_KNOWN_KEYS = {"variables", "user_agent", "connection_timeout", "check_certificates"}


def default_user_agent() -> str:
    return f"toolfs/{__version__} ({detect_platform().platform_string()})"


@dataclass
class ToolsConfig:
    """
    Settings consumed by the tool layer.

    Attributes:
        variables: Tool locations and flag fragments keyed by name
            (CURL, WGET, MD5SUM, OPENSSL, MD5, LS, WGETNOCERTFLAG, CURLNOCERTFLAG)
        user_agent: User-Agent sent by downloaders (annotated with the tool name)
        connection_timeout: Connection timeout in seconds; 0 disables it
        check_certificates: Whether downloaders verify TLS certificates
    """

    variables: Dict[str, str] = field(default_factory=dict)
    user_agent: str = field(default_factory=default_user_agent)
    connection_timeout: int = 30
    check_certificates: bool = True

    def __post_init__(self):
        """Fill in defaults for unset variables."""
        if self.connection_timeout < 0:
            raise ConfigError(
                f"connection_timeout must be >= 0, got {self.connection_timeout}"
            )
        merged = dict(DEFAULT_VARIABLES)
        for flag, value in _NOCERT_FLAGS.items():
            merged[flag] = "" if self.check_certificates else value
        merged.update(self.variables)
        self.variables = merged

    def variable(self, name: str) -> str:
        """
        Look up a variable.

        Raises:
            KeyError: If the variable is not defined
        """
        return self.variables[name]


def load_config(
    config_path: Optional[Path] = None, environ: Optional[Dict[str, str]] = None
) -> ToolsConfig:
    """
    Load configuration.

    Args:
        config_path: Path to a toolfs.yaml file. If None, defaults are used.
        environ: Environment used for TOOLFS_<VAR> overrides (default: os.environ)

    Returns:
        Parsed configuration

    Raises:
        ConfigError: If the file is missing or invalid
    """
    data: dict = {}
    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")
        try:
            with open(config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML syntax: {e}")
        logger.debug(f"Loaded configuration from {config_path}")

    config = _parse_and_validate(data)
    _apply_env_overrides(config, os.environ if environ is None else environ)
    return config


def _parse_and_validate(data: dict) -> ToolsConfig:
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

    variables = data.get("variables") or {}
    if not isinstance(variables, dict):
        raise ConfigError("'variables' must be a mapping")
    for key, value in variables.items():
        if not isinstance(value, str):
            raise ConfigError(f"Variable {key} must be a string, got {type(value).__name__}")

    kwargs = {"variables": {str(k): v for k, v in variables.items()}}

    if "user_agent" in data:
        if not isinstance(data["user_agent"], str):
            raise ConfigError("'user_agent' must be a string")
        kwargs["user_agent"] = data["user_agent"]

    if "connection_timeout" in data:
        timeout = data["connection_timeout"]
        if isinstance(timeout, bool) or not isinstance(timeout, int):
            raise ConfigError("'connection_timeout' must be an integer")
        kwargs["connection_timeout"] = timeout

    if "check_certificates" in data:
        if not isinstance(data["check_certificates"], bool):
            raise ConfigError("'check_certificates' must be true or false")
        kwargs["check_certificates"] = data["check_certificates"]

    return ToolsConfig(**kwargs)


def _apply_env_overrides(config: ToolsConfig, environ) -> None:
    for key, value in environ.items():
        if key.startswith(ENV_PREFIX) and len(key) > len(ENV_PREFIX):
            name = key[len(ENV_PREFIX):]
            logger.debug(f"Environment override: {name}={value}")
            config.variables[name] = value


__all__ = [
    "DEFAULT_CONFIG_NAME",
    "DEFAULT_VARIABLES",
    "ToolsConfig",
    "default_user_agent",
    "load_config",
]
