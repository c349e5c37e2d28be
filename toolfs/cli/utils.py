"""
Shared utilities for CLI commands.
"""

import logging
from pathlib import Path

from toolfs.core.config import DEFAULT_CONFIG_NAME, load_config
from toolfs.tools import FsTools

logger = logging.getLogger(__name__)


def build_tools(args) -> FsTools:
    """
    Build an FsTools for a command from the global CLI options.

    The config file is --config if given, else ./toolfs.yaml if present,
    else built-in defaults.

    Raises:
        ConfigError: If the configuration file is invalid
    """
    config_path = getattr(args, "config", None)
    if config_path is None:
        local = Path.cwd() / DEFAULT_CONFIG_NAME
        if local.exists():
            config_path = local

    if config_path is None:
        return FsTools()

    logger.debug(f"Using configuration: {config_path}")
    return FsTools(config=load_config(config_path))


def enter_directory(tools: FsTools, args) -> bool:
    """
    Apply --directory to the tools' directory stack.

    Returns:
        False if the directory does not exist (error already logged)
    """
    directory = getattr(args, "directory", None)
    if not directory:
        return True
    outcome = tools.change_dir(str(directory))
    if not outcome:
        logger.error(outcome.message)
        return False
    return True
