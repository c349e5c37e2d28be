"""
Run command implementation.

Executes a shell command string in the logical current directory.
"""

import logging

from toolfs.cli.utils import build_tools, enter_directory

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the run command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if the command succeeded)
    """
    tools = build_tools(args)
    if not enter_directory(tools, args):
        return 1

    cmd = " ".join(args.cmd)
    if tools.execute_string(cmd):
        return 0
    logger.error(f"Command failed: {cmd}")
    return 1
