"""
MD5 command implementation.

Prints md5sum-style lines for each file.
"""

import logging

from toolfs.cli.utils import build_tools, enter_directory

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the md5 command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every file was hashed)
    """
    tools = build_tools(args)
    if not enter_directory(tools, args):
        return 1

    exit_code = 0
    for file in args.files:
        result = tools.get_md5(file)
        if result:
            print(f"{result.value}  {file}")
        else:
            logger.error(result.message)
            exit_code = 1
    return exit_code
