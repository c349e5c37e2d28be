"""
Download command implementation.

Fetches a URL with the selected downloader.
"""

import logging

from toolfs.cli.utils import build_tools, enter_directory

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the download command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    tools = build_tools(args)
    if not enter_directory(tools, args):
        return 1

    result = tools.download(args.url, filename=args.output, cache=args.cache)
    if not result:
        logger.error(result.message)
        return 1

    if result.value:
        print(result.value)
    return 0
