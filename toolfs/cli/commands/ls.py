"""
List command implementation.
"""

from toolfs.cli.utils import build_tools, enter_directory


def run(args) -> int:
    """
    Run the ls command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    tools = build_tools(args)
    if not enter_directory(tools, args):
        return 1

    for entry in tools.list_directory(args.path):
        print(entry)
    return 0
