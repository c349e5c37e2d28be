"""
Which command implementation.

Shows the tool selected for each capability.
"""

from toolfs.cli.utils import build_tools
from toolfs.tools import ToolCapability


def run(args) -> int:
    """
    Run the which command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 if every requested capability has a tool)
    """
    tools = build_tools(args)
    capabilities = [args.capability] if args.capability else [c.value for c in ToolCapability]

    exit_code = 0
    for capability in capabilities:
        resolved = tools.which_tool(capability)
        if resolved is None:
            print(f"{capability}: not found")
            exit_code = 1
        else:
            name, prefix = resolved
            print(f"{capability}: {name} ({prefix})")
    return exit_code
