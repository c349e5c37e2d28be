"""
toolfs CLI argument parser.

This module implements the command-line interface for toolfs using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from toolfs import __version__
from toolfs.core.exceptions import ToolfsError
from toolfs.tools import ToolCapability

logger = logging.getLogger(__name__)


class CLI:
    """toolfs command-line interface."""

    COMMANDS = {
        "download": "toolfs.cli.commands.download",
        "md5": "toolfs.cli.commands.md5",
        "ls": "toolfs.cli.commands.ls",
        "run": "toolfs.cli.commands.run",
        "which": "toolfs.cli.commands.which",
    }

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="toolfs",
            description="toolfs - filesystem operations backed by external tools",
            epilog='Use "toolfs COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"toolfs {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./toolfs.yaml)",
        )
        parser.add_argument(
            "--directory",
            "-C",
            metavar="DIR",
            help="Logical directory to operate in (default: current directory)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_download_command(subparsers)
        self._add_md5_command(subparsers)
        self._add_ls_command(subparsers)
        self._add_run_command(subparsers)
        self._add_which_command(subparsers)

        return parser

    def _add_download_command(self, subparsers):
        """Add 'download' command parser."""
        download = subparsers.add_parser(
            "download",
            help="Download a remote file",
            description="Fetch a URL with curl or wget",
        )
        download.add_argument("url", help="URL to fetch")
        download.add_argument(
            "--output",
            "-o",
            metavar="FILE",
            help="Local filename (default: basename of the URL)",
        )
        download.add_argument(
            "--cache",
            action="store_true",
            help="Skip the download if the remote file is unchanged (wget only)",
        )

    def _add_md5_command(self, subparsers):
        """Add 'md5' command parser."""
        md5 = subparsers.add_parser(
            "md5",
            help="Compute MD5 checksums",
            description="Compute MD5 checksums with md5sum, openssl or md5",
        )
        md5.add_argument("files", nargs="+", metavar="FILE", help="Files to hash")

    def _add_ls_command(self, subparsers):
        """Add 'ls' command parser."""
        ls = subparsers.add_parser(
            "ls",
            help="List a directory",
            description="List directory entries with the configured LS tool",
        )
        ls.add_argument("path", nargs="?", help="Directory (default: current)")

    def _add_run_command(self, subparsers):
        """Add 'run' command parser."""
        run = subparsers.add_parser(
            "run",
            help="Run a shell command",
            description="Run a shell command in the logical current directory",
        )
        run.add_argument(
            "cmd", nargs=argparse.REMAINDER, metavar="CMD", help="Command to run"
        )

    def _add_which_command(self, subparsers):
        """Add 'which' command parser."""
        which = subparsers.add_parser(
            "which",
            help="Show selected tools",
            description="Show the tool selected for each capability",
        )
        which.add_argument(
            "capability",
            nargs="?",
            choices=[c.value for c in ToolCapability],
            help="Capability to resolve (default: all)",
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        if parsed_args.command == "run" and not parsed_args.cmd:
            logger.error("No command given to run")
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except ToolfsError as e:
            logger.error(f"Error: {e}")
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = self.COMMANDS.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
