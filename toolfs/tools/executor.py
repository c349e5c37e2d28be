"""
Command execution and directory listing at the logical current directory.
"""

import logging
import subprocess
from typing import Iterator, Optional

from toolfs.core.config import ToolsConfig
from toolfs.core.filesystem import Filesystem, is_success
from toolfs.tools.dirstack import DirectoryStack

logger = logging.getLogger(__name__)

_PSEUDO_ENTRIES = (".", "..")


class CommandExecutor:
    """
    Runs commands with the stack's current directory applied.

    Nothing here raises for a failing command: every run reports a boolean.
    """

    def __init__(self, config: ToolsConfig, fs: Filesystem, stack: DirectoryStack):
        self.config = config
        self.fs = fs
        self.stack = stack

    def execute_string(self, cmd: str) -> bool:
        """
        Run a shell command string in the current directory.

        No quoting is applied to cmd. Output is not captured.

        Returns:
            True if the command exited successfully
        """
        current = self.stack.current_dir()
        if current is None:
            return False
        status = self.fs.run_shell(self.fs.command_at(current, cmd))
        return is_success(status)

    def execute(self, *argv: str, quiet: bool = False) -> bool:
        """
        Run a program in the current directory.

        Args:
            argv: Program and arguments, passed without a shell
            quiet: Discard stdout and stderr

        Returns:
            True if the program exited successfully
        """
        current = self.stack.current_dir()
        if current is None:
            return False
        return is_success(self.fs.run(argv, cwd=current, quiet=quiet))

    def execute_quiet(self, *argv: str) -> bool:
        return self.execute(*argv, quiet=True)

    def list_directory(self, path: Optional[str] = None) -> Iterator[str]:
        """
        Stream the entries of a directory from the LS tool.

        The directory is fixed when this is called, so later stack changes
        do not move the listing. The LS process starts on the first next().
        Entries come in the order the tool prints them, minus '.' and '..'.
        The child process is reaped whether the caller exhausts the iterator
        or drops it early.

        Args:
            path: Directory to list, relative to the current directory
                (default: the current directory itself)

        Returns:
            Iterator of entry names
        """
        current = self.stack.current_dir()
        if current is None:
            return iter(())
        at = current if path is None else self.fs.absolute_name(path, current)
        return self._stream_listing(at)

    def _stream_listing(self, at: str) -> Iterator[str]:
        ls = self.config.variable("LS")
        try:
            proc = subprocess.Popen(
                [ls],
                cwd=at,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
            )
        except OSError as e:
            logger.warning(f"Cannot list {at}: {e}")
            return

        with proc:
            try:
                for line in proc.stdout:
                    entry = line.rstrip("\r\n")
                    if entry and entry not in _PSEUDO_ENTRIES:
                        yield entry
            finally:
                if proc.poll() is None:
                    proc.kill()


__all__ = ["CommandExecutor"]
