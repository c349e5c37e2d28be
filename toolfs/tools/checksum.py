"""
MD5 digests through an external checksum tool.

Tool output formats differ ("<hash>  <file>", "MD5(<file>)= <hash>",
"MD5 (<file>) = <hash>"), so the digest is taken as the first run of 32
hex digits on the first output line.
"""

import logging
import re
import subprocess

from toolfs.core.exceptions import (
    DigestParseError,
    DirectoryResolutionError,
    ToolUnavailableError,
)
from toolfs.core.filesystem import Filesystem
from toolfs.core.results import Outcome
from toolfs.tools.dirstack import DirectoryStack
from toolfs.tools.registry import ToolCapability, ToolRegistry

logger = logging.getLogger(__name__)

_MD5_PATTERN = re.compile(r"[0-9a-fA-F]{32}")


class ChecksumComputer:
    """Computes MD5 digests of local files."""

    def __init__(self, fs: Filesystem, registry: ToolRegistry, stack: DirectoryStack):
        self.fs = fs
        self.registry = registry
        self.stack = stack

    def get_md5(self, file: str) -> Outcome:
        """
        Get the MD5 checksum of a file.

        Args:
            file: File path, relative to the current directory

        Returns:
            Outcome with the lowercase hex digest on success
        """
        current = self.stack.current_dir()
        if current is None:
            return Outcome.failure(
                DirectoryResolutionError(
                    f"Failed to compute MD5 hash for file {file}: "
                    "working directory unknown"
                )
            )
        path = self.fs.absolute_name(file, current)
        message = f"Failed to compute MD5 hash for file {path}"

        tool = self.registry.resolve(ToolCapability.CHECKSUM)
        if tool is None:
            return Outcome.failure(
                ToolUnavailableError(ToolCapability.CHECKSUM.value, message)
            )

        argv = list(tool.command) + [path]
        logger.debug(f"Running: {self.fs.command(*argv)}")
        try:
            with subprocess.Popen(
                argv, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, text=True
            ) as proc:
                line = proc.stdout.readline()
                proc.stdout.close()
        except OSError as e:
            logger.debug(f"Failed to launch {tool.name}: {e}")
            return Outcome.failure(DigestParseError(message))

        match = _MD5_PATTERN.search(line)
        if not match:
            logger.debug(f"No MD5 digest in {tool.name} output: {line!r}")
            return Outcome.failure(DigestParseError(message))
        return Outcome.success(match.group(0).lower())


__all__ = ["ChecksumComputer"]
