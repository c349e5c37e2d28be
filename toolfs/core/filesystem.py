"""
Low-level filesystem façade for toolfs.

This module isolates everything that depends on the host shell and the
host filesystem:
- Shell quoting of untrusted values (URLs, filenames, tool paths)
- Path utilities (absolutization, basename/dirname splitting)
- Directory tests and best-effort file deletion
- "Run this command at directory X" transformation
- Process execution and tool presence probing

Higher layers (toolfs.tools) never quote or spawn anything themselves.
"""

import logging
import os
import re
import shlex
import subprocess
from typing import Optional, Sequence, Union

from toolfs.core.platform import PlatformInfo, detect_platform

logger = logging.getLogger(__name__)

ExitStatus = Union[int, bool]

_TRAILING_SEPARATORS = re.compile(r"[/\\]+$")


def is_success(status: ExitStatus) -> bool:
    """
    Interpret a child exit status.

    Only the boolean True and the integer 0 mean success. Anything else,
    including False (launch failure) and None, is a failure.

    Example:
        >>> is_success(0), is_success(True), is_success(1), is_success(False)
        (True, True, False, False)
    """
    if isinstance(status, bool):
        return status
    if isinstance(status, int):
        return status == 0
    return False


# ============================================================================
# Path Utilities
# ============================================================================


def base_name(pathname: str) -> str:
    """
    Get the last component of a path or URL.

    Trailing separators are ignored, so both '/' and '\\' split.

    Example:
        >>> base_name("http://example.test/pkg-1.0.tar.gz")
        'pkg-1.0.tar.gz'
        >>> base_name("/usr/local/")
        'local'
    """
    stripped = _TRAILING_SEPARATORS.sub("", pathname)
    return re.split(r"[/\\]", stripped)[-1]


def dir_name(pathname: str) -> str:
    """
    Get everything but the last component of a path.

    Example:
        >>> dir_name("/var/cache/pkg-1.0.tar.gz")
        '/var/cache'
        >>> dir_name("/pkg.tar.gz")
        '/'
        >>> dir_name("pkg.tar.gz")
        ''
    """
    stripped = _TRAILING_SEPARATORS.sub("", pathname)
    match = re.match(r"^(.*?)[/\\]+[^/\\]*$", stripped)
    if not match:
        return ""
    head = match.group(1)
    if not head and stripped[:1] in ("/", "\\"):
        return stripped[0]
    return head


# ============================================================================
# Filesystem Façade
# ============================================================================


class Filesystem:
    """
    Host-specific primitives consumed by the tool layer.

    Example:
        >>> fs = Filesystem()
        >>> fs.command_at("/tmp/build dir", "make")
        "cd '/tmp/build dir' && make"
    """

    def __init__(self, platform_info: Optional[PlatformInfo] = None):
        """
        Initialize façade.

        Args:
            platform_info: Platform information. If None, auto-detect.
        """
        self.platform = platform_info or detect_platform()

    # ------------------------------------------------------------------
    # Quoting
    # ------------------------------------------------------------------

    def quote(self, arg: str) -> str:
        """Quote a single value for the host shell."""
        if self.platform.is_windows:
            return subprocess.list2cmdline([str(arg)])
        return shlex.quote(str(arg))

    def command(self, *args: str) -> str:
        """Join values into one shell command string, quoting each."""
        return " ".join(self.quote(a) for a in args)

    def quiet_stderr(self, cmd: str) -> str:
        """Discard the standard error of a shell command string."""
        null = "NUL" if self.platform.is_windows else "/dev/null"
        return f"{cmd} 2> {null}"

    def command_at(self, directory: str, cmd: str) -> str:
        """Wrap a shell command string so it runs with cwd set to directory."""
        if self.platform.is_windows:
            return f"cd /d {self.quote(directory)} && {cmd}"
        return f"cd {self.quote(directory)} && {cmd}"

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def absolute_name(self, pathname: str, relative_to: str) -> str:
        """
        Make pathname absolute against relative_to.

        Absolute inputs are only normalized.

        Example:
            >>> Filesystem().absolute_name("src/../lib", "/work")
            '/work/lib'
        """
        if os.path.isabs(pathname):
            return os.path.normpath(pathname)
        return os.path.normpath(os.path.join(relative_to, pathname))

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def delete_file(self, path: str) -> bool:
        """
        Remove a file, ignoring errors.

        Returns:
            True if a file was removed
        """
        try:
            os.remove(path)
        except OSError as e:
            logger.debug(f"Could not remove {path}: {e}")
            return False
        logger.debug(f"Removed {path}")
        return True

    # ------------------------------------------------------------------
    # Processes
    # ------------------------------------------------------------------

    def run(
        self, argv: Sequence[str], cwd: Optional[str] = None, quiet: bool = False
    ) -> ExitStatus:
        """
        Run a program from an argument vector and wait for it.

        Args:
            argv: Program and arguments
            cwd: Working directory for the child
            quiet: Discard stdout and stderr

        Returns:
            The child's exit code, or False if it could not be started
        """
        output = subprocess.DEVNULL if quiet else None
        logger.debug(f"Running: {self.command(*argv)}" + (f" (in {cwd})" if cwd else ""))
        try:
            completed = subprocess.run(
                list(argv), cwd=cwd, stdout=output, stderr=output, check=False
            )
        except OSError as e:
            logger.debug(f"Failed to launch {argv[0]}: {e}")
            return False
        return completed.returncode

    def run_shell(self, cmd: str) -> ExitStatus:
        """
        Run a shell command string and wait for it.

        Returns:
            The shell's exit code, or False if it could not be started
        """
        logger.debug(f"Running shell command: {cmd}")
        try:
            completed = subprocess.run(cmd, shell=True, check=False)
        except OSError as e:
            logger.debug(f"Failed to launch shell: {e}")
            return False
        return completed.returncode

    def is_tool_available(
        self, tool_cmd: str, tool_name: str, probe_arg: Optional[str] = None
    ) -> bool:
        """
        Check whether an external tool runs on this host.

        Args:
            tool_cmd: Configured executable (path or bare name)
            tool_name: Display name used in log messages
            probe_arg: Argument the tool accepts harmlessly (default --version)

        Returns:
            True if the probe exited successfully
        """
        available = is_success(
            self.run([tool_cmd, probe_arg or "--version"], quiet=True)
        )
        if available:
            logger.debug(f"Found {tool_name}: {tool_cmd}")
        else:
            logger.debug(f"{tool_name} not available ({tool_cmd})")
        return available


__all__ = [
    "ExitStatus",
    "Filesystem",
    "base_name",
    "dir_name",
    "is_success",
]
