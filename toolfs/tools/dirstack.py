"""
Logical current directory tracking.

The process working directory is read once and never changed. Each
workflow keeps its own DirectoryStack of change_dir calls on top of it,
so two workflows in the same process can sit in different directories.
"""

import functools
import logging
import os
from contextlib import contextmanager
from typing import Iterator, List, Optional

from toolfs.core.exceptions import DirectoryNotFoundError, DirectoryResolutionError
from toolfs.core.filesystem import Filesystem
from toolfs.core.results import Outcome

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=1)
def get_base_dir() -> str:
    """
    Get the physical working directory of the process.

    This function is cached - the OS is asked only once per process.

    Raises:
        DirectoryResolutionError: If the working directory is unavailable
    """
    try:
        return os.getcwd()
    except OSError as e:
        raise DirectoryResolutionError(f"Cannot determine working directory: {e}") from e


def clear_base_dir_cache():
    """
    Forget the cached physical working directory.

    Useful for testing.
    """
    get_base_dir.cache_clear()


def _root_dir(base: str) -> str:
    drive, _ = os.path.splitdrive(base)
    return drive + os.sep


class DirectoryStack:
    """
    Stack of logical directory changes.

    Example:
        >>> stack = DirectoryStack(Filesystem())
        >>> stack.change_dir("/tmp")
        Outcome(ok=True, value='/tmp', error=None)
        >>> stack.current_dir()
        '/tmp'
        >>> stack.pop_dir()
        True
    """

    def __init__(self, fs: Filesystem):
        self.fs = fs
        self._stack: List[str] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def current_dir(self) -> Optional[str]:
        """
        Get the absolute logical current directory.

        Returns:
            Absolute path, or None if the base directory cannot be resolved
        """
        try:
            current = get_base_dir()
        except DirectoryResolutionError as e:
            logger.error(str(e))
            return None
        for directory in self._stack:
            current = self.fs.absolute_name(directory, current)
        return current

    def change_dir(self, directory: str) -> Outcome:
        """
        Push a directory change.

        Relative paths are taken against the current logical directory.
        The stack is left untouched if the directory does not exist.

        Returns:
            Outcome with the new current directory, or DirectoryNotFoundError
        """
        current = self.current_dir()
        target = directory
        if current is not None:
            target = self.fs.absolute_name(directory, current)
        if not self.fs.is_dir(target):
            logger.debug(f"change_dir failed, not a directory: {target}")
            return Outcome.failure(DirectoryNotFoundError(directory))
        self._stack.append(directory)
        return Outcome.success(target)

    def change_dir_to_root(self) -> None:
        """Push the filesystem root, e.g. to leave a directory before deleting it."""
        try:
            base = get_base_dir()
        except DirectoryResolutionError:
            base = os.sep
        self._stack.append(_root_dir(base))

    def pop_dir(self) -> bool:
        """
        Undo the most recent change.

        Returns:
            False if the stack was already empty
        """
        if not self._stack:
            return False
        self._stack.pop()
        return True

    @contextmanager
    def pushd(self, directory: str) -> Iterator[str]:
        """
        Temporarily change directory.

        Yields:
            The new absolute current directory

        Raises:
            DirectoryNotFoundError: If the directory does not exist
        """
        outcome = self.change_dir(directory)
        if not outcome:
            raise outcome.error
        try:
            yield outcome.value
        finally:
            self.pop_dir()


__all__ = [
    "DirectoryStack",
    "clear_base_dir_cache",
    "get_base_dir",
]
