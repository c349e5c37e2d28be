"""
Remote file download through an external downloader.

Supports:
- curl and wget, whichever the registry selected
- Explicit or URL-derived local filenames
- Cache mode: wget --timestamping skips unchanged remote files
- No partial file left behind on failure
"""

import logging
import shlex
from typing import Callable, Dict, List, Optional

from toolfs.core.config import ToolsConfig
from toolfs.core.exceptions import (
    DirectoryResolutionError,
    ExecutionFailedError,
    ToolUnavailableError,
)
from toolfs.core.filesystem import Filesystem, base_name, dir_name
from toolfs.core.results import Outcome
from toolfs.tools.dirstack import DirectoryStack
from toolfs.tools.executor import CommandExecutor
from toolfs.tools.registry import ResolvedTool, ToolCapability, ToolRegistry

logger = logging.getLogger(__name__)


class Downloader:
    """
    Fetches URLs with curl or wget.

    Example:
        >>> downloader = Downloader(config, fs, registry, stack, executor)
        >>> result = downloader.download("http://example.test/pkg-1.0.tar.gz")
        >>> result.value
        '/home/user/work/pkg-1.0.tar.gz'
    """

    def __init__(
        self,
        config: ToolsConfig,
        fs: Filesystem,
        registry: ToolRegistry,
        stack: DirectoryStack,
        executor: CommandExecutor,
    ):
        self.config = config
        self.fs = fs
        self.registry = registry
        self.stack = stack
        self.executor = executor
        self._backends: Dict[str, Callable[..., bool]] = {
            "curl": self._fetch_with_curl,
            "wget": self._fetch_with_wget,
        }

    def download(
        self, url: str, filename: Optional[str] = None, cache: bool = False
    ) -> Outcome:
        """
        Download a remote file.

        Args:
            url: URL to fetch
            filename: Local filename. Defaults to the basename of the URL,
                which is wrong after some redirects, hence the override.
            cache: Compare remote timestamps before re-downloading (wget).
                wget cannot combine this with an explicit output file, so
                in cache mode the file keeps wget's name for the URL and
                only the directory of filename is used.

        Returns:
            Outcome with the absolute local filename on success
        """
        current = self.stack.current_dir()
        if current is None:
            return Outcome.failure(
                DirectoryResolutionError(
                    f"Cannot place download of {url}: working directory unknown"
                )
            )
        target = self._target_path(url, filename, current)

        tool = self.registry.resolve(ToolCapability.DOWNLOADER)
        if tool is None:
            return Outcome.failure(
                ToolUnavailableError(
                    ToolCapability.DOWNLOADER.value,
                    f"No downloader available to fetch {url}",
                )
            )

        backend = self._backends.get(tool.name)
        if backend is None:
            return Outcome.failure(
                ToolUnavailableError(
                    ToolCapability.DOWNLOADER.value,
                    f"Unsupported downloader: {tool.name}",
                )
            )

        logger.info(f"Downloading {url} with {tool.name}")
        if backend(tool, url, target, cache):
            logger.debug(f"Downloaded {url} to {target}")
            return Outcome.success(target)

        if target is not None:
            self.fs.delete_file(target)
        logger.warning(f"Failed to download {url}")
        return Outcome.failure(ExecutionFailedError(f"{tool.name} {url}"))

    def _target_path(
        self, url: str, filename: Optional[str], current: str
    ) -> Optional[str]:
        name = filename or base_name(url)
        if not name:
            return None
        return self.fs.absolute_name(name, current)

    def _timeout(self) -> int:
        timeout = self.config.connection_timeout
        return timeout if timeout and timeout > 0 else 0

    def _fetch_with_wget(
        self, tool: ResolvedTool, url: str, target: Optional[str], cache: bool
    ) -> bool:
        argv: List[str] = list(tool.command)
        argv += shlex.split(self.config.variable("WGETNOCERTFLAG"))
        argv += [
            "--no-cache",
            f"--user-agent={self.config.user_agent} via wget",
            "--quiet",
        ]
        timeout = self._timeout()
        if timeout:
            argv += [f"--timeout={timeout}", "--tries=1"]

        if cache:
            if target is not None and _filename_differs(url, target):
                logger.debug(
                    f"Cache mode keeps wget's own name for {url}, "
                    f"ignoring requested name {base_name(target)}"
                )
            directory = dir_name(target) if target else ""
            if directory and not self.stack.change_dir(directory):
                return False
            try:
                return self.executor.execute_quiet(*argv, "--timestamping", url)
            finally:
                if directory:
                    self.stack.pop_dir()
        elif target is not None:
            return self.executor.execute_quiet(*argv, "--output-document", target, url)
        else:
            return self.executor.execute_quiet(*argv, url)

    def _fetch_with_curl(
        self, tool: ResolvedTool, url: str, target: Optional[str], cache: bool
    ) -> bool:
        if target is None:
            logger.warning(f"No local filename for {url}")
            return False

        parts = [tool.prefix]
        nocert = self.config.variable("CURLNOCERTFLAG")
        if nocert:
            parts.append(nocert)
        parts += [
            "-f",
            "-L",
            "--user-agent",
            self.fs.quote(f"{self.config.user_agent} via curl"),
        ]
        timeout = self._timeout()
        if timeout:
            parts += ["--connect-timeout", str(timeout)]
        parts += [self.fs.quote(url), ">", self.fs.quote(target)]

        return self.executor.execute_string(self.fs.quiet_stderr(" ".join(parts)))


def _filename_differs(url: str, target: str) -> bool:
    """Whether target's basename is not the one derived from url."""
    return base_name(target) != base_name(url)


__all__ = ["Downloader"]
