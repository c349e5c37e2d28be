"""
Common filesystem operations implemented with external tools.

FsTools bundles one workflow's state: its directory stack, plus a
(by default process-wide) tool registry.

Usage:
    from toolfs.tools import FsTools

    tools = FsTools()
    with tools.pushd("/var/cache/packages"):
        result = tools.download("https://example.com/pkg-1.0.tar.gz", cache=True)
    if result:
        print(tools.get_md5(result.value).value)
"""

from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from toolfs.core.config import ToolsConfig, load_config
from toolfs.core.filesystem import Filesystem
from toolfs.core.results import Outcome
from toolfs.tools.checksum import ChecksumComputer
from toolfs.tools.dirstack import DirectoryStack
from toolfs.tools.downloader import Downloader
from toolfs.tools.executor import CommandExecutor
from toolfs.tools.registry import (
    CapabilityLike,
    ToolCapability,
    ToolRegistry,
    get_default_registry,
)


class FsTools:
    """
    Entry point to the tool layer for one workflow.

    Two FsTools instances never share a directory stack, so independent
    workflows (e.g. parallel package builds) can change directories
    without interfering.
    """

    def __init__(
        self,
        config: Optional[ToolsConfig] = None,
        fs: Optional[Filesystem] = None,
        registry: Optional[ToolRegistry] = None,
    ):
        """
        Initialize tools.

        Args:
            config: Configuration (default: load_config())
            fs: Filesystem façade (default: Filesystem())
            registry: Tool registry. If None and no config or fs was given,
                the process-wide registry is shared; otherwise a private one
                is built from config and fs.
        """
        if registry is None and config is None and fs is None:
            registry = get_default_registry()
        self.config = config or (registry.config if registry else load_config())
        self.fs = fs or (registry.fs if registry else Filesystem())
        self.registry = registry or ToolRegistry(self.config, self.fs)

        self.stack = DirectoryStack(self.fs)
        self.executor = CommandExecutor(self.config, self.fs, self.stack)
        self.downloader = Downloader(
            self.config, self.fs, self.registry, self.stack, self.executor
        )
        self.checksum = ChecksumComputer(self.fs, self.registry, self.stack)

    # Directory stack

    def current_dir(self) -> Optional[str]:
        return self.stack.current_dir()

    def change_dir(self, directory: str) -> Outcome:
        return self.stack.change_dir(directory)

    def change_dir_to_root(self) -> None:
        self.stack.change_dir_to_root()

    def pop_dir(self) -> bool:
        return self.stack.pop_dir()

    @contextmanager
    def pushd(self, directory: str) -> Iterator[str]:
        with self.stack.pushd(directory) as current:
            yield current

    # Execution

    def execute_string(self, cmd: str) -> bool:
        return self.executor.execute_string(cmd)

    def execute(self, *argv: str) -> bool:
        return self.executor.execute(*argv)

    def execute_quiet(self, *argv: str) -> bool:
        return self.executor.execute_quiet(*argv)

    def list_directory(self, path: Optional[str] = None) -> Iterator[str]:
        return self.executor.list_directory(path)

    # Tools

    def which_tool(self, capability: CapabilityLike) -> Optional[Tuple[str, str]]:
        return self.registry.which_tool(capability)

    def download(
        self, url: str, filename: Optional[str] = None, cache: bool = False
    ) -> Outcome:
        return self.downloader.download(url, filename, cache)

    def get_md5(self, file: str) -> Outcome:
        return self.checksum.get_md5(file)


__all__ = [
    "FsTools",
    "ToolCapability",
]
