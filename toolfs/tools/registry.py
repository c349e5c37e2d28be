"""
Tool selection and caching.

A capability ("downloader", "checksum") can be fulfilled by one of several
interchangeable external programs. The registry probes the candidates in
their declared order, binds the first one present on the host and keeps
that answer for its whole lifetime, including a negative answer. A tool
that appears or disappears later is not noticed.

Usage:
    from toolfs.tools.registry import ToolCapability, get_default_registry

    registry = get_default_registry()
    tool = registry.resolve(ToolCapability.DOWNLOADER)
    if tool:
        print(f"Downloading with {tool.name}: {tool.prefix}")
"""

import functools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from toolfs.core.config import ToolsConfig, load_config
from toolfs.core.filesystem import Filesystem

logger = logging.getLogger(__name__)


class ToolCapability(Enum):
    """Abstract operations backed by external tools."""

    DOWNLOADER = "downloader"
    CHECKSUM = "checksum"


@dataclass(frozen=True)
class ToolCandidate:
    """
    One concrete tool able to fulfill a capability.

    Attributes:
        var: Configuration variable holding the executable location
        name: Tool name, also the name call sites dispatch on
        probe_arg: Argument used to test presence (None means --version)
        cmd_args: Arguments placed after the executable on every invocation
    """

    var: str
    name: str
    probe_arg: Optional[str] = None
    cmd_args: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ResolvedTool:
    """
    The candidate bound to a capability.

    Attributes:
        name: Candidate name ('curl', 'md5sum', ...)
        command: Invocation prefix as an argument vector
        prefix: Invocation prefix as a quoted shell string
    """

    name: str
    command: Tuple[str, ...]
    prefix: str


# Declared priority order. Call sites branch on ResolvedTool.name only.
TOOL_CANDIDATES: Dict[ToolCapability, Tuple[ToolCandidate, ...]] = {
    ToolCapability.DOWNLOADER: (
        ToolCandidate(var="CURL", name="curl"),
        ToolCandidate(var="WGET", name="wget"),
    ),
    ToolCapability.CHECKSUM: (
        ToolCandidate(var="MD5SUM", name="md5sum"),
        ToolCandidate(var="OPENSSL", name="openssl", probe_arg="version", cmd_args=("md5",)),
        ToolCandidate(var="MD5", name="md5", probe_arg="-v"),
    ),
}

CapabilityLike = Union[ToolCapability, str]


class ToolRegistry:
    """
    Lazily resolves and memoizes one tool per capability.

    Example:
        >>> registry = ToolRegistry(ToolsConfig(), Filesystem())
        >>> registry.which_tool("checksum")
        ('md5sum', 'md5sum')
    """

    def __init__(
        self,
        config: ToolsConfig,
        fs: Filesystem,
        candidates: Optional[Dict[ToolCapability, Tuple[ToolCandidate, ...]]] = None,
    ):
        """
        Initialize registry.

        Args:
            config: Source of configured tool locations
            fs: Façade used to probe and quote
            candidates: Candidate table (default: TOOL_CANDIDATES)
        """
        self.config = config
        self.fs = fs
        self.candidates = candidates if candidates is not None else TOOL_CANDIDATES
        self._cache: Dict[ToolCapability, Optional[ResolvedTool]] = {}

    def resolve(self, capability: CapabilityLike) -> Optional[ResolvedTool]:
        """
        Get the tool bound to a capability, probing on first use.

        Args:
            capability: ToolCapability or its string value

        Returns:
            ResolvedTool, or None if no candidate is present on this host

        Raises:
            ValueError: If the capability name is unknown
        """
        capability = ToolCapability(capability)
        if capability in self._cache:
            return self._cache[capability]

        resolved = None
        for candidate in self.candidates.get(capability, ()):
            location = self.config.variable(candidate.var)
            if self.fs.is_tool_available(location, candidate.name, candidate.probe_arg):
                command = (location,) + tuple(candidate.cmd_args)
                resolved = ResolvedTool(
                    name=candidate.name,
                    command=command,
                    prefix=self.fs.command(*command),
                )
                logger.info(f"Using {candidate.name} for {capability.value}")
                break

        if resolved is None:
            names = ", ".join(c.name for c in self.candidates.get(capability, ()))
            logger.warning(f"No {capability.value} tool found (tried: {names})")

        self._cache[capability] = resolved
        return resolved

    def which_tool(self, capability: CapabilityLike) -> Optional[Tuple[str, str]]:
        """
        Get (name, quoted invocation prefix) for a capability, or None.
        """
        tool = self.resolve(capability)
        if tool is None:
            return None
        return tool.name, tool.prefix


@functools.lru_cache(maxsize=1)
def get_default_registry() -> ToolRegistry:
    """
    Get the process-wide registry built from the default configuration.

    This function is cached - probing happens at most once per capability
    per process.
    """
    return ToolRegistry(load_config(), Filesystem())


def clear_registry_cache():
    """
    Drop the process-wide registry.

    Useful for testing.
    """
    get_default_registry.cache_clear()


__all__ = [
    "TOOL_CANDIDATES",
    "ResolvedTool",
    "ToolCandidate",
    "ToolCapability",
    "ToolRegistry",
    "clear_registry_cache",
    "get_default_registry",
]
