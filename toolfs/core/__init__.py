"""
Core functionality for toolfs.

This package contains the foundational modules that the tool layer
depends on: configuration, the filesystem façade, platform detection,
error types and result values.
"""

from .config import (
    ToolsConfig,
    load_config,
)

from .exceptions import (
    ToolfsError,
    ToolUnavailableError,
    DirectoryNotFoundError,
    ExecutionFailedError,
    DigestParseError,
    DirectoryResolutionError,
    ConfigError,
)

from .filesystem import (
    Filesystem,
    base_name,
    dir_name,
    is_success,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
)

from .results import Outcome

__all__ = [
    "ToolsConfig",
    "load_config",
    "ToolfsError",
    "ToolUnavailableError",
    "DirectoryNotFoundError",
    "ExecutionFailedError",
    "DigestParseError",
    "DirectoryResolutionError",
    "ConfigError",
    "Filesystem",
    "base_name",
    "dir_name",
    "is_success",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "Outcome",
]
