"""
Centralized exception hierarchy for toolfs.

Public operations never raise these for expected conditions. They are
created where a failure is detected and handed back to the caller inside
an Outcome (see toolfs.core.results).
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class ToolfsError(Exception):
    """Base exception for all toolfs errors."""

    pass


# ============================================================================
# Tool Exceptions
# ============================================================================


class ToolUnavailableError(ToolfsError):
    """No candidate tool for a capability is present on the host."""

    def __init__(self, capability: str, message: str = ""):
        self.capability = capability
        super().__init__(message or f"No tool available for capability: {capability}")


class ExecutionFailedError(ToolfsError):
    """External process returned a non-success status or failed to launch."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Command failed: {command}")


class DigestParseError(ToolfsError):
    """Checksum tool output did not contain a well-formed digest."""

    pass


# ============================================================================
# Directory Exceptions
# ============================================================================


class DirectoryNotFoundError(ToolfsError):
    """Raised or returned when a change_dir target does not exist."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"directory not found: {path}")


class DirectoryResolutionError(ToolfsError):
    """The physical base working directory could not be determined."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(ToolfsError):
    """Configuration parsing or validation error."""

    pass
