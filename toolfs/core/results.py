"""Return values for operations that report failure instead of raising."""

from dataclasses import dataclass
from typing import Optional

from toolfs.core.exceptions import ToolfsError


@dataclass(frozen=True)
class Outcome:
    """
    Result of a toolfs operation.

    Attributes:
        ok: Whether the operation succeeded
        value: Payload on success (a filename, a digest) or None
        error: Typed error on failure, None on success

    Example:
        >>> result = tools.download("https://example.com/pkg-1.0.tar.gz")
        >>> if result:
        ...     print(f"Saved to {result.value}")
        ... else:
        ...     print(result.message)
    """

    ok: bool
    value: Optional[str] = None
    error: Optional[ToolfsError] = None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> Optional[str]:
        """Human-readable failure message, or None on success."""
        return str(self.error) if self.error is not None else None

    @classmethod
    def success(cls, value: Optional[str] = None) -> "Outcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: ToolfsError) -> "Outcome":
        return cls(ok=False, error=error)
