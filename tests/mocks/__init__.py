"""Test doubles for toolfs tests."""

from .tools import FakeFilesystem, make_registry

__all__ = ["FakeFilesystem", "make_registry"]
