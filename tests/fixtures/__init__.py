"""Test fixtures for toolfs tests.

This package provides reusable pytest fixtures. Fixtures are organized by type:

- directories: Workspace trees for directory stack and listing tests
- servers: A local HTTP server for integration downloads

Import fixtures in your tests using:
    from tests.fixtures.directories import workspace
    from tests.fixtures.servers import http_server
"""

__all__ = [
    "directories",
    "servers",
]
