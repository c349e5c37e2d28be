"""
Integration tests running real downloaders and checksum tools.

A local HTTP server stands in for the package repository.
Run with: pytest --integration
"""

import os
import shutil
import time

import pytest

from toolfs.core.config import ToolsConfig
from toolfs.core.filesystem import Filesystem
from toolfs.tools import FsTools
from toolfs.tools.registry import (
    TOOL_CANDIDATES,
    ToolCandidate,
    ToolCapability,
    ToolRegistry,
)

pytestmark = pytest.mark.integration

PAYLOAD = b"pretend this is a tarball\n" * 64


def tools_with(downloader: str) -> FsTools:
    """FsTools whose downloader capability only considers one tool."""
    config = ToolsConfig(connection_timeout=5)
    fs = Filesystem()
    candidates = {
        ToolCapability.DOWNLOADER: tuple(
            c for c in TOOL_CANDIDATES[ToolCapability.DOWNLOADER] if c.name == downloader
        ),
        ToolCapability.CHECKSUM: (ToolCandidate(var="MD5SUM", name="md5sum"),),
    }
    return FsTools(config=config, fs=fs, registry=ToolRegistry(config, fs, candidates))


@pytest.fixture(params=["curl", "wget"])
def downloader_name(request):
    if shutil.which(request.param) is None:
        pytest.skip(f"{request.param} not installed")
    return request.param


class TestDownload:
    def test_fetch_derived_name(self, workspace, http_server, downloader_name):
        base_url, docroot = http_server
        (docroot / "pkg-1.0.tar.gz").write_bytes(PAYLOAD)
        tools = tools_with(downloader_name)

        result = tools.download(f"{base_url}/pkg-1.0.tar.gz")

        assert result
        assert os.path.basename(result.value) == "pkg-1.0.tar.gz"
        assert os.path.isabs(result.value)
        assert os.path.getsize(result.value) > 0

    def test_fetch_explicit_name_in_logical_dir(self, workspace, http_server, downloader_name):
        base_url, docroot = http_server
        (docroot / "pkg-1.0.tar.gz").write_bytes(PAYLOAD)
        tools = tools_with(downloader_name)

        with tools.pushd("cache"):
            result = tools.download(f"{base_url}/pkg-1.0.tar.gz", filename="local.tgz")

        assert result.value == str(workspace / "cache" / "local.tgz")
        assert (workspace / "cache" / "local.tgz").read_bytes() == PAYLOAD

    def test_missing_resource_leaves_no_file(self, workspace, http_server, downloader_name):
        base_url, _ = http_server
        tools = tools_with(downloader_name)

        result = tools.download(f"{base_url}/missing-1.0.tar.gz")

        assert not result
        assert not (workspace / "missing-1.0.tar.gz").exists()

    def test_unreachable_host_leaves_no_file(self, workspace, downloader_name):
        tools = tools_with(downloader_name)

        result = tools.download("http://127.0.0.1:9/pkg-1.0.tar.gz")

        assert not result
        assert not (workspace / "pkg-1.0.tar.gz").exists()


@pytest.mark.skipif(shutil.which("wget") is None, reason="wget not installed")
class TestCacheMode:
    @pytest.mark.slow
    def test_unchanged_resource_not_refetched(self, workspace, http_server):
        base_url, docroot = http_server
        remote = docroot / "pkg-1.0.tar.gz"
        remote.write_bytes(PAYLOAD)
        old = time.time() - 3600
        os.utime(remote, (old, old))
        tools = tools_with("wget")
        depth = tools.stack.depth

        first = tools.download(f"{base_url}/pkg-1.0.tar.gz", filename="cache/pkg-1.0.tar.gz", cache=True)
        assert first
        mtime = os.path.getmtime(first.value)
        time.sleep(1.1)

        second = tools.download(f"{base_url}/pkg-1.0.tar.gz", filename="cache/pkg-1.0.tar.gz", cache=True)

        assert second
        assert second.value == first.value
        assert os.path.getmtime(second.value) == mtime
        assert tools.stack.depth == depth


@pytest.mark.skipif(shutil.which("md5sum") is None, reason="md5sum not installed")
class TestChecksum:
    def test_downloaded_file_digest(self, workspace, http_server):
        base_url, docroot = http_server
        (docroot / "empty.tar.gz").write_bytes(b"")
        downloader = "curl" if shutil.which("curl") else "wget"
        if shutil.which(downloader) is None:
            pytest.skip("no downloader installed")
        tools = tools_with(downloader)

        result = tools.download(f"{base_url}/empty.tar.gz")
        assert result

        assert tools.get_md5(result.value).value == "d41d8cd98f00b204e9800998ecf8427e"
