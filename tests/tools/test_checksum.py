"""
Unit tests for MD5 computation.

Checksum tools are stood in for by small shell scripts printing each
real tool's output format.
"""

import shutil
import stat
from unittest.mock import patch

import pytest

from tests.mocks import FakeFilesystem
from toolfs.core.config import ToolsConfig
from toolfs.core.exceptions import (
    DigestParseError,
    DirectoryResolutionError,
    ToolUnavailableError,
)
from toolfs.tools.checksum import ChecksumComputer
from toolfs.tools.dirstack import DirectoryStack
from toolfs.tools.registry import ToolRegistry

EMPTY_MD5 = "d41d8cd98f00b204e9800998ecf8427e"
HELLO_MD5 = "b1946ac92492d2347c6235b4d2611184"  # "hello\n"


def make_computer(available, variables=None):
    config = ToolsConfig(variables=variables or {})
    fs = FakeFilesystem(available)
    registry = ToolRegistry(config, fs)
    return ChecksumComputer(fs, registry, DirectoryStack(fs))


def fake_tool(tmp_path, name, output):
    script = tmp_path / name
    script.write_text(f"#!/bin/sh\nprintf '%s\\n' \"{output}\"\n")
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


class TestOutputFormats:
    """The digest is found regardless of the tool's output layout."""

    @pytest.mark.parametrize(
        "name,output",
        [
            ("md5sum", f"{HELLO_MD5}  hello.txt"),
            ("openssl", f"MD5(hello.txt)= {HELLO_MD5}"),
            ("md5", f"MD5 (hello.txt) = {HELLO_MD5}"),
            ("md5", HELLO_MD5),
        ],
    )
    def test_formats(self, workspace, tmp_path, name, output):
        tool = fake_tool(tmp_path, f"fake-{name}", output)
        var = {"md5sum": "MD5SUM", "openssl": "OPENSSL", "md5": "MD5"}[name]
        computer = make_computer({name}, {var: tool})

        result = computer.get_md5("src/a")

        assert result
        assert result.value == HELLO_MD5

    def test_uppercase_lowered(self, workspace, tmp_path):
        tool = fake_tool(tmp_path, "fake-md5sum", f"{HELLO_MD5.upper()}  x")
        result = make_computer({"md5sum"}, {"MD5SUM": tool}).get_md5("src/a")
        assert result.value == HELLO_MD5

    def test_only_first_line_read(self, workspace, tmp_path):
        script = tmp_path / "two-lines"
        script.write_text(f"#!/bin/sh\necho 'no digest here'\necho {HELLO_MD5}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR)
        result = make_computer({"md5sum"}, {"MD5SUM": str(script)}).get_md5("src/a")
        assert not result

    def test_short_hex_run_rejected(self, workspace, tmp_path):
        tool = fake_tool(tmp_path, "fake-md5sum", "abc123  x")
        result = make_computer({"md5sum"}, {"MD5SUM": tool}).get_md5("src/a")
        assert not result
        assert isinstance(result.error, DigestParseError)

    def test_tool_receives_absolute_path(self, workspace, tmp_path):
        args_file = tmp_path / "args.txt"
        script = tmp_path / "echo-args"
        script.write_text(f"#!/bin/sh\necho \"$*\" > '{args_file}'\necho {HELLO_MD5}\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR)
        computer = make_computer({"openssl"}, {"OPENSSL": str(script)})
        computer.stack.change_dir("src")

        result = computer.get_md5("a")

        assert result.value == HELLO_MD5
        assert args_file.read_text().strip() == f"md5 {workspace / 'src' / 'a'}"


class TestFailures:
    def test_no_tool(self, workspace):
        result = make_computer(set()).get_md5("src/a")
        assert not result
        assert isinstance(result.error, ToolUnavailableError)
        assert result.message == f"Failed to compute MD5 hash for file {workspace / 'src' / 'a'}"

    def test_empty_output(self, workspace, tmp_path):
        script = tmp_path / "silent"
        script.write_text("#!/bin/sh\nexit 1\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR)
        result = make_computer({"md5sum"}, {"MD5SUM": str(script)}).get_md5("missing")
        assert not result
        assert result.message == f"Failed to compute MD5 hash for file {workspace / 'missing'}"

    def test_launch_failure(self, workspace):
        computer = make_computer({"md5sum"}, {"MD5SUM": "toolfs-no-such-md5sum"})
        result = computer.get_md5("src/a")
        assert not result
        assert str(workspace / "src" / "a") in result.message

    def test_unknown_working_directory(self, workspace):
        computer = make_computer({"md5sum"})
        with patch.object(computer.stack, "current_dir", return_value=None):
            result = computer.get_md5("src/a")
        assert not result
        assert isinstance(result.error, DirectoryResolutionError)
        assert computer.registry.fs.probes == []


@pytest.mark.skipif(shutil.which("md5sum") is None, reason="md5sum not installed")
class TestRealMd5sum:
    def test_empty_file(self, workspace):
        (workspace / "empty.txt").write_bytes(b"")
        computer = make_computer({"md5sum"})
        assert computer.get_md5("empty.txt").value == EMPTY_MD5

    def test_known_content(self, workspace):
        (workspace / "hello.txt").write_bytes(b"hello\n")
        assert make_computer({"md5sum"}).get_md5("hello.txt").value == HELLO_MD5

    def test_nonexistent_file(self, workspace):
        result = make_computer({"md5sum"}).get_md5("nope.txt")
        assert not result
        assert str(workspace / "nope.txt") in result.message
