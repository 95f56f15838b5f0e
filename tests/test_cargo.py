"""Tests for cargo invocation helpers — subprocess is mocked."""

from __future__ import annotations

import subprocess
from unittest.mock import patch

import pytest

from target_dylibs.cargo import build_command, build_events, package_id
from target_dylibs.config import Settings
from target_dylibs.exceptions import BuildToolError


def _completed(stdout: bytes = b"", returncode: int = 0, stderr: bytes = b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestBuildCommand:
    def test_default(self):
        assert build_command(Settings()) == [
            "cargo",
            "build",
            "--quiet",
            "--message-format",
            "json",
        ]

    def test_extra_args_release_and_manifest(self):
        settings = Settings(cargo="/usr/bin/cargo", extra_build_args=["--features", "ffi"])
        cmd = build_command(settings, release=True, manifest_path="app/Cargo.toml")
        assert cmd == [
            "/usr/bin/cargo",
            "build",
            "--features",
            "ffi",
            "--release",
            "--manifest-path",
            "app/Cargo.toml",
            "--quiet",
            "--message-format",
            "json",
        ]


class TestPackageId:
    def test_strips_trailing_whitespace(self):
        with patch("subprocess.run", return_value=_completed(b"path+file:///app#0.1.0\n")) as run:
            assert package_id(Settings()) == "path+file:///app#0.1.0"
        assert run.call_args.args[0] == ["cargo", "pkgid"]

    def test_manifest_path(self):
        with patch("subprocess.run", return_value=_completed(b"id\n")) as run:
            package_id(Settings(), "x/Cargo.toml")
        assert run.call_args.args[0] == ["cargo", "pkgid", "--manifest-path", "x/Cargo.toml"]

    def test_non_zero_exit(self):
        failed = _completed(returncode=101, stderr=b"error: could not find `Cargo.toml`\n")
        with patch("subprocess.run", return_value=failed):
            with pytest.raises(BuildToolError, match="status 101.*Cargo.toml"):
                package_id(Settings())

    def test_missing_binary(self):
        with patch("subprocess.run", side_effect=FileNotFoundError(2, "No such file")):
            with pytest.raises(BuildToolError, match="cargo pkgid"):
                package_id(Settings())


class TestBuildEvents:
    def test_splits_lines(self):
        out = b'{"reason":"a"}\n{"reason":"b"}\n'
        with patch("subprocess.run", return_value=_completed(out)):
            assert build_events(Settings()) == ['{"reason":"a"}', '{"reason":"b"}']

    def test_build_failure(self):
        with patch("subprocess.run", return_value=_completed(returncode=101)):
            with pytest.raises(BuildToolError) as exc:
                build_events(Settings())
        assert exc.value.phase == "build"

    def test_output_not_utf8(self):
        with patch("subprocess.run", return_value=_completed(b'{"reason":"\xff"}\n')):
            with pytest.raises(BuildToolError, match="converting output") as exc:
                build_events(Settings())
        assert exc.value.phase == "build"

    def test_stderr_not_utf8_still_reported(self):
        failed = _completed(returncode=101, stderr=b"error: \xff bad\n")
        with patch("subprocess.run", return_value=failed):
            with pytest.raises(BuildToolError, match="status 101"):
                build_events(Settings())
