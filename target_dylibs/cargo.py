"""Cargo invocation helpers: package ID lookup and JSON build messages."""

from __future__ import annotations

import subprocess

import structlog

from target_dylibs.config import Settings
from target_dylibs.exceptions import BuildToolError

log = structlog.get_logger("target_dylibs.cargo")


def _run(cmd: list[str]) -> str:
    """Run *cmd* and return its stdout with trailing whitespace stripped."""
    log.debug("cargo.run", cmd=cmd)
    try:
        result = subprocess.run(cmd, capture_output=True)
    except OSError as e:
        raise BuildToolError(f"executing `{' '.join(cmd)}`: {e}") from e
    if result.returncode != 0:
        stderr = result.stderr.decode("utf-8", errors="replace")
        raise BuildToolError(
            f"`{' '.join(cmd)}` exited with status {result.returncode}: {stderr.strip()}"
        )
    try:
        stdout = result.stdout.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BuildToolError(f"converting output of `{' '.join(cmd)}` to text: {e}") from e
    return stdout.rstrip()


def package_id(settings: Settings, manifest_path: str | None = None) -> str:
    """Return the ID of the current package as printed by ``cargo pkgid``."""
    cmd = [settings.cargo, "pkgid"]
    if manifest_path:
        cmd += ["--manifest-path", manifest_path]
    return _run(cmd)


def build_command(
    settings: Settings,
    release: bool = False,
    manifest_path: str | None = None,
) -> list[str]:
    """Assemble the ``cargo build`` command that emits JSON messages."""
    cmd = [settings.cargo, "build", *settings.extra_build_args]
    if release:
        cmd.append("--release")
    if manifest_path:
        cmd += ["--manifest-path", manifest_path]
    cmd += ["--quiet", "--message-format", "json"]
    return cmd


def build_events(
    settings: Settings,
    release: bool = False,
    manifest_path: str | None = None,
) -> list[str]:
    """Run the build and return its message lines."""
    cmd = build_command(settings, release=release, manifest_path=manifest_path)
    return _run(cmd).splitlines()
