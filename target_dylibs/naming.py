"""Platform file-naming conventions for dynamic libraries."""

from __future__ import annotations

import sys

# (platform, prefix, suffix), matched by sys.platform prefix
_DYLIB_AFFIXES: list[tuple[str, str, str]] = [
    ("win32", "", ".dll"),
    ("darwin", "lib", ".dylib"),
]
_DEFAULT_AFFIXES = ("lib", ".so")


def dylib_affixes(platform: str | None = None) -> tuple[str, str]:
    """Return the ``(prefix, suffix)`` used for dynamic libraries on *platform*.

    *platform* uses ``sys.platform`` names and defaults to the running one.
    """
    platform = sys.platform if platform is None else platform
    for name, prefix, suffix in _DYLIB_AFFIXES:
        if platform.startswith(name):
            return prefix, suffix
    return _DEFAULT_AFFIXES


def dylib_file_name(name: str, platform: str | None = None) -> str:
    """File name of the dynamic library *name*, e.g. ``ssl`` -> ``libssl.so``."""
    prefix, suffix = dylib_affixes(platform)
    return f"{prefix}{name}{suffix}"
