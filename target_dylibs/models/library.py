"""Data models for library resolution and materialization."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

MaterializeAction = Literal["copy", "link"]


@dataclass(frozen=True)
class LibraryRequest:
    """A linked library name and the directories it may live in."""

    name: str  # base name, e.g. "ssl" for libssl.so
    search_dirs: tuple[str, ...]  # deduplicated, first-seen order
    package_id: str = ""  # package whose build script declared it


@dataclass(frozen=True)
class ResolvedTarget:
    """Output directory of the designated package."""

    package_id: str
    directory: Path


@dataclass(frozen=True)
class MaterializedFile:
    """A single file copied or link created in the target directory."""

    action: MaterializeAction
    source: Path
    destination: Path
    link_target: str | None = None  # base name the created link points at
