"""Library materializer — resolve library files and copy them next to the artifact."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Iterable
from pathlib import Path

import structlog

from target_dylibs.exceptions import (
    DestinationRemovalError,
    MaterializeError,
    MissingParentError,
    SourceIsDirectoryError,
    SymlinkCycleError,
)
from target_dylibs.models.library import LibraryRequest, MaterializedFile
from target_dylibs.naming import dylib_file_name

log = structlog.get_logger("target_dylibs.materializer")

ALT_BIN_DIR = "bin"

FileCallback = Callable[[MaterializedFile], None]


def find_library(request: LibraryRequest, platform: str | None = None) -> Path | None:
    """Find the file for *request* in its search directories.

    Each directory is checked for ``<dir>/<file>`` and then for the sibling
    ``<dir>/../bin/<file>`` used by toolchains that keep DLLs apart from
    import libraries. The first hit wins; ``None`` means the library is not
    ours to copy (typically a system library).
    """
    file_name = dylib_file_name(request.name, platform)
    for search_dir in request.search_dirs:
        lib_dir = Path(search_dir)
        candidate = lib_dir / file_name
        if candidate.exists():
            return candidate

        # only a filesystem root lacks a parent; "." falls back to "bin/"
        if lib_dir.anchor and lib_dir == Path(lib_dir.anchor):
            raise MissingParentError(file_name)
        candidate = lib_dir.parent / ALT_BIN_DIR / file_name
        if candidate.exists():
            return candidate
    return None


def _remove_existing(path: Path) -> None:
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as e:
        raise DestinationRemovalError(str(path), e.strerror or str(e)) from e


def _made(record: MaterializedFile, on_file: FileCallback | None) -> MaterializedFile:
    if on_file is not None:
        on_file(record)
    return record


def copy_library(
    src_path: Path,
    dst_dir: Path,
    on_file: FileCallback | None = None,
    _visited: frozenset[str] = frozenset(),
) -> list[MaterializedFile]:
    """Copy *src_path* into *dst_dir*, recreating symlinks as relative links.

    A symlink source has its target materialized first, then a link named
    like the source is created pointing at the target's base name, so the
    output directory stays relocatable. *on_file* is called with each
    record as soon as the file or link exists.

    Returns:
        One record per copied file or created link, innermost target first.
    """
    key = os.path.abspath(src_path)
    if key in _visited:
        raise SymlinkCycleError(str(src_path))
    visited = _visited | {key}

    dst_path = dst_dir / src_path.name
    if os.path.abspath(dst_path) == key:
        log.debug("materializer.already_in_place", path=str(src_path))
        return []
    _remove_existing(dst_path)

    if src_path.is_symlink():
        link_target = Path(os.readlink(src_path))
        if not link_target.is_absolute():
            link_target = src_path.parent / link_target
        records = copy_library(link_target, dst_dir, on_file, visited)

        if link_target.name == dst_path.name:
            # the real file already occupies the destination name
            return records

        log.debug("materializer.link", destination=str(dst_path), target=link_target.name)
        try:
            os.symlink(link_target.name, dst_path)
        except OSError as e:
            raise MaterializeError(f"creating symbolic link '{dst_path}': {e}") from e
        record = MaterializedFile(
            action="link",
            source=src_path,
            destination=dst_path,
            link_target=link_target.name,
        )
        records.append(_made(record, on_file))
        return records

    if src_path.is_dir():
        raise SourceIsDirectoryError(str(src_path))

    log.debug("materializer.copy", source=str(src_path), destination=str(dst_path))
    try:
        shutil.copy(src_path, dst_path)
    except OSError as e:
        raise MaterializeError(f"copying library '{src_path}': {e}") from e
    record = MaterializedFile(action="copy", source=src_path, destination=dst_path)
    return [_made(record, on_file)]


def materialize(
    target_dir: Path,
    requests: Iterable[LibraryRequest],
    platform: str | None = None,
    on_file: FileCallback | None = None,
) -> list[MaterializedFile]:
    """Copy every resolvable library in *requests* into *target_dir*.

    Libraries not found in any search directory are skipped silently.
    *on_file* sees each copy or link as it is made, so work done before a
    fatal error is still reported.

    Returns:
        The copies and links made, in order.
    """
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    results: list[MaterializedFile] = []
    for request in requests:
        src_path = find_library(request, platform)
        if src_path is None:
            log.debug("materializer.not_found", name=request.name, package_id=request.package_id)
            continue
        results.extend(copy_library(src_path, target_dir, on_file))

    log.info("materializer.done", target_dir=str(target_dir), files=len(results))
    return results
