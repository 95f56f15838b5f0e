"""Build-event interpreter — recover the package artifact and linked libraries.

Reads cargo's JSON message stream line by line and extracts:
  1. the ``compiler-artifact`` message of the designated package, from which
     the output directory is derived;
  2. for every ``build-script-executed`` message, one :class:`LibraryRequest`
     per linked library, sharing that message's search directories.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import ValidationError

from target_dylibs.exceptions import (
    ArtifactLocationError,
    ArtifactNotFoundError,
    EmptySearchPathsError,
    MalformedEventError,
    MissingSearchPathsError,
)
from target_dylibs.models.events import ARTIFACT_PRODUCED, BUILD_SCRIPT_RAN, BuildEvent
from target_dylibs.models.library import LibraryRequest, ResolvedTarget

log = structlog.get_logger("target_dylibs.interpreter")

RLIB_SUFFIX = ".rlib"
DEPS_SUBDIR = "deps"


# Kinds accepted by rustc's -L and -l flags
PATH_KINDS = frozenset({"native", "crate", "dependency", "framework", "all"})
LIB_KINDS = frozenset({"dylib", "static", "framework", "raw-dylib", "link-arg"})


def strip_link_kind(entry: str, kinds: frozenset[str]) -> str:
    """Drop a recognised ``KIND=`` prefix from a linked lib or path entry.

    ``dylib=ssl`` -> ``ssl``, ``native=/opt/lib`` -> ``/opt/lib``,
    ``static:+whole-archive=z`` -> ``z``. Anything before the first ``=``
    that is not one of *kinds* is part of the value, so ``/opt/a=b/lib``
    is returned unchanged.
    """
    kind, sep, rest = entry.partition("=")
    if sep and kind.partition(":")[0] in kinds:
        return rest
    return entry


def decode_event(line: str, line_number: int) -> BuildEvent:
    """Decode one message line, raising :class:`MalformedEventError` on failure."""
    try:
        return BuildEvent.model_validate_json(line)
    except ValidationError as e:
        raise MalformedEventError(line_number, str(e)) from e


def _library_requests(event: BuildEvent) -> list[LibraryRequest]:
    """Requests declared by one build-script message (empty if it links nothing)."""
    package_id = event.owning_package
    if package_id is None or not event.linked_library_names:
        return []
    if event.linked_search_dirs is None:
        raise MissingSearchPathsError(package_id)
    if not event.linked_search_dirs:
        raise EmptySearchPathsError(package_id)

    search_dirs = tuple(
        dict.fromkeys(strip_link_kind(p, PATH_KINDS) for p in event.linked_search_dirs)
    )
    return [
        LibraryRequest(
            name=strip_link_kind(name, LIB_KINDS),
            search_dirs=search_dirs,
            package_id=package_id,
        )
        for name in event.linked_library_names
    ]


def resolve_target(event: BuildEvent, package_id: str) -> ResolvedTarget:
    """Derive the output directory from the package's artifact message.

    Uses the executable's directory, or for libraries the directory of the
    first ``.rlib`` file, then appends ``deps/``.
    """
    if event.executable_path:
        artifact = event.executable_path
    else:
        if event.output_file_paths is None:
            raise ArtifactLocationError(package_id, "missing filenames")
        artifact = next(
            (f for f in event.output_file_paths if f.endswith(RLIB_SUFFIX)),
            None,
        )
        if artifact is None:
            raise ArtifactLocationError(package_id, "missing rlib file")

    return ResolvedTarget(
        package_id=package_id,
        directory=Path(artifact).parent / DEPS_SUBDIR,
    )


def interpret(
    lines: Iterable[str],
    package_id: str,
) -> tuple[ResolvedTarget, list[LibraryRequest]]:
    """Interpret a full build-message stream.

    Args:
        lines: Message lines as printed by ``cargo build --message-format json``.
        package_id: Package ID of the package whose output directory receives
            the libraries (as printed by ``cargo pkgid``).

    Returns:
        The resolved target and the library requests in stream order.

    Raises:
        InterpretError: On the first malformed line, structurally invalid
            build-script message, or missing/unlocatable package artifact.
    """
    artifact: BuildEvent | None = None
    libraries: list[LibraryRequest] = []

    for line_number, line in enumerate(lines, start=1):
        event = decode_event(line, line_number)

        if event.kind == ARTIFACT_PRODUCED and event.owning_package == package_id:
            if artifact is None:
                artifact = event
            else:
                log.warning(
                    "interpreter.duplicate_artifact",
                    package_id=package_id,
                    line=line_number,
                )
            continue

        if event.kind != BUILD_SCRIPT_RAN:
            continue

        for request in _library_requests(event):
            log.debug(
                "interpreter.library_found",
                name=request.name,
                package_id=request.package_id,
                search_dirs=list(request.search_dirs),
            )
            libraries.append(request)

    if artifact is None:
        raise ArtifactNotFoundError(package_id)

    target = resolve_target(artifact, package_id)
    log.debug("interpreter.target_resolved", directory=str(target.directory))
    return target, libraries
