"""Data models shared by the interpreter and materializer."""

from target_dylibs.models.events import (
    ARTIFACT_PRODUCED,
    BUILD_SCRIPT_RAN,
    BuildEvent,
)
from target_dylibs.models.library import (
    LibraryRequest,
    MaterializedFile,
    ResolvedTarget,
)

__all__ = [
    "ARTIFACT_PRODUCED",
    "BUILD_SCRIPT_RAN",
    "BuildEvent",
    "LibraryRequest",
    "MaterializedFile",
    "ResolvedTarget",
]
