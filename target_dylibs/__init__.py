"""target-dylibs: copy build-script dynamic libraries next to cargo artifacts."""

__version__ = "0.1.0"

from target_dylibs.exceptions import TargetDylibsError
from target_dylibs.interpreter import interpret
from target_dylibs.materializer import materialize
from target_dylibs.models import (
    BuildEvent,
    LibraryRequest,
    MaterializedFile,
    ResolvedTarget,
)
from target_dylibs.naming import dylib_affixes, dylib_file_name

__all__ = [
    "BuildEvent",
    "LibraryRequest",
    "MaterializedFile",
    "ResolvedTarget",
    "TargetDylibsError",
    "dylib_affixes",
    "dylib_file_name",
    "interpret",
    "materialize",
]
