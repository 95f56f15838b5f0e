"""Custom exceptions for target-dylibs."""


class TargetDylibsError(Exception):
    """Base exception for all target-dylibs errors."""

    phase = "run"


class BuildToolError(TargetDylibsError):
    """Raised when a cargo invocation fails or cannot be started."""

    phase = "build"


# ── interpret phase ──


class InterpretError(TargetDylibsError):
    """Base for errors raised while reading the build-event stream."""

    phase = "interpret"


class MalformedEventError(InterpretError):
    """Raised when a build-event line cannot be decoded."""

    def __init__(self, line_number: int, detail: str):
        self.line_number = line_number
        self.detail = detail
        super().__init__(f"build message {line_number} is malformed: {detail}")


class MissingSearchPathsError(InterpretError):
    """Raised when a build script links libraries but declares no search paths."""

    def __init__(self, package_id: str):
        self.package_id = package_id
        super().__init__(f"missing paths for libraries in package '{package_id}'")


class EmptySearchPathsError(InterpretError):
    """Raised when a build script links libraries with an empty search path list."""

    def __init__(self, package_id: str):
        self.package_id = package_id
        super().__init__(f"no paths for libraries in package '{package_id}'")


class ArtifactNotFoundError(InterpretError):
    """Raised when no 'compiler-artifact' message matches the designated package."""

    def __init__(self, package_id: str):
        self.package_id = package_id
        super().__init__(f"no 'compiler-artifact' message found for package '{package_id}'")


class ArtifactLocationError(InterpretError):
    """Raised when the artifact has neither an executable nor an rlib file."""

    def __init__(self, package_id: str, reason: str):
        self.package_id = package_id
        super().__init__(f"{reason} for package '{package_id}'")


# ── materialize phase ──


class MaterializeError(TargetDylibsError):
    """Base for errors raised while copying libraries into the target directory."""

    phase = "materialize"


class MissingParentError(MaterializeError):
    """Raised when a candidate directory has no parent to look for a sibling bin/."""

    def __init__(self, library: str):
        self.library = library
        super().__init__(f"no parent path for library '{library}'")


class DestinationRemovalError(MaterializeError):
    """Raised when an existing destination file cannot be removed."""

    def __init__(self, path: str, detail: str):
        self.path = path
        super().__init__(f"removing existing file '{path}': {detail}")


class SourceIsDirectoryError(MaterializeError):
    """Raised when a resolved library source is a directory."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"source path '{path}' is a directory")


class SymlinkCycleError(MaterializeError):
    """Raised when following library symlinks leads back to an already visited path."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"symlink cycle detected at '{path}'")


class ConfigError(TargetDylibsError):
    """Raised when an environment setting has an unusable value."""

    phase = "config"
