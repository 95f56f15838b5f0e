"""Schema for cargo's ``--message-format json`` build messages."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

ARTIFACT_PRODUCED = "compiler-artifact"
BUILD_SCRIPT_RAN = "build-script-executed"


class BuildEvent(BaseModel):
    """One line of cargo's build-message stream.

    Only the keys needed to find the package artifact and the libraries
    linked by build scripts are modelled; everything else is ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    kind: str = Field(alias="reason")
    owning_package: str | None = Field(default=None, alias="package_id")
    linked_library_names: list[str] | None = Field(default=None, alias="linked_libs")
    linked_search_dirs: list[str] | None = Field(default=None, alias="linked_paths")
    executable_path: str | None = Field(default=None, alias="executable")
    output_file_paths: list[str] | None = Field(default=None, alias="filenames")
