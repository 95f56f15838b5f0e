"""CLI entry point: cargo-update-target-dylibs.

Usage:
    cargo update-target-dylibs [--verbose] [--release]
    cargo-update-target-dylibs --manifest-path path/to/Cargo.toml

Extra ``cargo build`` arguments come from CARGO_ARGS and CARGO_BUILD_ARGS.
"""

from __future__ import annotations

import sys

import click
import structlog

from target_dylibs import cargo
from target_dylibs.config import load_settings
from target_dylibs.core.logging import setup_logging
from target_dylibs.exceptions import TargetDylibsError
from target_dylibs.interpreter import interpret
from target_dylibs.materializer import materialize
from target_dylibs.models.library import MaterializedFile

SUBCOMMAND_NAME = "update-target-dylibs"

log = structlog.get_logger("target_dylibs.cli")


def _describe(record: MaterializedFile) -> str:
    if record.action == "link":
        return f"link {record.destination} -> {record.link_target}"
    return f"copy {record.source} -> {record.destination}"


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
@click.option("--release", is_flag=True, help="Pass --release through to `cargo build`")
@click.option(
    "--manifest-path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to Cargo.toml of the package",
)
def main(verbose: bool, release: bool, manifest_path: str | None) -> None:
    """Copy dynamic libraries built for dependencies into the target directory.

    Cargo workspaces are supported, but a particular package must be
    specified; the simplest way is to run in that package's directory.

    Specify additional arguments for `cargo build` with the environment
    variables CARGO_ARGS and/or CARGO_BUILD_ARGS.
    """
    try:
        settings = load_settings()
        setup_logging("DEBUG" if verbose else settings.log_level, settings.log_format)

        pkg_id = cargo.package_id(settings, manifest_path)
        log.debug("cli.package", package_id=pkg_id, release=release)

        lines = cargo.build_events(settings, release=release, manifest_path=manifest_path)
        target, libraries = interpret(lines, pkg_id)
        log.debug("cli.plan", target_dir=str(target.directory), libraries=len(libraries))

        materialize(
            target.directory,
            libraries,
            on_file=lambda record: click.echo(_describe(record)),
        )
    except TargetDylibsError as e:
        click.echo(f"Error ({e.phase}): {e}", err=True)
        sys.exit(1)


def run(argv: list[str] | None = None) -> None:
    """Console-script entry; drops the subcommand name cargo passes along."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] == SUBCOMMAND_NAME:
        args = args[1:]
    main.main(args=args, prog_name=f"cargo {SUBCOMMAND_NAME}")


if __name__ == "__main__":
    run()
