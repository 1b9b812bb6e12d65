"""
Command-line interface for rustydeps.

This module provides the CLI entry point: option parsing, logging and
configuration setup, and mapping of errors to exit codes. It is installed
both as ``rustydeps`` and as ``cargo-rusty-deps``, so it also runs as a
cargo subcommand (``cargo rusty-deps``).
"""

from __future__ import annotations

import os
import sys
import asyncio
import logging
from pathlib import Path
from typing import List, Optional, Sequence

import click

from rustydeps.config import load_config
from rustydeps.__version__ import __version__
from rustydeps.context import RustyDepsContext
from rustydeps.exceptions import RustyDepsError
from rustydeps.commands.check import OUTPUT_FORMATS, run_check
from rustydeps.constants import CARGO_SUBCOMMAND_NAME, MANIFEST_FILE_NAME
from rustydeps.utils.logger import get_logger, setup_logging
from rustydeps.utils.console import print_error, print_warning, reconfigure_console

logger = get_logger("cli")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--update",
    "-u",
    is_flag=True,
    help="Update outdated dependencies to their latest versions.",
)
@click.option(
    "--outdated",
    "-o",
    is_flag=True,
    help="Show only outdated dependencies, without updating.",
)
@click.option(
    "--manifest-path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=MANIFEST_FILE_NAME,
    show_default=True,
    help="Path to Cargo.toml.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="RUSTYDEPS_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="RUSTYDEPS_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="rustydeps",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    update: bool,
    outdated: bool,
    manifest_path: Path,
    output_format: str,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """See how far your Cargo dependencies have drifted.

    \b
    Lists every dependency in Cargo.toml next to the latest version on
    crates.io and highlights the most significant field that changed.

    \b
    Examples:
      cargo rusty-deps
      cargo rusty-deps --outdated
      cargo rusty-deps --update
      cargo rusty-deps --format json
    """
    _configure_logging(verbose)

    # Respect NO_COLOR for rich and downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    loaded_config = load_config(config, project_dir=manifest_path.parent)

    rustydeps_ctx = RustyDepsContext()
    rustydeps_ctx.config_path = config or loaded_config.source_path
    rustydeps_ctx.verbose = verbose
    rustydeps_ctx.color = color
    rustydeps_ctx.config = loaded_config
    ctx.obj = rustydeps_ctx

    logger.debug("rustydeps v%s", __version__)
    logger.debug("Config path: %s", rustydeps_ctx.config_path)
    logger.debug("Configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)

    asyncio.run(
        run_check(
            rustydeps_ctx,
            manifest_path,
            update=update,
            outdated=outdated,
            output_format=output_format.lower(),
        )
    )


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    if verbose <= 0:
        level = logging.WARNING
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    setup_logging(level=level, verbose=verbose > 1)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


def _strip_cargo_subcommand(args: Sequence[str]) -> List[str]:
    """Drop the subcommand name cargo passes to ``cargo-rusty-deps``."""
    argv = list(args)
    if argv and argv[0] == CARGO_SUBCOMMAND_NAME:
        return argv[1:]
    return argv


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the rustydeps CLI.

    Args:
        argv: Arguments to parse; defaults to ``sys.argv[1:]``.

    Returns:
        Exit code:
            0   Success
            1   Application error (manifest, registry, update, config)
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    args = _strip_cargo_subcommand(sys.argv[1:] if argv is None else argv)

    try:
        result = cli.main(args=args, prog_name="rustydeps", standalone_mode=False)
        return result if isinstance(result, int) else 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.Abort:
        print_warning("Operation cancelled by user")
        return 130

    except RustyDepsError as exc:
        print_error(str(exc))
        logger.debug(
            "RustyDepsError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("Operation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
