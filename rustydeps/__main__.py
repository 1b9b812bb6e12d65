"""
Executable module for rustydeps.

Running:
    python -m rustydeps

is equivalent to:
    rustydeps

This module simply forwards execution to the CLI entrypoint defined in
`rustydeps.cli`.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain on stderr why the CLI could not be loaded."""
    sys.stderr.write("rustydeps CLI could not be loaded.\n")
    sys.stderr.write(f"Python version   : {sys.version}\n")
    try:
        from rustydeps.__version__ import __version__

        sys.stderr.write(f"rustydeps version: {__version__}\n")
    except ImportError:
        sys.stderr.write("rustydeps version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m rustydeps`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from rustydeps.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
