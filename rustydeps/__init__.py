"""
rustydeps: dependency drift checker for Cargo projects

rustydeps reads the ``[dependencies]`` of a ``Cargo.toml``, looks up the
latest stable release of every crate on crates.io in parallel, and shows
which version field (major, minor, patch, pre-release or build metadata)
differs. It can also bump every outdated dependency with one ``cargo add``.

    $ cargo rusty-deps --outdated
    Name    Version   Latest
    serde   1.0.0     2.0.0
"""

from __future__ import annotations

from rustydeps.__version__ import __version__

# ---------------------------------------------------------------------------
# Package Metadata
# ---------------------------------------------------------------------------

__author__ = "rustydeps Contributors"
__license__ = "Apache-2.0"
__description__ = "Check and update outdated Cargo dependencies."

__all__ = [
    "__version__",
]
