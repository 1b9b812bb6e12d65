"""
Shared context object for the rustydeps CLI.

Holds configuration and runtime options resolved once per invocation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from rustydeps.config import RustyDepsConfig


class RustyDepsContext:
    """Per-invocation state for the rustydeps command.

    Attributes:
        config_path: Path to the rustydeps configuration file, if any.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration.
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[RustyDepsConfig] = None
