"""
Filesystem utilities for rustydeps.

Helpers for snapshotting and restoring manifest files around ``cargo add``.
All filesystem errors are normalized to ``FileOperationError``.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from datetime import datetime
from typing import Union

from rustydeps.utils.logger import get_logger
from rustydeps.exceptions import FileOperationError

logger = get_logger("filesystem")

PathLike = Union[str, Path]


def create_backup(file_path: PathLike) -> Path:
    """Copy ``file_path`` next to itself under a timestamped name.

    ``Cargo.toml`` becomes e.g. ``Cargo.toml.20240101_120000_000001.backup``.

    Returns:
        Path of the backup copy.

    Raises:
        FileOperationError: The file is missing or cannot be copied.
    """
    path = Path(file_path)
    if not path.is_file():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="backup",
        )

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
    backup_path = path.with_name(f"{path.name}.{timestamp}.backup")

    try:
        shutil.copy2(path, backup_path)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to create backup: {exc}",
            file_path=str(path),
            operation="backup",
            original_error=exc,
        ) from exc

    logger.debug("Backed up %s to %s", path, backup_path)
    return backup_path


def restore_backup(backup_path: PathLike, target_path: PathLike) -> None:
    """Overwrite ``target_path`` with the contents of ``backup_path``.

    Raises:
        FileOperationError: The backup is missing or cannot be copied.
    """
    backup = Path(backup_path)
    target = Path(target_path)

    try:
        shutil.copy2(backup, target)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to restore backup: {exc}",
            file_path=str(target),
            operation="restore",
            original_error=exc,
        ) from exc

    logger.debug("Restored %s from %s", target, backup)


def discard_backup(backup_path: PathLike) -> None:
    """Remove a backup that is no longer needed; missing files are ignored."""
    try:
        Path(backup_path).unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Failed to remove backup %s: %s", backup_path, exc)


def remove_file(file_path: PathLike) -> None:
    """Delete a file created during a failed operation; missing files are ignored.

    Raises:
        FileOperationError: The file exists but cannot be removed.
    """
    path = Path(file_path)
    try:
        path.unlink()
    except FileNotFoundError:
        return
    except OSError as exc:
        raise FileOperationError(
            f"Failed to remove file: {exc}",
            file_path=str(path),
            operation="remove",
            original_error=exc,
        ) from exc

    logger.debug("Removed %s", path)
