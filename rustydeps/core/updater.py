"""Bulk dependency updates through ``cargo add``.

All outdated dependencies are updated with a single invocation::

    cargo add --manifest-path Cargo.toml serde@2.0.0 tokio@1.36.0

Cargo only accepts ``--rename`` with one crate, so each renamed dependency
gets its own call after the batched one::

    cargo add --manifest-path Cargo.toml --rename json serde_json@1.0.120

``Cargo.toml`` and ``Cargo.lock`` are snapshotted first. If cargo cannot be
started, times out, or exits non-zero, both files are restored (a lock file
that cargo created is removed) and an :class:`UpdateExecutionError` is
raised, so a failed run never leaves a half-updated manifest behind.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, NamedTuple, Optional, Sequence, Tuple

from rustydeps.models import DependencySet, Version
from rustydeps.exceptions import UpdateExecutionError
from rustydeps.constants import DEFAULT_CARGO_COMMAND, LOCK_FILE_NAME
from rustydeps.utils import create_backup, discard_backup, get_logger, remove_file, restore_backup

logger = get_logger("updater")


class UpdateRequest(NamedTuple):
    """Move dependency ``name`` to ``version``.

    ``package`` is the registry crate of a renamed dependency.
    """

    name: str
    version: Version
    package: Optional[str] = None


# (backup, target); backup is None when the target did not exist yet
Snapshot = Tuple[Optional[Path], Path]


def update_requests(dependencies: DependencySet) -> List[UpdateRequest]:
    """Pair every dependency with its latest version, in set order.

    Raises:
        ValueError: A dependency has not been resolved yet.
    """
    requests: List[UpdateRequest] = []
    for dependency in dependencies:
        if dependency.latest_version is None:
            raise ValueError(f"Dependency '{dependency.name}' has not been resolved")
        requests.append(
            UpdateRequest(dependency.name, dependency.latest_version, dependency.package)
        )
    return requests


class UpdateExecutor:
    """Apply update requests to a manifest through ``cargo add``.

    Args:
        manifest_path: Path to the ``Cargo.toml`` being updated.
        cargo_command: Cargo executable to run.
        timeout: Seconds to wait for each cargo call, or ``None`` to wait
            indefinitely.
    """

    def __init__(
        self,
        manifest_path: Path,
        *,
        cargo_command: str = DEFAULT_CARGO_COMMAND,
        timeout: Optional[float] = None,
    ) -> None:
        self.manifest_path = manifest_path
        self.cargo_command = cargo_command
        self.timeout = timeout

    @staticmethod
    def build_arguments(requests: Sequence[UpdateRequest]) -> List[str]:
        """Format requests as ``name@version`` arguments.

        Example::

            >>> UpdateExecutor.build_arguments([
            ...     UpdateRequest("a", Version.parse("1.1.0")),
            ...     UpdateRequest("b", Version.parse("3.0.0")),
            ... ])
            ['a@1.1.0', 'b@3.0.0']
        """
        return [f"{request.name}@{request.version}" for request in requests]

    def build_command(self, arguments: Sequence[str]) -> List[str]:
        """Return a full ``cargo add`` command line for ``arguments``."""
        return [
            self.cargo_command,
            "add",
            "--manifest-path",
            str(self.manifest_path),
            *arguments,
        ]

    def build_commands(self, requests: Sequence[UpdateRequest]) -> List[List[str]]:
        """Plan the cargo calls for ``requests``.

        Plain dependencies share one call; every renamed dependency follows
        in its own ``--rename`` call, in request order.
        """
        plain = [request for request in requests if request.package is None]
        renamed = [request for request in requests if request.package is not None]

        commands: List[List[str]] = []
        if plain:
            commands.append(self.build_command(self.build_arguments(plain)))
        for request in renamed:
            commands.append(
                self.build_command(
                    ["--rename", request.name, f"{request.package}@{request.version}"]
                )
            )
        return commands

    def apply(
        self,
        requests: Sequence[UpdateRequest],
    ) -> Optional[List["subprocess.CompletedProcess[str]"]]:
        """Run ``cargo add`` for all requests.

        Args:
            requests: Updates to apply, in order.

        Returns:
            The completed processes, or ``None`` when there was nothing to do.

        Raises:
            UpdateExecutionError: Cargo could not run or reported failure.
                The manifest and lock file are restored first.
        """
        if not requests:
            logger.info("No updates to apply")
            return None

        commands = self.build_commands(requests)
        snapshots = self._snapshot()

        try:
            results = [self._run(command) for command in commands]
        except UpdateExecutionError:
            # A failed restore keeps the backups on disk for manual recovery
            self._rollback(snapshots)
            self._discard(snapshots)
            raise

        self._discard(snapshots)
        logger.info("Updated %d dependencies", len(requests))
        return results

    def _run(self, command: List[str]) -> "subprocess.CompletedProcess[str]":
        logger.debug("Running: %s", " ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as exc:
            raise UpdateExecutionError(
                f"Cargo executable not found: {self.cargo_command}",
                command=command,
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise UpdateExecutionError(
                f"cargo add timed out after {self.timeout}s",
                command=command,
            ) from exc
        except OSError as exc:
            raise UpdateExecutionError(
                f"Failed to run cargo: {exc}",
                command=command,
            ) from exc

        if result.returncode != 0:
            raise UpdateExecutionError(
                "cargo add failed",
                command=command,
                returncode=result.returncode,
                stderr=result.stderr,
            )

        return result

    def _snapshot(self) -> List[Snapshot]:
        """Back up the manifest and note whether its lock file exists."""
        snapshots: List[Snapshot] = [(create_backup(self.manifest_path), self.manifest_path)]

        lock_file = self.manifest_path.with_name(LOCK_FILE_NAME)
        if lock_file.is_file():
            snapshots.append((create_backup(lock_file), lock_file))
        else:
            snapshots.append((None, lock_file))
        return snapshots

    def _rollback(self, snapshots: List[Snapshot]) -> None:
        for backup, target in snapshots:
            if backup is None:
                remove_file(target)
            else:
                restore_backup(backup, target)
        logger.warning("Update failed; restored %s", self.manifest_path.name)

    @staticmethod
    def _discard(snapshots: List[Snapshot]) -> None:
        for backup, _ in snapshots:
            if backup is not None:
                discard_backup(backup)
