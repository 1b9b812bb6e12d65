from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from rustydeps.exceptions import FileOperationError
from rustydeps.utils.filesystem import create_backup, discard_backup, remove_file, restore_backup


@pytest.fixture
def manifest(tmp_path: Path) -> Path:
    path = tmp_path / "Cargo.toml"
    path.write_text('[dependencies]\nserde = "1.0"\n', encoding="utf-8")
    return path


@pytest.mark.unit
class TestCreateBackup:
    """Tests for create_backup()."""

    def test_creates_copy_next_to_file(self, manifest: Path) -> None:
        """Test the backup sits beside the original with the same content."""
        backup = create_backup(manifest)

        assert backup.parent == manifest.parent
        assert backup.name.startswith("Cargo.toml.")
        assert backup.suffix == ".backup"
        assert backup.read_text(encoding="utf-8") == manifest.read_text(encoding="utf-8")

    def test_accepts_string_path(self, manifest: Path) -> None:
        """Test plain string paths are accepted."""
        assert create_backup(str(manifest)).is_file()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test backing up a missing file raises FileOperationError."""
        with pytest.raises(FileOperationError, match="File not found") as exc_info:
            create_backup(tmp_path / "Cargo.toml")

        assert exc_info.value.operation == "backup"

    def test_copy_failure_raises(self, manifest: Path) -> None:
        """Test OS errors during the copy are wrapped."""
        with patch(
            "rustydeps.utils.filesystem.shutil.copy2",
            side_effect=PermissionError("denied"),
        ):
            with pytest.raises(FileOperationError, match="Failed to create backup") as exc_info:
                create_backup(manifest)

        assert isinstance(exc_info.value.original_error, PermissionError)
        assert exc_info.value.details["operation"] == "backup"


@pytest.mark.unit
class TestRestoreBackup:
    """Tests for restore_backup()."""

    def test_restores_original_content(self, manifest: Path) -> None:
        """Test the target is overwritten with the backup's content."""
        original = manifest.read_text(encoding="utf-8")
        backup = create_backup(manifest)
        manifest.write_text("garbage", encoding="utf-8")

        restore_backup(backup, manifest)

        assert manifest.read_text(encoding="utf-8") == original

    def test_missing_backup_raises(self, manifest: Path, tmp_path: Path) -> None:
        """Test restoring from a missing backup raises FileOperationError."""
        with pytest.raises(FileOperationError) as exc_info:
            restore_backup(tmp_path / "nope.backup", manifest)

        assert exc_info.value.operation == "restore"
        assert exc_info.value.file_path == str(manifest)


@pytest.mark.unit
class TestDiscardBackup:
    """Tests for discard_backup()."""

    def test_removes_backup(self, manifest: Path) -> None:
        """Test the backup file is deleted."""
        backup = create_backup(manifest)

        discard_backup(backup)

        assert not backup.exists()
        assert manifest.exists()

    def test_missing_backup_is_ignored(self, tmp_path: Path) -> None:
        """Test discarding a missing file is a no-op."""
        discard_backup(tmp_path / "gone.backup")

    def test_os_error_is_logged_not_raised(self, manifest: Path) -> None:
        """Test failing to delete a backup only warns."""
        backup = create_backup(manifest)

        with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")), patch(
            "rustydeps.utils.filesystem.logger"
        ) as mock_logger:
            discard_backup(backup)

        mock_logger.warning.assert_called_once()


@pytest.mark.unit
class TestRemoveFile:
    """Tests for remove_file()."""

    def test_removes_file(self, tmp_path: Path) -> None:
        """Test an existing file is deleted."""
        lock = tmp_path / "Cargo.lock"
        lock.write_text("# lock\n", encoding="utf-8")

        remove_file(lock)

        assert not lock.exists()

    def test_missing_file_is_ignored(self, tmp_path: Path) -> None:
        """Test removing a file that was never created is a no-op."""
        remove_file(tmp_path / "Cargo.lock")

    def test_os_error_raises(self, manifest: Path) -> None:
        """Test a file that cannot be removed raises FileOperationError."""
        with patch("pathlib.Path.unlink", side_effect=PermissionError("denied")):
            with pytest.raises(FileOperationError, match="Failed to remove file") as exc_info:
                remove_file(manifest)

        assert exc_info.value.details["operation"] == "remove"
