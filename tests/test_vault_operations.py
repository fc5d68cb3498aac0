"""Tests for the filesystem vault manager.

Every test works on a real vault directory under ``tmp_path`` and checks both
sandboxing of vault-relative paths and the resulting files on disk.
"""

import pytest

from obsidian_editor.core.note_operations import move_note
from obsidian_editor.core.vault_operations import (
    FileSystemVaultManager,
    VaultManager,
    ensure_vault_ready,
    has_file_type,
    normalize_file_types,
    resolve_vault_path,
)
from obsidian_editor.data_models import VaultMetadata


@pytest.fixture
def vault_metadata(tmp_path):
    """An existing, empty vault directory."""
    root = tmp_path / "vault"
    root.mkdir()
    return VaultMetadata(name="test", path=root, description="", exists=True)


@pytest.fixture
def manager(vault_metadata):
    """Filesystem manager rooted at ``vault_metadata``."""
    return FileSystemVaultManager(vault_metadata)


def test_manager_satisfies_protocol(manager):
    """FileSystemVaultManager implements the VaultManager protocol."""
    assert isinstance(manager, VaultManager)


def test_resolve_preserves_dots_in_basename(vault_metadata):
    """Dots within the note name stay untouched; no extension is added."""
    resolved = resolve_vault_path(vault_metadata, "v1.4 Release Changelog.md")
    assert resolved.name == "v1.4 Release Changelog.md"


def test_resolve_nested_path(vault_metadata):
    """Nested paths resolve below the vault root."""
    resolved = resolve_vault_path(vault_metadata, "Projects/v1.4 Release Notes")
    assert resolved == (vault_metadata.path / "Projects" / "v1.4 Release Notes").resolve()


@pytest.mark.parametrize("path", ["", "   ", "/etc/passwd", "../outside.md", "Notes/./a.md"])
def test_resolve_rejects_unsafe_paths(vault_metadata, path):
    """Empty, absolute and dot-segment paths are rejected."""
    with pytest.raises(ValueError):
        resolve_vault_path(vault_metadata, path)


def test_resolve_rejects_symlink_escape(vault_metadata, tmp_path):
    """A symlink pointing outside the vault cannot be followed."""
    outside = tmp_path / "outside"
    outside.mkdir()
    (vault_metadata.path / "link").symlink_to(outside, target_is_directory=True)
    with pytest.raises(ValueError, match="escapes vault"):
        resolve_vault_path(vault_metadata, "link/secret.md")


def test_ensure_vault_ready_missing_directory(tmp_path):
    """A missing vault directory is reported as not accessible."""
    missing = VaultMetadata(name="gone", path=tmp_path / "nope", description="", exists=False)
    with pytest.raises(FileNotFoundError, match="not accessible"):
        ensure_vault_ready(missing)


def test_write_creates_parent_folders(manager, vault_metadata):
    """Writing a nested note creates its folders."""
    manager.write_file("Journal/2025/2025-01-15.md", "entry")
    target = vault_metadata.path / "Journal" / "2025" / "2025-01-15.md"
    assert target.read_text(encoding="utf-8") == "entry"
    assert manager.file_exists("Journal/2025/2025-01-15.md")


def test_read_round_trips_unicode(manager):
    """Notes are stored as UTF-8."""
    manager.write_file("Note.md", "café ✓\n")
    assert manager.read_file("Note.md") == "café ✓\n"


def test_read_missing_file(manager):
    """Reading a missing note names the path."""
    with pytest.raises(FileNotFoundError, match="Failed to read file Missing.md"):
        manager.read_file("Missing.md")


def test_read_rejects_non_utf8(manager, vault_metadata):
    """Binary content is reported as not UTF-8."""
    (vault_metadata.path / "binary.md").write_bytes(b"\xff\xfe\x00")
    with pytest.raises(ValueError, match="not UTF-8"):
        manager.read_file("binary.md")


def test_delete(manager):
    """Deleting removes the note; deleting again fails."""
    manager.write_file("Note.md", "x")
    manager.delete_file("Note.md")
    assert not manager.file_exists("Note.md")
    with pytest.raises(FileNotFoundError):
        manager.delete_file("Note.md")


def test_delete_refuses_directories(manager, vault_metadata):
    """Folders are never deleted as notes."""
    (vault_metadata.path / "Folder").mkdir()
    with pytest.raises(IsADirectoryError):
        manager.delete_file("Folder")


def test_vault_path(manager, vault_metadata):
    """vault_path is the configured root."""
    assert manager.vault_path == str(vault_metadata.path)


class TestMoveFile:
    """Test suite for FileSystemVaultManager.move_file."""

    def test_move(self, manager):
        """A note moves into a new folder."""
        manager.write_file("Inbox/Note.md", "x")
        manager.move_file("Inbox/Note.md", "Archive/Note.md")
        assert not manager.file_exists("Inbox/Note.md")
        assert manager.read_file("Archive/Note.md") == "x"

    def test_move_replaces_existing_destination(self, manager):
        """An existing destination is replaced by the source."""
        manager.write_file("a.md", "A")
        manager.write_file("b.md", "B")
        manager.move_file("a.md", "b.md")
        assert not manager.file_exists("a.md")
        assert manager.read_file("b.md") == "A"

    def test_move_onto_directory_is_refused(self, manager, vault_metadata):
        """A folder at the destination is never replaced."""
        manager.write_file("a.md", "A")
        (vault_metadata.path / "Folder").mkdir()
        with pytest.raises(IsADirectoryError):
            manager.move_file("a.md", "Folder")
        assert manager.read_file("a.md") == "A"

    def test_failed_move_note_keeps_files_on_disk(self, manager):
        """move_note with overwrite keeps the destination when the source is missing."""
        manager.write_file("dest.md", "keep me")
        response = move_note(manager, "missing.md", "dest.md", overwrite=True)
        assert response["success"] is False
        assert manager.read_file("dest.md") == "keep me"

    def test_move_note_onto_itself_keeps_file_on_disk(self, manager):
        """move_note onto the same path leaves the note intact."""
        manager.write_file("a.md", "precious")
        response = move_note(manager, "a.md", "a.md", overwrite=True)
        assert response["success"] is False
        assert manager.read_file("a.md") == "precious"


class TestCreateDirectory:
    """Test suite for FileSystemVaultManager.create_directory."""

    def test_nested_directory(self, manager, vault_metadata):
        """Missing parents are created when recursive."""
        manager.create_directory("Projects/2025/Q1")
        assert (vault_metadata.path / "Projects" / "2025" / "Q1").is_dir()

    def test_existing_directory_is_left_alone(self, manager, vault_metadata):
        """Creating an existing folder keeps its contents."""
        manager.write_file("Projects/Note.md", "x")
        manager.create_directory("Projects")
        assert manager.read_file("Projects/Note.md") == "x"

    def test_non_recursive_requires_parent(self, manager, vault_metadata):
        """recursive=False fails when the parent is missing."""
        with pytest.raises(FileNotFoundError, match="parent directory does not exist"):
            manager.create_directory("Missing/Child", recursive=False)
        assert not (vault_metadata.path / "Missing").exists()

    def test_non_recursive_with_parent(self, manager, vault_metadata):
        """recursive=False works below an existing folder."""
        (vault_metadata.path / "Projects").mkdir()
        manager.create_directory("Projects/New", recursive=False)
        assert (vault_metadata.path / "Projects" / "New").is_dir()

    def test_file_in_the_way(self, manager):
        """A file at the path blocks the folder."""
        manager.write_file("Notes.md", "x")
        with pytest.raises(FileExistsError, match="a file exists at that path"):
            manager.create_directory("Notes.md")

    def test_escape_is_rejected(self, manager):
        """Folders outside the vault are rejected."""
        with pytest.raises(ValueError):
            manager.create_directory("../outside")


class TestListFiles:
    """Test suite for FileSystemVaultManager.list_files."""

    @pytest.fixture(autouse=True)
    def populate(self, manager, vault_metadata):
        """Notes, an attachment, a nested folder and hidden Obsidian state."""
        manager.write_file("Home.md", "")
        manager.write_file("Projects/Alpha.md", "")
        manager.write_file("Projects/diagram.png", "")
        manager.write_file("Projects/Archive/Old.md", "")
        (vault_metadata.path / ".obsidian").mkdir()
        (vault_metadata.path / ".obsidian" / "app.json").write_text("{}", encoding="utf-8")
        (vault_metadata.path / "Projects" / ".hidden.md").write_text("", encoding="utf-8")

    def test_whole_vault(self, manager):
        """The whole vault is listed recursively, hidden entries skipped."""
        assert manager.list_files() == [
            "Home.md",
            "Projects/Alpha.md",
            "Projects/Archive/Old.md",
            "Projects/diagram.png",
        ]

    def test_directory(self, manager):
        """Only files below the folder are listed."""
        assert manager.list_files("Projects/Archive") == ["Projects/Archive/Old.md"]

    def test_non_recursive(self, manager):
        """recursive=False stays in the folder itself."""
        assert manager.list_files("Projects", recursive=False) == [
            "Projects/Alpha.md",
            "Projects/diagram.png",
        ]

    def test_include_directories(self, manager):
        """Folders are listed on request."""
        assert manager.list_files(recursive=False, include_directories=True) == [
            "Home.md",
            "Projects",
        ]

    def test_file_types(self, manager):
        """Extensions filter files, with or without a leading dot."""
        assert manager.list_files(file_types=["png"]) == ["Projects/diagram.png"]
        assert manager.list_files("Projects", file_types=[".md"]) == [
            "Projects/Alpha.md",
            "Projects/Archive/Old.md",
        ]

    def test_file_types_do_not_filter_directories(self, manager):
        """Folders are still listed when a file type filter is set."""
        assert manager.list_files(
            "Projects", include_directories=True, file_types=["png"]
        ) == ["Projects/Archive", "Projects/diagram.png"]

    def test_missing_directory_is_empty(self, manager):
        """A folder that does not exist lists as empty."""
        assert manager.list_files("Nowhere") == []

    def test_file_path_is_not_a_directory(self, manager):
        """Listing a note path fails."""
        with pytest.raises(NotADirectoryError, match="not a directory"):
            manager.list_files("Home.md")

    def test_escape_is_rejected(self, manager):
        """Listing outside the vault is rejected."""
        with pytest.raises(ValueError):
            manager.list_files("../")


@pytest.mark.parametrize(
    "file_types, expected",
    [(None, None), ([], None), (["  "], None), ([".MD", "png"], {"md", "png"})],
)
def test_normalize_file_types(file_types, expected):
    """Extensions are lower-cased and stripped of dots and blanks."""
    assert normalize_file_types(file_types) == expected


@pytest.mark.parametrize(
    "path, expected",
    [("Notes/a.md", True), ("Notes/a.MD", True), ("Notes/a.png", False), ("Notes/README", False)],
)
def test_has_file_type(path, expected):
    """Only files with a listed extension match."""
    assert has_file_type(path, {"md"}) is expected
